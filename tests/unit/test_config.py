"""Tests for QuoteConfig."""

import pytest

from dynamic_amm.config import DEFAULT_QUOTE_CONFIG, QuoteConfig


class TestQuoteConfig:
    """Tests for QuoteConfig defaults and validation."""

    def test_defaults(self):
        """Defaults match the protocol constants."""
        assert DEFAULT_QUOTE_CONFIG.unlock_amount_buffer_bps == 100
        assert DEFAULT_QUOTE_CONFIG.min_token_left_in_pool == 1
        assert DEFAULT_QUOTE_CONFIG.max_slippage_bps == 10_000

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"unlock_amount_buffer_bps": -1},
            {"unlock_amount_buffer_bps": 10_001},
            {"min_token_left_in_pool": -1},
            {"max_slippage_bps": 10_001},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        """Out-of-range values are rejected."""
        with pytest.raises(ValueError):
            QuoteConfig(**kwargs)


class TestQuoteConfigFromEnv:
    """Tests for QuoteConfig.from_env."""

    def test_unset_uses_defaults(self, monkeypatch):
        """Without environment variables the defaults apply."""
        for name in ("DYNAMIC_AMM_UNLOCK_BUFFER_BPS", "DYNAMIC_AMM_MIN_TOKEN_LEFT", "DYNAMIC_AMM_MAX_SLIPPAGE_BPS"):
            monkeypatch.delenv(name, raising=False)
        assert QuoteConfig.from_env() == DEFAULT_QUOTE_CONFIG

    def test_reads_environment(self, monkeypatch):
        """Environment variables override the defaults."""
        monkeypatch.setenv("DYNAMIC_AMM_UNLOCK_BUFFER_BPS", "50")
        monkeypatch.setenv("DYNAMIC_AMM_MIN_TOKEN_LEFT", "10")
        monkeypatch.setenv("DYNAMIC_AMM_MAX_SLIPPAGE_BPS", "500")
        config = QuoteConfig.from_env()
        assert config == QuoteConfig(unlock_amount_buffer_bps=50, min_token_left_in_pool=10, max_slippage_bps=500)

    def test_invalid_environment_raises(self, monkeypatch):
        """Malformed values fail loudly."""
        monkeypatch.setenv("DYNAMIC_AMM_MAX_SLIPPAGE_BPS", "lots")
        with pytest.raises(ValueError):
            QuoteConfig.from_env()
