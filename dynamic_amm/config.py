"""Quote engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dynamic_amm.constants import BPS_DENOMINATOR, MIN_TOKEN_LEFT_IN_POOL, UNLOCK_AMOUNT_BUFFER_BPS


@dataclass(frozen=True)
class QuoteConfig:
    """Centralized configuration for quote calculation.

    Holds the empirically chosen slack constants so tests can run with
    different values and every quote path reads the same ones.

    Attributes:
        unlock_amount_buffer_bps: Haircut applied to the expected LP amount of
            a balanced deposit quote (default: 100 bps)
        min_token_left_in_pool: Units of each token a swap must leave in the
            pool (default: 1)
        max_slippage_bps: Upper bound accepted for caller slippage
            (default: 10,000 = 100%)
    """

    unlock_amount_buffer_bps: int = UNLOCK_AMOUNT_BUFFER_BPS
    min_token_left_in_pool: int = MIN_TOKEN_LEFT_IN_POOL
    max_slippage_bps: int = BPS_DENOMINATOR

    def __post_init__(self) -> None:
        if not 0 <= self.unlock_amount_buffer_bps <= BPS_DENOMINATOR:
            raise ValueError(f"unlock_amount_buffer_bps must be in [0, 10000]: {self.unlock_amount_buffer_bps}")
        if self.min_token_left_in_pool < 0:
            raise ValueError(f"min_token_left_in_pool must be non-negative: {self.min_token_left_in_pool}")
        if not 0 <= self.max_slippage_bps <= BPS_DENOMINATOR:
            raise ValueError(f"max_slippage_bps must be in [0, 10000]: {self.max_slippage_bps}")

    @classmethod
    def from_env(cls) -> QuoteConfig:
        """Build a config from DYNAMIC_AMM_* environment variables.

        - DYNAMIC_AMM_UNLOCK_BUFFER_BPS
        - DYNAMIC_AMM_MIN_TOKEN_LEFT
        - DYNAMIC_AMM_MAX_SLIPPAGE_BPS

        Unset variables fall back to the defaults.
        """
        return cls(
            unlock_amount_buffer_bps=int(
                os.environ.get("DYNAMIC_AMM_UNLOCK_BUFFER_BPS", UNLOCK_AMOUNT_BUFFER_BPS)
            ),
            min_token_left_in_pool=int(os.environ.get("DYNAMIC_AMM_MIN_TOKEN_LEFT", MIN_TOKEN_LEFT_IN_POOL)),
            max_slippage_bps=int(os.environ.get("DYNAMIC_AMM_MAX_SLIPPAGE_BPS", BPS_DENOMINATOR)),
        )


# Default configuration instance
DEFAULT_QUOTE_CONFIG = QuoteConfig()
