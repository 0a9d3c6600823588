"""Tests for building swap curves from curve types."""

import pytest
from structlog.testing import capture_logs

from dynamic_amm.constants import BASE_CACHE_EXPIRES
from dynamic_amm.curve.constant_product import ConstantProductSwap
from dynamic_amm.curve.factory import build_swap_curve, refresh_depeg
from dynamic_amm.curve.stable_swap import StableSwap
from dynamic_amm.curve.types import ConstantProductCurveType, Depeg, DepegType, StableCurveType
from dynamic_amm.errors import InvalidInputError
from tests.helpers import NOW, STAKE_POOL, make_stable_curve

STALE_TIME = NOW + BASE_CACHE_EXPIRES + 1


class TestRefreshDepeg:
    """Tests for the depeg base price cache."""

    def test_fresh_cache_kept(self):
        """A cache within BASE_CACHE_EXPIRES is used even if a live price is given."""
        depeg = Depeg(DepegType.MARINADE, base_virtual_price=1_000_000, base_cache_updated=NOW)
        assert refresh_depeg(depeg, NOW + BASE_CACHE_EXPIRES, base_virtual_price=1_100_000) is depeg

    def test_expired_cache_replaced(self):
        """An expired cache is replaced by the live price."""
        depeg = Depeg(DepegType.MARINADE, base_virtual_price=1_000_000, base_cache_updated=NOW)
        refreshed = refresh_depeg(depeg, STALE_TIME, base_virtual_price=1_100_000)
        assert refreshed.base_virtual_price == 1_100_000
        assert refreshed.base_cache_updated == STALE_TIME
        assert depeg.base_virtual_price == 1_000_000

    def test_expired_cache_without_live_price_warns(self):
        """Without a live price the stale cache is kept and a warning logged."""
        depeg = Depeg(DepegType.LIDO, base_virtual_price=1_000_000, base_cache_updated=NOW)
        with capture_logs() as logs:
            refreshed = refresh_depeg(depeg, STALE_TIME)
        assert refreshed is depeg
        assert [log["event"] for log in logs] == ["depeg_cache_expired"]
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["depeg_type"] == "lido"

    def test_inactive_depeg_untouched(self):
        """NONE depegs never expire."""
        depeg = Depeg()
        assert refresh_depeg(depeg, STALE_TIME, base_virtual_price=1_100_000) is depeg


class TestBuildSwapCurve:
    """Tests for build_swap_curve."""

    def test_constant_product(self):
        """Constant product curve types build ConstantProductSwap."""
        assert isinstance(build_swap_curve(ConstantProductCurveType(), NOW), ConstantProductSwap)

    def test_stable(self):
        """Stable curve types build StableSwap with their parameters."""
        curve = build_swap_curve(make_stable_curve(amp=250), NOW)
        assert isinstance(curve, StableSwap)
        assert curve.amp == 250
        assert curve.depeg is None

    def test_stable_depeg_refreshed(self):
        """The built curve prices with the refreshed base price."""
        curve_type = make_stable_curve(depeg_type=DepegType.MARINADE, base_virtual_price=1_000_000)
        curve = build_swap_curve(curve_type, STALE_TIME, base_virtual_price=1_200_000)
        assert isinstance(curve, StableSwap)
        assert curve.depeg is not None
        assert curve.depeg.base_virtual_price == 1_200_000

    def test_stake_passed_through(self):
        """SPL stake pools receive the stake address."""
        curve_type = make_stable_curve(depeg_type=DepegType.SPL_STAKE, base_virtual_price=1_050_000)
        curve = build_swap_curve(curve_type, NOW, stake=STAKE_POOL)
        assert isinstance(curve, StableSwap)
        assert curve.stake == STAKE_POOL

    def test_unknown_curve_type_raises(self):
        """Anything outside the closed curve union is rejected."""
        with pytest.raises(TypeError):
            build_swap_curve(object(), NOW)  # type: ignore[arg-type]

    def test_stable_curve_type_validation(self):
        """Curve type descriptors reject a non-positive amp."""
        with pytest.raises(InvalidInputError):
            StableCurveType(amp=0)
