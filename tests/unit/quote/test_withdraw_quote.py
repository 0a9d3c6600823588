"""Tests for withdrawal quotes."""

import pytest

from dynamic_amm.errors import InvalidInputError, UnsupportedCurveOperation
from dynamic_amm.pool.snapshot import ReserveSnapshot
from tests.helpers import BONK, NOW, USDC, USDT, make_quoter


class TestBalancedWithdraw:
    """Tests for balanced withdrawals."""

    def test_pro_rata(self, cp_quoter):
        """1% of the LP supply returns 1% of each token."""
        quote = cp_quoter.get_withdraw_quote(10_000, 0)
        assert quote.pool_token_amount_in == 10_000
        assert quote.token_a_out_amount == 10_000
        assert quote.token_b_out_amount == 10_000

    def test_slippage(self, cp_quoter):
        """Minimum outputs are the outputs less slippage."""
        quote = cp_quoter.get_withdraw_quote(10_000, 100)
        assert quote.min_token_a_out_amount == 9_900
        assert quote.min_token_b_out_amount == 9_900

    def test_zero_lp(self, cp_quoter):
        """Burning nothing returns nothing."""
        quote = cp_quoter.get_withdraw_quote(0, 0)
        assert (quote.token_a_out_amount, quote.token_b_out_amount) == (0, 0)

    def test_stable_pool(self, stable_quoter):
        """Balanced withdrawals ignore the curve."""
        quote = stable_quoter.get_withdraw_quote(10_000, 0)
        assert quote.token_a_out_amount == 10_000
        assert quote.token_b_out_amount == 10_000

    def test_rounds_down_through_vault_shares(self, fee_free_pool):
        """Outputs round down through the pool share and vault share conversions."""
        snapshot = ReserveSnapshot(
            current_time=NOW,
            pool_vault_a_lp=1_000,
            pool_vault_b_lp=1_000,
            vault_a_lp_supply=3_000,
            vault_b_lp_supply=1_000,
            vault_a_withdrawable=10_000,
            vault_b_withdrawable=1_000,
            pool_lp_supply=3_000,
        )
        quote = make_quoter(fee_free_pool, snapshot).get_withdraw_quote(1_000, 0)
        # 1,000 LP burns 333 vault A shares worth 1,110; a third of the
        # pool's 3,333 token A would be 1,111
        assert quote.token_a_out_amount == 1_110
        assert quote.token_b_out_amount == 333

    def test_more_than_supply_raises(self, cp_quoter):
        """Burning more LP than exists is rejected instead of quoting tokens the pool does not hold."""
        with pytest.raises(InvalidInputError, match="supply"):
            cp_quoter.get_withdraw_quote(5_000_000, 0)

    def test_whole_supply(self, cp_quoter):
        """Burning the entire supply returns the whole pool."""
        quote = cp_quoter.get_withdraw_quote(1_000_000, 0)
        assert (quote.token_a_out_amount, quote.token_b_out_amount) == (1_000_000, 1_000_000)


class TestSingleSidedWithdraw:
    """Tests for single-token withdrawals."""

    def test_stable_token_a(self, stable_quoter):
        """1% of a balanced 1M/1M pool is worth 20,000 of one token, less curve slippage."""
        quote = stable_quoter.get_withdraw_quote(10_000, 0, USDC)
        assert 19_800 < quote.token_a_out_amount <= 20_000
        assert quote.token_b_out_amount == 0
        assert quote.min_token_a_out_amount == quote.token_a_out_amount
        assert quote.min_token_b_out_amount == 0

    def test_stable_token_b(self, stable_quoter):
        """Withdrawing token B pays only token B."""
        quote = stable_quoter.get_withdraw_quote(10_000, 50, USDT)
        assert quote.token_a_out_amount == 0
        assert 19_800 < quote.token_b_out_amount <= 20_000
        assert quote.min_token_b_out_amount == quote.token_b_out_amount * 9_950 // 10_000

    def test_worse_than_balanced(self, stable_quoter):
        """The single-sided output is at most the balanced value."""
        balanced = stable_quoter.get_withdraw_quote(10_000, 0)
        single = stable_quoter.get_withdraw_quote(10_000, 0, USDC)
        assert single.token_a_out_amount <= balanced.token_a_out_amount + balanced.token_b_out_amount

    def test_vault_share_precision_loss(self, stable_pool):
        """Only whole vault shares are burned, so the output is a multiple of the share price."""
        snapshot = ReserveSnapshot(
            current_time=NOW,
            pool_vault_a_lp=1_000_000,
            pool_vault_b_lp=3_000_000,
            vault_a_lp_supply=1_000_000,
            vault_b_lp_supply=3_000_000,
            vault_a_withdrawable=3_000_000,
            vault_b_withdrawable=3_000_000,
            pool_lp_supply=1_000_000,
        )
        quote = make_quoter(stable_pool, snapshot).get_withdraw_quote(10_000, 0, USDC)
        assert quote.token_a_out_amount > 0
        assert quote.token_a_out_amount % 3 == 0

    def test_zero_lp(self, stable_quoter):
        """Burning nothing returns nothing."""
        quote = stable_quoter.get_withdraw_quote(0, 0, USDC)
        assert (quote.token_a_out_amount, quote.token_b_out_amount) == (0, 0)

    def test_foreign_mint_raises(self, stable_quoter):
        """A mint outside the pool is rejected."""
        with pytest.raises(InvalidInputError):
            stable_quoter.get_withdraw_quote(10_000, 0, BONK)

    def test_more_than_supply_raises(self, stable_quoter):
        """An LP amount above supply is an input error, not an arithmetic one."""
        with pytest.raises(InvalidInputError, match="supply"):
            stable_quoter.get_withdraw_quote(1_000_001, 0, USDC)

    def test_constant_product_unsupported(self, cp_quoter):
        """Constant product pools cannot withdraw a single token."""
        with pytest.raises(UnsupportedCurveOperation):
            cp_quoter.get_withdraw_quote(10_000, 0, USDC)


class TestDepositWithdrawRoundTrip:
    """Depositing then withdrawing the minted LP never returns more than was put in."""

    @pytest.mark.parametrize("amount", [1, 9_999, 10_000, 12_345, 250_000])
    def test_constant_product(self, cp_quoter, amount):
        """Balanced deposit then balanced withdraw on a constant product pool."""
        deposit = cp_quoter.get_deposit_quote(amount, 0, True, 0)
        withdraw = cp_quoter.get_withdraw_quote(deposit.pool_token_amount_out, 0)
        assert withdraw.token_a_out_amount <= deposit.token_a_in_amount
        assert withdraw.token_b_out_amount <= deposit.token_b_in_amount

    @pytest.mark.parametrize("amount", [1, 12_345, 250_000])
    def test_stable(self, stable_quoter, amount):
        """Balanced deposit then balanced withdraw on a stable pool."""
        deposit = stable_quoter.get_deposit_quote(0, amount, True, 0)
        withdraw = stable_quoter.get_withdraw_quote(deposit.pool_token_amount_out, 0)
        assert withdraw.token_a_out_amount <= deposit.token_a_in_amount
        assert withdraw.token_b_out_amount <= deposit.token_b_in_amount
