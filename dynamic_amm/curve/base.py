"""Base classes for swap curve implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from dynamic_amm.pool.fees import PoolFees


class TradeDirection(str, Enum):
    """Which reserve a trade moves tokens into."""

    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"


@dataclass(frozen=True)
class OutResult:
    """Result of simulating a trade through a curve."""

    out_amount: int
    # (ideal - actual) / ideal, against the pre-trade price
    price_impact: Decimal


@dataclass(frozen=True)
class AccountMeta:
    """An extra account the transaction builder must append unchanged."""

    pubkey: str
    is_signer: bool = False
    is_writable: bool = False


class SwapCurve(ABC):
    """Abstract base class for swap curves.

    A closed set of variants (ConstantProductSwap, StableSwap) implements
    this interface; dispatch happens on the concrete class built by
    build_swap_curve(), never on runtime tags.
    """

    @abstractmethod
    def compute_out_amount(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> OutResult:
        """Calculate output amount for a given input.

        Args:
            source_amount: Input token amount (after fees)
            swap_source_amount: Pool amount of the input token
            swap_destination_amount: Pool amount of the output token
            trade_direction: Direction of the trade

        Returns:
            OutResult with the output amount and price impact
        """
        ...

    @abstractmethod
    def compute_in_amount(
        self,
        destination_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> int:
        """Calculate input required for a desired output.

        Used only to estimate the maximum input; the authoritative price is
        always compute_out_amount.
        """
        ...

    @abstractmethod
    def compute_d(self, token_a_amount: int, token_b_amount: int) -> int:
        """Curve invariant for the given pool amounts.

        Also the LP amount minted by the bootstrap deposit into an empty pool.
        """
        ...

    @abstractmethod
    def compute_imbalance_deposit(
        self,
        deposit_a_amount: int,
        deposit_b_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_token_supply: int,
        fees: PoolFees,
    ) -> int:
        """LP amount minted for an arbitrary (imbalanced) deposit."""
        ...

    @abstractmethod
    def compute_withdraw_one(
        self,
        pool_token_amount: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        fees: PoolFees,
        trade_direction: TradeDirection,
    ) -> int:
        """Token amount received for burning LP into a single token.

        trade_direction names the internal swap: B_TO_A pays out token A,
        A_TO_B pays out token B.
        """
        ...

    @abstractmethod
    def get_remaining_accounts(self) -> list[AccountMeta]:
        """Extra accounts the remote program reads for this curve."""
        ...
