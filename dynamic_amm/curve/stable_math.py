"""Stable curve math.

Core math functions for two-token StableSwap pools. Uses Newton iteration
for the invariant D and for the balance y that preserves D.

Amplification follows the A*n convention (Ann = amp * n), with n = 2.
All inputs are already normalized (multiplier- and depeg-scaled) amounts.

IMPORTANT: All financial calculations use SafeInt for overflow protection
and explicit bounds checking.
"""

from __future__ import annotations

from decimal import Decimal

from dynamic_amm.constants import N_COINS, STABLE_MAX_ITERATIONS
from dynamic_amm.errors import CurveConvergenceError
from dynamic_amm.pool.fees import PoolFees
from dynamic_amm.safe_int import S


def compute_d(amp: int, amount_a: int, amount_b: int) -> int:
    """Calculate the StableSwap invariant D using Newton iteration.

    Algorithm:
        1. Initial guess: D = amount_a + amount_b
        2. d_p = D^3 / (n^n * amount_a * amount_b), built up one balance at a time
        3. D = (Ann*S + d_p*n) * D / ((Ann - 1) * D + (n + 1) * d_p)
        4. Stop once |D_new - D_prev| <= 1

    Args:
        amp: Amplification coefficient A
        amount_a: Normalized amount of token A
        amount_b: Normalized amount of token B

    Returns:
        The invariant D (0 when both amounts are zero)

    Raises:
        CurveConvergenceError: If iteration doesn't converge
    """
    sum_amounts = S(amount_a) + S(amount_b)
    if sum_amounts == 0:
        return 0
    if amount_a == 0 or amount_b == 0:
        # d_p is undefined with an empty side; the invariant degenerates to the sum
        return sum_amounts.value

    ann = S(amp) * N_COINS
    d = sum_amounts

    for _ in range(STABLE_MAX_ITERATIONS):
        d_p = d
        d_p = (d_p * d) // (S(amount_a) * N_COINS)
        d_p = (d_p * d) // (S(amount_b) * N_COINS)

        d_prev = d
        numerator = (ann * sum_amounts + d_p * N_COINS) * d
        denominator = (ann - 1) * d + d_p * (N_COINS + 1)
        d = numerator // denominator

        if d.abs_diff(d_prev) <= 1:
            return d.value

    raise CurveConvergenceError(f"Stable invariant did not converge after {STABLE_MAX_ITERATIONS} iterations")


def compute_y(amp: int, x: int, d: int) -> int:
    """Solve for the other balance y given one balance x and invariant D.

    Newton iteration on y^2 + (b - D) * y = c with
        b = x + D / Ann
        c = D^3 / (n^2 * x * Ann)  (one division)

    Args:
        amp: Amplification coefficient A
        x: Normalized balance of the known token
        d: Invariant D to preserve

    Returns:
        The normalized balance y

    Raises:
        CurveConvergenceError: If iteration doesn't converge
    """
    if d == 0:
        return 0
    if x == 0:
        raise CurveConvergenceError("Cannot solve stable balance against an empty reserve")

    ann = S(amp) * N_COINS
    sd = S(d)
    b = S(x) + sd // ann
    c = sd * sd * sd // (S(x) * (N_COINS * N_COINS) * ann)

    y = sd
    for _ in range(STABLE_MAX_ITERATIONS):
        y_prev = y
        # denominator = 2y + b - D, kept in signed ints since b may be < D
        denominator = 2 * y.value + b.value - sd.value
        if denominator <= 0:
            raise CurveConvergenceError("Stable balance iteration denominator became non-positive")
        y = (y * y + c) // denominator

        if y.abs_diff(y_prev) <= 1:
            return y.value

    raise CurveConvergenceError(f"Stable balance did not converge after {STABLE_MAX_ITERATIONS} iterations")


def spot_out_amount(amp: int, amount_in: int, x: int, y: int, d: int) -> Decimal:
    """Output for amount_in at the marginal price of the (x, y) reserves.

    Differentiating Ann*(x + y) + D = Ann*D + D^3 / (4xy) at fixed D gives
    the destination paid per unit of source:

        price = (4*Ann*x^2*y^2 + D^3*y) / (4*Ann*x^2*y^2 + D^3*x)

    which is 1 on a balanced pool and falls below 1 as y becomes scarce.
    """
    if x == 0 or y == 0:
        return Decimal(0)
    ann = amp * N_COINS
    weighted = 4 * ann * x * x * y * y
    d_cubed = d * d * d
    return Decimal(amount_in) * Decimal(weighted + d_cubed * y) / Decimal(weighted + d_cubed * x)


def normalized_trade_fee(fees: PoolFees, amount: int) -> int:
    """Trade fee charged on an imbalanced leg of a liquidity operation.

    Formula: amount * trade_fee * n / (4 * (n - 1)), rounded down. For two
    tokens this is half the swap fee, since an imbalanced leg is economically
    half a swap.
    """
    numerator = S(amount) * fees.trade_fee_numerator * N_COINS
    denominator = S(fees.trade_fee_denominator) * (4 * (N_COINS - 1))
    return (numerator // denominator).value


def compute_mint_amount_for_deposit(
    amp: int,
    deposit_a: int,
    deposit_b: int,
    swap_a: int,
    swap_b: int,
    pool_token_supply: int,
    fees: PoolFees,
) -> int:
    """LP minted for an imbalanced deposit, after the imbalance fee.

    Algorithm:
        1. d0 = D(old balances), d1 = D(new balances)
        2. For each token: ideal = d1 * old / d0, fee = normalized fee on |ideal - new|
        3. d2 = D(new balances - fees)
        4. mint = supply * (d2 - d0) / d0

    Raises:
        CurveConvergenceError: If D decreases or iteration doesn't converge
    """
    if deposit_a == 0 and deposit_b == 0:
        return 0

    d0 = compute_d(amp, swap_a, swap_b)
    new_a = swap_a + deposit_a
    new_b = swap_b + deposit_b
    d1 = compute_d(amp, new_a, new_b)
    if d1 < d0:
        raise CurveConvergenceError("New D cannot be less than previous D")
    if d0 == 0:
        return 0

    adjusted = []
    for old_balance, new_balance in ((swap_a, new_a), (swap_b, new_b)):
        ideal_balance = (S(d1) * old_balance // d0).value
        fee = normalized_trade_fee(fees, abs(ideal_balance - new_balance))
        adjusted.append((S(new_balance) - fee).value)

    d2 = compute_d(amp, adjusted[0], adjusted[1])
    return (S(pool_token_supply) * S(d2).saturating_sub(d0) // d0).value


def compute_withdraw_one_amount(
    amp: int,
    pool_token_amount: int,
    pool_token_supply: int,
    base_amount: int,
    quote_amount: int,
    fees: PoolFees,
) -> int:
    """Base-token amount received for burning LP into the base token only.

    A single-sided withdrawal is a balanced withdrawal followed by an internal
    swap of the quote leg into base, so both legs pay the normalized trade fee.

    Algorithm:
        d0 = D(base, quote)
        d1 = d0 - pool_token_amount * d0 / supply
        new_y = y(quote, d1)
        expected_base = base * d1 / d0 - new_y
        expected_quote = quote - quote * d1 / d0
        new_base = base - fee(expected_base)
        new_quote = quote - fee(expected_quote)
        dy = new_base - y(new_quote, d1)

    Args:
        amp: Amplification coefficient A
        pool_token_amount: LP amount burned
        pool_token_supply: Total LP supply
        base_amount: Normalized pool amount of the token paid out
        quote_amount: Normalized pool amount of the other token
        fees: Pool fee schedule

    Returns:
        Normalized base amount paid out
    """
    if pool_token_amount == 0 or pool_token_supply == 0:
        return 0

    d0 = compute_d(amp, base_amount, quote_amount)
    if d0 == 0:
        return 0
    d1 = (S(d0) - S(pool_token_amount) * d0 // pool_token_supply).value

    new_y = compute_y(amp, quote_amount, d1)

    expected_base = (S(base_amount) * d1 // d0).saturating_sub(new_y)
    expected_quote = S(quote_amount) - S(quote_amount) * d1 // d0

    new_base = S(base_amount) - normalized_trade_fee(fees, expected_base.value)
    new_quote = S(quote_amount) - normalized_trade_fee(fees, expected_quote.value)

    return new_base.saturating_sub(compute_y(amp, new_quote.value, d1)).value
