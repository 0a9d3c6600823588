"""Shared token constants for tests.

Usage:
    from tests.helpers import USDC, USDT
    # or
    from tests.helpers.constants import USDC, USDT
"""

# =============================================================================
# Stablecoins
# =============================================================================

USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"  # USD Coin (6 decimals)
USDT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"  # Tether USD (6 decimals)

# =============================================================================
# SOL and liquid staking tokens (used in depeg tests)
# =============================================================================

WSOL = "So11111111111111111111111111111111111111112"  # Wrapped SOL (9 decimals)
MSOL = "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So"  # Marinade staked SOL (9 decimals)
STSOL = "7dHbWXmci3dT8UFYWYZweBLXgycu7Y3iL6trKn1Y7ARj"  # Lido staked SOL (9 decimals)

# =============================================================================
# Other accounts
# =============================================================================

BONK = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"  # Not in any test pool
LP_MINT = "LPm1nt1111111111111111111111111111111111111"
STAKE_POOL = "StakePoo111111111111111111111111111111111111"

# Snapshot time used by default (2023-11-14)
NOW = 1_700_000_000
