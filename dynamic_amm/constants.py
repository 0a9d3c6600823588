"""Protocol constants for the dynamic AMM quote engine.

Centralizes well-known addresses and protocol parameters.
"""

# Basis-point denominator for slippage and fee-bps conversions
BPS_DENOMINATOR = 10_000

# Deposit quotes shave this many bps off the expected LP amount so that
# vault-share rounding drift between quote and execution cannot make the
# transaction fail. Empirical value, preserved as-is.
UNLOCK_AMOUNT_BUFFER_BPS = 100

# A swap can never drain one side of the pool completely
MIN_TOKEN_LEFT_IN_POOL = 1

# Stable curve Newton iterations before giving up
STABLE_MAX_ITERATIONS = 255

# Number of tokens in a pool (the stable math is written for n = 2)
N_COINS = 2

# Depeg base virtual prices are fixed-point with 6 decimals
DEPEG_PRICE_PRECISION = 1_000_000

# Seconds a cached depeg base virtual price stays valid
BASE_CACHE_EXPIRES = 60 * 10

# Virtual price raw values are Q64.64 fixed-point
VIRTUAL_PRICE_RAW_SHIFT = 64

# Vault locked-profit degradation is expressed against this denominator
LOCKED_PROFIT_DEGRADATION_DENOMINATOR = 1_000_000_000_000

# Oracle state accounts appended to instructions for depegged stable pools
MARINADE_STATE = "8szGkuLTAux9XMgZ2vtY39jVSowEcpBfFfD8hXSEqdGC"
LIDO_STATE = "49Yi1TKkNyYjPAFdR9LBvoHcUjuPX4Df5T5yv39w2XTn"
