"""Dynamic AMM quote engine - off-chain pricing for vault-backed pools."""

from dynamic_amm.quote.engine import PoolQuoter

__version__ = "0.1.0"
__all__ = ["PoolQuoter", "__version__"]
