"""StableSwap meta pool engine - Python Implementation."""

from metaswap.config import LogSettings, PoolParameters
from metaswap.ledger import Host, LPToken, Token
from metaswap.log import configure_logging
from metaswap.pools import MetaSwapPool, StableSwapPool

__version__ = "0.1.0"
__all__ = [
    "Host",
    "Token",
    "LPToken",
    "PoolParameters",
    "LogSettings",
    "StableSwapPool",
    "MetaSwapPool",
    "configure_logging",
    "__version__",
]
