"""Pool and logging configuration.

PoolParameters validates construction-time parameters against the protocol
bounds. LogSettings reads logging configuration from the environment.
"""

import os

from pydantic import BaseModel, Field

from metaswap.constants import MAX_A, MAX_ADMIN_FEE, MAX_SWAP_FEE, MAX_WITHDRAW_FEE


class PoolParameters(BaseModel):
    """Initial parameters of a stable swap pool.

    Attributes:
        a: Amplification parameter, unscaled (stored internally times A_PRECISION)
        swap_fee: Swap fee against FEE_DENOMINATOR (4e6 == 0.04%)
        admin_fee: Admin share of swap fees against FEE_DENOMINATOR
        withdraw_fee: Default withdraw fee right after a deposit
        lp_token_symbol: Symbol the pool expects on its liquidity share token
    """

    a: int = Field(gt=0, lt=MAX_A)
    swap_fee: int = Field(default=0, ge=0, le=MAX_SWAP_FEE)
    admin_fee: int = Field(default=0, ge=0, le=MAX_ADMIN_FEE)
    withdraw_fee: int = Field(default=0, ge=0, le=MAX_WITHDRAW_FEE)
    lp_token_symbol: str = Field(default="stableLP", min_length=1)

    model_config = {"frozen": True}


class LogSettings(BaseModel):
    """Logging settings.

    Configuration via environment variables:
    - METASWAP_LOG_LEVEL: Minimum level (default: INFO)
    - METASWAP_LOG_JSON: Render JSON instead of console output (default: false)
    """

    level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_output: bool = False

    @classmethod
    def from_env(cls) -> "LogSettings":
        return cls(
            level=os.environ.get("METASWAP_LOG_LEVEL", "INFO").upper(),
            json_output=os.environ.get("METASWAP_LOG_JSON", "false").lower() in ("true", "1", "yes"),
        )
