"""Stable swap and meta pool implementations."""

from metaswap.pools.amplification import AmplificationRamp
from metaswap.pools.fees import (
    ImbalanceFees,
    admin_fee_amount,
    apply_withdraw_fee,
    blended_fee_multiplier,
    current_withdraw_fee,
    fee_per_token,
    gross_up_for_withdraw_fee,
    imbalance_fees,
    swap_fee_amount,
)
from metaswap.pools.meta import (
    BaseAsset,
    LocalAsset,
    MetaSwapPool,
    UnderlyingRoute,
    VirtualAsset,
    plan_underlying_route,
    read_base_virtual_price,
    refresh_base_virtual_price,
    resolve_virtual_index,
)
from metaswap.pools.precision import normalize, normalize_meta, precision_multipliers
from metaswap.pools.state import MetaPoolState, PoolState, WithdrawFeeAccount
from metaswap.pools.swap import StableSwapPool

__all__ = [
    # Pools
    "StableSwapPool",
    "MetaSwapPool",
    # State
    "PoolState",
    "MetaPoolState",
    "WithdrawFeeAccount",
    "AmplificationRamp",
    # Precision
    "precision_multipliers",
    "normalize",
    "normalize_meta",
    # Fees
    "ImbalanceFees",
    "swap_fee_amount",
    "admin_fee_amount",
    "fee_per_token",
    "imbalance_fees",
    "current_withdraw_fee",
    "blended_fee_multiplier",
    "apply_withdraw_fee",
    "gross_up_for_withdraw_fee",
    # Meta routing
    "LocalAsset",
    "BaseAsset",
    "VirtualAsset",
    "UnderlyingRoute",
    "resolve_virtual_index",
    "plan_underlying_route",
    "refresh_base_virtual_price",
    "read_base_virtual_price",
]
