"""Precision normalization.

Functions for scaling token balances between native decimals and the
common 18-decimal pool precision.
"""

from collections.abc import Sequence

from metaswap.constants import BASE_VIRTUAL_PRICE_PRECISION, POOL_PRECISION_DECIMALS
from metaswap.errors import InvalidPoolConfiguration, LengthMismatch


def precision_multipliers(decimals: Sequence[int]) -> list[int]:
    """Compute per-token multipliers that lift balances to 18 decimals.

    Args:
        decimals: Native decimals of each pooled token

    Returns:
        10^(18 - decimals) per token

    Raises:
        InvalidPoolConfiguration: If a token has more than 18 decimals
    """
    multipliers = []
    for i, d in enumerate(decimals):
        if d < 0 or d > POOL_PRECISION_DECIMALS:
            raise InvalidPoolConfiguration(
                f"Token decimals exceeds max: token {i} has {d} decimals"
            )
        multipliers.append(10 ** (POOL_PRECISION_DECIMALS - d))
    return multipliers


def normalize(balances: Sequence[int], multipliers: Sequence[int]) -> list[int]:
    """Scale native balances to pool precision.

    Raises:
        LengthMismatch: If the two sequences have different lengths
    """
    if len(balances) != len(multipliers):
        raise LengthMismatch(
            f"Balances must match multipliers: {len(balances)} != {len(multipliers)}"
        )
    return [balance * multiplier for balance, multiplier in zip(balances, multipliers)]


def normalize_meta(
    balances: Sequence[int],
    multipliers: Sequence[int],
    base_virtual_price: int,
) -> list[int]:
    """Scale meta pool balances to pool precision.

    Same as normalize(), but the last slot holds base pool LP tokens and is
    valued at the base pool's virtual price.

    Args:
        balances: Native balances, last one being the base LP token
        multipliers: Precision multipliers
        base_virtual_price: Base pool virtual price (1e18 == 1.0)

    Returns:
        Normalized balances
    """
    xp = normalize(balances, multipliers)
    base_lp_token_index = len(xp) - 1
    xp[base_lp_token_index] = (
        xp[base_lp_token_index] * base_virtual_price // BASE_VIRTUAL_PRICE_PRECISION
    )
    return xp
