"""Invariant math for stable swap pools.

This package provides the D and Y solvers shared by local and meta pools.
"""

from metaswap.math.stable_math import (
    compute_balance_after_trade,
    compute_balance_given_invariant,
    compute_invariant,
)

__all__ = [
    "compute_invariant",
    "compute_balance_after_trade",
    "compute_balance_given_invariant",
]
