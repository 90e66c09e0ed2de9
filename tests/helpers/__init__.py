"""Test helpers module for shared test utilities.

- constants: Accounts, addresses, time and amount units
- factories: Pool and token factory functions
"""

from tests.helpers.constants import (
    ADMIN,
    ALICE,
    BOB,
    DAY,
    DEADLINE,
    ONE,
    START_TIME,
    WEEK,
)
from tests.helpers.factories import fund, make_meta_pool, make_pool, make_token, seed_pool

__all__ = [
    # Constants
    "ALICE",
    "BOB",
    "ADMIN",
    "START_TIME",
    "DAY",
    "WEEK",
    "DEADLINE",
    "ONE",
    # Factories
    "make_token",
    "make_pool",
    "make_meta_pool",
    "fund",
    "seed_pool",
]
