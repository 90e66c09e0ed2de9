"""Pytest configuration and fixtures."""

import pytest

from metaswap.config import LogSettings
from metaswap.ledger import Host
from metaswap.log import configure_logging
from metaswap.pools import MetaSwapPool, StableSwapPool
from tests.helpers import ALICE, DEADLINE, ONE, START_TIME, make_meta_pool, make_pool, seed_pool

USDC_UNIT = 10**6


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging() -> None:
    """Only surface warnings from the pools during tests."""
    configure_logging(LogSettings(level="WARNING"))


@pytest.fixture
def host() -> Host:
    """Host whose clock starts well past the first ramp cooldown."""
    return Host(timestamp=START_TIME)


@pytest.fixture
def pool(host: Host) -> StableSwapPool:
    """Empty fee-less two-token pool (18 and 6 decimals), A = 200."""
    return make_pool(host, decimals=(18, 6))


@pytest.fixture
def seeded_pool(host: Host) -> StableSwapPool:
    """Two-token pool (18 and 6 decimals) holding 1000 of each token.

    Swap fee 0.04%, admin fee 50%.
    """
    pool = make_pool(host, decimals=(18, 6), swap_fee=4 * 10**6, admin_fee=5 * 10**9)
    seed_pool(pool, ALICE, [1_000 * ONE, 1_000 * USDC_UNIT])
    return pool


@pytest.fixture
def base_pool(host: Host) -> StableSwapPool:
    """DAI/USDC/USDT base pool holding 1M of each token. Swap fee 0.04%."""
    pool = make_pool(host, decimals=(18, 6, 6), swap_fee=4 * 10**6)
    seed_pool(pool, ALICE, [10**6 * ONE, 10**6 * USDC_UNIT, 10**6 * USDC_UNIT])
    return pool


@pytest.fixture
def meta_pool(host: Host, base_pool: StableSwapPool) -> MetaSwapPool:
    """sUSD / base LP meta pool holding 1M of each. Swap fee 0.04%, admin fee 50%."""
    pool = make_meta_pool(host, base_pool, swap_fee=4 * 10**6, admin_fee=5 * 10**9)
    pool.get_token(0).mint(ALICE, 10**6 * ONE)
    pool.add_liquidity(ALICE, [10**6 * ONE, 10**6 * ONE], 0, DEADLINE)
    return pool
