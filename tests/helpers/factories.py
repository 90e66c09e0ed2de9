"""Factory functions for building pools in tests.

Usage:
    from tests.helpers import make_pool, seed_pool

    pool = make_pool(host, decimals=(18, 6))
    seed_pool(pool, ALICE, [1_000 * ONE, 1_000 * 10**6])
"""

from collections.abc import Sequence

from metaswap.config import PoolParameters
from metaswap.ledger import Host, LPToken, Token
from metaswap.pools import MetaSwapPool, StableSwapPool
from tests.helpers.constants import (
    BASE_LP,
    BASE_POOL,
    DAI,
    DEADLINE,
    META_LP,
    META_POOL,
    SUSD,
    USDC,
    USDT,
)

_DEFAULT_ADDRESSES = (DAI, USDC, USDT)
_DEFAULT_SYMBOLS = ("DAI", "USDC", "USDT")


def make_token(
    host: Host,
    address: str,
    symbol: str,
    decimals: int = 18,
    transfer_fee: int = 0,
) -> Token:
    """Create a token ledger registered with host."""
    return Token(host, address, symbol, decimals=decimals, transfer_fee=transfer_fee)


def make_pool(
    host: Host,
    decimals: Sequence[int] = (18, 18),
    a: int = 200,
    swap_fee: int = 0,
    admin_fee: int = 0,
    withdraw_fee: int = 0,
    transfer_fees: Sequence[int] | None = None,
    address: str = BASE_POOL,
    lp_address: str = BASE_LP,
) -> StableSwapPool:
    """Create a stable swap pool over fresh tokens.

    Token i uses DAI/USDC/USDT addresses for the first three tokens and
    generated addresses beyond that.

    Args:
        host: Test host
        decimals: Native decimals of each token (default: two 18-decimal tokens)
        a: Amplification parameter, unscaled
        swap_fee: Swap fee against FEE_DENOMINATOR
        admin_fee: Admin fee against FEE_DENOMINATOR
        withdraw_fee: Default withdraw fee against FEE_DENOMINATOR
        transfer_fees: Optional fee-on-transfer rate per token
        address: Pool address
        lp_address: LP token address

    Returns:
        An empty StableSwapPool
    """
    transfer_fees = transfer_fees or [0] * len(decimals)
    tokens = []
    for i, (d, fee) in enumerate(zip(decimals, transfer_fees)):
        if i < len(_DEFAULT_ADDRESSES):
            token_address, symbol = _DEFAULT_ADDRESSES[i], _DEFAULT_SYMBOLS[i]
        else:
            token_address, symbol = f"0x{i + 1:040x}", f"TKN{i}"
        tokens.append(make_token(host, token_address, symbol, decimals=d, transfer_fee=fee))

    lp_token = LPToken(host, lp_address, "baseLP")
    params = PoolParameters(
        a=a,
        swap_fee=swap_fee,
        admin_fee=admin_fee,
        withdraw_fee=withdraw_fee,
        lp_token_symbol=lp_token.symbol,
    )
    return StableSwapPool(host, address, tokens, lp_token, params)


def make_meta_pool(
    host: Host,
    base_pool: StableSwapPool,
    a: int = 200,
    swap_fee: int = 0,
    admin_fee: int = 0,
    withdraw_fee: int = 0,
    local_decimals: int = 18,
) -> MetaSwapPool:
    """Create a meta pool pairing a fresh sUSD-like token with base_pool's LP token.

    The base pool should already hold liquidity so its virtual price is non-zero.
    """
    susd = make_token(host, SUSD, "sUSD", decimals=local_decimals)
    lp_token = LPToken(host, META_LP, "metaLP")
    params = PoolParameters(
        a=a,
        swap_fee=swap_fee,
        admin_fee=admin_fee,
        withdraw_fee=withdraw_fee,
        lp_token_symbol=lp_token.symbol,
    )
    return MetaSwapPool(host, META_POOL, [susd, base_pool.lp_token], lp_token, params, base_pool)


def fund(pool: StableSwapPool, account: str, amounts: Sequence[int]) -> None:
    """Mint each pooled token to account (skips the LP tokens of other pools)."""
    for token, amount in zip(pool.tokens, amounts):
        if amount and isinstance(token, Token) and not isinstance(token, LPToken):
            token.mint(account, amount)


def seed_pool(pool: StableSwapPool, provider: str, amounts: Sequence[int]) -> int:
    """Fund provider and deposit amounts. Returns LP shares minted."""
    fund(pool, provider, amounts)
    return pool.add_liquidity(provider, amounts, 0, DEADLINE)
