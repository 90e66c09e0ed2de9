"""Meta pool: a stable swap pool paired against a base pool's LP token.

The last pooled token of a MetaSwapPool is the LP token of an external base
pool. Its balance is valued at the base pool's virtual price, which is
cached for BASE_CACHE_EXPIRE_TIME. Callers can also trade the base pool's
underlying tokens directly through a virtual index space:

    0 .. n-2              local tokens
    n-1 .. n-2+m          base pool tokens 0 .. m-1

The base LP slot itself (local index n-1) is not addressable through the
virtual index space; virtual index n-1 means base token 0.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from metaswap.config import PoolParameters
from metaswap.constants import BASE_CACHE_EXPIRE_TIME, BASE_VIRTUAL_PRICE_PRECISION, FEE_DENOMINATOR
from metaswap.errors import (
    InsufficientFunds,
    InvalidPoolConfiguration,
    SameTokenSwap,
    SlippageExceeded,
    TokenIndexOutOfRange,
)
from metaswap.ledger.host import Host
from metaswap.ledger.interfaces import BasePool, ShareLedger, TransferableToken
from metaswap.math.stable_math import compute_balance_after_trade
from metaswap.pools.amplification import AmplificationRamp
from metaswap.pools.fees import admin_fee_amount, swap_fee_amount
from metaswap.pools.precision import normalize_meta
from metaswap.pools.state import MetaPoolState
from metaswap.pools.swap import StableSwapPool
from metaswap.safe_int import S

logger = structlog.get_logger()


# =============================================================================
# Virtual index routing
# =============================================================================


@dataclass(frozen=True)
class LocalAsset:
    """A token held directly by the meta pool (never the base LP token)."""

    index: int


@dataclass(frozen=True)
class BaseAsset:
    """A token of the base pool, addressed by its index in the base pool."""

    index: int


VirtualAsset = LocalAsset | BaseAsset


class UnderlyingRoute(Enum):
    """How a swap between two virtual assets is executed."""

    # Both tokens local: plain meta pool swap
    LOCAL = "local"
    # Deposit into the base pool, then swap base LP for a local token
    FROM_BASE = "from_base"
    # Swap a local token for base LP, then withdraw one base token
    TO_BASE = "to_base"
    # Both tokens in the base pool: delegate the whole swap
    BASE_ONLY = "base_only"


def resolve_virtual_index(virtual_index: int, base_lp_token_index: int, base_n_coins: int) -> VirtualAsset:
    """Map a virtual index to a local or base pool token.

    Args:
        virtual_index: Index in the combined token space
        base_lp_token_index: Local index of the base LP token (n - 1)
        base_n_coins: Number of tokens in the base pool

    Returns:
        LocalAsset or BaseAsset

    Raises:
        TokenIndexOutOfRange: If the index is outside the combined space
    """
    if not 0 <= virtual_index < base_lp_token_index + base_n_coins:
        raise TokenIndexOutOfRange(f"Token index out of range: {virtual_index}")
    if virtual_index < base_lp_token_index:
        return LocalAsset(virtual_index)
    return BaseAsset(virtual_index - base_lp_token_index)


def plan_underlying_route(source: VirtualAsset, destination: VirtualAsset) -> UnderlyingRoute:
    if isinstance(source, BaseAsset) and isinstance(destination, BaseAsset):
        return UnderlyingRoute.BASE_ONLY
    if isinstance(source, BaseAsset):
        return UnderlyingRoute.FROM_BASE
    if isinstance(destination, BaseAsset):
        return UnderlyingRoute.TO_BASE
    return UnderlyingRoute.LOCAL


# =============================================================================
# Base virtual price cache
# =============================================================================


def _cache_expired(state: MetaPoolState, now: int) -> bool:
    return now > state.base_cache_last_updated + BASE_CACHE_EXPIRE_TIME


def refresh_base_virtual_price(state: MetaPoolState, base_pool: BasePool, now: int) -> int:
    """Return the base virtual price, refetching and caching it if stale.

    Used by state-changing operations.
    """
    if _cache_expired(state, now):
        state.base_virtual_price = base_pool.get_virtual_price()
        state.base_cache_last_updated = now
        logger.debug(
            "base_virtual_price_refreshed",
            base_pool=base_pool.address,
            virtual_price=state.base_virtual_price,
            timestamp=now,
        )
    return state.base_virtual_price


def read_base_virtual_price(state: MetaPoolState, base_pool: BasePool, now: int) -> int:
    """Return the base virtual price without touching the cache.

    A stale cache falls back to a live read from the base pool. Used by
    pricing queries.
    """
    if _cache_expired(state, now):
        return base_pool.get_virtual_price()
    return state.base_virtual_price


# =============================================================================
# Meta pool
# =============================================================================


class MetaSwapPool(StableSwapPool):
    """Stable swap pool whose last token is a base pool's LP token.

    Attributes:
        base_pool: The base pool whose LP token is pooled here
    """

    def __init__(
        self,
        host: Host,
        address: str,
        tokens: Sequence[TransferableToken],
        lp_token: ShareLedger,
        params: PoolParameters,
        base_pool: BasePool,
    ) -> None:
        if not tokens or tokens[-1].address.lower() != base_pool.lp_token.address.lower():
            raise InvalidPoolConfiguration("Last pooled token must be the base pool LP token")
        if base_pool.get_virtual_price() == 0:
            raise InvalidPoolConfiguration("Base pool has no liquidity to price its LP token")
        self.base_pool = base_pool
        self._base_tokens = [base_pool.get_token(i) for i in range(base_pool.n_coins)]
        super().__init__(host, address, tokens, lp_token, params)

    def _initial_state(self, params: PoolParameters, multipliers: list[int]) -> MetaPoolState:
        return MetaPoolState(
            balances=[0] * len(multipliers),
            precision_multipliers=multipliers,
            swap_fee=params.swap_fee,
            admin_fee=params.admin_fee,
            default_withdraw_fee=params.withdraw_fee,
            ramp=AmplificationRamp.constant(params.a),
            base_virtual_price=self.base_pool.get_virtual_price(),
            base_cache_last_updated=self.host.timestamp,
        )

    def get_base_pool(self) -> BasePool:
        return self.base_pool

    @property
    def base_lp_token_index(self) -> int:
        return self.state.base_lp_token_index

    def get_base_token(self, index: int) -> TransferableToken:
        if not 0 <= index < len(self._base_tokens):
            raise TokenIndexOutOfRange(f"Base token index out of range: {index}")
        return self._base_tokens[index]

    def get_underlying_token(self, virtual_index: int) -> TransferableToken:
        return self._token_for(self._resolve(virtual_index))

    # =========================================================================
    # Base virtual price
    # =========================================================================

    def refresh_base_virtual_price(self) -> int:
        return refresh_base_virtual_price(self.state, self.base_pool, self._now)

    def read_base_virtual_price(self) -> int:
        return read_base_virtual_price(self.state, self.base_pool, self._now)

    def _before_mutation(self) -> None:
        self.refresh_base_virtual_price()

    # =========================================================================
    # Pricing hooks
    # =========================================================================

    def _xp(self, balances: Sequence[int] | None = None) -> list[int]:
        if balances is None:
            balances = self.state.balances
        return normalize_meta(balances, self.state.precision_multipliers, self.read_base_virtual_price())

    def _to_xp_amount(self, index: int, amount: int) -> int:
        xp_amount = super()._to_xp_amount(index, amount)
        if index == self.base_lp_token_index:
            return xp_amount * self.read_base_virtual_price() // BASE_VIRTUAL_PRICE_PRECISION
        return xp_amount

    def _to_native_amount(self, index: int, xp_amount: int) -> int:
        if index == self.base_lp_token_index:
            xp_amount = xp_amount * BASE_VIRTUAL_PRICE_PRECISION // self.read_base_virtual_price()
        return super()._to_native_amount(index, xp_amount)

    # =========================================================================
    # Underlying swaps
    # =========================================================================

    def _resolve(self, virtual_index: int) -> VirtualAsset:
        return resolve_virtual_index(virtual_index, self.base_lp_token_index, len(self._base_tokens))

    def _token_for(self, asset: VirtualAsset) -> TransferableToken:
        if isinstance(asset, LocalAsset):
            return self._tokens[asset.index]
        return self._base_tokens[asset.index]

    def _meta_index(self, asset: VirtualAsset) -> int:
        """Local index that stands in for an asset in the meta pool's invariant."""
        if isinstance(asset, LocalAsset):
            return asset.index
        return self.base_lp_token_index

    def calculate_swap_underlying(self, token_index_from: int, token_index_to: int, dx: int) -> int:
        """Quote a swap between any two tokens of the virtual index space.

        Base-only swaps are quoted by the base pool. Otherwise a base token
        input is valued as the base LP it would mint (paying roughly half the
        base swap fee), and a base token output as a single-token withdrawal
        of the base LP the meta swap yields.

        Args:
            token_index_from: Virtual index of the input token
            token_index_to: Virtual index of the output token
            dx: Input amount in native decimals

        Returns:
            Output amount in native decimals
        """
        source = self._resolve(token_index_from)
        destination = self._resolve(token_index_to)
        if source == destination:
            raise SameTokenSwap("Can't compare token to itself")
        self._check_non_negative([dx], "Swap amount")
        route = plan_underlying_route(source, destination)

        if route is UnderlyingRoute.BASE_ONLY:
            return self.base_pool.calculate_swap(source.index, destination.index, dx)

        base_virtual_price = self.read_base_virtual_price()
        xp = self._xp()
        meta_index_from = self._meta_index(source)
        meta_index_to = self._meta_index(destination)

        if isinstance(source, LocalAsset):
            x = xp[meta_index_from] + self._to_xp_amount(meta_index_from, dx)
        else:
            base_inputs = [0] * len(self._base_tokens)
            base_inputs[source.index] = dx
            base_lp_amount = self.base_pool.calculate_token_amount(self.address, base_inputs, True)
            x = base_lp_amount * base_virtual_price // BASE_VIRTUAL_PRICE_PRECISION
            # Depositing into the base pool costs about half its swap fee
            x = x - x * self.base_pool.swap_fee // (FEE_DENOMINATOR * 2) + xp[meta_index_from]

        y = compute_balance_after_trade(
            self.get_curvature_precise(), meta_index_from, meta_index_to, x, xp
        )
        dy = S(xp[meta_index_to]) - y - 1
        dy = dy - swap_fee_amount(dy.value, self.state.swap_fee)

        if isinstance(destination, LocalAsset):
            return self._to_native_amount(meta_index_to, dy.value)
        base_lp_amount = self._to_native_amount(meta_index_to, dy.value)
        return self.base_pool.calculate_withdraw_one_token(
            self.address, base_lp_amount, destination.index
        )

    def swap_underlying(
        self,
        sender: str,
        token_index_from: int,
        token_index_to: int,
        dx: int,
        min_dy: int,
        deadline: int,
    ) -> int:
        """Swap between any two tokens of the virtual index space.

        Legs that touch the base pool are executed against it with this pool
        as the depositor. The base pool leg runs before the meta pool's
        balances are committed, and the whole operation shares one
        transaction: a failing base pool call leaves nothing applied.

        Args:
            sender: Account paying dx and receiving the output
            token_index_from: Virtual index of the input token
            token_index_to: Virtual index of the output token
            dx: Input amount in native decimals
            min_dy: Minimum acceptable output
            deadline: Latest timestamp at which the swap may execute

        Returns:
            Output amount transferred to sender

        Raises:
            InsufficientFunds: If sender holds less than dx
            SlippageExceeded: If the output is below min_dy
        """
        with self.host.atomic():
            self._check_deadline(deadline)
            self.refresh_base_virtual_price()

            source = self._resolve(token_index_from)
            destination = self._resolve(token_index_to)
            if source == destination:
                raise SameTokenSwap("Can't compare token to itself")
            route = plan_underlying_route(source, destination)

            token_from = self._token_for(source)
            token_to = self._token_for(destination)
            self._check_non_negative([dx], "Swap amount")
            if dx > token_from.balance_of(sender):
                raise InsufficientFunds("Cannot swap more than you own")
            received = self._pull(token_from, sender, dx)

            if route is UnderlyingRoute.BASE_ONLY:
                before = token_to.balance_of(self.address)
                self.base_pool.swap(self.address, source.index, destination.index, received, min_dy, deadline)
                dy = token_to.balance_of(self.address) - before
            else:
                dy = self._swap_through_meta(source, destination, received, deadline)
                if dy < min_dy:
                    raise SlippageExceeded(f"Swap didn't result in min tokens: {dy} < {min_dy}")

            token_to.transfer(self.address, sender, dy)

            logger.debug(
                "token_swap_underlying",
                pool=self.address,
                route=route.value,
                buyer=sender,
                tokens_sold=received,
                tokens_bought=dy,
                sold_id=token_index_from,
                bought_id=token_index_to,
            )
            return dy

    def _swap_through_meta(
        self,
        source: VirtualAsset,
        destination: VirtualAsset,
        received: int,
        deadline: int,
    ) -> int:
        """Run the meta pool leg of an underlying swap and return the output amount."""
        xp = self._xp()
        meta_index_from = self._meta_index(source)
        meta_index_to = self._meta_index(destination)

        if isinstance(source, LocalAsset):
            dx = received
        else:
            base_amounts = [0] * len(self._base_tokens)
            base_amounts[source.index] = received
            dx = self.base_pool.add_liquidity(self.address, base_amounts, 0, deadline)
        x = xp[meta_index_from] + self._to_xp_amount(meta_index_from, dx)

        y = compute_balance_after_trade(
            self.get_curvature_precise(), meta_index_from, meta_index_to, x, xp
        )
        dy = S(xp[meta_index_to]) - y - 1
        dy_fee = swap_fee_amount(dy.value, self.state.swap_fee)
        dy_native = self._to_native_amount(meta_index_to, (dy - dy_fee).value)
        dy_admin_fee = self._to_native_amount(
            meta_index_to, admin_fee_amount(dy_fee, self.state.admin_fee)
        )

        balances = list(self.state.balances)
        balances[meta_index_from] += dx
        balances[meta_index_to] = (S(balances[meta_index_to]) - dy_native - dy_admin_fee).value

        output = dy_native
        if isinstance(destination, BaseAsset):
            token_to = self._base_tokens[destination.index]
            before = token_to.balance_of(self.address)
            self.base_pool.remove_liquidity_one_token(
                self.address, dy_native, destination.index, 0, deadline
            )
            output = token_to.balance_of(self.address) - before

        self.state.balances = balances
        return output
