"""Stable swap pool.

StableSwapPool orchestrates the normalizer, the invariant solvers, the
amplification ramp and the fee model to implement swaps and liquidity
operations on a PoolState. Every mutating operation runs inside
Host.atomic(), so it either fully applies or leaves pools and token
ledgers untouched.
"""

from __future__ import annotations

import copy
from collections.abc import Sequence

import structlog

from metaswap.config import PoolParameters
from metaswap.constants import (
    FEE_DENOMINATOR,
    MAX_ADMIN_FEE,
    MAX_POOLED_TOKENS,
    MAX_SWAP_FEE,
    MAX_WITHDRAW_FEE,
    MIN_POOLED_TOKENS,
    POOL_PRECISION_DECIMALS,
    ZERO_ADDRESS,
)
from metaswap.errors import (
    DeadlineExceeded,
    DuplicateToken,
    FeeTooHigh,
    InputValidationError,
    InsufficientFunds,
    InvalidPoolConfiguration,
    InvariantDidNotIncrease,
    LengthMismatch,
    SlippageExceeded,
    TokenIndexOutOfRange,
    WithdrawExceedsAvailable,
    ZeroBurnAmount,
)
from metaswap.ledger.host import Host
from metaswap.ledger.interfaces import ShareLedger, TransferableToken
from metaswap.math.stable_math import (
    compute_balance_after_trade,
    compute_balance_given_invariant,
    compute_invariant,
)
from metaswap.pools.amplification import AmplificationRamp
from metaswap.pools.fees import (
    admin_fee_amount,
    apply_withdraw_fee,
    blended_fee_multiplier,
    current_withdraw_fee,
    fee_per_token,
    gross_up_for_withdraw_fee,
    imbalance_fees,
    swap_fee_amount,
)
from metaswap.pools.precision import normalize, precision_multipliers
from metaswap.pools.state import PoolState, WithdrawFeeAccount
from metaswap.safe_int import S, Underflow

logger = structlog.get_logger()


class StableSwapPool:
    """StableSwap pool over 2 to 32 tokens of up to 18 decimals.

    Attributes:
        host: Execution substrate (clock and transaction boundary)
        address: Pool address, used as the custody account for pooled tokens
        state: Mutable pool state
    """

    def __init__(
        self,
        host: Host,
        address: str,
        tokens: Sequence[TransferableToken],
        lp_token: ShareLedger,
        params: PoolParameters,
    ) -> None:
        n_coins = len(tokens)
        if not MIN_POOLED_TOKENS <= n_coins <= MAX_POOLED_TOKENS:
            raise InvalidPoolConfiguration(
                f"Pool needs {MIN_POOLED_TOKENS}-{MAX_POOLED_TOKENS} tokens, got {n_coins}"
            )

        token_indexes: dict[str, int] = {}
        for i, token in enumerate(tokens):
            token_address = token.address.lower()
            if token_address in token_indexes:
                raise DuplicateToken(f"Duplicate tokens: {token_address}")
            token_indexes[token_address] = i

        if lp_token.symbol != params.lp_token_symbol:
            raise InvalidPoolConfiguration(
                f"LP token symbol {lp_token.symbol!r} does not match {params.lp_token_symbol!r}"
            )

        self.host = host
        self.address = address.lower()
        self._tokens = list(tokens)
        self._token_indexes = token_indexes
        self._lp_token = lp_token
        self.state = self._initial_state(params, precision_multipliers([t.decimals for t in tokens]))

        lp_token.set_transfer_hook(self.update_user_withdraw_fee)
        host.register(self)

        logger.info(
            "pool_created",
            pool=self.address,
            lp_token=params.lp_token_symbol,
            n_coins=n_coins,
            a=params.a,
            swap_fee=params.swap_fee,
            admin_fee=params.admin_fee,
            withdraw_fee=params.withdraw_fee,
        )

    def _initial_state(self, params: PoolParameters, multipliers: list[int]) -> PoolState:
        return PoolState(
            balances=[0] * len(multipliers),
            precision_multipliers=multipliers,
            swap_fee=params.swap_fee,
            admin_fee=params.admin_fee,
            default_withdraw_fee=params.withdraw_fee,
            ramp=AmplificationRamp.constant(params.a),
        )

    # =========================================================================
    # Journaling
    # =========================================================================

    def snapshot(self) -> PoolState:
        return copy.deepcopy(self.state)

    def restore(self, snapshot: PoolState) -> None:
        self.state = snapshot

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def lp_token(self) -> ShareLedger:
        return self._lp_token

    @property
    def n_coins(self) -> int:
        return len(self._tokens)

    @property
    def swap_fee(self) -> int:
        return self.state.swap_fee

    @property
    def admin_fee(self) -> int:
        return self.state.admin_fee

    @property
    def default_withdraw_fee(self) -> int:
        return self.state.default_withdraw_fee

    @property
    def tokens(self) -> list[TransferableToken]:
        return list(self._tokens)

    def get_token(self, index: int) -> TransferableToken:
        self._check_index(index)
        return self._tokens[index]

    def get_token_index(self, token_address: str) -> int:
        """Return the index of a pooled token.

        Raises:
            TokenIndexOutOfRange: If the token is not in the pool
        """
        index = self._token_indexes.get(token_address.lower())
        if index is None:
            raise TokenIndexOutOfRange(f"Token does not exist: {token_address}")
        return index

    def get_token_balance(self, index: int) -> int:
        self._check_index(index)
        return self.state.balances[index]

    def get_curvature(self) -> int:
        """Current amplification parameter A, unscaled."""
        return self.state.ramp.a(self._now)

    def get_curvature_precise(self) -> int:
        """Current amplification parameter A, scaled by A_PRECISION."""
        return self.state.ramp.a_precise(self._now)

    def get_deposit_timestamp(self, user: str) -> int:
        return self.state.withdraw_fee_account(user).deposit_timestamp

    def get_withdraw_fee_multiplier(self, user: str) -> int:
        return self.state.withdraw_fee_account(user).fee_multiplier

    def calculate_current_withdraw_fee(self, user: str) -> int:
        """Withdraw fee the user would pay right now, against FEE_DENOMINATOR."""
        return current_withdraw_fee(
            self.state.default_withdraw_fee,
            self.state.withdraw_fee_account(user),
            self._now,
        )

    def get_admin_balance(self, index: int) -> int:
        """Tokens held by the pool beyond its accounted balance (collected admin fees)."""
        self._check_index(index)
        return self._tokens[index].balance_of(self.address) - self.state.balances[index]

    # =========================================================================
    # Pricing hooks
    # =========================================================================

    @property
    def _now(self) -> int:
        return self.host.timestamp

    def _before_mutation(self) -> None:
        """Prepare pricing inputs for a state-changing operation."""

    def _xp(self, balances: Sequence[int] | None = None) -> list[int]:
        """Normalize balances (current balances by default) to pool precision."""
        if balances is None:
            balances = self.state.balances
        return normalize(balances, self.state.precision_multipliers)

    def _to_xp_amount(self, index: int, amount: int) -> int:
        """Convert a native token amount to pool precision."""
        return amount * self.state.precision_multipliers[index]

    def _to_native_amount(self, index: int, xp_amount: int) -> int:
        """Convert a pool-precision amount back to native decimals, rounding down."""
        return xp_amount // self.state.precision_multipliers[index]

    def _invariant(self, balances: Sequence[int] | None = None) -> int:
        return compute_invariant(self._xp(balances), self.get_curvature_precise())

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.n_coins:
            raise TokenIndexOutOfRange(f"Token index out of range: {index}")

    def _check_length(self, values: Sequence[int], name: str) -> None:
        if len(values) != self.n_coins:
            raise LengthMismatch(f"{name} must match pooled tokens: {len(values)} != {self.n_coins}")

    def _check_non_negative(self, values: Sequence[int], name: str) -> None:
        if any(value < 0 for value in values):
            raise InputValidationError(f"{name} cannot be negative: {list(values)}")

    def _check_deadline(self, deadline: int) -> None:
        if self._now > deadline:
            raise DeadlineExceeded(f"Deadline not met: {deadline} < {self._now}")

    def _pull(self, token: TransferableToken, sender: str, amount: int) -> int:
        """Transfer tokens in and return the amount actually received."""
        before = token.balance_of(self.address)
        token.transfer_from(sender, self.address, amount)
        return token.balance_of(self.address) - before

    # =========================================================================
    # Pricing queries
    # =========================================================================

    def get_virtual_price(self) -> int:
        """Value of one LP share in pool precision (1e18 == 1.0).

        Returns 0 for a pool without liquidity.
        """
        d = self._invariant()
        supply = self._lp_token.total_supply()
        if supply > 0:
            return d * 10**POOL_PRECISION_DECIMALS // supply
        return 0

    def calculate_swap(self, token_index_from: int, token_index_to: int, dx: int) -> int:
        """Quote the output of swapping dx of one pooled token for another.

        Args:
            token_index_from: Index of the input token
            token_index_to: Index of the output token
            dx: Input amount in native decimals

        Returns:
            Output amount in native decimals, net of the swap fee
        """
        dy, _ = self._calculate_swap(token_index_from, token_index_to, dx)
        return dy

    def _calculate_swap(self, token_index_from: int, token_index_to: int, dx: int) -> tuple[int, int]:
        """Return (dy, dy_fee): native output and the swap fee in pool precision."""
        self._check_non_negative([dx], "Swap amount")
        self._check_index(token_index_from)
        self._check_index(token_index_to)
        xp = self._xp()
        x = self._to_xp_amount(token_index_from, dx) + xp[token_index_from]
        y = compute_balance_after_trade(
            self.get_curvature_precise(), token_index_from, token_index_to, x, xp
        )
        dy = S(xp[token_index_to]) - y - 1
        dy_fee = swap_fee_amount(dy.value, self.state.swap_fee)
        return self._to_native_amount(token_index_to, (dy - dy_fee).value), dy_fee

    def calculate_token_amount(self, account: str, amounts: Sequence[int], deposit: bool) -> int:
        """Estimate LP shares minted by a deposit or burned by a withdrawal.

        Imbalance fees are not included. For withdrawals the account's
        current withdraw fee is added on top.

        Args:
            account: Depositor whose withdraw fee applies
            amounts: Per-token amounts in native decimals
            deposit: True for a deposit, False for a withdrawal

        Returns:
            LP share amount

        Raises:
            LengthMismatch: If amounts does not match the pooled tokens
            WithdrawExceedsAvailable: If a withdrawal exceeds a pool balance
        """
        self._check_length(amounts, "Amounts")
        self._check_non_negative(amounts, "Amounts")
        balances = self.state.balances
        d0 = self._invariant(balances)

        new_balances = []
        for balance, amount in zip(balances, amounts):
            if deposit:
                new_balances.append(balance + amount)
            elif amount > balance:
                raise WithdrawExceedsAvailable("Cannot withdraw more than available")
            else:
                new_balances.append(balance - amount)

        d1 = self._invariant(new_balances)
        supply = self._lp_token.total_supply()

        if deposit:
            if supply == 0:
                return d1
            return (d1 - d0) * supply // d0
        burn = (S(d0) - d1) * supply // d0
        return gross_up_for_withdraw_fee(burn.value, self.calculate_current_withdraw_fee(account))

    def calculate_remove_liquidity(self, account: str, amount: int) -> list[int]:
        """Quote a balanced withdrawal of amount LP shares.

        Raises:
            WithdrawExceedsAvailable: If amount exceeds the total supply
        """
        self._check_non_negative([amount], "Withdraw amount")
        supply = self._lp_token.total_supply()
        if amount > supply:
            raise WithdrawExceedsAvailable("Cannot exceed total supply")
        if supply == 0:
            return [0] * self.n_coins
        fee_adjusted = apply_withdraw_fee(amount, self.calculate_current_withdraw_fee(account))
        return [balance * fee_adjusted // supply for balance in self.state.balances]

    def calculate_withdraw_one_token(self, account: str, token_amount: int, token_index: int) -> int:
        """Quote burning token_amount LP shares for a single token.

        Args:
            account: Depositor whose withdraw fee applies
            token_amount: LP shares to burn
            token_index: Index of the token to receive

        Returns:
            Amount of the token received, after imbalance and withdraw fees
        """
        dy, _ = self._calculate_withdraw_one_token(account, token_amount, token_index)
        return dy

    def _calculate_withdraw_one_token(
        self, account: str, token_amount: int, token_index: int
    ) -> tuple[int, int]:
        dy, new_y = self._calculate_withdraw_one_token_dy(token_index, token_amount)
        xp = self._xp()
        dy_swap_fee = S(self._to_native_amount(token_index, xp[token_index] - new_y)) - dy
        dy = apply_withdraw_fee(dy, self.calculate_current_withdraw_fee(account))
        return dy, dy_swap_fee.value

    def _calculate_withdraw_one_token_dy(self, token_index: int, token_amount: int) -> tuple[int, int]:
        """Return (dy, new_y) for a single-token withdrawal before the withdraw fee.

        D shrinks in proportion to the shares burned. new_y is the token's
        balance consistent with the smaller D; the imbalance fee is then
        charged on every token's deviation from the proportional outcome.
        """
        self._check_non_negative([token_amount], "Withdraw amount")
        self._check_index(token_index)
        supply = self._lp_token.total_supply()
        if token_amount > supply:
            raise WithdrawExceedsAvailable("Cannot exceed total supply")
        if supply == 0:
            raise WithdrawExceedsAvailable("Pool has no liquidity")

        amp = self.get_curvature_precise()
        xp = self._xp()
        d0 = compute_invariant(xp, amp)
        d1 = d0 - token_amount * d0 // supply

        if token_amount > xp[token_index]:
            raise WithdrawExceedsAvailable("Withdraw exceeds available")

        new_y = compute_balance_given_invariant(amp, token_index, xp, d1)

        rate = fee_per_token(self.state.swap_fee, len(xp))
        xp_reduced = []
        for i, xpi in enumerate(xp):
            expected = xpi * d1 // d0
            delta = S(expected) - new_y if i == token_index else S(xpi) - expected
            xp_reduced.append((S(xpi) - delta * rate // FEE_DENOMINATOR).value)

        y_reduced = compute_balance_given_invariant(amp, token_index, xp_reduced, d1)
        dy = S(xp_reduced[token_index]) - y_reduced - 1
        return self._to_native_amount(token_index, dy.value), new_y

    # =========================================================================
    # Swaps
    # =========================================================================

    def swap(
        self,
        sender: str,
        token_index_from: int,
        token_index_to: int,
        dx: int,
        min_dy: int,
        deadline: int,
    ) -> int:
        """Swap dx of one pooled token for another.

        The output is priced on the amount actually received, so tokens that
        take a fee on transfer are handled.

        Args:
            sender: Account paying dx and receiving the output
            token_index_from: Index of the input token
            token_index_to: Index of the output token
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
            self._before_mutation()
            self._check_index(token_index_from)
            self._check_index(token_index_to)

            self._check_non_negative([dx], "Swap amount")
            token_from = self._tokens[token_index_from]
            if dx > token_from.balance_of(sender):
                raise InsufficientFunds("Cannot swap more than you own")

            transferred_dx = self._pull(token_from, sender, dx)
            dy, dy_fee = self._calculate_swap(token_index_from, token_index_to, transferred_dx)
            if dy < min_dy:
                raise SlippageExceeded(f"Swap didn't result in min tokens: {dy} < {min_dy}")

            dy_admin_fee = self._to_native_amount(
                token_index_to, admin_fee_amount(dy_fee, self.state.admin_fee)
            )
            balances = self.state.balances
            balances[token_index_from] += transferred_dx
            balances[token_index_to] = (S(balances[token_index_to]) - dy - dy_admin_fee).value

            self._tokens[token_index_to].transfer(self.address, sender, dy)

            logger.debug(
                "token_swap",
                pool=self.address,
                buyer=sender,
                tokens_sold=transferred_dx,
                tokens_bought=dy,
                sold_id=token_index_from,
                bought_id=token_index_to,
            )
            return dy

    # =========================================================================
    # Liquidity
    # =========================================================================

    def add_liquidity(
        self,
        sender: str,
        amounts: Sequence[int],
        min_to_mint: int,
        deadline: int,
    ) -> int:
        """Deposit tokens and mint LP shares.

        The first deposit must include every token and mints D shares. Later
        deposits pay an imbalance fee on each token's deviation from the
        proportional deposit and mint in proportion to the fee-adjusted
        growth of D.

        Args:
            sender: Depositor
            amounts: Per-token amounts in native decimals
            min_to_mint: Minimum acceptable LP shares
            deadline: Latest timestamp at which the deposit may execute

        Returns:
            LP shares minted to sender

        Raises:
            InvariantDidNotIncrease: If the deposit does not grow D
            SlippageExceeded: If fewer than min_to_mint shares would be minted
        """
        with self.host.atomic():
            self._check_deadline(deadline)
            self._before_mutation()
            self._check_length(amounts, "Amounts")
            self._check_non_negative(amounts, "Amounts")

            supply = self._lp_token.total_supply()
            old_balances = list(self.state.balances)
            d0 = self._invariant(old_balances) if supply != 0 else 0

            new_balances = list(old_balances)
            for i, amount in enumerate(amounts):
                if supply == 0 and amount <= 0:
                    raise InputValidationError("Must supply all tokens in pool")
                if amount != 0:
                    new_balances[i] += self._pull(self._tokens[i], sender, amount)

            d1 = self._invariant(new_balances)
            if d1 <= d0:
                raise InvariantDidNotIncrease(f"D should increase: {d0} -> {d1}")

            fees = [0] * self.n_coins
            if supply == 0:
                self.state.balances = new_balances
                to_mint = d1
            else:
                result = imbalance_fees(
                    d0, d1, old_balances, new_balances, self.state.swap_fee, self.state.admin_fee
                )
                fees = result.fees
                self.state.balances = result.stored_balances
                d2 = self._invariant(result.fee_free_balances)
                to_mint = (d2 - d0) * supply // d0

            if to_mint < min_to_mint:
                raise SlippageExceeded(f"Couldn't mint min requested: {to_mint} < {min_to_mint}")

            self.update_user_withdraw_fee(sender, to_mint)
            self._lp_token.mint(sender, to_mint)

            logger.debug(
                "add_liquidity",
                pool=self.address,
                provider=sender,
                token_amounts=list(amounts),
                fees=fees,
                minted=to_mint,
            )
            return to_mint

    def remove_liquidity(
        self,
        sender: str,
        amount: int,
        min_amounts: Sequence[int],
        deadline: int,
    ) -> list[int]:
        """Burn LP shares for a pro-rata share of every token.

        No invariant is computed. The sender's withdraw fee is deducted from
        the burned amount before pro-rating.

        Raises:
            InsufficientFunds: If sender holds fewer than amount shares
            SlippageExceeded: If any token amount is below its minimum
        """
        with self.host.atomic():
            self._check_deadline(deadline)
            self._before_mutation()
            if amount > self._lp_token.balance_of(sender):
                raise InsufficientFunds(">LP.balanceOf")
            self._check_length(min_amounts, "Min amounts")

            amounts = self.calculate_remove_liquidity(sender, amount)
            balances = self.state.balances
            for i, (out, minimum) in enumerate(zip(amounts, min_amounts)):
                if out < minimum:
                    raise SlippageExceeded(f"amounts[{i}] < minAmounts[{i}]: {out} < {minimum}")
                balances[i] -= out

            self._lp_token.burn_from(sender, amount)
            for token, out in zip(self._tokens, amounts):
                token.transfer(self.address, sender, out)

            logger.debug(
                "remove_liquidity",
                pool=self.address,
                provider=sender,
                token_amounts=amounts,
                burned=amount,
            )
            return amounts

    def remove_liquidity_one_token(
        self,
        sender: str,
        token_amount: int,
        token_index: int,
        min_amount: int,
        deadline: int,
    ) -> int:
        """Burn LP shares for a single token.

        Args:
            sender: Share holder
            token_amount: LP shares to burn
            token_index: Index of the token to receive
            min_amount: Minimum acceptable token amount
            deadline: Latest timestamp at which the withdrawal may execute

        Returns:
            Token amount transferred to sender

        Raises:
            InsufficientFunds: If sender holds fewer than token_amount shares
            SlippageExceeded: If the output is below min_amount
        """
        with self.host.atomic():
            self._check_deadline(deadline)
            self._before_mutation()
            if token_amount > self._lp_token.balance_of(sender):
                raise InsufficientFunds(">LP.balanceOf")
            self._check_index(token_index)

            dy, dy_fee = self._calculate_withdraw_one_token(sender, token_amount, token_index)
            if dy < min_amount:
                raise SlippageExceeded(f"dy < minAmount: {dy} < {min_amount}")

            balances = self.state.balances
            balances[token_index] = (
                S(balances[token_index]) - dy - admin_fee_amount(dy_fee, self.state.admin_fee)
            ).value

            self._lp_token.burn_from(sender, token_amount)
            self._tokens[token_index].transfer(self.address, sender, dy)

            logger.debug(
                "remove_liquidity_one",
                pool=self.address,
                provider=sender,
                lp_token_amount=token_amount,
                bought_id=token_index,
                tokens_bought=dy,
            )
            return dy

    def remove_liquidity_imbalance(
        self,
        sender: str,
        amounts: Sequence[int],
        max_burn_amount: int,
        deadline: int,
    ) -> int:
        """Withdraw exact token amounts, burning the LP shares they cost.

        The burn is derived from the drop in D after imbalance fees, then
        grossed up by the sender's withdraw fee.

        Returns:
            LP shares burned

        Raises:
            InsufficientFunds: If max_burn_amount is zero or exceeds the sender's shares
            WithdrawExceedsAvailable: If an amount exceeds the pool balance
            ZeroBurnAmount: If the withdrawal would burn nothing
            SlippageExceeded: If the burn exceeds max_burn_amount
        """
        with self.host.atomic():
            self._check_deadline(deadline)
            self._before_mutation()
            self._check_length(amounts, "Amounts")
            self._check_non_negative(amounts, "Amounts")
            if max_burn_amount == 0 or max_burn_amount > self._lp_token.balance_of(sender):
                raise InsufficientFunds(">LP.balanceOf")

            supply = self._lp_token.total_supply()
            old_balances = list(self.state.balances)
            d0 = self._invariant(old_balances)

            try:
                new_balances = [(S(b) - a).value for b, a in zip(old_balances, amounts)]
            except Underflow as e:
                raise WithdrawExceedsAvailable("Cannot withdraw more than available") from e

            d1 = self._invariant(new_balances)
            result = imbalance_fees(
                d0, d1, old_balances, new_balances, self.state.swap_fee, self.state.admin_fee
            )
            self.state.balances = result.stored_balances
            d2 = self._invariant(result.fee_free_balances)

            token_amount = (S(d0) - d2) * supply // d0
            if token_amount == 0:
                raise ZeroBurnAmount("Burnt amount cannot be zero")
            burn = gross_up_for_withdraw_fee(
                token_amount.value + 1, self.calculate_current_withdraw_fee(sender)
            )
            if burn > max_burn_amount:
                raise SlippageExceeded(f"tokenAmount > maxBurnAmount: {burn} > {max_burn_amount}")

            self._lp_token.burn_from(sender, burn)
            for token, amount in zip(self._tokens, amounts):
                token.transfer(self.address, sender, amount)

            logger.debug(
                "remove_liquidity_imbalance",
                pool=self.address,
                provider=sender,
                token_amounts=list(amounts),
                fees=result.fees,
                burned=burn,
            )
            return burn

    def update_user_withdraw_fee(self, user: str, to_mint: int) -> None:
        """Blend a user's withdraw fee schedule with newly received shares.

        Called before shares are minted to (or transferred to) the user, so
        the user's current share balance is the pre-receipt balance.
        """
        if user.lower() == ZERO_ADDRESS:
            return
        current_fee = self.calculate_current_withdraw_fee(user)
        multiplier = blended_fee_multiplier(
            self._lp_token.balance_of(user),
            current_fee,
            to_mint,
            self.state.default_withdraw_fee,
        )
        self.state.set_withdraw_fee_account(
            user, WithdrawFeeAccount(deposit_timestamp=self._now, fee_multiplier=multiplier)
        )

    # =========================================================================
    # Governance
    # =========================================================================

    def withdraw_admin_fees(self, recipient: str) -> list[int]:
        """Send every token's collected admin fees to recipient."""
        with self.host.atomic():
            withdrawn = []
            for i, token in enumerate(self._tokens):
                amount = self.get_admin_balance(i)
                if amount > 0:
                    token.transfer(self.address, recipient, amount)
                withdrawn.append(amount)
            logger.info("admin_fees_withdrawn", pool=self.address, recipient=recipient, amounts=withdrawn)
            return withdrawn

    def set_admin_fee(self, new_admin_fee: int) -> None:
        _check_fee(new_admin_fee, MAX_ADMIN_FEE)
        self.state.admin_fee = new_admin_fee
        logger.info("new_admin_fee", pool=self.address, admin_fee=new_admin_fee)

    def set_swap_fee(self, new_swap_fee: int) -> None:
        _check_fee(new_swap_fee, MAX_SWAP_FEE)
        self.state.swap_fee = new_swap_fee
        logger.info("new_swap_fee", pool=self.address, swap_fee=new_swap_fee)

    def set_default_withdraw_fee(self, new_withdraw_fee: int) -> None:
        _check_fee(new_withdraw_fee, MAX_WITHDRAW_FEE)
        self.state.default_withdraw_fee = new_withdraw_fee
        logger.info("new_withdraw_fee", pool=self.address, withdraw_fee=new_withdraw_fee)

    def begin_ramp(self, future_a: int, future_time: int) -> None:
        """Start ramping A to future_a (unscaled), reaching it at future_time."""
        with self.host.atomic():
            self.state.ramp.begin(future_a, future_time, self._now)

    def stop_ramp(self) -> None:
        """Freeze A at its current interpolated value."""
        with self.host.atomic():
            self.state.ramp.stop(self._now)


def _check_fee(fee: int, maximum: int) -> None:
    if not 0 <= fee <= maximum:
        raise FeeTooHigh(f"Fee is too high: {fee} > {maximum}")
