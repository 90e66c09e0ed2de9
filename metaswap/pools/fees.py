"""Pool fee model.

Swap fees, the admin's cut of them, imbalance fees charged on uneven
liquidity changes, and the per-depositor withdraw fee that decays linearly
after each deposit. All rates are expressed against FEE_DENOMINATOR.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from metaswap.constants import FEE_DENOMINATOR, MIN_POOLED_TOKENS, WITHDRAW_FEE_DECAY_TIME
from metaswap.errors import InvalidPoolConfiguration
from metaswap.pools.state import WithdrawFeeAccount
from metaswap.safe_int import S


def swap_fee_amount(amount: int, swap_fee: int) -> int:
    """Fee taken from a swap output amount."""
    return amount * swap_fee // FEE_DENOMINATOR


def admin_fee_amount(fee: int, admin_fee: int) -> int:
    """Admin's share of a collected fee."""
    return fee * admin_fee // FEE_DENOMINATOR


def fee_per_token(swap_fee: int, n_coins: int) -> int:
    """Imbalance fee rate applied to each token's deviation from its ideal balance.

    Equals swap_fee * n / (4 * (n - 1)), so a fully one-sided deposit pays
    roughly half a swap fee on the part that is effectively swapped.

    Raises:
        InvalidPoolConfiguration: If the pool has fewer than two tokens
    """
    if n_coins < MIN_POOLED_TOKENS:
        raise InvalidPoolConfiguration(f"Imbalance fee needs at least 2 tokens, got {n_coins}")
    return swap_fee * n_coins // (4 * (n_coins - 1))


@dataclass(frozen=True)
class ImbalanceFees:
    """Result of applying imbalance fees to a liquidity change.

    Attributes:
        fees: Fee charged per token, in native decimals
        stored_balances: Balances to record in pool state (admin share removed)
        fee_free_balances: Balances net of the full fee, used to compute D2
    """

    fees: list[int]
    stored_balances: list[int]
    fee_free_balances: list[int]


def imbalance_fees(
    d0: int,
    d1: int,
    old_balances: Sequence[int],
    new_balances: Sequence[int],
    swap_fee: int,
    admin_fee: int,
) -> ImbalanceFees:
    """Charge each token for its distance from the proportional ideal balance.

    The ideal balance of token i is old_balances[i] * d1 / d0, i.e. what it
    would be had the invariant moved from d0 to d1 without changing the
    pool's composition.

    Args:
        d0: Invariant before the liquidity change
        d1: Invariant after the liquidity change, before fees
        old_balances: Balances before the change
        new_balances: Balances after the change, before fees
        swap_fee: Pool swap fee
        admin_fee: Pool admin fee

    Returns:
        ImbalanceFees with the per-token fees and the two adjusted balance vectors
    """
    rate = fee_per_token(swap_fee, len(old_balances))
    fees = []
    stored = []
    fee_free = []
    for old_balance, new_balance in zip(old_balances, new_balances):
        ideal_balance = S(d1) * old_balance // d0
        fee = (S(rate) * ideal_balance.difference(new_balance)) // FEE_DENOMINATOR
        fees.append(fee.value)
        stored.append((S(new_balance) - admin_fee_amount(fee.value, admin_fee)).value)
        fee_free.append((S(new_balance) - fee).value)
    return ImbalanceFees(fees=fees, stored_balances=stored, fee_free_balances=fee_free)


# =============================================================================
# Withdraw fee
# =============================================================================


def current_withdraw_fee(default_withdraw_fee: int, account: WithdrawFeeAccount, now: int) -> int:
    """Withdraw fee currently owed by a depositor.

    Decays linearly from default_withdraw_fee * multiplier at deposit time
    to zero at deposit_timestamp + WITHDRAW_FEE_DECAY_TIME.
    """
    end_time = account.deposit_timestamp + WITHDRAW_FEE_DECAY_TIME
    if end_time <= now:
        return 0
    time_left = end_time - now
    return (
        default_withdraw_fee
        * account.fee_multiplier
        * time_left
        // WITHDRAW_FEE_DECAY_TIME
        // FEE_DENOMINATOR
    )


def blended_fee_multiplier(
    current_balance: int,
    current_fee: int,
    to_mint: int,
    default_withdraw_fee: int,
) -> int:
    """New withdraw fee multiplier after a depositor receives more shares.

    Weights the depositor's residual fee on their existing balance against
    the full default fee on the new shares, so adding to a position does not
    reset the fee to its maximum:

        ((balance * current_fee) + (to_mint * default_fee)) * FEE_DENOMINATOR
        / ((balance + to_mint) * default_fee)

    A zero default fee, or an empty position receiving nothing, yields
    FEE_DENOMINATOR.
    """
    total = current_balance + to_mint
    if default_withdraw_fee == 0 or total == 0:
        return FEE_DENOMINATOR
    return (
        (current_balance * current_fee + to_mint * default_withdraw_fee)
        * FEE_DENOMINATOR
        // (total * default_withdraw_fee)
    )


def apply_withdraw_fee(amount: int, withdraw_fee: int) -> int:
    """Amount left after deducting the withdraw fee."""
    return amount * (FEE_DENOMINATOR - withdraw_fee) // FEE_DENOMINATOR


def gross_up_for_withdraw_fee(amount: int, withdraw_fee: int) -> int:
    """Shares that must be burned so that amount remains after the withdraw fee."""
    return amount * FEE_DENOMINATOR // (FEE_DENOMINATOR - withdraw_fee)
