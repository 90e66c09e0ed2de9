"""StableSwap invariant math.

Core solvers for the StableSwap invariant:

    A * n^n * sum(x_i) + D = A * D * n^n + D^(n+1) / (n^n * prod(x_i))

All inputs are precision-normalized balances (18 decimals) and the
amplification parameter scaled by A_PRECISION. Both solvers use Newton
iteration bounded by MAX_LOOP_LIMIT and stop once two successive values
differ by at most one unit.

IMPORTANT: Arithmetic goes through SafeInt so that an underflow or a
division by zero aborts the calculation instead of returning garbage.
"""

from collections.abc import Sequence

from metaswap.constants import A_PRECISION, MAX_LOOP_LIMIT
from metaswap.errors import (
    BalanceDidNotConverge,
    InvariantDidNotConverge,
    SameTokenSwap,
    TokenIndexOutOfRange,
)
from metaswap.safe_int import S, SafeInt


def compute_invariant(xp: Sequence[int], amp: int) -> int:
    """Calculate the StableSwap invariant D.

    Algorithm:
        1. Initial guess: D = sum(xp). An empty pool has D = 0.
        2. D_P = D^(n+1) / (n^n * prod(xp)), built one balance at a time
        3. D = (nA * S / A_PRECISION + n * D_P) * D
               / ((nA - A_PRECISION) * D / A_PRECISION + (n + 1) * D_P)
        4. Stop when |D_new - D_prev| <= 1

    Args:
        xp: Precision-normalized balances
        amp: Amplification parameter (scaled by A_PRECISION)

    Returns:
        The invariant D

    Raises:
        InvariantDidNotConverge: If MAX_LOOP_LIMIT iterations are exhausted
    """
    n_coins = len(xp)
    s = S(sum(xp))
    if s == 0:
        return 0

    d = s
    n_a = S(amp) * n_coins

    for _ in range(MAX_LOOP_LIMIT):
        d_p = d
        for x in xp:
            # d_p = d_p * D / (x * n); a zero balance with non-zero sum divides by zero
            d_p = (d_p * d) // (S(x) * n_coins)
        d_prev = d
        numerator = ((n_a * s) // A_PRECISION + d_p * n_coins) * d
        denominator = ((n_a - A_PRECISION) * d) // A_PRECISION + d_p * (n_coins + 1)
        d = numerator // denominator
        if d.within_one(d_prev):
            return d.value

    raise InvariantDidNotConverge(f"D does not converge after {MAX_LOOP_LIMIT} iterations")


def compute_balance_after_trade(
    amp: int,
    token_index_from: int,
    token_index_to: int,
    x: int,
    xp: Sequence[int],
) -> int:
    """Solve for the output token balance after the input balance becomes x.

    The invariant is computed from the unchanged balances xp, then the
    output balance y is found such that replacing xp[from] by x and
    xp[to] by y keeps D constant.

    Args:
        amp: Amplification parameter (scaled by A_PRECISION)
        token_index_from: Index of the input token
        token_index_to: Index of the output token
        x: New normalized balance of the input token
        xp: Current normalized balances

    Returns:
        The new normalized balance of the output token

    Raises:
        SameTokenSwap: If token_index_from == token_index_to
        TokenIndexOutOfRange: If either index is out of range
        InvariantDidNotConverge: If D cannot be computed
        BalanceDidNotConverge: If y cannot be computed
    """
    n_coins = len(xp)
    if token_index_from == token_index_to:
        raise SameTokenSwap("Can't compare token to itself")
    if not (0 <= token_index_from < n_coins and 0 <= token_index_to < n_coins):
        raise TokenIndexOutOfRange(
            f"Token index out of range: {token_index_from}, {token_index_to} for {n_coins} tokens"
        )

    d = S(compute_invariant(xp, amp))
    n_a = S(amp) * n_coins
    c = d
    s = S(0)

    for i in range(n_coins):
        if i == token_index_from:
            balance = S(x)
        elif i != token_index_to:
            balance = S(xp[i])
        else:
            continue
        s = s + balance
        c = (c * d) // (balance * n_coins)

    c = (c * d * A_PRECISION) // (n_a * n_coins)
    b = s + (d * A_PRECISION) // n_a
    return _solve_y(d, b, c)


def compute_balance_given_invariant(
    amp: int,
    token_index: int,
    xp: Sequence[int],
    d: int,
) -> int:
    """Solve for xp[token_index] given a target invariant and all other balances.

    Used for single-token withdrawals: D is first reduced in proportion to
    the shares burned, then the remaining balance of the withdrawn token is
    derived from the smaller D.

    Args:
        amp: Amplification parameter (scaled by A_PRECISION)
        token_index: Index of the token whose balance is solved for
        xp: Normalized balances (the value at token_index is ignored)
        d: Target invariant

    Returns:
        The normalized balance of token_index consistent with d

    Raises:
        TokenIndexOutOfRange: If token_index is out of range
        BalanceDidNotConverge: If y cannot be computed
    """
    n_coins = len(xp)
    if not 0 <= token_index < n_coins:
        raise TokenIndexOutOfRange(f"Token not found: index {token_index} for {n_coins} tokens")

    d_s = S(d)
    n_a = S(amp) * n_coins
    c = d_s
    s = S(0)

    for i in range(n_coins):
        if i == token_index:
            continue
        s = s + xp[i]
        c = (c * d_s) // (S(xp[i]) * n_coins)

    c = (c * d_s * A_PRECISION) // (n_a * n_coins)
    b = s + (d_s * A_PRECISION) // n_a
    return _solve_y(d_s, b, c)


def _solve_y(d: SafeInt, b: SafeInt, c: SafeInt) -> int:
    """Newton iteration for y^2 + (b - D) * y = c, starting from y = D."""
    y = d
    for _ in range(MAX_LOOP_LIMIT):
        y_prev = y
        # Denominator 2y + b - D underflows (and aborts) on pathological inputs
        y = (y * y + c) // (y * 2 + b - d)
        if y.within_one(y_prev):
            return y.value

    raise BalanceDidNotConverge(f"Approximation did not converge after {MAX_LOOP_LIMIT} iterations")
