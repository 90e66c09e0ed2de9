"""Pool error classes.

Every failure aborts the enclosing operation. Errors are grouped into four
categories so callers can tell bad input from economic rejections, solver
failures and governance bounds.
"""


class PoolError(Exception):
    """Base error for pool operations."""

    pass


# =============================================================================
# Input validation
# =============================================================================


class InputValidationError(PoolError):
    """Request is malformed and was rejected before any state change."""

    pass


class TokenIndexOutOfRange(InputValidationError):
    """Token index does not address a pooled (or virtual) token."""

    pass


class LengthMismatch(InputValidationError):
    """Per-token array length does not match the number of pooled tokens."""

    pass


class SameTokenSwap(InputValidationError):
    """Input and output token are the same."""

    pass


class DuplicateToken(InputValidationError):
    """A token appears more than once in the pool."""

    pass


class InvalidPoolConfiguration(InputValidationError):
    """Pool cannot be built from the given tokens."""

    pass


class DeadlineExceeded(InputValidationError):
    """Operation deadline is in the past."""

    pass


# =============================================================================
# Economic violations
# =============================================================================


class EconomicViolationError(PoolError):
    """Operation is well-formed but economically unacceptable."""

    pass


class InsufficientFunds(EconomicViolationError):
    """Account does not hold enough tokens or shares."""

    pass


class WithdrawExceedsAvailable(EconomicViolationError):
    """Requested amount exceeds the pool balance or total supply."""

    pass


class InvariantDidNotIncrease(EconomicViolationError):
    """Deposit did not grow the invariant D."""

    pass


class SlippageExceeded(EconomicViolationError):
    """Output is below the caller's minimum or burn above the caller's maximum."""

    pass


class ZeroBurnAmount(EconomicViolationError):
    """Withdrawal would burn no liquidity shares."""

    pass


# =============================================================================
# Numeric non-convergence
# =============================================================================


class NonConvergenceError(PoolError):
    """Newton iteration exceeded MAX_LOOP_LIMIT. Balances are pathological."""

    pass


class InvariantDidNotConverge(NonConvergenceError):
    """Iteration for the invariant D did not converge."""

    pass


class BalanceDidNotConverge(NonConvergenceError):
    """Iteration for a token balance Y did not converge."""

    pass


# =============================================================================
# Governance bounds
# =============================================================================


class GovernanceBoundError(PoolError):
    """Parameter change is outside the allowed range."""

    pass


class FeeTooHigh(GovernanceBoundError):
    """Fee exceeds its configured maximum."""

    pass


class RampTooSoon(GovernanceBoundError):
    """A ramp started less than RAMP_COOLDOWN ago."""

    pass


class RampTooShort(GovernanceBoundError):
    """Requested ramp is shorter than MIN_RAMP_TIME."""

    pass


class CurvatureOutOfRange(GovernanceBoundError):
    """Target A must be > 0 and < MAX_A."""

    pass


class CurvatureChangeTooLarge(GovernanceBoundError):
    """Target A differs from the current A by more than MAX_A_CHANGE."""

    pass


class RampAlreadyStopped(GovernanceBoundError):
    """There is no ramp in progress."""

    pass
