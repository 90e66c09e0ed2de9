"""Checked uint256 arithmetic for pool math.

Pool balances, invariants and fee amounts behave like on-chain uint256
values: going below zero, above 2^256 - 1, or dividing by zero reverts the
whole operation. SafeInt wraps a Python int and raises a SafeIntError
(a PoolError) instead of silently producing a negative or oversized value.

Usage pattern:
    from metaswap.safe_int import S

    dy = S(xp[j]) - y - 1  # Underflow if y > xp[j] - 1
    return dy.value
"""

from __future__ import annotations

from metaswap.errors import PoolError

UINT256_MAX = 2**256 - 1


class SafeIntError(PoolError, ArithmeticError):
    """Checked arithmetic reverted."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction went below zero."""

    pass


class Uint256Overflow(SafeIntError):
    """Result does not fit in a uint256."""

    pass


def _raw(x: SafeInt | int) -> int:
    return x._value if isinstance(x, SafeInt) else x


def _checked(result: int) -> SafeInt:
    if result > UINT256_MAX:
        raise Uint256Overflow(f"Result exceeds uint256 max: {result}")
    return SafeInt(result)


class SafeInt:
    """Integer operand with uint256 revert semantics.

    Construction accepts any int; the bounds are enforced by the arithmetic
    operators and by to_uint256().

    Attributes:
        value: The wrapped integer
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            value = value._value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return _checked(self._value + _raw(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return _checked(self._value * _raw(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Raises Underflow if other is larger than self."""
        return _subtract(self._value, _raw(other))

    def __rsub__(self, other: int) -> SafeInt:
        return _subtract(other, self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Division rounding down. Raises DivisionByZero."""
        return _divide(self._value, _raw(other))

    def __rfloordiv__(self, other: int) -> SafeInt:
        return _divide(other, self._value)

    # =========================================================================
    # Comparison and conversion
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SafeInt, int)):
            return self._value == _raw(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _raw(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _raw(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _raw(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _raw(other)

    def __int__(self) -> int:
        return self._value

    __index__ = __int__

    def __bool__(self) -> bool:
        return self._value != 0

    # =========================================================================
    # Pool helpers
    # =========================================================================

    def difference(self, other: SafeInt | int) -> SafeInt:
        """Distance |self - other|, used for imbalance fees."""
        return SafeInt(abs(self._value - _raw(other)))

    def within_one(self, other: SafeInt | int) -> bool:
        """Newton convergence test: the two values differ by at most 1."""
        return abs(self._value - _raw(other)) <= 1

    def to_uint256(self) -> int:
        """Return the wrapped int, checking it is a valid uint256.

        Raises:
            Uint256Overflow: If the value is negative or above UINT256_MAX
        """
        if not 0 <= self._value <= UINT256_MAX:
            raise Uint256Overflow(f"Not a uint256: {self._value}")
        return self._value


def _subtract(a: int, b: int) -> SafeInt:
    if b > a:
        raise Underflow(f"Underflow: {a} - {b}")
    return SafeInt(a - b)


def _divide(a: int, b: int) -> SafeInt:
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} // 0")
    return SafeInt(a // b)


S = SafeInt
