"""Checked unsigned integer wrapper for pool arithmetic.

This module provides SafeInt, a lightweight wrapper that makes arithmetic on
reserves, fees and share amounts fail loudly instead of producing values a
fixed-width implementation would wrap:
- Results above 2^128-1 raise Overflow (intermediates are 128-bit)
- Subtraction below zero raises Underflow
- Division by zero raises DivisionByZero
- Values stored back into a pair must fit in 64 bits (to_u64)

All three errors are ArithmeticOverflow subclasses, so callers of the engine
only need to handle one class.

Usage pattern:
    from amm.safe_int import S

    def proportional(amount: int, supply: int, reserve: int) -> int:
        # Wrap at entry
        sa, st, sr = S(amount), S(supply), S(reserve)

        # Natural arithmetic - automatically checked
        shares = (sa * st) // sr  # Raises if reserve == 0

        # Unwrap at exit, enforcing the storage width
        return shares.to_u64()
"""

from __future__ import annotations

from math import isqrt

from amm.constants import U64_MAX, U128_MAX
from amm.errors import ArithmeticOverflow


class SafeIntError(ArithmeticOverflow):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Result would be negative."""

    pass


class Overflow(SafeIntError):
    """Result exceeds the 128-bit intermediate or 64-bit storage range."""

    pass


class SafeInt:
    """Unsigned integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt (bool is rejected)
            Underflow: If value is negative
            Overflow: If value exceeds 2^128-1
        """
        if isinstance(value, SafeInt):
            self._value = value._value
            return
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        if value < 0:
            raise Underflow(f"Negative value is not an unsigned amount: {value}")
        if value > U128_MAX:
            raise Overflow(f"Value exceeds u128 max: {value}")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds 2^128-1
        """
        other_val = _extract_value(other)
        result = self._value + other_val
        if result > U128_MAX:
            raise Overflow(f"Overflow: {self._value} + {other_val} exceeds u128")
        return SafeInt(result)

    def __radd__(self, other: int) -> SafeInt:
        return self.__add__(other)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            Overflow: If the product exceeds 2^128-1
        """
        other_val = _extract_value(other)
        result = self._value * other_val
        if result > U128_MAX:
            raise Overflow(f"Overflow: {self._value} * {other_val} exceeds u128")
        return SafeInt(result)

    def __rmul__(self, other: int) -> SafeInt:
        return self.__mul__(other)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division (floor).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def isqrt(self) -> SafeInt:
        """Integer square root, floor(sqrt(self))."""
        return SafeInt(isqrt(self._value))

    def to_u64(self) -> int:
        """Convert to int, validating the 64-bit storage range.

        Raises:
            Overflow: If value exceeds 2^64-1
        """
        if self._value > U64_MAX:
            raise Overflow(f"Value exceeds u64 max: {self._value}")
        return self._value

    def is_u64(self) -> bool:
        """Check if value fits in 64 bits without raising."""
        return self._value <= U64_MAX

    @classmethod
    def zero(cls) -> SafeInt:
        """Create a SafeInt with value 0."""
        return cls(0)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
