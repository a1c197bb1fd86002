import logging
import math
import numbers
import re
from fractions import Fraction
from typing import Union

LOG = logging.getLogger(__name__)

_RATIONAL_FORMAT = re.compile(r"\A(?P<num>-?[0-9]+)(?:/(?P<denom>[0-9]+))?\Z")


class RationalNumber:
    """Immutable exact fraction with a NaN sentinel.

    The value is kept reduced with the sign on the numerator. NaN is
    stored as numerator 1 over denominator 0 and compares equal only to
    another NaN.
    """

    __slots__ = ('_value',)

    ZERO: 'RationalNumber'
    ONE: 'RationalNumber'
    NaN: 'RationalNumber'

    def __init__(self, numerator: Union[int, Fraction] = 0, denominator: int = 1):
        if isinstance(numerator, Fraction) and denominator == 1:
            value = numerator
        elif _is_int(numerator) and _is_int(denominator):
            value = None if denominator == 0 else Fraction(int(numerator), int(denominator))
        else:
            raise ValueError(f"numerator and denominator must be integers, got {numerator!r}/{denominator!r}")
        object.__setattr__(self, '_value', value)

    def __setattr__(self, name, value):
        raise AttributeError("RationalNumber is immutable")

    @classmethod
    def from_string(cls, s: str) -> 'RationalNumber':
        """Parse "N", "N/D" or "NaN"."""
        if s == "NaN":
            return cls.NaN
        match = _RATIONAL_FORMAT.match(s)
        if match is None:
            raise ValueError(f"Invalid rational literal: {s!r}")
        denom = match.group('denom')
        return cls(int(match.group('num')), int(denom) if denom is not None else 1)

    @classmethod
    def _coerce(cls, other):
        if isinstance(other, RationalNumber):
            return other
        if isinstance(other, Fraction):
            return cls(other)
        if _is_int(other):
            return cls(int(other))
        return None

    @property
    def numerator(self) -> int:
        return 1 if self._value is None else self._value.numerator

    @property
    def denominator(self) -> int:
        return 0 if self._value is None else self._value.denominator

    def is_nan(self) -> bool:
        return self._value is None

    def is_negative(self) -> bool:
        return self._value is not None and self._value < 0

    def is_positive(self) -> bool:
        return self._value is not None and self._value > 0

    def is_zero(self) -> bool:
        return self._value is not None and self._value == 0

    def negate(self) -> 'RationalNumber':
        if self._value is None:
            return self
        return RationalNumber(-self._value)

    def add(self, other: 'RationalNumber') -> 'RationalNumber':
        other = self._checked(other)
        if self._value is None or other._value is None:
            return RationalNumber.NaN
        return RationalNumber(self._value + other._value)

    def sub(self, other: 'RationalNumber') -> 'RationalNumber':
        other = self._checked(other)
        if self._value is None or other._value is None:
            return RationalNumber.NaN
        return RationalNumber(self._value - other._value)

    def mul(self, other: 'RationalNumber') -> 'RationalNumber':
        other = self._checked(other)
        if self._value is None or other._value is None:
            return RationalNumber.NaN
        return RationalNumber(self._value * other._value)

    def div(self, other: 'RationalNumber') -> 'RationalNumber':
        other = self._checked(other)
        if self._value is None or other._value is None:
            return RationalNumber.NaN
        if other._value == 0:
            LOG.debug("Division of %s by zero yields NaN", self)
            return RationalNumber.NaN
        return RationalNumber(self._value / other._value)

    def compare_to(self, other: 'RationalNumber') -> int:
        """Return -1, 0 or 1. NaN sorts above every number and equals itself."""
        other = self._checked(other)
        if self._value is None:
            return 0 if other._value is None else 1
        if other._value is None:
            return -1
        return (self._value > other._value) - (self._value < other._value)

    def int_value(self) -> int:
        if self._value is None:
            raise ValueError("NaN has no integer value")
        if self._value.denominator != 1:
            raise ValueError(f"{self} is not an integer")
        return self._value.numerator

    def double_value(self) -> float:
        if self._value is None:
            return float('nan')
        try:
            return float(self._value)
        except OverflowError:
            return math.inf if self._value > 0 else -math.inf

    def _checked(self, other):
        coerced = self._coerce(other)
        if coerced is None:
            raise TypeError(f"Unsupported operand for RationalNumber: {other!r}")
        return coerced

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.negate() if self.is_negative() else self

    def __add__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.sub(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else other.sub(self)

    def __mul__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.mul(other)

    def __rmul__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else other.mul(self)

    def __truediv__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.div(other)

    def __rtruediv__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else other.div(self)

    def __eq__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        if self._value is None or other._value is None:
            return self._value is None and other._value is None
        return self._value == other._value

    def __lt__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.compare_to(other) < 0

    def __le__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.compare_to(other) <= 0

    def __gt__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.compare_to(other) > 0

    def __ge__(self, other):
        other = self._coerce(other)
        return NotImplemented if other is None else self.compare_to(other) >= 0

    def __hash__(self):
        # all NaNs share one hash; numbers hash like the equal int or Fraction
        if self._value is None:
            return 0
        return hash(self._value)

    def __int__(self):
        return self.int_value()

    def __float__(self):
        return self.double_value()

    def __repr__(self):
        if self._value is None:
            return "NaN"
        if self._value.denominator == 1:
            return str(self._value.numerator)
        return f"{self._value.numerator}/{self._value.denominator}"

    def __reduce__(self):
        return (RationalNumber, (self.numerator, self.denominator))


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


RationalNumber.ZERO = RationalNumber(0)
RationalNumber.ONE = RationalNumber(1)
RationalNumber.NaN = RationalNumber(1, 0)
