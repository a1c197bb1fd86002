import logging
import math
import re
import numpy as np
from fractions import Fraction
from typing import Iterator, Sequence, Tuple, Union

from rational import RationalNumber

LOG = logging.getLogger(__name__)

Coefficient = Union[RationalNumber, Fraction, int]

_EXPONENT = re.compile(r"[0-9]+")


class Polynomial:
    """Immutable single-variable polynomial with exact rational coefficients.

    ``Polynomial([c0, c1, ..., cn])`` represents c0 + c1*x + ... + cn*x^n.
    Coefficients are kept in a read-only numpy object array in ascending
    exponent order. The zero polynomial has no coefficients and degree 0;
    a NaN polynomial holds a single NaN coefficient.
    """

    __slots__ = ('_coefficients', '_degree')

    ZERO: 'Polynomial'
    NaN: 'Polynomial'

    def __init__(self, coefficients: Sequence[Coefficient] = ()):
        coeffs = [_as_rational(c) for c in coefficients]
        if any(c.is_nan() for c in coeffs):
            coeffs = [RationalNumber.NaN]
        else:
            # Remove trailing zeros
            while coeffs and coeffs[-1].is_zero():
                coeffs.pop()
        array = np.empty(len(coeffs), dtype=object)
        array[:] = coeffs
        array.flags.writeable = False
        object.__setattr__(self, '_coefficients', array)
        object.__setattr__(self, '_degree', max(len(coeffs) - 1, 0))

        if __debug__:
            self._check_rep()

    def __setattr__(self, name, value):
        raise AttributeError("Polynomial is immutable")

    @classmethod
    def term(cls, coeff: Coefficient, exponent: int) -> 'Polynomial':
        """Return the single term coeff*x^exponent."""
        if exponent < 0:
            raise ValueError(f"Exponent must be non-negative, got {exponent}")
        coeff = _as_rational(coeff)
        if coeff.is_zero():
            return cls.ZERO
        return cls([RationalNumber.ZERO] * exponent + [coeff])

    @property
    def coefficients(self) -> np.ndarray:
        return self._coefficients

    @property
    def degree(self) -> int:
        return self._degree

    def get_coeff(self, power: int) -> RationalNumber:
        if 0 <= power < len(self._coefficients):
            return self._coefficients[power]
        return RationalNumber.ZERO

    def is_nan(self) -> bool:
        return len(self._coefficients) > 0 and self._coefficients[0].is_nan()

    def is_zero(self) -> bool:
        return len(self._coefficients) == 0

    def negate(self) -> 'Polynomial':
        if self.is_nan() or self.is_zero():
            return self
        return Polynomial([-c for c in self._coefficients])

    def add(self, other: 'Polynomial') -> 'Polynomial':
        if self.is_nan() or other.is_nan():
            return Polynomial.NaN
        if self.is_zero():
            return other
        if other.is_zero():
            return self
        max_order = max(self._degree, other._degree)
        new_coeffs = [self.get_coeff(i) + other.get_coeff(i) for i in range(max_order + 1)]
        return Polynomial(new_coeffs)

    def sub(self, other: 'Polynomial') -> 'Polynomial':
        if self.is_nan() or other.is_nan():
            return Polynomial.NaN
        return self.add(other.negate())

    def mul(self, other: 'Polynomial') -> 'Polynomial':
        if self.is_nan() or other.is_nan():
            return Polynomial.NaN
        if self.is_zero() or other.is_zero():
            return Polynomial.ZERO
        new_coeffs = [RationalNumber.ZERO] * (len(self._coefficients) + other._degree)
        for i, c1 in enumerate(self._coefficients):
            for j, c2 in enumerate(other._coefficients):
                new_coeffs[i + j] += c1 * c2
        return Polynomial(new_coeffs)

    def div(self, other: 'Polynomial') -> 'Polynomial':
        """Truncating long division: return q such that self = q*other + r.

        The remainder r is discarded. Division by the zero polynomial gives
        NaN, and a divisor of higher degree than self gives zero.
        """
        if self.is_nan() or other.is_nan() or other.is_zero():
            return Polynomial.NaN
        if self.is_zero() or other._degree > self._degree:
            return Polynomial.ZERO

        divisor = list(other._coefficients)
        lead = divisor[-1]
        remainder = list(self._coefficients)
        quotient = [RationalNumber.ZERO] * (self._degree - other._degree + 1)
        steps = 0
        while len(remainder) >= len(divisor):
            shift = len(remainder) - len(divisor)
            factor = remainder[-1] / lead
            quotient[shift] = factor
            for j, c in enumerate(divisor):
                remainder[shift + j] -= factor * c
            # the leading term cancels exactly, so the remainder degree drops
            while remainder and remainder[-1].is_zero():
                remainder.pop()
            steps += 1
        LOG.debug("Divided %s by %s in %d steps, remainder degree %d", self, other, steps, max(len(remainder) - 1, 0))
        return Polynomial(quotient)

    def eval(self, x: float) -> float:
        """Evaluate at x with Horner's rule."""
        if self.is_nan():
            return math.nan
        if self.is_zero():
            return 0.0
        if x == 0.0:
            return self._coefficients[0].double_value()
        result = self._coefficients[-1].double_value()
        for c in self._coefficients[-2::-1]:
            result = result * x + c.double_value()
        return result

    def differentiate(self) -> 'Polynomial':
        if self.is_nan():
            return Polynomial.NaN
        if self._degree == 0:
            return Polynomial.ZERO
        return Polynomial([c * i for i, c in enumerate(self._coefficients) if i > 0])

    def anti_differentiate(self, constant: Coefficient) -> 'Polynomial':
        """Return the antiderivative whose constant term is `constant`."""
        constant = _as_rational(constant)
        if self.is_nan() or constant.is_nan():
            return Polynomial.NaN
        return Polynomial([constant] + [c / (i + 1) for i, c in enumerate(self._coefficients)])

    def integrate(self, lower: float, upper: float) -> float:
        """Definite integral from lower to upper; lower may exceed upper."""
        if self.is_nan() or math.isnan(lower) or math.isnan(upper):
            return math.nan
        antiderivative = self.anti_differentiate(RationalNumber.ZERO)
        return antiderivative.eval(upper) - antiderivative.eval(lower)

    @staticmethod
    def from_string(s: str) -> 'Polynomial':
        s = s.replace(" ", "")
        if s == "0":
            return Polynomial.ZERO
        if s == "NaN":
            return Polynomial.NaN

        coeff_dict = {}
        for negative, term in _tokenize(s):
            coeff, power = _parse_term(term)
            if coeff.is_zero():
                continue
            if negative:
                coeff = -coeff
            coeff_dict[power] = coeff_dict.get(power, RationalNumber.ZERO) + coeff

        if not coeff_dict:
            return Polynomial.ZERO
        order = max(coeff_dict.keys())
        result = Polynomial([coeff_dict.get(i, RationalNumber.ZERO) for i in range(order + 1)])
        LOG.debug("Parsed %r as %s", s, result)
        return result

    def __repr__(self):
        if self.is_zero():
            return "0"
        if self.is_nan():
            return "NaN"
        terms = []
        for i in range(self._degree, -1, -1):
            coeff = self._coefficients[i]
            if coeff.is_zero():
                continue
            term = _format_term(coeff, i)
            if terms and not coeff.is_negative():
                term = "+" + term
            terms.append(term)
        return "".join(terms)

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return self.is_nan() and other.is_nan()
        return tuple(self._coefficients) == tuple(other._coefficients)

    def __hash__(self):
        if self.is_nan():
            return 0
        return hash(tuple(self._coefficients))

    def __neg__(self):
        return self.negate()

    def __add__(self, other):
        other = _as_polynomial(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other):
        other = _as_polynomial(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other):
        other = _as_polynomial(other)
        return NotImplemented if other is None else self.sub(other)

    def __rsub__(self, other):
        other = _as_polynomial(other)
        return NotImplemented if other is None else other.sub(self)

    def __mul__(self, other):
        other = _as_polynomial(other)
        return NotImplemented if other is None else self.mul(other)

    def __rmul__(self, other):
        other = _as_polynomial(other)
        return NotImplemented if other is None else other.mul(self)

    def __truediv__(self, other):
        other = _as_polynomial(other)
        return NotImplemented if other is None else self.div(other)

    def __rtruediv__(self, other):
        other = _as_polynomial(other)
        return NotImplemented if other is None else other.div(self)

    def __call__(self, x: float) -> float:
        return self.eval(x)

    def __reduce__(self):
        return (Polynomial, (list(self._coefficients),))

    def _check_rep(self):
        coeffs = self._coefficients
        assert not coeffs.flags.writeable, "coefficients are writeable"
        assert all(isinstance(c, RationalNumber) for c in coeffs), "non-rational coefficient"
        if len(coeffs) == 0:
            assert self._degree == 0, "degree of the zero polynomial is not 0"
        else:
            assert self._degree == len(coeffs) - 1, "degree != len(coefficients) - 1"
            if coeffs[0].is_nan():
                assert len(coeffs) == 1, "NaN polynomial has extra coefficients"
            else:
                assert not coeffs[-1].is_zero(), "leading coefficient is 0"
                assert not any(c.is_nan() for c in coeffs), "NaN coefficient above degree 0"


def _as_rational(value) -> RationalNumber:
    coerced = RationalNumber._coerce(value)
    if coerced is None:
        raise TypeError(f"Coefficient must be rational, got {value!r}")
    return coerced


def _as_polynomial(value):
    if isinstance(value, Polynomial):
        return value
    coerced = RationalNumber._coerce(value)
    if coerced is None:
        return None
    return Polynomial([coerced])


def _format_term(coeff: RationalNumber, exponent: int) -> str:
    if exponent == 0:
        return str(coeff)
    if coeff == 1:
        term = "x"
    elif coeff == -1:
        term = "-x"
    else:
        term = f"{coeff}*x"
    if exponent > 1:
        term += f"^{exponent}"
    return term


def _tokenize(s: str) -> Iterator[Tuple[bool, str]]:
    """Split s into (negative, term) pairs on '+' and '-'.

    The first term may be unsigned; every later term needs exactly one sign.
    """
    if not s:
        raise ValueError("Empty polynomial string")
    negative = False
    signed = False
    start = 0
    for i, ch in enumerate(s):
        if ch not in "+-":
            continue
        if i == start:
            if signed or i > 0:
                raise ValueError(f"Missing term before {ch!r} at position {i} in {s!r}")
        else:
            yield negative, s[start:i]
        negative = ch == "-"
        signed = True
        start = i + 1
    if start == len(s):
        raise ValueError(f"Polynomial string ends with a sign: {s!r}")
    yield negative, s[start:]


def _parse_term(term: str) -> Tuple[RationalNumber, int]:
    """Parse an unsigned term "C", "x", "C*x", "x^E" or "C*x^E"."""
    x_index = term.find("x")
    if x_index < 0:
        return RationalNumber.from_string(term), 0

    c, e = term[:x_index], term[x_index + 1:]
    if c == "":
        coeff = RationalNumber.ONE
    elif c.endswith("*") and len(c) > 1:
        coeff = RationalNumber.from_string(c[:-1])
    else:
        raise ValueError(f"Malformed coefficient in term {term!r}")
    if coeff.is_nan():
        raise ValueError(f"NaN coefficient in term {term!r}")

    if e == "":
        power = 1
    elif e.startswith("^") and _EXPONENT.fullmatch(e[1:]):
        power = int(e[1:])
    else:
        raise ValueError(f"Malformed exponent in term {term!r}")
    return coeff, power


Polynomial.ZERO = Polynomial()
Polynomial.NaN = Polynomial([RationalNumber.NaN])
