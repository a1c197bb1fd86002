"""Tests for exact rational coefficients."""
import math
import pickle
from fractions import Fraction

import pytest
from rational import RationalNumber

NaN = RationalNumber.NaN


def test_reduced_form():
    """Values are reduced with the sign on the numerator."""
    r = RationalNumber(6, -8)
    assert (r.numerator == -3)
    assert (r.denominator == 4)
    assert (str(r) == "-3/4")
    assert (str(RationalNumber(0, -5)) == "0")
    assert (RationalNumber(0, 7).denominator == 1)
    assert (str(RationalNumber(10, 5)) == "2")


def test_zero_denominator_is_nan():
    assert RationalNumber(3, 0).is_nan()
    assert (RationalNumber(0, 0) == NaN)
    assert (str(NaN) == "NaN")


def test_rejects_non_integers():
    with pytest.raises(ValueError):
        RationalNumber(1.5)
    with pytest.raises(ValueError):
        RationalNumber(1, 2.0)
    with pytest.raises(ValueError):
        RationalNumber(True)


def test_immutable():
    r = RationalNumber(1, 2)
    with pytest.raises(AttributeError):
        r._value = Fraction(3)
    with pytest.raises(AttributeError):
        r.numerator = 3


def test_arithmetic():
    half = RationalNumber(1, 2)
    third = RationalNumber(1, 3)
    assert (half.add(third) == RationalNumber(5, 6))
    assert (half.sub(third) == RationalNumber(1, 6))
    assert (half.mul(third) == RationalNumber(1, 6))
    assert (half.div(third) == RationalNumber(3, 2))
    assert (half.negate() == RationalNumber(-1, 2))
    assert (half + 1 == RationalNumber(3, 2))
    assert (1 - half == half)
    assert (3 * third == RationalNumber.ONE)
    assert (1 / half == 2)
    assert (-half == RationalNumber(-1, 2))
    assert (abs(RationalNumber(-2, 3)) == RationalNumber(2, 3))


def test_nan_propagates():
    one = RationalNumber.ONE
    for result in (NaN.add(one), one.sub(NaN), NaN.mul(RationalNumber.ZERO),
                   one.div(NaN), NaN.negate(), NaN / NaN):
        assert result.is_nan()


def test_division_by_zero_is_nan():
    assert RationalNumber(5).div(RationalNumber.ZERO).is_nan()
    assert (RationalNumber.ZERO / RationalNumber(3) == RationalNumber.ZERO)


def test_equality_and_hash():
    assert (RationalNumber(2, 4) == RationalNumber(1, 2))
    assert (hash(RationalNumber(2, 4)) == hash(RationalNumber(1, 2)))
    assert (RationalNumber(3) == 3)
    assert (RationalNumber(1, 3) == Fraction(1, 3))
    assert (RationalNumber(1, 0) == RationalNumber(-7, 0))
    assert (hash(RationalNumber(1, 0)) == hash(RationalNumber(-7, 0)))
    assert (NaN != RationalNumber.ZERO)
    assert (RationalNumber.ZERO != NaN)
    assert (RationalNumber(1) != "1")
    assert (len({RationalNumber(1, 2), RationalNumber(2, 4), NaN, RationalNumber(5, 0)}) == 2)


def test_ordering():
    a, b = RationalNumber(-1, 2), RationalNumber(1, 3)
    assert (a.compare_to(b) == -1)
    assert (b.compare_to(a) == 1)
    assert (a.compare_to(RationalNumber(-2, 4)) == 0)
    assert (a < b <= b < 1)
    assert (b > a and b >= a)


def test_nan_ordering_is_consistent():
    """NaN sorts above every number and compares equal to itself."""
    big = RationalNumber(10 ** 30)
    assert (NaN.compare_to(NaN) == 0)
    assert (NaN.compare_to(big) == 1)
    assert (big.compare_to(NaN) == -1)
    values = [NaN, RationalNumber(2), RationalNumber(-1), NaN, RationalNumber(1, 2)]
    assert ([str(v) for v in sorted(values)] == ["-1", "1/2", "2", "NaN", "NaN"])


def test_queries():
    assert RationalNumber(-1, 5).is_negative()
    assert not RationalNumber.ZERO.is_negative()
    assert not NaN.is_negative()
    assert RationalNumber(1, 5).is_positive()
    assert not NaN.is_positive()
    assert RationalNumber.ZERO.is_zero()
    assert not NaN.is_zero()


def test_int_value():
    assert (RationalNumber(12, 4).int_value() == 3)
    assert (int(RationalNumber(-7)) == -7)
    with pytest.raises(ValueError):
        RationalNumber(1, 2).int_value()
    with pytest.raises(ValueError):
        NaN.int_value()


def test_double_value():
    assert (RationalNumber(1, 4).double_value() == 0.25)
    assert (float(RationalNumber(-3, 2)) == -1.5)
    assert math.isnan(NaN.double_value())


def test_double_value_beyond_float_range():
    """Values too large for a float saturate to a signed infinity."""
    assert (RationalNumber(10 ** 400).double_value() == math.inf)
    assert (float(RationalNumber(-10 ** 400, 3)) == -math.inf)
    assert (RationalNumber(1, 10 ** 400).double_value() == 0.0)


@pytest.mark.parametrize("text", ["0", "1", "-1", "5/3", "-22/7", "123456789012345678901234567891/7", "NaN"])
def test_string_round_trip(text):
    assert (str(RationalNumber.from_string(text)) == text)


def test_from_string_reduces():
    assert (str(RationalNumber.from_string("4/6")) == "2/3")
    assert (str(RationalNumber.from_string("-0")) == "0")
    assert RationalNumber.from_string("1/0").is_nan()
    big = RationalNumber.from_string("123456789012345678901234567890/7")
    assert (big.denominator == 1)
    assert (str(big) == "17636684144620811271604938270")


@pytest.mark.parametrize("text", ["", "x", "1/", "/2", "1/-2", "+1", "1.5", " 1", "1//2", "nan", "١/٢", "٣"])
def test_from_string_rejects_malformed(text):
    with pytest.raises(ValueError):
        RationalNumber.from_string(text)


def test_pickle():
    for r in (RationalNumber(-5, 3), NaN, RationalNumber.ZERO):
        assert (pickle.loads(pickle.dumps(r)) == r)


def test_unsupported_operand():
    with pytest.raises(TypeError):
        RationalNumber(1) + 1.5
    with pytest.raises(TypeError):
        RationalNumber(1).add(0.5)
