import pytest
from polynomial import Polynomial

SAMPLE_POLYNOMIALS = [
    "0",
    "1",
    "-1/2",
    "x",
    "-x",
    "x+1",
    "x-10",
    "2*x^2-1",
    "x^3-2*x^2+5/3*x+3",
    "-3/4*x^5+x^2-x",
    "x^17-3/2*x^2+1",
    "7*x^4",
]


@pytest.fixture(params=SAMPLE_POLYNOMIALS)
def poly(request: pytest.FixtureRequest) -> Polynomial:
    """Provide each sample polynomial in turn."""
    return Polynomial.from_string(request.param)


@pytest.fixture(params=["1", "x", "x-1", "-2/3*x^2+x", "x^3+1"])
def divisor(request: pytest.FixtureRequest) -> Polynomial:
    """Provide non-zero polynomials used as divisors and second operands."""
    return Polynomial.from_string(request.param)
