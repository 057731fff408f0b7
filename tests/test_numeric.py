"""Tests for the numeric capability layer."""

from fractions import Fraction

import pytest
from hypothesis import assume, given
from hypothesis.strategies import integers

from numeric import Domain, DomainError, check_value, truncdiv, truncmod


class TestDomain:
    def test_integral(self):
        assert Domain.NATURAL.integral
        assert Domain.INTEGER.integral
        assert not Domain.DECIMAL.integral

    def test_signed(self):
        assert not Domain.NATURAL.signed
        assert Domain.INTEGER.signed
        assert Domain.DECIMAL.signed


class TestCheckValue:
    def test_natural_accepts_zero_and_positive(self):
        check_value(Domain.NATURAL, 0)
        check_value(Domain.NATURAL, 2**70)

    def test_natural_rejects_negative(self):
        with pytest.raises(DomainError, match="natural"):
            check_value(Domain.NATURAL, -1)

    def test_domain_error_is_value_error(self):
        assert issubclass(DomainError, ValueError)

    def test_integer_rejects_float(self):
        with pytest.raises(TypeError, match="integer"):
            check_value(Domain.INTEGER, 1.5)

    def test_integer_rejects_bool(self):
        with pytest.raises(TypeError, match="bool"):
            check_value(Domain.INTEGER, True)

    def test_decimal_accepts_reals(self):
        check_value(Domain.DECIMAL, 1)
        check_value(Domain.DECIMAL, 0.25)
        check_value(Domain.DECIMAL, Fraction(1, 3))
        check_value(Domain.DECIMAL, float("inf"))

    def test_decimal_rejects_nan(self):
        with pytest.raises(DomainError, match="NaN"):
            check_value(Domain.DECIMAL, float("nan"))

    def test_decimal_rejects_complex_and_str(self):
        with pytest.raises(TypeError):
            check_value(Domain.DECIMAL, 1j)
        with pytest.raises(TypeError):
            check_value(Domain.DECIMAL, "1.0")

    def test_role_appears_in_message(self):
        with pytest.raises(TypeError, match="operand"):
            check_value(Domain.INTEGER, "x", "operand")


class TestTruncatingDivision:
    @pytest.mark.parametrize(
        "a, b, q, r",
        [
            (7, 2, 3, 1),
            (-7, 2, -3, -1),
            (7, -2, -3, 1),
            (-7, -2, 3, -1),
            (6, 3, 2, 0),
            (-6, 3, -2, 0),
            (0, 5, 0, 0),
        ],
    )
    def test_known_values(self, a, b, q, r):
        assert truncdiv(a, b) == q
        assert truncmod(a, b) == r

    @given(a=integers(-1000, 1000), b=integers(-1000, 1000))
    def test_division_identity(self, a, b):
        assume(b != 0)
        assert truncdiv(a, b) * b + truncmod(a, b) == a

    @given(a=integers(-1000, 1000), b=integers(-1000, 1000))
    def test_quotient_rounds_toward_zero(self, a, b):
        assume(b != 0)
        assert truncdiv(a, b) == int(a / b)

    @given(a=integers(-1000, 1000), b=integers(-1000, 1000))
    def test_remainder_takes_sign_of_dividend(self, a, b):
        assume(b != 0)
        r = truncmod(a, b)
        assert r == 0 or (r < 0) == (a < 0)
        assert abs(r) < abs(b)
