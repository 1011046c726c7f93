"""
Тесты для numeric capabilities: RealNumber, is_fractional, decimal_from, integer_from
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.domain.numeric import RealNumber, decimal_from, integer_from, is_fractional
from src.core.domain.precision import PrecisionContext
from src.core.exceptions import InvalidArgumentError
from src.core.math.rational import Rational
from src.core.math.surd import SimpleSurd


@pytest.fixture
def ctx():
    return PrecisionContext(precision=20)


class TestIsFractional:
    """Дробность определяется по типу для float/Decimal и по значению для дробей."""

    @pytest.mark.parametrize(
        "number, expected",
        [
            (5, False),
            (-3, False),
            (5.0, True),
            (Decimal("5"), True),
            (Fraction(4, 2), False),
            (Fraction(1, 2), True),
            (Rational(3), False),
            (Rational(1, 3), True),
        ],
    )
    def test_classification(self, number, expected):
        assert is_fractional(number) is expected

    def test_surd_is_fractional(self):
        assert is_fractional(SimpleSurd(2, 2)) is True


class TestDecimalFrom:
    """Приведение к Decimal."""

    def test_rational_rendered_in_context(self, ctx):
        assert decimal_from(Rational(1, 4), ctx) == Decimal("0.25")

    def test_fraction_divided_in_context(self):
        ctx = PrecisionContext(precision=5)
        assert decimal_from(Fraction(1, 3), ctx) == Decimal("0.33333")

    def test_surd_rendered_in_context(self, ctx):
        assert ctx.round(decimal_from(SimpleSurd(16, 4), ctx)) == Decimal(2)

    def test_plain_values_exact(self, ctx):
        assert decimal_from("1.5", ctx) == Decimal("1.5")
        assert decimal_from(0.5, ctx) == Decimal("0.5")
        assert decimal_from(10**40, ctx) == Decimal(10**40)

    @pytest.mark.parametrize("bad", [None, "abc", float("inf"), float("nan"), []])
    def test_invalid_input(self, ctx, bad):
        with pytest.raises(InvalidArgumentError):
            decimal_from(bad, ctx)


class TestIntegerFrom:
    """Приведение к int с усечением к нулю."""

    def test_rational_truncated(self):
        assert integer_from(Rational(7, 2)) == 3
        assert integer_from(Rational(-7, 2)) == -3

    def test_plain_values(self):
        assert integer_from(5) == 5
        assert integer_from("12") == 12
        assert integer_from(Fraction(9, 2)) == 4

    @pytest.mark.parametrize("bad", [None, "x", float("inf"), object()])
    def test_invalid_input(self, bad):
        with pytest.raises(InvalidArgumentError):
            integer_from(bad)


class TestRealNumberCapability:
    """RealNumber — structural Protocol."""

    def test_rational_and_surd_are_real_numbers(self):
        assert isinstance(Rational(1, 2), RealNumber)
        assert isinstance(SimpleSurd(2, 2), RealNumber)

    def test_builtins_are_not(self):
        assert not isinstance(5, RealNumber)
        assert not isinstance(Decimal("1.5"), RealNumber)
