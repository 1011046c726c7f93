"""
Тесты для factorial

Параллельный результат должен совпадать с последовательным произведением
для порогового значения и его окрестности.
"""

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.exceptions import ArithmeticDomainError, InvalidArgumentError
from src.core.math.factorial import factorial
from src.core.math.rational import Rational
from src.core.math.reduction import ReductionConfig


def _sequential(n: int) -> int:
    return math.prod(range(1, n + 1))


class TestFactorialValues:
    """Совпадение с последовательным произведением."""

    @pytest.mark.parametrize("n", [0, 1, 2, 10, 9_999, 10_000, 10_001, 50_000])
    def test_matches_sequential(self, n):
        assert factorial(n) == _sequential(n)

    @pytest.mark.parametrize("threshold", [1, 3, 64])
    def test_small_thresholds(self, threshold):
        config = ReductionConfig(threshold=threshold, max_workers=4)
        assert factorial(300, config) == math.factorial(300)

    def test_integral_rational_input(self):
        assert factorial(Rational(12, 2)) == 720
        assert factorial(Fraction(10, 2)) == 120


class TestFactorialDomain:
    """Область определения."""

    @pytest.mark.parametrize(
        "bad", [-1, Rational(-3), Rational(1, 2), Fraction(7, 3), 5.0, Decimal(5)]
    )
    def test_rejected(self, bad):
        with pytest.raises(ArithmeticDomainError, match="non-negative integers"):
            factorial(bad)

    def test_none(self):
        with pytest.raises(InvalidArgumentError):
            factorial(None)
