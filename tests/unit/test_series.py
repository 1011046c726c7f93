"""
Тесты для Series Evaluators (exp, log, sin, cos, atan)

Проверяемые свойства:
1. Известные значения: e, ln 2, π через формулу Мэчина
2. Обратные тождества: log(exp(x)) ≈ x, exp(log(x)) ≈ x
3. sin² + cos² ≈ 1
4. Согласие с math.* в пределах двойной точности
5. Границы областей применимости
"""

import math
import random
from decimal import Decimal

import pytest

from src.core.domain.precision import PrecisionContext
from src.core.exceptions import ArithmeticDomainError
from src.core.math.rational import ONE, ZERO, Rational
from src.core.math.series import atan, cos, exp, log, sin

E_DIGITS = "2.71828182845904523536028747135266249775724709369995957496696762772407663"
LN2_DIGITS = "0.69314718055994530941723212145817656807550013436025525412068000949339362"
PI_DIGITS = "3.14159265358979323846264338327950288419716939937510582097494459230781640"


def assert_close(value: Rational, expected, digits: int) -> None:
    """|value - expected| <= 10^-digits."""
    difference = value.subtract(Rational.value_of(expected)).abs()
    assert difference <= Rational(1, 10**digits), f"{value} differs from {expected}"


@pytest.fixture
def rng():
    return random.Random(271828)


@pytest.fixture
def ctx():
    return PrecisionContext(precision=30)


# =============================================================================
# ТЕСТЫ: exp / log
# =============================================================================


class TestExp:
    """Экспонента."""

    def test_zero(self, ctx):
        assert exp(0, ctx) == ONE

    def test_e(self):
        ctx = PrecisionContext(precision=50)
        assert_close(exp(1, ctx), E_DIGITS, 48)

    def test_negative_argument(self, ctx):
        assert_close(exp(-1, ctx).multiply(exp(1, ctx)), 1, 28)

    @pytest.mark.parametrize("bad", [2, -2, Rational(1001, 1000), 1.5])
    def test_outside_convergence_range(self, ctx, bad):
        with pytest.raises(ArithmeticDomainError, match="out of range"):
            exp(bad, ctx)

    def test_tiny_precision_still_converges(self):
        ctx = PrecisionContext(precision=3)
        assert exp(1, ctx).to_decimal(ctx) == Decimal("2.72")

    def test_matches_math(self, rng, ctx):
        for _ in range(20):
            x = rng.uniform(-1, 1)
            assert float(exp(x, ctx)) == pytest.approx(math.exp(x), rel=1e-14)


class TestLog:
    """Натуральный логарифм."""

    def test_one(self, ctx):
        assert log(1, ctx) == ZERO

    def test_ln2(self):
        ctx = PrecisionContext(precision=50)
        assert_close(log(2, ctx), LN2_DIGITS, 48)

    def test_reciprocal_is_negation(self, ctx):
        assert_close(log(Rational(1, 2), ctx).add(log(2, ctx)), 0, 28)

    def test_domain_edges_accepted(self, ctx):
        assert float(log(5, ctx)) == pytest.approx(math.log(5), rel=1e-14)
        assert float(log(Rational(1, 5), ctx)) == pytest.approx(math.log(0.2), rel=1e-14)

    @pytest.mark.parametrize("bad", [1000, 6, Rational(1, 6), Rational(1, 1000)])
    def test_outside_convergence_range(self, ctx, bad):
        with pytest.raises(ArithmeticDomainError, match="out of range"):
            log(bad, ctx)

    @pytest.mark.parametrize("bad", [0, -1, Rational(-1, 3)])
    def test_non_positive_rejected(self, ctx, bad):
        with pytest.raises(ArithmeticDomainError, match="undefined"):
            log(bad, ctx)


class TestInverseIdentities:
    """exp и log взаимно обратны."""

    def test_log_of_exp(self, rng, ctx):
        for _ in range(30):
            x = Rational(rng.randint(-500, 500), 1000)
            assert_close(log(exp(x, ctx), ctx), x, ctx.precision - 2)

    def test_exp_of_log(self, rng, ctx):
        for _ in range(30):
            x = Rational(rng.randint(500, 2000), 1000)
            assert_close(exp(log(x, ctx), ctx), x, ctx.precision - 2)


# =============================================================================
# ТЕСТЫ: Тригонометрия
# =============================================================================


class TestTrigonometry:
    """sin и cos на [-π/4, π/4]."""

    def test_zero(self, ctx):
        assert sin(0, ctx) == ZERO
        assert cos(0, ctx) == ONE

    def test_pythagorean_identity(self, rng):
        ctx = PrecisionContext(precision=25)
        for _ in range(30):
            theta = Rational(rng.randint(-785, 785), 1000)
            s = sin(theta, ctx)
            c = cos(theta, ctx)
            assert_close(s.multiply(s).add(c.multiply(c)), 1, ctx.precision - 1)

    def test_matches_math(self, rng, ctx):
        for _ in range(20):
            theta = rng.uniform(-0.78, 0.78)
            assert float(sin(theta, ctx)) == pytest.approx(math.sin(theta), rel=1e-14)
            assert float(cos(theta, ctx)) == pytest.approx(math.cos(theta), rel=1e-14)

    def test_symmetry(self, ctx):
        x = Rational(3, 7)
        assert sin(x.negate(), ctx) == sin(x, ctx).negate()
        assert cos(x.negate(), ctx) == cos(x, ctx)

    @pytest.mark.parametrize("angle", [1, Rational(-4, 5), 0.8])
    def test_out_of_range(self, ctx, angle):
        with pytest.raises(ArithmeticDomainError, match="out of range"):
            sin(angle, ctx)
        with pytest.raises(ArithmeticDomainError, match="out of range"):
            cos(angle, ctx)


class TestAtan:
    """Арктангенс на |x| <= 2 - √3."""

    def test_zero(self, ctx):
        assert atan(0, ctx) == ZERO

    def test_machin_formula(self):
        """π = 16 atan(1/5) - 4 atan(1/239)."""
        ctx = PrecisionContext(precision=40)
        value = (
            atan(Rational(1, 5), ctx)
            .multiply(16)
            .subtract(atan(Rational(1, 239), ctx).multiply(4))
        )
        assert_close(value, PI_DIGITS, ctx.precision - 3)

    def test_odd_function(self, ctx):
        x = Rational(1, 7)
        assert atan(x.negate(), ctx) == atan(x, ctx).negate()

    def test_matches_math(self, ctx):
        assert float(atan(0.25, ctx)) == pytest.approx(math.atan(0.25), rel=1e-14)

    def test_out_of_range(self, ctx):
        with pytest.raises(ArithmeticDomainError, match="out of range"):
            atan(Rational(1, 2), ctx)
