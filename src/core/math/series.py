"""
Series — степенные ряды exp, log, sin, cos, atan

Все ряды устроены одинаково:
- аккумулятор (Rational) и бегущий мультипликативный partial term
- ФИКСИРОВАННОЕ число итераций из точности контекста (нет адаптивной
  проверки сходимости): 1.5 × precision для exp/sin/cos/atan,
  4 × precision для log
- после каждого шага аккумулятор и partial ограничиваются drop_to(work)
- результат возвращается drop_to(context)

ОБЛАСТИ ПРИМЕНИМОСТИ:
- exp: |x| <= 1
- log: 1/5 <= x <= 5, т.е. |u| <= 2/3 для u = (x-1)/(x+1)
- sin, cos: |angle| <= π/4 (приведение угла — ответственность вызывающего)
- atan: |x| <= 2 - √3
"""

from typing import Final

from src.core.domain.precision import PrecisionContext
from src.core.exceptions import ArithmeticDomainError
from src.core.math.rational import ONE, TWO, ZERO, Rational

# =============================================================================
# ITERATION RATIOS
# =============================================================================

# Итераций на одну значащую цифру
EXP_ITERATION_RATIO: Final[float] = 1.5
TRIG_ITERATION_RATIO: Final[float] = 1.5
ATAN_ITERATION_RATIO: Final[float] = 1.5
LOG_ITERATION_RATIO: Final[int] = 4

# Нижняя граница числа итераций для очень малых точностей
MIN_ITERATIONS: Final[int] = 16

# =============================================================================
# DOMAIN BOUNDS
# =============================================================================

# Рациональная верхняя оценка π/4 (0.785398...)
TRIG_DOMAIN_BOUND: Final[Rational] = Rational(7854, 10000)

# Рациональная верхняя оценка 2 - √3 (0.267949...)
ATAN_DOMAIN_BOUND: Final[Rational] = Rational(268, 1000)

# 1.5 × precision членов x^i / i! достаточно при |x| <= 1
EXP_DOMAIN_BOUND: Final[Rational] = ONE

# 4 × precision членов u^(2k+1): (2/3)^(8P) < 10^-(1.4P)
LOG_DOMAIN_BOUND: Final[Rational] = Rational(2, 3)


def _iterations(context: PrecisionContext, ratio: float) -> int:
    return max(int(context.precision * ratio), MIN_ITERATIONS)


def _bounded(value: object, bound: Rational, name: str) -> Rational:
    argument = Rational.value_of(value)
    if argument.abs() > bound:
        raise ArithmeticDomainError(
            f"{name} series argument out of range: |{argument}| > {bound}"
        )
    return argument


# =============================================================================
# EXP / LOG
# =============================================================================


def exp(x: object, context: PrecisionContext) -> Rational:
    """
    e^x рядом Маклорена: sum x^i / i!.

    partial <- partial * x / i; аккумулятор ограничивается после каждого
    сложения.

    Raises:
        ArithmeticDomainError: |x| > 1
    """
    term = _bounded(x, EXP_DOMAIN_BOUND, "exp")
    limit = _iterations(context, EXP_ITERATION_RATIO)
    work = context.expand(limit)

    total = ZERO
    partial = ONE
    for i in range(1, limit + 1):
        total = total.add(partial).drop_to(work)
        partial = partial.multiply(term).divide(i).drop_to(work)
    return total.drop_to(context)


def log(x: object, context: PrecisionContext) -> Rational:
    """
    Натуральный логарифм: u = (x-1)/(x+1), ln x = 2 * sum u^(2k+1) / (2k+1).

    Raises:
        ArithmeticDomainError: x <= 0 или x вне [1/5, 5]
    """
    value = Rational.value_of(x)
    if value.signum() <= 0:
        raise ArithmeticDomainError(f"Logarithm is undefined for {value}")
    u = ONE.subtract(TWO.divide(value.add(ONE)))
    _bounded(u, LOG_DOMAIN_BOUND, "log")
    limit = _iterations(context, LOG_ITERATION_RATIO)
    work = context.expand(limit)

    square = u.multiply(u)

    total = ZERO
    partial = u
    for k in range(limit):
        total = total.add(partial.divide(2 * k + 1)).drop_to(work)
        partial = partial.multiply(square).drop_to(work)
    return total.multiply(TWO).drop_to(context)


# =============================================================================
# TRIGONOMETRY
# =============================================================================


def sin(angle: object, context: PrecisionContext) -> Rational:
    """
    Синус знакопеременным рядом Маклорена.

    Raises:
        ArithmeticDomainError: |angle| > π/4
    """
    x = _bounded(angle, TRIG_DOMAIN_BOUND, "sin")
    limit = _iterations(context, TRIG_ITERATION_RATIO)
    work = context.expand(limit)

    total = ZERO
    partial = ONE
    negative = False
    for i in range(1, limit + 1):
        # partial == x^(i-1) / (i-1)!
        if i % 2 == 0:
            total = total.add(partial.negate() if negative else partial).drop_to(work)
            negative = not negative
        partial = partial.multiply(x).divide(i).drop_to(work)
    return total.drop_to(context)


def cos(angle: object, context: PrecisionContext) -> Rational:
    """
    Косинус знакопеременным рядом Маклорена.

    Raises:
        ArithmeticDomainError: |angle| > π/4
    """
    x = _bounded(angle, TRIG_DOMAIN_BOUND, "cos")
    limit = _iterations(context, TRIG_ITERATION_RATIO)
    work = context.expand(limit)

    total = ZERO
    partial = ONE
    negative = False
    for i in range(1, limit + 1):
        if i % 2 == 1:
            total = total.add(partial.negate() if negative else partial).drop_to(work)
            negative = not negative
        partial = partial.multiply(x).divide(i).drop_to(work)
    return total.drop_to(context)


def atan(x: object, context: PrecisionContext) -> Rational:
    """
    Арктангенс: sum (-1)^k x^(2k+1) / (2k+1).

    Нечётные степени получаются одним умножением на x^2 за шаг.

    Raises:
        ArithmeticDomainError: |x| > 2 - √3
    """
    value = _bounded(x, ATAN_DOMAIN_BOUND, "atan")
    limit = _iterations(context, ATAN_ITERATION_RATIO)
    work = context.expand(limit)

    square = value.multiply(value)
    total = ZERO
    partial = value
    negative = False
    for k in range(limit):
        term = partial.divide(2 * k + 1)
        total = total.add(term.negate() if negative else term).drop_to(work)
        negative = not negative
        partial = partial.multiply(square).drop_to(work)
    return total.drop_to(context)
