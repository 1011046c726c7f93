"""
Roots — корни n-й степени произвольной точности

Алгоритм (целочисленный Newton-Raphson на масштабированных цифрах):
1. value = unscaled * 10^-scale
2. adjustment подбирается так, чтобы (scale + adjustment) делилось на n
3. unscaled дополняется множителем 10^(precision*n + adjustment), чтобы
   целочисленный корень нёс precision значащих цифр
4. Целый корень: guess = 2^ceil(bit_length / n),
   guess <- guess + (padded // guess^(n-1) - guess) // n, пока |delta| > 1
5. Результат: guess * 10^-(scale_out), scale_out = (scale + adjustment)/n
   + precision

ГАРАНТИЯ (round-trip):
    context.round(nth_root(x, n, context) ** n) == context.round(x)

Результат НЕ округляется до context: он несёт precision + guard digits,
округление — на стороне вызывающего.
"""

from decimal import Decimal
from typing import Final

from src.core.domain.numeric import decimal_from
from src.core.domain.precision import EXACT_DECIMAL_CONTEXT, PrecisionContext
from src.core.exceptions import ArithmeticDomainError, InvalidArgumentError

# Guard-цифры сверх запрошенной точности
ROOT_GUARD_DIGITS: Final[int] = 2

# Допуск сходимости Newton-Raphson (в единицах целочисленного guess)
NEWTON_TOLERANCE: Final[int] = 1


def sqrt(number: object, context: PrecisionContext) -> Decimal:
    """Квадратный корень. Raises ArithmeticDomainError для отрицательных."""
    return nth_root(number, 2, context)


def cbrt(number: object, context: PrecisionContext) -> Decimal:
    """Кубический корень (определён и для отрицательных)."""
    return nth_root(number, 3, context)


def hypot(x: object, y: object, context: PrecisionContext) -> Decimal:
    """
    Гипотенуза прямоугольного треугольника с катетами x и y.

    Квадраты катетов вычисляются точно, корень — с точностью context.
    """
    first = decimal_from(x, context)
    second = decimal_from(y, context)
    squares = EXACT_DECIMAL_CONTEXT.fma(
        first, first, EXACT_DECIMAL_CONTEXT.multiply(second, second)
    )
    return sqrt(squares, context)


def nth_root(number: object, n: int, context: PrecisionContext) -> Decimal:
    """
    Корень n-й степени с точностью context.

    Args:
        number: Подкоренное значение (int, float, Decimal, str, Rational, ...)
        n: Степень корня (>= 1)
        context: Требуемая точность

    Returns:
        Decimal, несущий не менее context.precision значащих цифр

    Raises:
        InvalidArgumentError: n < 1
        ArithmeticDomainError: n чётное и значение отрицательное

    Examples:
        >>> nth_root(2, 2, PrecisionContext(precision=10))  # doctest: +SKIP
        Decimal('1.41421356237')
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidArgumentError(f"Root index must be a positive integer, got {n!r}")

    decimal = decimal_from(number, context)
    if decimal.is_signed() and n % 2 == 0 and not decimal.is_zero():
        raise ArithmeticDomainError("Even root of negative number is not defined.")
    if decimal.is_zero():
        return Decimal(0)
    if n == 1:
        return decimal

    negative = decimal.is_signed()
    exponent = decimal.as_tuple().exponent
    scale = -exponent
    value = int(decimal.copy_abs().scaleb(scale, EXACT_DECIMAL_CONTEXT))

    # (scale + adjustment) должен иметь вид k*n
    adjustment = n - scale % n
    new_scale = (scale + adjustment) // n
    precision = context.precision + ROOT_GUARD_DIGITS + adjustment
    padded = value * 10 ** (precision * n + adjustment)

    root = _newton_approximate(padded, n)
    result = Decimal(-root if negative else root)
    return result.scaleb(-(new_scale + precision), EXACT_DECIMAL_CONTEXT)


def _newton_approximate(raw: int, n: int) -> int:
    """
    Целочисленный корень n-й степени методом Newton-Raphson.

    Начальное приближение 2^ceil(bit_length / n) не меньше корня, поэтому
    последовательность монотонно убывает; итерации до |delta| <= 1.
    """
    guess = 1 << -(-raw.bit_length() // n)
    while True:
        delta = (raw // guess ** (n - 1) - guess) // n
        guess += delta
        if abs(delta) <= NEWTON_TOLERANCE:
            return guess


def integer_root(value: int, n: int) -> int:
    """
    Точный целый корень: наибольшее r >= 0, для которого r^n <= value.

    Raises:
        InvalidArgumentError: value < 0 или n < 1
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidArgumentError(f"Root index must be a positive integer, got {n!r}")
    if value < 0:
        raise InvalidArgumentError(f"Integer root of negative value: {value}")
    if value < 2 or n == 1:
        return value
    root = _newton_approximate(value, n)
    while root**n > value:
        root -= 1
    while (root + 1) ** n <= value:
        root += 1
    return root
