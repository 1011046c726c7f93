"""
Factorial — n! через параллельную редукцию

n! = prod(1..n), диапазон [1, n+1) делится пополам до поддиапазонов
длиной <= FACTORIAL_THRESHOLD, которые перемножаются последовательно.
"""

import logging
import math
import operator

from src.core.domain.numeric import integer_from, is_fractional
from src.core.exceptions import ArithmeticDomainError, InvalidArgumentError
from src.core.math.reduction import ReductionConfig, reduce_with_config

logger = logging.getLogger(__name__)

_FAIL_MESSAGE = "The factorial function is only defined for non-negative integers."


def _multiply_range(start: int, end: int) -> int:
    """Произведение целых из [start, end)."""
    return math.prod(range(start, end))


def factorial(number: object, config: ReductionConfig | None = None) -> int:
    """
    Факториал неотрицательного целого.

    Args:
        number: int, Fraction или Rational с целым значением
        config: Параметры редукции (default: ReductionConfig())

    Returns:
        number!

    Raises:
        ArithmeticDomainError: дробное (float/Decimal/нецелое рациональное)
            или отрицательное значение

    Examples:
        >>> factorial(5)
        120
        >>> factorial(Rational(12, 2))  # doctest: +SKIP
        720
    """
    if number is None:
        raise InvalidArgumentError("number must not be None")
    if is_fractional(number):
        raise ArithmeticDomainError(_FAIL_MESSAGE)
    n = integer_from(number)
    if n < 0:
        raise ArithmeticDomainError(_FAIL_MESSAGE)
    logger.debug("factorial of %d", n)
    return verified_factorial(n, config)


def verified_factorial(n: int, config: ReductionConfig | None = None) -> int:
    """Факториал уже проверенного n >= 0."""
    return reduce_with_config(1, n + 1, operator.mul, _multiply_range, config)
