"""
Numeric capabilities — интерфейс "вещественного числа" и классификаторы

Вместо общего супертипа для Rational и SimpleSurd используется capability
интерфейс: любое значение, которое умеет рендериться в Decimal с заданной
точностью и в целое число, является RealNumber.

Классификаторы:
- is_fractional: "является ли значение дробным по своему типу"
- decimal_from: привести число к Decimal
- integer_from: привести число к int
"""

import numbers
from decimal import Decimal, InvalidOperation
from typing import Protocol, runtime_checkable

from src.core.domain.precision import PrecisionContext
from src.core.exceptions import InvalidArgumentError


# =============================================================================
# CAPABILITY INTERFACE
# =============================================================================


@runtime_checkable
class RealNumber(Protocol):
    """Значение, которое можно отрендерить в Decimal/int с заданной точностью."""

    def to_decimal(self, context: PrecisionContext) -> Decimal: ...

    def to_integer(self) -> int: ...


# =============================================================================
# CLASSIFIERS
# =============================================================================


def is_fractional(number: object) -> bool:
    """
    Является ли значение дробным.

    float и Decimal считаются дробными всегда (по типу, а не по значению),
    рациональные значения — только при знаменателе != 1.

    Examples:
        >>> is_fractional(5)
        False
        >>> is_fractional(5.0)
        True
        >>> is_fractional(Fraction(4, 2))  # doctest: +SKIP
        False
    """
    if isinstance(number, (float, Decimal)):
        return True
    if isinstance(number, numbers.Integral):
        return False
    if isinstance(number, numbers.Rational):
        return number.denominator != 1
    return True


def decimal_from(number: object, context: PrecisionContext) -> Decimal:
    """
    Привести число к Decimal.

    Decimal возвращается как есть, RealNumber рендерится в context,
    float конвертируется точно (значение битового представления),
    int и str — без потерь.

    Raises:
        InvalidArgumentError: None, NaN/Inf, нераспознаваемая строка
    """
    if number is None:
        raise InvalidArgumentError("number must not be None")
    if isinstance(number, RealNumber):
        return number.to_decimal(context)
    if isinstance(number, numbers.Rational) and not isinstance(number, numbers.Integral):
        return context.to_decimal_context().divide(
            Decimal(number.numerator), Decimal(number.denominator)
        )
    if isinstance(number, (Decimal, int, float, str)):
        try:
            result = Decimal(number)
        except InvalidOperation as err:
            raise InvalidArgumentError(f"Cannot parse number: {number!r}") from err
        if not result.is_finite():
            raise InvalidArgumentError(f"Number must be finite, got {number!r}")
        return result
    raise InvalidArgumentError(f"Unsupported numeric type: {type(number).__name__}")


def integer_from(number: object) -> int:
    """
    Привести число к int (усечение к нулю для RealNumber).

    Raises:
        InvalidArgumentError: None или нераспознаваемое значение
    """
    if number is None:
        raise InvalidArgumentError("number must not be None")
    if isinstance(number, numbers.Integral):
        return int(number)
    if isinstance(number, RealNumber):
        return number.to_integer()
    if isinstance(number, numbers.Rational):
        return int(number)
    try:
        return int(number)
    except (TypeError, ValueError, OverflowError) as err:
        raise InvalidArgumentError(f"Cannot convert to integer: {number!r}") from err
