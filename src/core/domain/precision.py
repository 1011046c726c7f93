"""
PrecisionContext — контекст точности

Immutable Pydantic модель: количество значащих цифр + режим округления.

Используется для:
- ограничения роста числителя/знаменателя Rational (drop_to)
- рендеринга точного значения в Decimal с заданной точностью
- выбора количества итераций рядов

Контекст хешируемый (frozen=True), поэтому может быть ключом кеша π.
"""

import decimal
from decimal import Decimal
from enum import Enum
from typing import Final

from pydantic import BaseModel, Field


# =============================================================================
# ROUNDING MODE
# =============================================================================


class RoundingMode(str, Enum):
    """
    Режим округления.

    Значения совпадают с константами модуля decimal, поэтому передаются
    в decimal.Context без преобразования.
    """

    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR
    HALF_UP = decimal.ROUND_HALF_UP
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    UP05 = decimal.ROUND_05UP


# =============================================================================
# PRECISION CONTEXT
# =============================================================================


class PrecisionContext(BaseModel):
    """
    Контекст точности: {significant digits, rounding mode}.

    Examples:
        >>> ctx = PrecisionContext(precision=50)
        >>> ctx.expand(2).precision
        52
        >>> ctx.round(Decimal("1.23456"))  # doctest: +SKIP
    """

    precision: int = Field(..., gt=0, description="Количество значащих цифр")
    rounding: RoundingMode = Field(
        RoundingMode.HALF_UP, description="Режим округления"
    )

    model_config = {"frozen": True}

    def expand(self, delta: int) -> "PrecisionContext":
        """
        Контекст с delta дополнительными guard-цифрами и тем же режимом
        округления.
        """
        return PrecisionContext(
            precision=self.precision + delta, rounding=self.rounding
        )

    def to_decimal_context(self) -> decimal.Context:
        """decimal.Context с той же точностью и неограниченным диапазоном экспонент."""
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding.value,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
        )

    def round(self, value: Decimal) -> Decimal:
        """Округлить Decimal до precision значащих цифр."""
        return self.to_decimal_context().plus(value)


def expand_context(context: PrecisionContext, delta: int) -> PrecisionContext:
    """Функциональная форма PrecisionContext.expand."""
    return context.expand(delta)


# =============================================================================
# PREDEFINED CONTEXTS
# =============================================================================

# IEEE 754-2008 decimal форматы
DECIMAL32: Final[PrecisionContext] = PrecisionContext(
    precision=7, rounding=RoundingMode.HALF_EVEN
)
DECIMAL64: Final[PrecisionContext] = PrecisionContext(
    precision=16, rounding=RoundingMode.HALF_EVEN
)
DECIMAL128: Final[PrecisionContext] = PrecisionContext(
    precision=34, rounding=RoundingMode.HALF_EVEN
)

# Контекст для сужения к float: с запасом покрывает 17 значащих цифр double
DOUBLE_CONTEXT: Final[PrecisionContext] = PrecisionContext(
    precision=64, rounding=RoundingMode.HALF_UP
)

# Точный контекст для операций без округления (scaleb, целые степени)
EXACT_DECIMAL_CONTEXT: Final[decimal.Context] = decimal.Context(
    prec=decimal.MAX_PREC,
    rounding=decimal.ROUND_HALF_EVEN,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
)
