"""
Rational — точная рациональная арифметика

Rational — несократимая дробь numerator/denominator из целых произвольной
точности (int). Все экземпляры immutable; каждая операция возвращает новый
сокращённый экземпляр.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. denominator > 0 всегда
2. gcd(|numerator|, denominator) == 1 всегда
3. Ноль представлен единственным образом: 0/1 (нет знакового нуля)
4. Структурное равенство == числовое равенство (сокращение канонично)

Создание только через фабрику value_of() (или эквивалентный вызов
Rational(number, denominator)), которая валидирует аргументы. float и
Decimal конвертируются через точное десятичное представление
(unscaled digits + scale), без floating-point арифметики.

drop_to(context) округляет ВНУТРЕННИЕ numerator и denominator до context
+ guard digits. Без этого итеративные ряды непригодны: размер дроби растёт
мультипликативно с каждым членом.
"""

import math
import numbers
import sys
from decimal import Decimal, InvalidOperation
from typing import Final

from src.core.domain.numeric import is_fractional
from src.core.domain.precision import (
    DOUBLE_CONTEXT,
    EXACT_DECIMAL_CONTEXT,
    PrecisionContext,
)
from src.core.exceptions import (
    ArithmeticDomainError,
    InvalidArgumentError,
    PrecisionConfigurationError,
    ZeroDenominatorError,
)
from src.core.math.roots import nth_root

# =============================================================================
# CONSTANTS
# =============================================================================

# Guard-цифры, добавляемые к контексту в drop_to
DROP_GUARD_DIGITS: Final[int] = 2

_HASH_MODULUS: Final[int] = sys.hash_info.modulus
_HASH_INF: Final[int] = sys.hash_info.inf

# Отличает отсутствующий знаменатель от явного None
_MISSING: Final[object] = object()


# =============================================================================
# DECIMAL HELPERS
# =============================================================================


def _to_decimal(number: object) -> Decimal:
    """Точная конвертация float/Decimal/str/int в конечный Decimal."""
    try:
        result = Decimal(number)
    except (InvalidOperation, TypeError, ValueError) as err:
        raise InvalidArgumentError(f"Cannot parse number: {number!r}") from err
    if not result.is_finite():
        raise InvalidArgumentError(f"Number must be finite, got {number!r}")
    return result


def _digits(value: int) -> str:
    """Десятичная запись целого без лимита int_max_str_digits."""
    return str(Decimal(value))


def _unscaled(decimal: Decimal) -> tuple[int, int]:
    """
    Разложить Decimal на (unscaled, scale): value = unscaled * 10^-scale.
    """
    scale = -decimal.as_tuple().exponent
    unscaled = int(decimal.scaleb(scale, EXACT_DECIMAL_CONTEXT))
    return unscaled, scale


# =============================================================================
# RATIONAL
# =============================================================================


class Rational:
    """
    Точная несократимая дробь произвольной точности.

    Examples:
        >>> Rational(24, 543)
        Rational(8, 181)
        >>> str(Rational.value_of(0.125))
        '1/8'
        >>> Rational(1, 3) + Rational(1, 6)
        Rational(1, 2)
        >>> Rational(42, 0)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ZeroDenominatorError: Zero denominator.
    """

    __slots__ = ("_numerator", "_denominator")

    ZERO: "Rational"
    ONE: "Rational"
    TWO: "Rational"
    TEN: "Rational"
    HALF: "Rational"
    QUARTER: "Rational"
    THIRD: "Rational"
    TENTH: "Rational"

    def __new__(cls, number: object, denominator: object = _MISSING) -> "Rational":
        return cls.value_of(number, denominator)

    @classmethod
    def _reduced(cls, numerator: int, denominator: int) -> "Rational":
        """Сокращённая дробь из уже проверенной пары (denominator > 0)."""
        gcd = math.gcd(numerator, denominator)
        instance = object.__new__(cls)
        instance._numerator = numerator // gcd
        instance._denominator = denominator // gcd
        return instance

    @classmethod
    def _corrected(cls, numerator: int, denominator: int) -> "Rational":
        """Проверка нулевого знаменателя и нормализация знака."""
        if denominator == 0:
            raise ZeroDenominatorError("Zero denominator.")
        if numerator == 0:
            return cls.ZERO
        if denominator < 0:
            return cls._reduced(-numerator, -denominator)
        return cls._reduced(numerator, denominator)

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def value_of(cls, number: object, denominator: object = _MISSING) -> "Rational":
        """
        Фабрика Rational.

        С одним аргументом принимает int, float, Decimal, str, Fraction или
        Rational. С двумя аргументами возвращает точное частное
        number / denominator для любой комбинации поддерживаемых типов.

        Args:
            number: Число или числитель
            denominator: Знаменатель (optional)

        Returns:
            Сокращённый Rational

        Raises:
            InvalidArgumentError: None, NaN/Inf, нераспознаваемая строка,
                неподдерживаемый тип
            ZeroDenominatorError: denominator равен нулю
        """
        if number is None:
            raise InvalidArgumentError("Null numerator.")
        if denominator is _MISSING:
            return cls._from_number(number)
        if denominator is None:
            raise InvalidArgumentError("Null denominator.")
        if isinstance(number, Rational) or isinstance(denominator, Rational):
            return cls._from_number(number).divide(cls._from_number(denominator))
        if is_fractional(number) or is_fractional(denominator):
            return cls._from_fractions(number, denominator)
        return cls._from_integers(number, denominator)

    @classmethod
    def _from_number(cls, number: object) -> "Rational":
        if number is None:
            raise InvalidArgumentError("Null argument.")
        if isinstance(number, Rational):
            return number
        if isinstance(number, numbers.Integral):
            return cls._reduced(int(number), 1)
        if isinstance(number, numbers.Rational):
            return cls._corrected(int(number.numerator), int(number.denominator))
        if isinstance(number, (float, Decimal, str)):
            unscaled, scale = _unscaled(_to_decimal(number))
            if scale < 0:
                return cls._corrected(unscaled * 10 ** -scale, 1)
            return cls._corrected(unscaled, 10**scale)
        raise InvalidArgumentError(
            f"Unsupported numeric type: {type(number).__name__}"
        )

    @classmethod
    def _from_fractions(cls, number: object, denominator: object) -> "Rational":
        """Оба аргумента приводятся к целым одного масштаба."""
        if _is_exact_ratio(number) or _is_exact_ratio(denominator):
            return cls._from_number(number).divide(cls._from_number(denominator))
        n, n_scale = _unscaled(_to_decimal(number))
        d, d_scale = _unscaled(_to_decimal(denominator))
        scale = n_scale - d_scale
        if scale < 0:
            n *= 10**-scale
        else:
            d *= 10**scale
        return cls._corrected(n, d)

    @classmethod
    def _from_integers(cls, number: object, denominator: object) -> "Rational":
        if isinstance(number, numbers.Integral) and isinstance(
            denominator, numbers.Integral
        ):
            return cls._corrected(int(number), int(denominator))
        return cls._from_number(number).divide(cls._from_number(denominator))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def signum(self) -> int:
        """-1, 0 или 1 в зависимости от знака."""
        return (self._numerator > 0) - (self._numerator < 0)

    def is_integer(self) -> bool:
        return self._denominator == 1

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, term: object) -> "Rational":
        other = Rational._from_number(term)
        return Rational._reduced(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def subtract(self, term: object) -> "Rational":
        other = Rational._from_number(term)
        return Rational._reduced(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def negate(self) -> "Rational":
        return Rational._reduced(-self._numerator, self._denominator)

    def multiply(self, term: object) -> "Rational":
        other = Rational._from_number(term)
        return Rational._reduced(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def reciprocate(self) -> "Rational":
        """
        Обратное значение 1/x.

        Raises:
            ZeroDenominatorError: если значение равно нулю
        """
        if self._numerator == 0:
            raise ZeroDenominatorError("Zero denominator.")
        if self._numerator < 0:
            return Rational._reduced(-self._denominator, -self._numerator)
        return Rational._reduced(self._denominator, self._numerator)

    def divide(self, term: object) -> "Rational":
        return self.multiply(Rational._from_number(term).reciprocate())

    def abs(self) -> "Rational":
        return self.negate() if self._numerator < 0 else self

    def pow(self, exponent: object, context: PrecisionContext | None = None) -> "Rational":
        """
        Возведение в степень.

        Целая степень вычисляется точно и не требует контекста. Дробная
        степень p/q: целая часть точно, корень q-й степени через
        nth_root с заданным контекстом.

        Args:
            exponent: Показатель (int, Rational, Fraction, float, Decimal)
            context: Контекст точности для дробных показателей

        Returns:
            self ** exponent

        Raises:
            PrecisionConfigurationError: дробный показатель без context
            ArithmeticDomainError: отрицательное основание и чётный корень
            ZeroDenominatorError: ноль в отрицательной степени
        """
        if isinstance(exponent, numbers.Integral):
            return self._pow_int(int(exponent))
        power = Rational._from_number(exponent)
        if power.is_integer():
            return self._pow_int(power._numerator)
        if context is None:
            raise PrecisionConfigurationError(
                "PrecisionContext is required for fractional power."
            )
        root = power._denominator
        if self._numerator < 0 and root % 2 == 0:
            raise ArithmeticDomainError("Real principal root doesn't exist.")
        magnitude = abs(power._numerator)
        numerator = nth_root(Decimal(self._numerator**magnitude), root, context)
        denominator = nth_root(Decimal(self._denominator**magnitude), root, context)
        if power._numerator < 0:
            return Rational.value_of(denominator, numerator)
        return Rational.value_of(numerator, denominator)

    def _pow_int(self, exponent: int) -> "Rational":
        if exponent < 0:
            return Rational._reduced(
                self._numerator**-exponent, self._denominator**-exponent
            ).reciprocate()
        return Rational._reduced(self._numerator**exponent, self._denominator**exponent)

    def drop_to(self, context: PrecisionContext) -> "Rational":
        """
        Округлить внутренние numerator и denominator до context + guard digits.

        Ограничивает рост разрядности дроби ценой малой (ограниченной)
        потери точности. Если дробь уже короче контекста, значение не
        меняется.
        """
        rounding = context.expand(DROP_GUARD_DIGITS).to_decimal_context()
        numerator = int(rounding.plus(Decimal(self._numerator)))
        denominator = int(rounding.plus(Decimal(self._denominator)))
        return Rational._corrected(numerator, denominator)

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def to_rational(self, context: PrecisionContext | None = None) -> "Rational":
        return self

    def to_decimal(self, context: PrecisionContext) -> Decimal:
        """Decimal с precision значащих цифр (trailing zeros удалены)."""
        rounding = context.to_decimal_context()
        quotient = rounding.divide(Decimal(self._numerator), Decimal(self._denominator))
        return quotient.normalize(rounding)

    def to_integer(self) -> int:
        """Целая часть с усечением к нулю."""
        quotient = abs(self._numerator) // self._denominator
        return -quotient if self._numerator < 0 else quotient

    def __int__(self) -> int:
        return self.to_integer()

    def __trunc__(self) -> int:
        return self.to_integer()

    def __float__(self) -> float:
        return float(self.to_decimal(DOUBLE_CONTEXT))

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __floor__(self) -> int:
        return self._numerator // self._denominator

    def __ceil__(self) -> int:
        return -(-self._numerator // self._denominator)

    def __round__(self, ndigits: int | None = None):
        """
        Округление half-even, как round() для int и Fraction.

        Без ndigits возвращает int, иначе Rational.
        """
        if ndigits is None:
            floor, remainder = divmod(self._numerator, self._denominator)
            if remainder * 2 < self._denominator:
                return floor
            if remainder * 2 > self._denominator:
                return floor + 1
            return floor if floor % 2 == 0 else floor + 1
        shift = 10 ** abs(ndigits)
        if ndigits > 0:
            return Rational._corrected(round(self.multiply(shift)), shift)
        return Rational._reduced(round(self.divide(shift)) * shift, 1)

    def __complex__(self) -> complex:
        return complex(float(self))

    @property
    def real(self) -> "Rational":
        return self

    @property
    def imag(self) -> int:
        return 0

    def conjugate(self) -> "Rational":
        return self

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def compare_to(self, other: object) -> int:
        """-1, 0 или 1 как self меньше, равен или больше other."""
        term = Rational._from_number(other)
        if self.signum() != term.signum():
            return -1 if self.signum() < term.signum() else 1
        left = self._numerator * term._denominator
        right = term._numerator * self._denominator
        return (left > right) - (left < right)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return (
                self._numerator == other._numerator
                and self._denominator == other._denominator
            )
        if isinstance(other, numbers.Rational):
            return (
                self._numerator == other.numerator
                and self._denominator == other.denominator
            )
        if isinstance(other, (float, Decimal)):
            try:
                return self == Rational._from_number(other)
            except InvalidArgumentError:
                return False
        return NotImplemented

    def __hash__(self) -> int:
        # Совпадает с hash(int) и hash(Fraction) для того же значения
        try:
            inverse = pow(self._denominator, -1, _HASH_MODULUS)
        except ValueError:
            hash_ = _HASH_INF
        else:
            hash_ = hash(hash(abs(self._numerator)) * inverse)
        result = hash_ if self._numerator >= 0 else -hash_
        return -2 if result == -1 else result

    def _compare(self, other: object) -> int | None:
        if not isinstance(other, (Rational, numbers.Rational, float, Decimal)):
            return None
        return self.compare_to(other)

    def __lt__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return Rational._from_number(other).add(self)

    def __sub__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return Rational._from_number(other).subtract(self)

    def __mul__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return Rational._from_number(other).multiply(self)

    def __truediv__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return Rational._from_number(other).divide(self)

    def __pow__(self, exponent: object) -> "Rational":
        if not _is_operand(exponent):
            return NotImplemented
        return self.pow(exponent)

    def __rpow__(self, base: object) -> "Rational":
        if not _is_operand(base):
            return NotImplemented
        return Rational._from_number(base).pow(self)

    def _divmod(self, other: "Rational") -> tuple[int, "Rational"]:
        """Целочисленное деление с остатком через перекрёстные произведения."""
        if other._numerator == 0:
            raise ZeroDenominatorError("Integer division by zero.")
        quotient, remainder = divmod(
            self._numerator * other._denominator, self._denominator * other._numerator
        )
        return quotient, Rational._corrected(
            remainder, self._denominator * other._denominator
        )

    def __floordiv__(self, other: object) -> int:
        if not _is_operand(other):
            return NotImplemented
        return self._divmod(Rational._from_number(other))[0]

    def __rfloordiv__(self, other: object) -> int:
        if not _is_operand(other):
            return NotImplemented
        return Rational._from_number(other)._divmod(self)[0]

    def __mod__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return self._divmod(Rational._from_number(other))[1]

    def __rmod__(self, other: object) -> "Rational":
        if not _is_operand(other):
            return NotImplemented
        return Rational._from_number(other)._divmod(self)[1]

    def __divmod__(self, other: object) -> tuple[int, "Rational"]:
        if not _is_operand(other):
            return NotImplemented
        return self._divmod(Rational._from_number(other))

    def __rdivmod__(self, other: object) -> tuple[int, "Rational"]:
        if not _is_operand(other):
            return NotImplemented
        return Rational._from_number(other)._divmod(self)

    def __neg__(self) -> "Rational":
        return self.negate()

    def __pos__(self) -> "Rational":
        return self

    def __abs__(self) -> "Rational":
        return self.abs()

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        if self._denominator == 1:
            return _digits(self._numerator)
        return f"{_digits(self._numerator)}/{_digits(self._denominator)}"

    def __repr__(self) -> str:
        return f"Rational({_digits(self._numerator)}, {_digits(self._denominator)})"

    def __reduce__(self):
        return (Rational._reduced, (self._numerator, self._denominator))


def _is_exact_ratio(value: object) -> bool:
    return isinstance(value, numbers.Rational) and not isinstance(
        value, numbers.Integral
    )


def _is_operand(value: object) -> bool:
    return isinstance(value, (Rational, numbers.Rational, float, Decimal))


numbers.Rational.register(Rational)

# =============================================================================
# NAMED CONSTANTS
# =============================================================================

Rational.ZERO = Rational._reduced(0, 1)
Rational.ONE = Rational._reduced(1, 1)
Rational.TWO = Rational._reduced(2, 1)
Rational.TEN = Rational._reduced(10, 1)
Rational.HALF = Rational._reduced(1, 2)
Rational.QUARTER = Rational._reduced(1, 4)
Rational.THIRD = Rational._reduced(1, 3)
Rational.TENTH = Rational._reduced(1, 10)

ZERO: Final[Rational] = Rational.ZERO
ONE: Final[Rational] = Rational.ONE
TWO: Final[Rational] = Rational.TWO
TEN: Final[Rational] = Rational.TEN
HALF: Final[Rational] = Rational.HALF
QUARTER: Final[Rational] = Rational.QUARTER
THIRD: Final[Rational] = Rational.THIRD
TENTH: Final[Rational] = Rational.TENTH
