"""
SimpleSurd — символьный корень (value)^(1/root)

Хранит точное значение и степень корня; рендеринг в Decimal/int
делегируется nth_root. Отрицательная степень корня переводится в
обратное значение: x^(1/-n) == (1/x)^(1/n).
"""

from decimal import Decimal

from src.core.domain.precision import PrecisionContext
from src.core.exceptions import ArithmeticDomainError, InvalidArgumentError
from src.core.math.rational import Rational
from src.core.math.roots import integer_root, nth_root


class SimpleSurd:
    """
    Корень root-й степени из рационального значения.

    Examples:
        >>> str(SimpleSurd(Rational(8, 3), 2))
        '(8/3)^(1/2)'
        >>> SimpleSurd(2, 2).to_decimal(PrecisionContext(precision=5))  # doctest: +SKIP
        Decimal('1.4142')
    """

    __slots__ = ("_value", "_root")

    def __init__(self, value: object, root: int):
        if isinstance(root, bool) or not isinstance(root, int) or root == 0:
            raise InvalidArgumentError(f"Root index must be a non-zero integer, got {root!r}")
        radicand = Rational.value_of(value)
        if root < 0:
            root = -root
            radicand = radicand.reciprocate()
        if radicand.signum() < 0 and root % 2 == 0:
            raise ArithmeticDomainError("Even root of negative number is not defined.")
        self._value = radicand
        self._root = root

    @property
    def value(self) -> Rational:
        return self._value

    @property
    def root(self) -> int:
        return self._root

    def to_decimal(self, context: PrecisionContext) -> Decimal:
        numerator = nth_root(Decimal(self._value.numerator), self._root, context)
        denominator = nth_root(Decimal(self._value.denominator), self._root, context)
        rounding = context.to_decimal_context()
        return rounding.divide(numerator, denominator).normalize(rounding)

    def to_rational(self, context: PrecisionContext) -> Rational:
        return Rational.value_of(self.to_decimal(context))

    def to_integer(self) -> int:
        """
        Целая часть с усечением к нулю.

        floor(|v|^(1/n)) == floor(floor(|v|)^(1/n)), поэтому достаточно
        точного целого корня из целой части значения.
        """
        whole = self._value.abs().to_integer()
        root = integer_root(whole, self._root)
        return -root if self._value.signum() < 0 else root

    def __int__(self) -> int:
        return self.to_integer()

    def __float__(self) -> float:
        return float(self.to_decimal(PrecisionContext(precision=20)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleSurd):
            return NotImplemented
        return self._value == other._value and self._root == other._root

    def __hash__(self) -> int:
        return hash((self._value, self._root))

    def __str__(self) -> str:
        return f"({self._value})^(1/{self._root})"

    def __repr__(self) -> str:
        return f"SimpleSurd({self._value!r}, {self._root})"
