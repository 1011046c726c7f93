"""
Pi — приближение π рядом Рамануджана

    1/π = (2√2 / 9801) * sum_k (4k)! (1103 + 26390k) / ((k!)^4 396^(4k))

- front = sqrt(8) / 9801 (Root Solver + Rational)
- sum — параллельная редукция по k в [0, iterations) со сложением Rational;
  каждый член вычисляется независимо от k и сразу ограничивается drop_to
- iterations ≈ precision / 7 (каждый член даёт ~8 верных цифр)
- π = 1 / (front * sum)

Для precision <= 16 используется константа с 27 значащими цифрами: её
округление до context верно при любом режиме округления.

Результаты кешируются в PiCache по PrecisionContext. Кеш инжектируемый;
get_or_compute атомарен по ключу: один контекст вычисляется не более
одного раза даже при конкурентных вызовах.
"""

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Final

from src.core.domain.precision import PrecisionContext
from src.core.math.factorial import verified_factorial
from src.core.math.rational import ZERO, Rational
from src.core.math.reduction import SERIES_THRESHOLD, parallel_reduce
from src.core.math.roots import sqrt

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

_1103: Final[int] = 1103
_26390: Final[int] = 26390
_396_POW_4: Final[int] = 396**4  # 24591257856
_9801: Final[int] = 9801

# Цифр π на один член ряда (эмпирически ~8, берётся с запасом)
DIGITS_PER_TERM: Final[int] = 7

# До этой точности достаточно машинной константы
LOW_PRECISION_LIMIT: Final[int] = 16

# Guard-цифры рабочего контекста суммирования
PI_GUARD_DIGITS: Final[int] = 5

# π с запасом цифр над LOW_PRECISION_LIMIT
_REFERENCE_PI: Final[Decimal] = Decimal("3.14159265358979323846264338")


# =============================================================================
# CACHE
# =============================================================================


class PiCache:
    """
    Потокобезопасный кеш PrecisionContext → Rational.

    Записи не вытесняются; время жизни совпадает со временем жизни
    экземпляра (для default кеша — процесса).
    """

    def __init__(self) -> None:
        self._values: dict[PrecisionContext, Rational] = {}
        self._locks: dict[PrecisionContext, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, context: PrecisionContext) -> Rational | None:
        with self._guard:
            return self._values.get(context)

    def get_or_compute(
        self,
        context: PrecisionContext,
        compute: Callable[[PrecisionContext], Rational],
    ) -> Rational:
        """
        Вернуть закешированное значение или вычислить и сохранить его.

        Конкурентные вызовы с одним контекстом ждут первого вычисления.
        Если compute падает, ничего не кешируется и ошибка пробрасывается.
        """
        with self._guard:
            cached = self._values.get(context)
            if cached is not None:
                return cached
            lock = self._locks.setdefault(context, threading.Lock())

        with lock:
            with self._guard:
                cached = self._values.get(context)
            if cached is not None:
                logger.debug("pi cache hit after wait: precision=%d", context.precision)
                return cached
            try:
                value = compute(context)
                with self._guard:
                    self._values[context] = value
            finally:
                with self._guard:
                    self._locks.pop(context, None)
            return value

    def clear(self) -> None:
        with self._guard:
            self._values.clear()

    def __contains__(self, context: object) -> bool:
        with self._guard:
            return context in self._values

    def __len__(self) -> int:
        with self._guard:
            return len(self._values)


# =============================================================================
# GENERATOR
# =============================================================================


@dataclass(frozen=True)
class PiConfig:
    """Конфигурация генератора π."""

    digits_per_term: int = DIGITS_PER_TERM
    low_precision_limit: int = LOW_PRECISION_LIMIT
    guard_digits: int = PI_GUARD_DIGITS
    threshold: int = SERIES_THRESHOLD


def ramanujan_term(k: int) -> Rational:
    """k-й член ряда: (4k)! (1103 + 26390k) / ((k!)^4 396^(4k))."""
    numerator = verified_factorial(4 * k) * (_1103 + _26390 * k)
    denominator = verified_factorial(k) ** 4 * _396_POW_4**k
    return Rational.value_of(numerator, denominator)


def ramanujan_sum(start: int, end: int, context: PrecisionContext) -> Rational:
    """Сумма членов ряда для k в [start, end), ограниченная context."""
    total = ZERO
    for k in range(start, end):
        total = total.add(ramanujan_term(k).drop_to(context)).drop_to(context)
    return total


class PiGenerator:
    """Генератор π заданной точности с кешем."""

    def __init__(
        self, config: PiConfig | None = None, cache: PiCache | None = None
    ):
        """
        Args:
            config: конфигурация (optional, default PiConfig())
            cache: кеш значений (optional, новый PiCache)
        """
        self.config = config or PiConfig()
        self.cache = cache if cache is not None else PiCache()

    def of(self, context: PrecisionContext) -> Rational:
        """π как Rational, верный до context.precision значащих цифр."""
        cached = self.cache.get(context)
        if cached is not None:
            logger.debug("pi cache hit: precision=%d", context.precision)
            return cached
        return self.cache.get_or_compute(context, self._compute)

    def _compute(self, context: PrecisionContext) -> Rational:
        if context.precision <= self.config.low_precision_limit:
            logger.debug("pi from reference constant: precision=%d", context.precision)
            return Rational.value_of(_REFERENCE_PI)

        work = context.expand(self.config.guard_digits)
        iterations = work.precision // self.config.digits_per_term + 1
        logger.debug(
            "computing pi: precision=%d, iterations=%d", context.precision, iterations
        )

        front = Rational.value_of(sqrt(8, work), _9801)
        total = parallel_reduce(
            0,
            iterations,
            self.config.threshold,
            Rational.add,
            lambda start, end: ramanujan_sum(start, end, work),
        )
        return front.multiply(total).reciprocate()


_DEFAULT_GENERATOR = PiGenerator()


def pi(context: PrecisionContext) -> Rational:
    """π с точностью context через процессный кеш по умолчанию."""
    return _DEFAULT_GENERATOR.of(context)
