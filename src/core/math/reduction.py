"""
Parallel Reduction — параллельная свёртка divide-and-conquer

Обобщённая свёртка диапазона [start, end) с ассоциативной операцией combine:
- end - start <= threshold → leaf_compute(start, end) последовательно
- иначе split по середине: левая половина отправляется в пул потоков,
  правая вычисляется на вызывающем пути, затем join и combine(left, right)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. combine применяется в фиксированном порядке (left, right) — результат
   детерминирован независимо от планирования
2. Ошибка в любой половине пробрасывается через join и прерывает всю
   редукцию; частичный результат не возвращается
3. Нет deadlock при ограниченном пуле: если отправленная половина ещё не
   начата, вызывающий путь отменяет её и вычисляет сам

Инстанцирования: factorial (умножение целых), сумма ряда Рамануджана для π
(сложение Rational).
"""

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Final, Generic, Optional, TypeVar

from src.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# =============================================================================
# THRESHOLDS
# =============================================================================

# Поддиапазоны короче этого порога перемножаются без дальнейшего split
FACTORIAL_THRESHOLD: Final[int] = 10_000

# Порог для суммирования членов ряда (индексы k)
SERIES_THRESHOLD: Final[int] = 5_000


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ReductionConfig:
    """Конфигурация параллельной редукции.

    threshold — максимальная длина диапазона, вычисляемого без split.
    max_workers — размер пула (None → default ThreadPoolExecutor).
    """

    threshold: int = FACTORIAL_THRESHOLD
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        if self.threshold < 1:
            raise InvalidArgumentError(
                f"threshold must be positive, got {self.threshold}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise InvalidArgumentError(
                f"max_workers must be positive, got {self.max_workers}"
            )


# =============================================================================
# REDUCTION TASK
# =============================================================================


@dataclass(frozen=True)
class ReductionTask(Generic[T]):
    """Транзиентная задача: свёртка [start, end) с заданным порогом."""

    start: int
    end: int
    threshold: int
    combine: Callable[[T, T], T]
    leaf_compute: Callable[[int, int], T]

    def split(self) -> tuple["ReductionTask[T]", "ReductionTask[T]"]:
        mid = self.start + (self.end - self.start) // 2
        left = ReductionTask(self.start, mid, self.threshold, self.combine, self.leaf_compute)
        right = ReductionTask(mid, self.end, self.threshold, self.combine, self.leaf_compute)
        return left, right

    def compute(self, executor: Executor) -> T:
        if self.end - self.start <= self.threshold:
            return self.leaf_compute(self.start, self.end)

        left, right = self.split()
        forked = executor.submit(left.compute, executor)
        try:
            right_result = right.compute(executor)
        except BaseException:
            forked.cancel()
            raise

        # Левая половина ещё в очереди → вычисляем её здесь
        if forked.cancel():
            left_result = left.compute(executor)
        else:
            left_result = forked.result()
        return self.combine(left_result, right_result)


# =============================================================================
# PARALLEL REDUCE
# =============================================================================


def parallel_reduce(
    start: int,
    end: int,
    threshold: int,
    combine: Callable[[T, T], T],
    leaf_compute: Callable[[int, int], T],
    executor: Executor | None = None,
) -> T:
    """
    Параллельная свёртка диапазона [start, end).

    Args:
        start: Включительная нижняя граница
        end: Исключительная верхняя граница (end >= start)
        threshold: Максимальная длина диапазона без split (>= 1)
        combine: Ассоциативная операция над результатами половин
        leaf_compute: Последовательное вычисление поддиапазона (start, end)
        executor: Пул для отправленных половин (None → временный
            ThreadPoolExecutor на время вызова)

    Returns:
        Результат свёртки

    Raises:
        InvalidArgumentError: end < start или threshold < 1
        Любая ошибка leaf_compute/combine пробрасывается без изменений

    Examples:
        >>> parallel_reduce(1, 6, 2, operator.mul, lambda a, b: math.prod(range(a, b)))
        120
    """
    if threshold < 1:
        raise InvalidArgumentError(f"threshold must be positive, got {threshold}")
    if end < start:
        raise InvalidArgumentError(f"Invalid range [{start}, {end})")

    if end - start <= threshold:
        return leaf_compute(start, end)

    task = ReductionTask(start, end, threshold, combine, leaf_compute)

    logger.debug(
        "parallel reduce over [%d, %d) with threshold %d", start, end, threshold
    )
    if executor is not None:
        return task.compute(executor)
    with ThreadPoolExecutor(thread_name_prefix="reduce") as pool:
        return task.compute(pool)


def reduce_with_config(
    start: int,
    end: int,
    combine: Callable[[T, T], T],
    leaf_compute: Callable[[int, int], T],
    config: ReductionConfig | None = None,
) -> T:
    """parallel_reduce с параметрами из ReductionConfig."""
    config = config or ReductionConfig()
    if end - start <= config.threshold:
        return parallel_reduce(start, end, config.threshold, combine, leaf_compute)
    with ThreadPoolExecutor(
        max_workers=config.max_workers, thread_name_prefix="reduce"
    ) as pool:
        return parallel_reduce(
            start, end, config.threshold, combine, leaf_compute, executor=pool
        )
