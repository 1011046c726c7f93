"""
Тесты для Parallel Reduction

Проверяемые инварианты:
1. Результат совпадает с последовательной свёрткой при любом пороге
2. Порядок combine(left, right) фиксирован — некоммутативная операция
   даёт детерминированный результат
3. Ошибка в листе пробрасывается, частичный результат не возвращается
4. Нет deadlock при пуле из одного потока
"""

import operator
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.core.exceptions import InvalidArgumentError
from src.core.math.reduction import (
    ReductionConfig,
    ReductionTask,
    parallel_reduce,
    reduce_with_config,
)


def _range_sum(start: int, end: int) -> int:
    return sum(range(start, end))


def _range_list(start: int, end: int) -> list[int]:
    return list(range(start, end))


# =============================================================================
# ТЕСТЫ: Корректность
# =============================================================================


class TestParallelReduce:
    """Результат не зависит от порога и планирования."""

    @pytest.mark.parametrize("threshold", [1, 2, 7, 100, 10_000])
    def test_sum_matches_sequential(self, threshold):
        assert parallel_reduce(0, 1000, threshold, operator.add, _range_sum) == 499500

    @pytest.mark.parametrize("threshold", [1, 3, 16])
    def test_order_preserved(self, threshold):
        """Конкатенация списков некоммутативна: порядок должен сохраниться."""
        result = parallel_reduce(0, 500, threshold, operator.add, _range_list)
        assert result == list(range(500))

    def test_repeated_runs_identical(self):
        results = {
            tuple(parallel_reduce(10, 300, 4, operator.add, _range_list))
            for _ in range(5)
        }
        assert len(results) == 1

    def test_empty_range_goes_to_leaf(self):
        assert parallel_reduce(5, 5, 1, operator.add, _range_list) == []

    def test_single_leaf_does_not_use_executor(self):
        calls = []

        def leaf(start, end):
            calls.append((start, end))
            return end - start

        assert parallel_reduce(0, 10, 10, operator.add, leaf) == 10
        assert calls == [(0, 10)]

    def test_leaves_cover_range_exactly_once(self):
        seen = []
        lock = threading.Lock()

        def leaf(start, end):
            with lock:
                seen.extend(range(start, end))
            return end - start

        assert parallel_reduce(0, 257, 5, operator.add, leaf) == 257
        assert sorted(seen) == list(range(257))


# =============================================================================
# ТЕСТЫ: Ошибки
# =============================================================================


class TestFailurePropagation:
    """Ошибки листа и некорректные аргументы."""

    def test_leaf_error_propagates(self):
        def leaf(start, end):
            if start <= 137 < end:
                raise ValueError("bad leaf")
            return end - start

        with pytest.raises(ValueError, match="bad leaf"):
            parallel_reduce(0, 1000, 8, operator.add, leaf)

    def test_combine_error_propagates(self):
        def combine(left, right):
            raise RuntimeError("combine failed")

        with pytest.raises(RuntimeError, match="combine failed"):
            parallel_reduce(0, 100, 10, combine, _range_sum)

    def test_invalid_threshold(self):
        with pytest.raises(InvalidArgumentError, match="threshold"):
            parallel_reduce(0, 10, 0, operator.add, _range_sum)

    def test_invalid_range(self):
        with pytest.raises(InvalidArgumentError, match="Invalid range"):
            parallel_reduce(10, 0, 1, operator.add, _range_sum)


# =============================================================================
# ТЕСТЫ: Пул потоков
# =============================================================================


class TestExecutor:
    """Работа с внешним и ограниченным пулом."""

    def test_single_worker_pool_no_deadlock(self):
        with ThreadPoolExecutor(max_workers=1) as pool:
            result = parallel_reduce(0, 64, 1, operator.add, _range_list, executor=pool)
        assert result == list(range(64))

    def test_external_executor_left_open(self):
        with ThreadPoolExecutor(max_workers=2) as pool:
            parallel_reduce(0, 100, 10, operator.add, _range_sum, executor=pool)
            # пул не закрыт редукцией и принимает новые задачи
            assert pool.submit(lambda: 42).result() == 42

    def test_reduce_with_config(self):
        config = ReductionConfig(threshold=3, max_workers=2)
        assert reduce_with_config(0, 100, operator.add, _range_sum, config) == 4950


class TestReductionConfig:
    """Валидация конфигурации."""

    def test_defaults(self):
        config = ReductionConfig()
        assert config.threshold == 10_000
        assert config.max_workers is None

    @pytest.mark.parametrize("threshold", [0, -1])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(InvalidArgumentError):
            ReductionConfig(threshold=threshold)

    def test_invalid_workers(self):
        with pytest.raises(InvalidArgumentError):
            ReductionConfig(max_workers=0)


class TestReductionTask:
    """split делит диапазон пополам."""

    def test_split_at_midpoint(self):
        task = ReductionTask(0, 11, 2, operator.add, _range_sum)
        left, right = task.split()
        assert (left.start, left.end) == (0, 5)
        assert (right.start, right.end) == (5, 11)
        assert left.threshold == right.threshold == 2
