"""
Fitness traces: best-fitness-so-far sampled at fixed intervals across runs.

Pass a trace to an optimizer (``fitness_trace=...``); it receives
``trace(iteration, best_fitness)`` after every iteration. Traces can be
chained so several views observe the same stream::

    quartiles = FitnessTraceQuartiles(60000, 100)
    mean = FitnessTraceMean(60000, 100, chained=quartiles)
    de = DE(problem, fitness_trace=mean)
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from swarmtune.foundation.core.tools import format_number
from swarmtune.foundation.exceptions import ConfigurationError
from .statistics import Quartiles, StatisticsAccumulator


class FitnessTrace:
    """Base class: linear binning of iterations into ``num_intervals`` buckets.

    Bucket ``k`` covers iterations ``[iteration(k), iteration(k + 1))``. A run
    contributes one sample per bucket, the best fitness at the bucket's first
    iteration. Iterations at or beyond ``max_iterations`` are ignored.
    """

    header = "# Iteration"

    def __init__(self, max_iterations: int, num_intervals: int, chained: "FitnessTrace | None" = None) -> None:
        if max_iterations <= 0:
            raise ConfigurationError(f"max_iterations must be positive, got {max_iterations}.")
        if num_intervals <= 0:
            raise ConfigurationError(f"num_intervals must be positive, got {num_intervals}.")
        self.max_iterations = int(max_iterations)
        self.num_intervals = min(int(num_intervals), self.max_iterations)
        self.chained = chained

    def iteration(self, index: int) -> int:
        """First iteration of bucket ``index``."""
        return -(-index * self.max_iterations // self.num_intervals)

    def index(self, iteration: int) -> int:
        return iteration * self.num_intervals // self.max_iterations

    def trace(self, iteration: int, fitness: float) -> None:
        if 0 <= iteration < self.max_iterations:
            index = self.index(iteration)
            if iteration == self.iteration(index):
                self._log(index, float(fitness))
        if self.chained is not None:
            self.chained.trace(iteration, fitness)

    def _log(self, index: int, fitness: float) -> None:
        raise NotImplementedError

    def rows(self) -> list[list[float]]:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def write(self, stream: TextIO) -> None:
        stream.write(self.header + "\n\n")
        for k, row in enumerate(self.rows()):
            stream.write(" ".join([str(self.iteration(k))] + [format_number(v) for v in row]) + "\n")

    def write_to_file(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            self.write(fh)
        return path


class FitnessTraceMean(FitnessTrace):
    """Per-bucket mean, standard deviation, min and max across runs."""

    header = "# Iteration\tMean Fitness\tStdDev\tMin\tMax"

    def __init__(self, max_iterations: int, num_intervals: int, chained: FitnessTrace | None = None) -> None:
        super().__init__(max_iterations, num_intervals, chained)
        self.buckets = [StatisticsAccumulator() for _ in range(self.num_intervals)]

    def _log(self, index: int, fitness: float) -> None:
        self.buckets[index].accumulate(fitness)

    def clear(self) -> None:
        for acc in self.buckets:
            acc.clear()

    def rows(self) -> list[list[float]]:
        rows = []
        for acc in self.buckets:
            # Runs fill buckets from the start; the first empty one ends the trace.
            if not acc.count:
                break
            rows.append([acc.mean, acc.std, acc.min, acc.max])
        return rows


class FitnessTraceQuartiles(FitnessTrace):
    """Per-bucket quartiles across runs."""

    header = "# Iteration\tMin\tQ1\tMedian\tQ3\tMax"

    def __init__(self, max_iterations: int, num_intervals: int, chained: FitnessTrace | None = None) -> None:
        super().__init__(max_iterations, num_intervals, chained)
        self.samples: list[list[float]] = [[] for _ in range(self.num_intervals)]

    def _log(self, index: int, fitness: float) -> None:
        self.samples[index].append(fitness)

    def clear(self) -> None:
        for bucket in self.samples:
            bucket.clear()

    def rows(self) -> list[list[float]]:
        rows = []
        for bucket in self.samples:
            if not bucket:
                break
            q = Quartiles.compute(bucket)
            rows.append([q.min, q.q1, q.median, q.q3, q.max])
        return rows


__all__ = ["FitnessTrace", "FitnessTraceMean", "FitnessTraceQuartiles"]
