"""
Per-run result statistics.

``Statistics`` wraps an optimizer, records every :class:`Result` it returns
and summarizes them on demand::

    stats = Statistics(DE(problem, rng=0))
    for _ in range(20):
        stats.optimize()
    summary = stats.compute()
    summary.fitness_mean, summary.fitness_quartiles.median, summary.best_result
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from swarmtune.engine.algorithm.base import Optimizer
from swarmtune.foundation.core.solution import Result
from swarmtune.foundation.exceptions import ResultsNotAvailableError
from swarmtune.foundation.random import as_random


class StatisticsAccumulator:
    """Running count, mean, population variance, min and max (Welford's method)."""

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        self.count = 0
        self._mean = 0.0
        self._m2 = 0.0
        self.min = math.inf
        self.max = -math.inf

    def accumulate(self, value: float) -> None:
        value = float(value)
        self.count += 1
        delta = value - self._mean
        self._mean += delta / self.count
        self._m2 += delta * (value - self._mean)
        self.min = min(self.min, value)
        self.max = max(self.max, value)

    @property
    def mean(self) -> float:
        return self._mean if self.count else math.nan

    @property
    def variance(self) -> float:
        return self._m2 / self.count if self.count else math.nan

    @property
    def std(self) -> float:
        return math.sqrt(self.variance) if self.count else math.nan


@dataclass(frozen=True)
class Quartiles:
    min: float
    q1: float
    median: float
    q3: float
    max: float

    @classmethod
    def compute(cls, values: Sequence[float] | np.ndarray) -> "Quartiles":
        """Quartiles by linear interpolation between sorted order statistics."""
        arr = np.asarray(values, dtype=float)
        if arr.size == 0:
            raise ResultsNotAvailableError("quartiles")
        return cls(*(float(q) for q in np.percentile(arr, [0, 25, 50, 75, 100])))


@dataclass(frozen=True)
class RunStatistics:
    """Summary of the results recorded by :class:`Statistics`."""

    num_results: int
    fitness_min: float
    fitness_max: float
    fitness_mean: float
    fitness_std: float
    fitness_quartiles: Quartiles
    iterations_mean: float
    iterations_std: float
    iterations_quartiles: Quartiles
    best_results: tuple[Result, ...]

    @property
    def best_result(self) -> Result | None:
        """First of the equally good best results, or None when none qualified."""
        return self.best_results[0] if self.best_results else None


class Statistics(Optimizer):
    """Optimizer decorator that records results for later summary.

    Parameters
    ----------
    optimizer : Optimizer
        Wrapped optimizer; its problem, run condition and parameter schema are
        forwarded.
    feasible_only : bool
        Restrict the best results to those flagged feasible by the problem.
    """

    def __init__(self, optimizer: Optimizer, feasible_only: bool = False) -> None:
        self.optimizer = optimizer
        self.feasible_only = feasible_only
        self.results: list[Result] = []

    # Forwarded schema ----------------------------------------------------

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"Statistics({self.optimizer.name})"

    @property
    def parameter_names(self):  # type: ignore[override]
        return self.optimizer.parameter_names

    @property
    def default_parameters(self):  # type: ignore[override]
        return self.optimizer.default_parameters

    @property
    def parameter_lower(self):  # type: ignore[override]
        return self.optimizer.parameter_lower

    @property
    def parameter_upper(self):  # type: ignore[override]
        return self.optimizer.parameter_upper

    @property
    def problem(self):
        return self.optimizer.problem

    @problem.setter
    def problem(self, value) -> None:
        self.optimizer.problem = value

    @property
    def run_condition(self):
        return self.optimizer.run_condition

    @run_condition.setter
    def run_condition(self, value) -> None:
        self.optimizer.run_condition = value

    @property
    def fitness_trace(self):
        return self.optimizer.fitness_trace

    @fitness_trace.setter
    def fitness_trace(self, value) -> None:
        self.optimizer.fitness_trace = value

    @property
    def rng(self):
        return self.optimizer.rng

    @rng.setter
    def rng(self, value) -> None:
        self.optimizer.rng = as_random(value)

    def clone(self, **overrides: Any) -> "Statistics":
        """Wrap a clone of the inner optimizer; the clone records into the same results list."""
        other = copy.copy(self)
        other.optimizer = self.optimizer.clone(**overrides)
        return other

    # Recording -----------------------------------------------------------

    def optimize(self, parameters=None) -> Result:
        result = self.optimizer.optimize(parameters)
        self.results.append(result)
        return result

    def clear(self) -> None:
        self.results.clear()

    def compute(self) -> RunStatistics:
        if not self.results:
            raise ResultsNotAvailableError(self.optimizer.name)
        fitness = np.array([r.fitness for r in self.results], dtype=float)
        iterations = np.array([r.iterations for r in self.results], dtype=float)

        candidates = [r for r in self.results if r.feasible or not self.feasible_only]
        best: tuple[Result, ...] = ()
        if candidates:
            best_fitness = min(r.fitness for r in candidates)
            best = tuple(r for r in candidates if r.fitness == best_fitness)

        fq = Quartiles.compute(fitness)
        return RunStatistics(
            num_results=len(self.results),
            fitness_min=fq.min,
            fitness_max=fq.max,
            fitness_mean=float(fitness.mean()),
            fitness_std=float(fitness.std()),
            fitness_quartiles=fq,
            iterations_mean=float(iterations.mean()),
            iterations_std=float(iterations.std()),
            iterations_quartiles=Quartiles.compute(iterations),
            best_results=best,
        )


__all__ = ["StatisticsAccumulator", "Quartiles", "RunStatistics", "Statistics"]
