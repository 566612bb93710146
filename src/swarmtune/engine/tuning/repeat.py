"""
Run-aggregation combinators.

A ``Repeat`` turns "run this optimizer N times with these control
parameters" into a single scalar, and is itself a :class:`Problem` over the
optimizer's control-parameter space, so it can be optimized in turn.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from swarmtune.engine.algorithm.base import Optimizer, OptimizerProblem
from swarmtune.foundation.core.solution import Result
from swarmtune.foundation.exceptions import ConfigurationError, MissingProblemError


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class Repeat(OptimizerProblem):
    """Base class: run ``optimizer`` ``num_runs`` times on its bound problem.

    Every run goes through :meth:`Optimizer.optimize`, which resets the run
    condition first, so stateful conditions never carry over between runs.
    """

    label = "Repeat"

    def __init__(self, optimizer: Optimizer, num_runs: int, run_condition=None) -> None:
        super().__init__(optimizer, run_condition=run_condition)
        if num_runs <= 0:
            raise ConfigurationError(f"{self.label} needs num_runs > 0, got {num_runs}.")
        self.num_runs = int(num_runs)

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"{self.label}({self.optimizer.name})"

    @property
    def inner_problem(self):
        if self.optimizer.problem is None:
            raise MissingProblemError(self.optimizer.name)
        return self.optimizer.problem

    def run(self, parameters: np.ndarray) -> Result:
        result = self.optimizer.optimize(parameters)
        _logger().debug("%s run on %s: %g", self.name, self.inner_problem.name, result.fitness)
        return result


class RepeatSum(Repeat):
    """Sum of the best fitness over all runs.

    Once the partial sum plus the smallest possible contribution of the
    remaining runs exceeds ``fitness_limit``, the remaining runs are skipped
    and that lower bound is returned.
    """

    label = "RepeatSum"

    @property
    def min_fitness(self) -> float:  # type: ignore[override]
        return self.num_runs * self.inner_problem.min_fitness

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        floor = self.inner_problem.min_fitness
        total = 0.0
        for k in range(self.num_runs):
            total += self.run(x).fitness
            lowest = total + (self.num_runs - k - 1) * floor
            if lowest > fitness_limit:
                return lowest
        return total


class RepeatMin(Repeat):
    """Best (lowest) fitness over all runs.

    Stops as soon as a run reaches the inner problem's minimum fitness, since
    no later run can go lower.
    """

    label = "RepeatMin"

    @property
    def min_fitness(self) -> float:  # type: ignore[override]
        return self.inner_problem.min_fitness

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        floor = self.inner_problem.min_fitness
        best = self.inner_problem.max_fitness
        for _ in range(self.num_runs):
            best = min(best, self.run(x).fitness)
            if best <= floor:
                break
        return best


class RepeatCount(Repeat):
    """Fraction of runs whose fitness reached the inner problem's acceptable fitness."""

    label = "RepeatCount"
    min_fitness = 0.0

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        acceptable = self.inner_problem.acceptable_fitness
        successes = 0
        for _ in range(self.num_runs):
            result = self.run(x)
            _logger().info("%s %d %g", self.inner_problem.name, result.iterations, result.fitness)
            if result.fitness <= acceptable:
                successes += 1
        return successes / self.num_runs


__all__ = ["Repeat", "RepeatSum", "RepeatMin", "RepeatCount"]
