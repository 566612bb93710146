"""Problem decorators that observe evaluations without changing them."""

from __future__ import annotations

import bisect
import logging
import math
import threading

import numpy as np

from swarmtune.foundation.core.solution import Solution
from swarmtune.foundation.core.tools import format_number, format_vector
from swarmtune.foundation.exceptions import ConfigurationError
from .base import Problem, ProblemWrapper


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class LogSolutions(ProblemWrapper):
    """Keep the ``capacity`` best solutions that beat the caller's fitness limit.

    Typically wraps a meta-fitness so the best control-parameter candidates of
    a meta-optimization can be inspected afterwards.
    """

    def __init__(self, problem: Problem, capacity: int) -> None:
        super().__init__(problem)
        if capacity <= 0:
            raise ConfigurationError(f"LogSolutions capacity must be positive, got {capacity}.")
        self.capacity = int(capacity)
        self._log: list[Solution] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"LogSolutions({self.problem.name})"

    @property
    def log(self) -> list[Solution]:
        """Logged solutions, best first."""
        with self._lock:
            return list(self._log)

    def clear(self) -> None:
        with self._lock:
            self._log.clear()

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        value = self.problem.fitness(x, fitness_limit)
        if value < fitness_limit:
            candidate = Solution(x, value, feasible=self.problem.is_feasible(x))
            with self._lock:
                bisect.insort(self._log, candidate, key=lambda s: s.fitness)
                if len(self._log) > self.capacity:
                    self._log.pop()
        return value


class FitnessPrint(ProblemWrapper):
    """Log every evaluation as ``parameters  fitness  [***]``.

    ``***`` marks evaluations that beat the fitness limit, i.e. improvements
    from the point of view of the calling optimizer.
    """

    def __init__(self, problem: Problem, digits: int = 4) -> None:
        super().__init__(problem)
        self.digits = digits

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"FitnessPrint({self.problem.name})"

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        value = self.problem.fitness(x, fitness_limit)
        log_evaluation(x, value, fitness_limit, self.digits)
        return value


def log_evaluation(x: np.ndarray, fitness: float, fitness_limit: float, digits: int = 4) -> None:
    _logger().info(
        "%s \t%s \t%s",
        format_vector(x, digits),
        format_number(fitness),
        "***" if fitness < fitness_limit else "",
    )


__all__ = ["LogSolutions", "FitnessPrint", "log_evaluation"]
