"""
Run conditions: termination predicates consulted once per iteration.

An iteration is one fitness evaluation, counted the same way by every
optimizer so that meta-comparisons between optimizers are fair.
"""

from __future__ import annotations

import copy

from swarmtune.foundation.exceptions import ConfigurationError


class RunCondition:
    """Base class for termination predicates."""

    def continue_run(self, iteration: int, fitness: float) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def reset(self) -> None:
        """Clear per-run state. Stateless conditions have nothing to clear."""
        return None

    def spawn(self) -> "RunCondition":
        """Return an independent, freshly reset copy for another run."""
        clone = copy.copy(self)
        clone.reset()
        return clone


class RunConditionIterations(RunCondition):
    """Continue while ``iteration < max_iterations``."""

    def __init__(self, max_iterations: int) -> None:
        max_iterations = int(max_iterations)
        if max_iterations < 0:
            raise ConfigurationError(f"max_iterations must be >= 0, got {max_iterations}.")
        self.max_iterations = max_iterations

    def continue_run(self, iteration: int, fitness: float) -> bool:
        return iteration < self.max_iterations

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_iterations={self.max_iterations})"


class RunConditionFitness(RunConditionIterations):
    """Stop once the fitness reaches ``acceptable_fitness`` or the iteration cap."""

    def __init__(self, max_iterations: int, acceptable_fitness: float) -> None:
        super().__init__(max_iterations)
        self.acceptable_fitness = float(acceptable_fitness)

    def continue_run(self, iteration: int, fitness: float) -> bool:
        return fitness > self.acceptable_fitness and super().continue_run(iteration, fitness)


class RunConditionFitnessStagnation(RunConditionIterations):
    """Stop when the best fitness has not improved for ``stagnation_limit`` iterations.

    An improvement is a drop of more than ``epsilon`` below the best fitness
    seen so far. The first call establishes the baseline and never counts as
    stagnation. The condition is stateful: optimizers call :meth:`reset` at
    the start of each run and concurrent runs must each use :meth:`spawn`.
    """

    def __init__(
        self,
        max_iterations: int,
        stagnation_limit: int,
        epsilon: float = 0.0,
        acceptable_fitness: float = float("-inf"),
    ) -> None:
        super().__init__(max_iterations)
        stagnation_limit = int(stagnation_limit)
        if stagnation_limit <= 0:
            raise ConfigurationError(f"stagnation_limit must be positive, got {stagnation_limit}.")
        if epsilon < 0:
            raise ConfigurationError(f"epsilon must be >= 0, got {epsilon}.")
        self.stagnation_limit = stagnation_limit
        self.epsilon = float(epsilon)
        self.acceptable_fitness = float(acceptable_fitness)
        self._last_improvement = -1
        self._best_fitness = float("inf")

    def reset(self) -> None:
        self._last_improvement = -1
        self._best_fitness = float("inf")

    @property
    def last_improvement(self) -> int:
        return self._last_improvement

    def continue_run(self, iteration: int, fitness: float) -> bool:
        if self._last_improvement < 0 or fitness < self._best_fitness - self.epsilon:
            self._last_improvement = iteration
            self._best_fitness = fitness
        stagnant = iteration - self._last_improvement
        return (
            stagnant < self.stagnation_limit
            and fitness > self.acceptable_fitness
            and super().continue_run(iteration, fitness)
        )


__all__ = [
    "RunCondition",
    "RunConditionIterations",
    "RunConditionFitness",
    "RunConditionFitnessStagnation",
]
