"""
Meta-fitness: score an optimizer's control parameters by how well the
optimizer performs on a weighted set of problems.

``MetaFitness`` is a :class:`Problem` over the optimizer's control-parameter
space, so any optimizer (typically :class:`LUS` or :class:`DE`) can search it.

Example::

    from swarmtune import DE, LUS, MetaFitness, RunConditionIterations, Sphere, Rastrigin

    rc = RunConditionIterations(2000)
    de = DE(rng=1)
    meta = MetaFitness(de, [Sphere(10, run_condition=rc), Rastrigin(10, run_condition=rc)], num_runs=5)
    lus = LUS(meta, run_condition=RunConditionIterations(40), rng=2)
    best = lus.optimize()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

import numpy as np
from joblib import Parallel, delayed  # type: ignore[import-untyped]

from swarmtune.engine.algorithm.base import Optimizer, OptimizerProblem
from swarmtune.foundation.exceptions import ConfigurationError, MissingRunConditionError
from swarmtune.foundation.problem.base import Problem
from swarmtune.foundation.problem.wrappers import log_evaluation
from swarmtune.foundation.random import Random, as_random

if TYPE_CHECKING:
    from swarmtune.foundation.core.run_condition import RunCondition


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightedProblem:
    weight: float
    problem: Problem

    def __post_init__(self) -> None:
        if not self.weight > 0:
            raise ConfigurationError(f"Problem weight must be positive, got {self.weight} for {self.problem.name}.")


class ProblemIndex:
    """Weighted problems ordered worst-performing first.

    After each meta-fitness evaluation the problems are re-sorted by the
    fitness they last contributed, so the next evaluation starts on the
    problem most likely to exceed the fitness limit early.
    """

    def __init__(self, problems: Iterable[Problem | WeightedProblem]) -> None:
        self._items: list[WeightedProblem] = [
            p if isinstance(p, WeightedProblem) else WeightedProblem(1.0, p) for p in problems
        ]
        if not self._items:
            raise ConfigurationError("ProblemIndex needs at least one problem.")
        self._fitness: list[float] = [0.0] * len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def problem(self, i: int) -> Problem:
        return self._items[i].problem

    def weight(self, i: int) -> float:
        return self._items[i].weight

    def fitness(self, i: int) -> float:
        return self._fitness[i]

    def set_fitness(self, i: int, value: float) -> None:
        self._fitness[i] = float(value)

    def sort(self) -> None:
        # Stable sort keeps insertion order among ties.
        order = sorted(range(len(self._items)), key=lambda i: self._fitness[i], reverse=True)
        self._items = [self._items[i] for i in order]
        self._fitness = [self._fitness[i] for i in order]

    @property
    def problems(self) -> list[Problem]:
        return [item.problem for item in self._items]


def _fresh_run_condition(optimizer: Optimizer, problem: Problem) -> "RunCondition":
    rc = problem.run_condition if problem.run_condition is not None else optimizer.run_condition
    if rc is None:
        raise MissingRunConditionError(optimizer.name)
    return rc.spawn()


class MetaFitness(OptimizerProblem):
    """Weighted sum over problems and runs of ``result.fitness - problem.min_fitness``.

    Parameters
    ----------
    optimizer : Optimizer
        Inner optimizer whose control parameters are being tuned. Its own
        ``problem`` is ignored.
    problems : sequence of Problem or WeightedProblem
        Plain problems get weight 1.
    num_runs : int
        Runs per problem.
    run_condition : RunCondition, optional
        Budget of the outer (meta) optimizer.

    Each inner run gets a fresh copy of the problem's run condition, falling
    back to the inner optimizer's. Evaluation stops early once the sum
    reaches ``fitness_limit``.
    """

    min_fitness = 0.0

    def __init__(
        self,
        optimizer: Optimizer,
        problems: Sequence[Problem | WeightedProblem],
        num_runs: int,
        run_condition: "RunCondition | None" = None,
    ) -> None:
        super().__init__(optimizer, run_condition=run_condition)
        if num_runs <= 0:
            raise ConfigurationError(f"MetaFitness needs num_runs > 0, got {num_runs}.")
        self.num_runs = int(num_runs)
        self.problem_index = ProblemIndex(problems)

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"MetaFitness({self.optimizer.name})"

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        index = self.problem_index
        total = 0.0
        for i in range(len(index)):
            if total >= fitness_limit:
                break
            problem = index.problem(i)
            weight = index.weight(i)
            floor = problem.min_fitness
            inner = 0.0
            for _ in range(self.num_runs):
                if total >= fitness_limit:
                    break
                runner = self.optimizer.clone(
                    problem=problem,
                    run_condition=_fresh_run_condition(self.optimizer, problem),
                )
                result = runner.optimize(x)
                adjusted = weight * (result.fitness - floor)
                inner += adjusted
                total += adjusted
            index.set_fitness(i, inner)
        index.sort()
        log_evaluation(x, total, fitness_limit)
        return total


def _single_run(optimizer: Optimizer, parameters: np.ndarray) -> float:
    return optimizer.optimize(parameters).fitness


class ParallelMetaFitness(MetaFitness):
    """MetaFitness whose (problem, run) pairs execute as joblib tasks.

    Every task runs a clone of the inner optimizer bound to its own problem,
    a fresh run condition and a child random stream spawned from ``rng``, so
    a seeded evaluation is reproducible regardless of scheduling. Inner
    problems must be thread-safe. There is no early exit: all runs are
    dispatched up front.
    """

    def __init__(
        self,
        optimizer: Optimizer,
        problems: Sequence[Problem | WeightedProblem],
        num_runs: int,
        run_condition: "RunCondition | None" = None,
        *,
        n_jobs: int = -1,
        rng: Random | int | None = None,
    ) -> None:
        super().__init__(optimizer, problems, num_runs, run_condition=run_condition)
        if n_jobs == 0:
            raise ConfigurationError("n_jobs must be non-zero.")
        self.n_jobs = n_jobs
        self.rng = as_random(rng)

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        index = self.problem_index
        params = np.asarray(x, dtype=float)
        pairs = [(i, r) for i in range(len(index)) for r in range(self.num_runs)]
        streams = self.rng.spawn(len(pairs))
        runners = []
        for (i, _), stream in zip(pairs, streams):
            problem = index.problem(i)
            runners.append(
                self.optimizer.clone(
                    problem=problem,
                    run_condition=_fresh_run_condition(self.optimizer, problem),
                    rng=stream,
                    fitness_trace=None,
                )
            )
        fitnesses = Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(_single_run)(runner, params) for runner in runners
        )

        sums = [0.0] * len(index)
        for (i, _), value in zip(pairs, fitnesses):
            sums[i] += index.weight(i) * (value - index.problem(i).min_fitness)
        # Deterministic combination order: problems as indexed, runs in order.
        total = 0.0
        for i, value in enumerate(sums):
            index.set_fitness(i, value)
            total += value
        index.sort()
        log_evaluation(x, total, fitness_limit)
        return total


__all__ = ["WeightedProblem", "ProblemIndex", "MetaFitness", "ParallelMetaFitness"]
