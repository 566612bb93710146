"""Differential Evolution, best/1/bin variant.

Reference:
    Storn, R. and Price, K. (1997). Differential evolution - a simple and
    efficient heuristic for global optimization over continuous spaces.
    Journal of Global Optimization, 11(4), pp. 341-359.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from swarmtune.foundation.core.solution import Result
from swarmtune.foundation.core.tools import bound
from swarmtune.foundation.eval import EvaluationBackend, SerialEvalBackend, ThreadPoolEvalBackend
from .base import Optimizer, adjust_population_size

if TYPE_CHECKING:
    from swarmtune.foundation.core.run_condition import RunCondition
    from swarmtune.foundation.problem.base import Problem


__all__ = ["DE", "ParallelDE"]


class DE(Optimizer):
    """Differential Evolution with a best/1/bin mutation-crossover strategy.

    Control parameters
    ------------------
    NP : float
        Population size. Rounded half away from zero, then lifted to the
        nearest positive multiple of ``num_agents_multiple``.
    CR : float
        Crossover probability in [0, 1].
    F : float
        Differential weight.

    Each generation builds one trial vector per agent,

        y[k] = g[k] + F * (x_R1[k] - x_R2[k])   if k == R or u < CR
        y[k] = x[k]                             otherwise,

    evaluates all trials as one batch and greedily replaces agents whose trial
    improved. Each evaluation counts as one iteration, the initial population
    included.

    Examples
    --------
    >>> from swarmtune import DE, Sphere, RunConditionIterations
    >>> de = DE(Sphere(10), run_condition=RunConditionIterations(5000), rng=42)
    >>> result = de.optimize(DE.parameter_sets["hand_tuned"])
    """

    name = "DE"
    parameter_names = ("NP", "CR", "F")
    default_parameters = (37.0, 0.496, 0.5313)
    parameter_lower = (3.0, 0.0, 0.0)
    parameter_upper = (200.0, 1.0, 2.0)
    parameter_sets = {
        "hand_tuned": (50.0, 0.9, 0.6),
        "for_meta_optimization": (14.0, 0.8434, 0.7660),
        "all_benchmarks_30dim_6000iter": (136.0, 0.9813, 0.279),
        "all_benchmarks_30dim_60000iter": (186.0, 0.8493, 0.4818),
        "four_benchmarks_30dim_6000iter": (103.0, 0.9794, 0.3976),
        "four_benchmarks_30dim_60000iter": (191.0, 0.8448, 0.51),
        "six_benchmarks_10dim_100000iter": (40.0, 0.0103, 0.8991),
        "sphere_rosenbrock_30dim_60000iter": (126.0, 0.9211, 0.4027),
        "rastrigin_30dim_60000iter": (42.0, 0.0082, 0.9417),
        "ackley_30dim_60000iter": (19.0, 0.013, 1.2935),
        "parallel_all_benchmarks_5dim_10000iter": (32.0, 0.4845, 0.9833),
        "parallel_all_benchmarks_30dim_60000iter": (32.0, 0.3176, 0.5543),
    }

    def __init__(
        self,
        problem: "Problem | None" = None,
        *,
        num_agents_multiple: int = 1,
        eval_backend: EvaluationBackend | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(problem, **kwargs)
        # Validates the multiple eagerly.
        adjust_population_size(1, num_agents_multiple)
        self.num_agents_multiple = int(num_agents_multiple)
        self.eval_backend: EvaluationBackend = eval_backend or SerialEvalBackend()

    def num_agents(self, parameters) -> int:
        return adjust_population_size(parameters[0], self.num_agents_multiple)

    @staticmethod
    def crossover_probability(parameters) -> float:
        return float(parameters[1])

    @staticmethod
    def differential_weight(parameters) -> float:
        return float(parameters[2])

    def _optimize(self, parameters: np.ndarray, problem: "Problem", run_condition: "RunCondition") -> Result:
        num_agents = self.num_agents(parameters)
        cr = self.crossover_probability(parameters)
        f = self.differential_weight(parameters)

        rng = self.rng
        lower, upper = problem.lower_bound, problem.upper_bound
        n = problem.dimensionality

        # Population and its fitness; trial vectors are rebuilt every generation.
        agents = rng.uniform_vector(problem.lower_init, problem.upper_init, (num_agents, n))
        agent_fitness = self.eval_backend.evaluate(problem, agents)

        # Global best is an owned copy, never a view into ``agents``.
        best = agents[0].copy()
        best_fitness = float(agent_fitness[0])
        self.trace(0, best_fitness)
        for j in range(1, num_agents):
            if agent_fitness[j] < best_fitness:
                best = agents[j].copy()
                best_fitness = float(agent_fitness[j])
            self.trace(j, best_fitness)

        i = num_agents
        rows = np.arange(num_agents)
        while run_condition.continue_run(i, best_fitness):
            # Mutation and crossover (sequential: reads the shared best).
            forced = rng.integers(n, num_agents)
            pairs = rng.integers(num_agents, (num_agents, 2))
            cross = rng.random((num_agents, n)) < cr
            cross[rows, forced] = True
            donors = best + f * (agents[pairs[:, 0]] - agents[pairs[:, 1]])
            trials = np.where(cross, donors, agents)
            bound(trials, lower, upper)

            trial_fitness = self.eval_backend.evaluate(problem, trials, agent_fitness)

            # Greedy replacement.
            for j in range(num_agents):
                if trial_fitness[j] < agent_fitness[j]:
                    agents[j] = trials[j]
                    agent_fitness[j] = trial_fitness[j]
                    if trial_fitness[j] < best_fitness:
                        best = trials[j].copy()
                        best_fitness = float(trial_fitness[j])
                self.trace(i, best_fitness)
                i += 1

        return self._result(problem, best, best_fitness, i)


class ParallelDE(DE):
    """DE whose fitness evaluations run on a bounded thread pool.

    Only the two evaluation passes (initial population, per-generation
    trials) are parallel; mutation, crossover and replacement stay
    sequential, so a seeded run gives the same result as :class:`DE` with
    the same population multiple. The problem's fitness must be thread-safe.
    """

    default_parameters = DE.parameter_sets["parallel_all_benchmarks_30dim_60000iter"]

    def __init__(
        self,
        problem: "Problem | None" = None,
        *,
        num_agents_multiple: int = 32,
        n_workers: int | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("eval_backend", ThreadPoolEvalBackend(n_workers=n_workers))
        super().__init__(problem, num_agents_multiple=num_agents_multiple, **kwargs)

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"DE-Par{self.num_agents_multiple}"
