"""Particle Swarm Optimization.

Reference:
    Kennedy, J. and Eberhart, R. (1995). Particle swarm optimization.
    Proceedings of IEEE International Conference on Neural Networks,
    volume IV, pp. 1942-1948.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from swarmtune.foundation.core.solution import Result
from swarmtune.foundation.core.tools import bound, denormalize
from swarmtune.foundation.eval import EvaluationBackend, SerialEvalBackend, ThreadPoolEvalBackend
from .base import Optimizer, adjust_population_size

if TYPE_CHECKING:
    from swarmtune.foundation.core.run_condition import RunCondition
    from swarmtune.foundation.problem.base import Problem


__all__ = ["PSO", "ParallelPSO"]


class PSO(Optimizer):
    """Particle Swarm Optimization with inertia weight.

    Control parameters
    ------------------
    S : float
        Swarm size, rounded and adjusted like DE's population size.
    omega : float
        Inertia weight.
    phi_p : float
        Weight on the particle's own best known position.
    phi_g : float
        Weight on the swarm's best known position.

    Velocities are bounded by ``+/- |upper - lower|`` per dimension, positions
    by the problem bounds. A full swarm pass counts one iteration per particle.
    """

    name = "PSO"
    parameter_names = ("S", "omega", "phi_p", "phi_g")
    default_parameters = (134.0, -0.1618, 1.8903, 2.1225)
    parameter_lower = (1.0, -2.0, -4.0, -4.0)
    parameter_upper = (200.0, 2.0, 4.0, 4.0)
    parameter_sets = {
        "hand_tuned": (50.0, 0.729, 1.49445, 1.49445),
        "all_benchmarks_30dim_60000iter": (134.0, -0.1618, 1.8903, 2.1225),
        "all_benchmarks_30dim_600000iter": (95.0, -0.6031, -0.6485, 2.6475),
        "ackley_30dim_60000iter": (24.0, -0.6421, -3.9845, 0.2583),
        "rastrigin_30dim_60000iter": (53.0, -1.3131, -0.709, -0.5648),
        "rosenbrock_30dim_60000iter": (2.0, 0.7622, 1.3619, 3.4249),
        "schwefel12_30dim_60000iter": (119.0, -0.3718, -0.2031, 3.2785),
        "sphere_rosenbrock_30dim_60000iter": (84.0, -0.3036, -0.0075, 3.973),
        "parallel_all_benchmarks_5dim_10000iter": (72.0, -0.4031, -0.5631, 3.4277),
        "parallel_all_benchmarks_30dim_60000iter": (64.0, -0.2063, -2.7449, 2.3198),
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
        adjust_population_size(1, num_agents_multiple)
        self.num_agents_multiple = int(num_agents_multiple)
        self.eval_backend: EvaluationBackend = eval_backend or SerialEvalBackend()

    def num_agents(self, parameters) -> int:
        return adjust_population_size(parameters[0], self.num_agents_multiple)

    def _optimize(self, parameters: np.ndarray, problem: "Problem", run_condition: "RunCondition") -> Result:
        num_agents = self.num_agents(parameters)
        omega, phi_p, phi_g = (float(v) for v in parameters[1:4])

        rng = self.rng
        lower, upper = problem.lower_bound, problem.upper_bound
        n = problem.dimensionality

        v_high = np.abs(upper - lower)
        v_low = -v_high

        positions = rng.uniform_vector(problem.lower_init, problem.upper_init, (num_agents, n))
        velocities = rng.uniform_vector(v_low, v_high, (num_agents, n))
        best_positions = positions.copy()
        best_fitness = self.eval_backend.evaluate(problem, best_positions)

        g = best_positions[0].copy()
        g_fitness = float(best_fitness[0])
        self.trace(0, g_fitness)
        for j in range(1, num_agents):
            if best_fitness[j] < g_fitness:
                g = best_positions[j].copy()
                g_fitness = float(best_fitness[j])
            self.trace(j, g_fitness)

        i = num_agents
        while run_condition.continue_run(i, g_fitness):
            r_p = rng.random(num_agents)[:, None]
            r_g = rng.random(num_agents)[:, None]

            velocities = (
                omega * velocities
                + phi_p * r_p * (best_positions - positions)
                + phi_g * r_g * (g - positions)
            )
            denormalize(velocities)
            bound(velocities, v_low, v_high)
            positions += velocities
            bound(positions, lower, upper)

            new_fitness = self.eval_backend.evaluate(problem, positions, best_fitness)

            for j in range(num_agents):
                if new_fitness[j] < best_fitness[j]:
                    best_positions[j] = positions[j]
                    best_fitness[j] = new_fitness[j]
                    if new_fitness[j] < g_fitness:
                        g = positions[j].copy()
                        g_fitness = float(new_fitness[j])
                self.trace(i, g_fitness)
                i += 1

        return self._result(problem, g, g_fitness, i)


class ParallelPSO(PSO):
    """PSO whose swarm evaluation passes run on a bounded thread pool.

    The velocity and position update stays sequential since every particle
    reads the shared global best.
    """

    default_parameters = PSO.parameter_sets["parallel_all_benchmarks_30dim_60000iter"]

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
        return f"PSO-Par{self.num_agents_multiple}"
