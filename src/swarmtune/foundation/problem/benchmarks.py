"""
Standard continuous benchmark problems.

Bounds and initialization ranges follow the classic asymmetric-initialization
setup: agents start in a corner of the search space away from the optimum.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from swarmtune.foundation.exceptions import InvalidProblemError, ProblemDimensionError
from swarmtune.foundation.registry import Registry
from .base import Problem

if TYPE_CHECKING:
    from swarmtune.foundation.core.run_condition import RunCondition


BENCHMARKS: Registry[type["Benchmark"]] = Registry("benchmarks")


class Benchmark(Problem):
    """Problem with identical bounds in every dimension and an optionally displaced optimum."""

    def __init__(
        self,
        dimensionality: int,
        lower_bound: float,
        upper_bound: float,
        lower_init: float,
        upper_init: float,
        displace_value: float = 0.0,
        displace_optimum: bool = False,
        run_condition: "RunCondition | None" = None,
    ) -> None:
        if dimensionality <= 0:
            raise ProblemDimensionError("Benchmark dimensionality must be positive.", dimensionality)
        n = int(dimensionality)
        super().__init__(
            lower_bound=np.full(n, float(lower_bound)),
            upper_bound=np.full(n, float(upper_bound)),
            lower_init=np.full(n, float(lower_init)),
            upper_init=np.full(n, float(upper_init)),
            run_condition=run_condition,
        )
        self.displace_optimum = displace_optimum
        self.displace_value = float(displace_value)

    def displace(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return x - self.displace_value if self.displace_optimum else x


@BENCHMARKS.register("sphere")
class Sphere(Benchmark):
    name = "Sphere"

    def __init__(self, dimensionality: int, displace_optimum: bool = False, run_condition=None) -> None:
        super().__init__(dimensionality, -100, 100, 50, 100, 25, displace_optimum, run_condition)

    @property
    def acceptable_fitness(self) -> float:
        return 1.0

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        value = 0.0
        for elm in self.displace(x).tolist():
            value += elm * elm
            if value > fitness_limit:
                break
        return value


@BENCHMARKS.register("rosenbrock")
class Rosenbrock(Benchmark):
    name = "Rosenbrock"

    def __init__(self, dimensionality: int, displace_optimum: bool = False, run_condition=None) -> None:
        super().__init__(dimensionality, -100, 100, 15, 30, 25, displace_optimum, run_condition)

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        z = self.displace(x).tolist()
        value = 0.0
        for elm, next_elm in zip(z[:-1], z[1:]):
            minus_one = elm - 1.0
            next_minus_sqr = next_elm - elm * elm
            value += 100.0 * next_minus_sqr * next_minus_sqr + minus_one * minus_one
            if value > fitness_limit:
                break
        return value


@BENCHMARKS.register("rastrigin")
class Rastrigin(Benchmark):
    name = "Rastrigin"

    def __init__(self, dimensionality: int, displace_optimum: bool = False, run_condition=None) -> None:
        super().__init__(dimensionality, -5.12, 5.12, 2.56, 5.12, 1.28, displace_optimum, run_condition)

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        z = self.displace(x)
        return float(np.sum(z * z - 10.0 * np.cos(2.0 * math.pi * z) + 10.0))


@BENCHMARKS.register("griewank")
class Griewank(Benchmark):
    name = "Griewank"

    def __init__(self, dimensionality: int, displace_optimum: bool = False, run_condition=None) -> None:
        super().__init__(dimensionality, -600, 600, 300, 600, -150, displace_optimum, run_condition)

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        z = self.displace(x)
        idx = np.sqrt(np.arange(1, z.size + 1, dtype=float))
        return float(1.0 + np.sum(z * z) / 4000.0 - np.prod(np.cos(z / idx)))


@BENCHMARKS.register("ackley")
class Ackley(Benchmark):
    name = "Ackley"

    def __init__(self, dimensionality: int, displace_optimum: bool = False, run_condition=None) -> None:
        super().__init__(dimensionality, -30, 30, 15, 30, -7.5, displace_optimum, run_condition)

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        z = self.displace(x)
        n = z.size
        value = (
            math.e
            + 20.0
            - 20.0 * math.exp(-0.2 * math.sqrt(float(np.sum(z * z)) / n))
            - math.exp(float(np.sum(np.cos(2.0 * math.pi * z))) / n)
        )
        # Rounding can push the optimum a hair below zero.
        return max(value, 0.0)


@BENCHMARKS.register("step")
class Step(Benchmark):
    name = "Step"

    def __init__(self, dimensionality: int, displace_optimum: bool = False, run_condition=None) -> None:
        super().__init__(dimensionality, -100, 100, 50, 100, 25, displace_optimum, run_condition)

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        z = np.floor(self.displace(x) + 0.5)
        return float(np.sum(z * z))


@BENCHMARKS.register("schwefel12")
class Schwefel12(Benchmark):
    name = "Schwefel1-2"

    def __init__(self, dimensionality: int, displace_optimum: bool = False, run_condition=None) -> None:
        super().__init__(dimensionality, -100, 100, 50, 100, -25, displace_optimum, run_condition)

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        partial = np.cumsum(self.displace(x))
        return float(np.sum(partial * partial))


@BENCHMARKS.register("schwefel222")
class Schwefel222(Benchmark):
    name = "Schwefel2-22"

    def __init__(self, dimensionality: int, displace_optimum: bool = False, run_condition=None) -> None:
        super().__init__(dimensionality, -10, 10, 5, 10, -2.5, displace_optimum, run_condition)

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        z = np.abs(self.displace(x))
        return float(np.sum(z) + np.prod(z))


class RosenbrockF6(Problem):
    """Shifted 10-dimensional Rosenbrock with a fitness bias of 390.

    The optimum lies at ``offset + 1`` where the fitness equals the bias.
    """

    name = "RosenbrockF6"
    bias = 390.0
    min_fitness = 390.0
    offset = np.array(
        [81.0232, -48.395, 19.2316, -2.5231, 70.4338, 47.1774, -7.8358, -86.6693, 57.8532, -9.9533]
    )

    def __init__(self, run_condition=None) -> None:
        super().__init__(
            lower_bound=np.full(10, -100.0),
            upper_bound=np.full(10, 100.0),
            run_condition=run_condition,
        )

    @property
    def acceptable_fitness(self) -> float:
        return self.bias + 0.01

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        z = np.asarray(x, dtype=float) - self.offset
        z0, z1 = z[:-1], z[1:]
        return self.bias + float(np.sum(100.0 * (z0 * z0 - z1) ** 2 + (z0 - 1.0) ** 2))


class GearTrain(Problem):
    """Gear-train design: pick four teeth counts so the ratio approaches 1/6.931.

    Teeth counts are integers, so candidates are rounded before evaluation.
    """

    name = "GearTrain"
    optimal = np.array([19.0, 16.0, 43.0, 49.0])

    def __init__(self, run_condition=None) -> None:
        super().__init__(
            lower_bound=np.full(4, 12.0),
            upper_bound=np.full(4, 60.0),
            run_condition=run_condition,
        )

    @property
    def acceptable_fitness(self) -> float:
        return 2.71e-12

    def fitness(self, x: np.ndarray, fitness_limit: float = math.inf) -> float:
        x1, x2, x3, x4 = np.rint(np.asarray(x, dtype=float)).tolist()
        f = 1.0 / 6.931 - x1 * x2 / (x3 * x4)
        return f * f


def make_benchmark(
    name: str,
    dimensionality: int,
    *,
    displace_optimum: bool = False,
    run_condition: "RunCondition | None" = None,
) -> Benchmark:
    """Instantiate a registered benchmark by name."""
    if name not in BENCHMARKS:
        raise InvalidProblemError(name, BENCHMARKS.list())
    cls = BENCHMARKS.get(name)
    return cls(dimensionality, displace_optimum, run_condition)


__all__ = [
    "BENCHMARKS",
    "Benchmark",
    "Sphere",
    "Rosenbrock",
    "Rastrigin",
    "Griewank",
    "Ackley",
    "Step",
    "Schwefel12",
    "Schwefel222",
    "RosenbrockF6",
    "GearTrain",
    "make_benchmark",
]
