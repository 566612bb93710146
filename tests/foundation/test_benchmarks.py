import numpy as np
import pytest

from swarmtune.foundation.exceptions import BoundsError, InvalidProblemError, ProblemDimensionError
from swarmtune.foundation.problem.base import Problem
from swarmtune.foundation.problem.benchmarks import (
    BENCHMARKS,
    Ackley,
    GearTrain,
    Griewank,
    Rastrigin,
    Rosenbrock,
    RosenbrockF6,
    Schwefel12,
    Schwefel222,
    Sphere,
    Step,
    make_benchmark,
)


def test_gear_train_known_optimum():
    f = GearTrain().fitness(np.array([19.0, 16.0, 43.0, 49.0]))
    assert round(f, 14) == 2.7e-12


def test_gear_train_rounds_teeth_counts():
    problem = GearTrain()
    assert problem.fitness(np.array([19.2, 15.8, 43.4, 48.6])) == problem.fitness(problem.optimal)
    assert problem.fitness(problem.optimal) <= problem.acceptable_fitness


def test_rosenbrock_optimum_is_zero():
    assert Rosenbrock(10).fitness(np.ones(10)) == 0.0


def test_rosenbrock_f6_optimum_equals_bias():
    problem = RosenbrockF6()
    assert problem.fitness(problem.offset + 1.0) == 390.0
    assert problem.min_fitness == 390.0
    assert problem.acceptable_fitness == pytest.approx(390.01)


@pytest.mark.parametrize("cls", [Sphere, Rastrigin, Griewank, Ackley, Step, Schwefel12, Schwefel222])
def test_benchmark_optimum_at_origin(cls):
    problem = cls(5)
    assert problem.fitness(np.zeros(5)) == pytest.approx(0.0, abs=1e-12)
    assert problem.dimensionality == 5
    problem.validate()


def test_displaced_optimum():
    problem = Sphere(3, displace_optimum=True)
    assert problem.fitness(np.full(3, 25.0)) == 0.0
    assert problem.fitness(np.zeros(3)) == pytest.approx(3 * 625.0)


def test_sphere_early_exit_stays_above_limit():
    problem = Sphere(4)
    x = np.full(4, 10.0)
    full = problem.fitness(x)
    partial = problem.fitness(x, 150.0)
    assert full == 400.0
    assert 150.0 < partial <= full
    assert problem.fitness(x, 1000.0) == full


def test_asymmetric_initialization_range():
    problem = Rastrigin(2)
    np.testing.assert_array_equal(problem.lower_init, [2.56, 2.56])
    np.testing.assert_array_equal(problem.upper_bound, [5.12, 5.12])


def test_make_benchmark():
    problem = make_benchmark("SPHERE", 6)
    assert isinstance(problem, Sphere)
    assert problem.dimensionality == 6
    assert "rosenbrock" in BENCHMARKS


def test_make_benchmark_unknown():
    with pytest.raises(InvalidProblemError, match="Unknown problem 'sphre'"):
        make_benchmark("sphre", 2)


def test_benchmark_dimensionality_must_be_positive():
    with pytest.raises(ProblemDimensionError):
        Sphere(0)


def test_validate_rejects_inverted_bounds():
    problem = Problem(lower_bound=[1.0, 0.0], upper_bound=[0.0, 1.0])
    with pytest.raises(BoundsError):
        problem.validate()


def test_validate_rejects_mismatched_lengths():
    problem = Problem(lower_bound=[0.0, 0.0], upper_bound=[1.0, 1.0, 1.0])
    with pytest.raises(BoundsError):
        problem.validate()


def test_default_feasibility_is_bound_membership():
    problem = Sphere(2)
    assert problem.is_feasible(np.array([0.0, 100.0]))
    assert not problem.is_feasible(np.array([0.0, 100.5]))
    assert problem.max_fitness == np.finfo(float).max
