import pytest

from swarmtune.engine.algorithm import (
    DE,
    LUS,
    PSO,
    ParallelDE,
    ParallelPSO,
    get_optimizers_registry,
    make_optimizer,
    resolve_optimizer,
)
from swarmtune.foundation.exceptions import InvalidAlgorithmError
from swarmtune.foundation.problem.benchmarks import Sphere


def test_registered_names():
    assert get_optimizers_registry().list() == ["de", "de-par", "lus", "pso", "pso-par"]


@pytest.mark.parametrize(
    "name,cls",
    [("de", DE), ("DE", DE), ("de-par", ParallelDE), ("pso", PSO), ("pso-par", ParallelPSO), ("lus", LUS)],
)
def test_resolve(name, cls):
    assert resolve_optimizer(name) is cls


def test_make_optimizer_forwards_arguments():
    problem = Sphere(3)
    opt = make_optimizer("de-par", problem, num_agents_multiple=16, rng=4)
    assert opt.name == "DE-Par16"
    assert opt.problem is problem


def test_unknown_optimizer_suggests_close_match():
    with pytest.raises(InvalidAlgorithmError, match="Did you mean 'de'"):
        make_optimizer("ded")


def test_unknown_optimizer_without_match():
    with pytest.raises(InvalidAlgorithmError) as excinfo:
        resolve_optimizer("simulated-annealing")
    assert "Did you mean" not in str(excinfo.value)
    assert excinfo.value.details["available"] == get_optimizers_registry().list()
