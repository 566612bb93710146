import json

import pytest

from swarmtune.engine.algorithm import DE, LUS, PSO, optimizer_from_config
from swarmtune.engine.algorithm.config import (
    DEConfig,
    DEConfigData,
    LUSConfig,
    LUSConfigData,
    PSOConfig,
    PSOConfigData,
)
from swarmtune.foundation.eval import SerialEvalBackend, ThreadPoolEvalBackend
from swarmtune.foundation.exceptions import ConfigurationError
from swarmtune.foundation.problem.benchmarks import Sphere


class TestDEConfig:
    def test_parameter_set_with_override(self):
        cfg = DEConfig().parameter_set("hand_tuned").cr(0.8).fixed()
        assert cfg.to_vector() == [50.0, 0.8, 0.6]

    def test_unset_values_fall_back_to_defaults(self):
        assert DEConfig().fixed().to_vector() == list(DE.default_parameters)
        assert DEConfig().np(20).fixed().to_vector() == [20.0, 0.496, 0.5313]

    def test_out_of_range(self):
        with pytest.raises(ConfigurationError, match="'cr'"):
            DEConfig().cr(1.5).fixed()

    def test_unknown_parameter_set(self):
        with pytest.raises(ConfigurationError, match="Unknown DE parameter set"):
            DEConfig().parameter_set("best_ever")

    def test_bad_backend(self):
        with pytest.raises(ConfigurationError):
            DEConfig().eval_backend("processes").fixed()

    def test_serialization(self):
        cfg = DEConfig().parameter_set("hand_tuned").num_agents_multiple(32).fixed()
        data = cfg.to_dict()
        assert data["algorithm"] == "de"
        assert data["num_agents_multiple"] == 32
        assert json.loads(cfg.to_json()) == data
        assert DEConfigData.from_dict(data) == cfg

    def test_from_dict_rejects_unknown_fields(self):
        with pytest.raises(ConfigurationError, match="unknown fields: population"):
            DEConfigData.from_dict({"np": 10, "cr": 0.5, "f": 0.5, "population": 3})


class TestPSOConfig:
    def test_parameter_set(self):
        cfg = PSOConfig().parameter_set("hand_tuned").fixed()
        assert cfg.to_vector() == [50.0, 0.729, 1.49445, 1.49445]

    def test_builder_setters(self):
        cfg = PSOConfig().swarm_size(10).omega(0.5).phi_p(1.0).phi_g(-1.0).fixed()
        assert cfg.to_vector() == [10.0, 0.5, 1.0, -1.0]
        assert cfg.to_dict()["algorithm"] == "pso"

    def test_out_of_range(self):
        with pytest.raises(ConfigurationError):
            PSOConfig().omega(3.0).fixed()

    def test_frozen(self):
        cfg = PSOConfig().fixed()
        with pytest.raises(AttributeError):
            cfg.omega = 0.1  # type: ignore[misc]


class TestLUSConfig:
    def test_default_gamma(self):
        assert LUSConfig().fixed() == LUSConfigData(gamma=3.0)

    def test_out_of_range(self):
        with pytest.raises(ConfigurationError):
            LUSConfig().gamma(0.1).fixed()


def test_optimizer_from_de_config():
    cfg = DEConfig().parameter_set("hand_tuned").num_agents_multiple(32).eval_backend("threads", n_workers=2).fixed()
    optimizer, vector = optimizer_from_config(cfg, Sphere(2), rng=0)
    assert isinstance(optimizer, DE)
    assert optimizer.num_agents_multiple == 32
    assert isinstance(optimizer.eval_backend, ThreadPoolEvalBackend)
    assert optimizer.eval_backend.n_workers == 2
    assert vector == [50.0, 0.9, 0.6]
    assert optimizer.num_agents(vector) == 64


def test_optimizer_from_pso_config():
    optimizer, vector = optimizer_from_config(PSOConfig().fixed())
    assert isinstance(optimizer, PSO)
    assert isinstance(optimizer.eval_backend, SerialEvalBackend)
    assert vector == list(PSO.default_parameters)


def test_optimizer_from_lus_config():
    optimizer, vector = optimizer_from_config(LUSConfig().gamma(5.0).fixed())
    assert isinstance(optimizer, LUS)
    assert vector == [5.0]
