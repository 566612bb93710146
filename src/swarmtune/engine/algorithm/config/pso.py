"""PSO configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from swarmtune.engine.algorithm.pso import PSO
from swarmtune.foundation.exceptions import ConfigurationError
from .base import _SerializableConfig, _require_backend, _require_range


@dataclass(frozen=True)
class PSOConfigData(_SerializableConfig):
    algorithm = "pso"
    control_fields = ("swarm_size", "omega", "phi_p", "phi_g")

    swarm_size: float
    omega: float
    phi_p: float
    phi_g: float
    num_agents_multiple: int = 1
    eval_backend: str = "serial"
    n_workers: Optional[int] = None


class PSOConfig:
    """Declarative configuration holder for PSO settings."""

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def swarm_size(self, value: float) -> "PSOConfig":
        self._cfg["swarm_size"] = value
        return self

    def omega(self, value: float) -> "PSOConfig":
        self._cfg["omega"] = value
        return self

    def phi_p(self, value: float) -> "PSOConfig":
        self._cfg["phi_p"] = value
        return self

    def phi_g(self, value: float) -> "PSOConfig":
        self._cfg["phi_g"] = value
        return self

    def parameter_set(self, name: str) -> "PSOConfig":
        if name not in PSO.parameter_sets:
            raise ConfigurationError(
                f"Unknown PSO parameter set '{name}'.",
                f"Available: {', '.join(sorted(PSO.parameter_sets))}",
            )
        self._cfg.update(zip(PSOConfigData.control_fields, PSO.parameter_sets[name]))
        return self

    def num_agents_multiple(self, value: int) -> "PSOConfig":
        self._cfg["num_agents_multiple"] = value
        return self

    def eval_backend(self, value: str, n_workers: Optional[int] = None) -> "PSOConfig":
        self._cfg["eval_backend"] = value
        self._cfg["n_workers"] = n_workers
        return self

    def fixed(self) -> PSOConfigData:
        defaults = dict(zip(PSOConfigData.control_fields, PSO.default_parameters))
        values = {name: float(self._cfg.get(name, defaults[name])) for name in PSOConfigData.control_fields}
        for name, low, high in zip(PSOConfigData.control_fields, PSO.parameter_lower, PSO.parameter_upper):
            _require_range(values[name], low, high, name, "PSO")
        backend = self._cfg.get("eval_backend", "serial")
        _require_backend(backend, "PSO")
        return PSOConfigData(
            swarm_size=values["swarm_size"],
            omega=values["omega"],
            phi_p=values["phi_p"],
            phi_g=values["phi_g"],
            num_agents_multiple=int(self._cfg.get("num_agents_multiple", 1)),
            eval_backend=backend,
            n_workers=self._cfg.get("n_workers"),
        )
