"""DE configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from swarmtune.engine.algorithm.de import DE
from swarmtune.foundation.exceptions import ConfigurationError
from .base import _SerializableConfig, _require_backend, _require_range


@dataclass(frozen=True)
class DEConfigData(_SerializableConfig):
    algorithm = "de"
    control_fields = ("np", "cr", "f")

    np: float
    cr: float
    f: float
    num_agents_multiple: int = 1
    eval_backend: str = "serial"
    n_workers: Optional[int] = None


class DEConfig:
    """Declarative configuration holder for DE settings.

    Unset control parameters fall back to :attr:`DE.default_parameters`.

    >>> cfg = DEConfig().parameter_set("hand_tuned").cr(0.8).fixed()
    >>> cfg.to_vector()
    [50.0, 0.8, 0.6]
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def np(self, value: float) -> "DEConfig":
        self._cfg["np"] = value
        return self

    def cr(self, value: float) -> "DEConfig":
        self._cfg["cr"] = value
        return self

    def f(self, value: float) -> "DEConfig":
        self._cfg["f"] = value
        return self

    def parameter_set(self, name: str) -> "DEConfig":
        if name not in DE.parameter_sets:
            raise ConfigurationError(
                f"Unknown DE parameter set '{name}'.",
                f"Available: {', '.join(sorted(DE.parameter_sets))}",
            )
        self._cfg.update(zip(DEConfigData.control_fields, DE.parameter_sets[name]))
        return self

    def num_agents_multiple(self, value: int) -> "DEConfig":
        self._cfg["num_agents_multiple"] = value
        return self

    def eval_backend(self, value: str, n_workers: Optional[int] = None) -> "DEConfig":
        self._cfg["eval_backend"] = value
        self._cfg["n_workers"] = n_workers
        return self

    def fixed(self) -> DEConfigData:
        defaults = dict(zip(DEConfigData.control_fields, DE.default_parameters))
        values = {name: float(self._cfg.get(name, defaults[name])) for name in DEConfigData.control_fields}
        for name, low, high in zip(DEConfigData.control_fields, DE.parameter_lower, DE.parameter_upper):
            _require_range(values[name], low, high, name, "DE")
        backend = self._cfg.get("eval_backend", "serial")
        _require_backend(backend, "DE")
        return DEConfigData(
            np=values["np"],
            cr=values["cr"],
            f=values["f"],
            num_agents_multiple=int(self._cfg.get("num_agents_multiple", 1)),
            eval_backend=backend,
            n_workers=self._cfg.get("n_workers"),
        )
