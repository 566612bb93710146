"""LUS configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from swarmtune.engine.algorithm.lus import LUS
from .base import _SerializableConfig, _require_range


@dataclass(frozen=True)
class LUSConfigData(_SerializableConfig):
    algorithm = "lus"
    control_fields = ("gamma",)

    gamma: float


class LUSConfig:
    """Declarative configuration holder for LUS settings."""

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    def gamma(self, value: float) -> "LUSConfig":
        self._cfg["gamma"] = value
        return self

    def fixed(self) -> LUSConfigData:
        gamma = float(self._cfg.get("gamma", LUS.default_parameters[0]))
        _require_range(gamma, LUS.parameter_lower[0], LUS.parameter_upper[0], "gamma", "LUS")
        return LUSConfigData(gamma=gamma)
