"""Base utilities for optimizer configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from typing import Any, ClassVar, Dict, Mapping, Tuple

from swarmtune.foundation.exceptions import ConfigurationError


class _SerializableConfig:
    """Mixin to serialize dataclass configs and expose the control vector."""

    algorithm: ClassVar[str] = ""
    control_fields: ClassVar[Tuple[str, ...]] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"algorithm": self.algorithm, **asdict(self)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    def to_vector(self) -> list[float]:
        """Control parameters in the optimizer's ``parameter_names`` order."""
        return [float(getattr(self, name)) for name in self.control_fields]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        unknown = sorted(set(data) - known - {"algorithm"})
        if unknown:
            raise ConfigurationError(
                f"{cls.__name__} got unknown fields: {', '.join(unknown)}",
                f"Known fields: {', '.join(sorted(known))}",
            )
        return cls(**{k: v for k, v in data.items() if k in known})


def _require_range(value: float, low: float, high: float, field: str, name: str) -> None:
    """Validate that a control parameter lies in the optimizer's search bounds."""
    if not low <= value <= high:
        raise ConfigurationError(
            f"{name} configuration field '{field}' = {value} is outside [{low}, {high}].",
        )


def _require_backend(value: str, name: str) -> None:
    if value not in {"serial", "threads"}:
        raise ConfigurationError(f"{name} eval_backend must be 'serial' or 'threads', got '{value}'.")


__all__ = ["_SerializableConfig", "_require_range", "_require_backend"]
