"""Small numeric helpers shared by the optimizers."""

from __future__ import annotations

import math
import sys

import numpy as np

from swarmtune.foundation.random import Random

_TINY = sys.float_info.min


def round_away(x: float) -> int:
    """Round half away from zero (``2.5 -> 3``, ``-2.5 -> -3``)."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def bound(x: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> np.ndarray:
    """Clamp ``x`` in place into ``[lower, upper]`` and return it."""
    np.clip(x, lower, upper, out=x)
    return x


def denormalize(v: np.ndarray) -> np.ndarray:
    """Zero subnormal components of ``v`` in place and return it."""
    v[np.abs(v) < _TINY] = 0.0
    return v


def sample_bounded(x: np.ndarray, d: np.ndarray, lower: np.ndarray, upper: np.ndarray, rng: Random) -> np.ndarray:
    """Uniform sample in ``[x - d, x + d]`` intersected with the search bounds."""
    low = np.maximum(x - d, lower)
    high = np.minimum(x + d, upper)
    return rng.uniform_vector(low, high)


def format_number(value: float) -> str:
    """Compact formatting for log lines and trace files."""
    mag = abs(value)
    if value == 0:
        return "0"
    if math.isinf(value) or math.isnan(value):
        return str(value)
    if mag < 1e-2 or mag > 1e6:
        return f"{value:.2e}"
    if mag > 1e3:
        return f"{value:.0f}"
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_vector(values, digits: int = 4) -> str:
    return " ".join(f"{float(v):.{digits}f}" for v in values)


__all__ = ["round_away", "bound", "denormalize", "sample_bounded", "format_number", "format_vector"]
