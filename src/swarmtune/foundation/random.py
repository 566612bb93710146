"""
Random capability consumed by every optimizer.

There is no process-wide random source: each optimizer holds its own
``Random`` handle. A handle wraps a ``numpy.random.Generator`` and serializes
draws behind a lock, so one handle may be shared between threads. For
reproducible parallel fan-out use :meth:`Random.spawn` to derive independent
child streams from the parent's seed sequence instead of sharing one stream.
"""

from __future__ import annotations

import threading
from typing import Sequence

import numpy as np

from swarmtune.foundation.exceptions import ConfigurationError


class Random:
    """Thread-safe uniform/index sampling over a numpy ``Generator``.

    Parameters
    ----------
    seed : int, SeedSequence or None
        Seed for the underlying PCG64 stream. ``None`` draws fresh OS entropy.
    """

    def __init__(self, seed: int | np.random.SeedSequence | None = None) -> None:
        if isinstance(seed, np.random.SeedSequence):
            self._seed_seq = seed
        else:
            self._seed_seq = np.random.SeedSequence(seed)
        self._gen = np.random.default_rng(self._seed_seq)
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return f"PCG64({self._seed_seq.entropy})"

    def uniform(self, low: float | None = None, high: float | None = None) -> float:
        """Uniform draw in the open interval (0, 1), or in [low, high) when bounds are given."""
        with self._lock:
            if low is None and high is None:
                u = self._gen.random()
                while u == 0.0:
                    u = self._gen.random()
                return float(u)
            if low is None or high is None:
                raise ConfigurationError("uniform() needs both low and high, or neither.")
            return float(low + self._gen.random() * (high - low))

    def uniform_vector(
        self,
        low: Sequence[float] | np.ndarray,
        high: Sequence[float] | np.ndarray,
        size: int | tuple[int, ...] | None = None,
    ) -> np.ndarray:
        """Component-wise uniform draws in [low, high), broadcast to ``size`` when given.

        ``uniform_vector(lower, upper, (n_agents, n))`` initializes a whole population.
        """
        low = np.asarray(low, dtype=float)
        high = np.asarray(high, dtype=float)
        shapes = [low.shape, high.shape]
        if size is not None:
            shapes.append((size,) if isinstance(size, int) else tuple(size))
        try:
            shape = np.broadcast_shapes(*shapes)
        except ValueError as exc:
            raise ConfigurationError("uniform_vector() bounds do not broadcast to the requested size.") from exc
        with self._lock:
            u = self._gen.random(shape)
        return low + u * (high - low)

    def random(self, size: int | tuple[int, ...]) -> np.ndarray:
        """Array of draws in [0, 1)."""
        with self._lock:
            return self._gen.random(size)

    def integers(self, n: int, size: int | tuple[int, ...]) -> np.ndarray:
        """Array of integers in [0, n)."""
        if n <= 0:
            raise ConfigurationError(f"integers() requires n > 0, got {n}.")
        with self._lock:
            return self._gen.integers(n, size=size)

    def index(self, n: int) -> int:
        """Random integer in [0, n)."""
        if n <= 0:
            raise ConfigurationError(f"index() requires n > 0, got {n}.")
        with self._lock:
            return int(self._gen.integers(n))

    def index2(self, n: int) -> tuple[int, int]:
        """Two random integers in [0, n); they are not required to be distinct."""
        if n <= 0:
            raise ConfigurationError(f"index2() requires n > 0, got {n}.")
        with self._lock:
            pair = self._gen.integers(n, size=2)
        return int(pair[0]), int(pair[1])

    def spawn(self, n: int) -> list["Random"]:
        """Derive ``n`` independent child streams.

        Children are a deterministic function of this handle's seed and of how
        many children were spawned before, so a seeded parent always yields the
        same children in the same order.
        """
        with self._lock:
            children = self._seed_seq.spawn(n)
        return [Random(child) for child in children]


def as_random(rng: Random | int | None) -> Random:
    """Accept a ``Random`` handle, a seed, or None."""
    if isinstance(rng, Random):
        return rng
    return Random(rng)


__all__ = ["Random", "as_random"]
