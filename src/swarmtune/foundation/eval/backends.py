from __future__ import annotations

import math
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Optional

import numpy as np

from swarmtune.foundation.exceptions import ConfigurationError


def _eval_rows(problem: Any, X: np.ndarray, limits: Optional[np.ndarray], out: np.ndarray, start: int, end: int) -> None:
    """Evaluate rows ``[start, end)``; each row writes only its own slot."""
    for i in range(start, end):
        if limits is None:
            out[i] = problem.fitness(X[i])
        else:
            out[i] = problem.fitness(X[i], limits[i])


class SerialEvalBackend:
    """Synchronous in-process evaluation (default)."""

    n_workers = 1

    def evaluate(self, problem: Any, X: np.ndarray, limits: Optional[np.ndarray] = None) -> np.ndarray:
        out = np.empty(X.shape[0], dtype=float)
        _eval_rows(problem, X, limits, out, 0, X.shape[0])
        return out


class ThreadPoolEvalBackend:
    """
    Parallel evaluation over a bounded thread pool.

    Notes:
        - The pool lives only for one ``evaluate`` call; every batch is joined
          before returning.
        - The problem's fitness must be thread-safe. Rows are read-only and
          each worker writes disjoint output slots.
        - Best suited for expensive evaluations that release the GIL
          (numpy kernels, simulators, I/O); overhead dominates for tiny problems.
    """

    def __init__(self, n_workers: Optional[int] = None, chunk_size: Optional[int] = None):
        if n_workers is not None and n_workers < 1:
            raise ConfigurationError(f"n_workers must be >= 1, got {n_workers}.")
        self.n_workers = max(1, n_workers or os.cpu_count() or 1)
        self.chunk_size = chunk_size

    def evaluate(self, problem: Any, X: np.ndarray, limits: Optional[np.ndarray] = None) -> np.ndarray:
        n = X.shape[0]
        if self.n_workers <= 1 or n <= 1:
            return SerialEvalBackend().evaluate(problem, X, limits)

        if self.chunk_size is not None and self.chunk_size > 0:
            chunk_size = self.chunk_size
        else:
            chunk_size = max(1, math.ceil(n / self.n_workers))
        slices = [(i, min(i + chunk_size, n)) for i in range(0, n, chunk_size)]

        out = np.empty(n, dtype=float)
        with ThreadPoolExecutor(max_workers=self.n_workers) as ex:
            futures = [ex.submit(_eval_rows, problem, X, limits, out, start, end) for start, end in slices]
            for fut in as_completed(futures):
                # Re-raise the first worker exception in the caller's thread.
                fut.result()
        return out


def resolve_eval_backend(name: str, *, n_workers: Optional[int] = None, chunk_size: Optional[int] = None):
    key = (name or "serial").lower()
    if key in {"threads", "thread", "parallel"}:
        return ThreadPoolEvalBackend(n_workers=n_workers, chunk_size=chunk_size)
    if key == "serial":
        return SerialEvalBackend()
    raise ConfigurationError(f"Unknown evaluation backend '{name}'.", "Use 'serial' or 'threads'")


__all__ = ["SerialEvalBackend", "ThreadPoolEvalBackend", "resolve_eval_backend"]
