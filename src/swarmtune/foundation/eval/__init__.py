from __future__ import annotations

from typing import Any, Protocol

import numpy as np


class EvaluationBackend(Protocol):
    """Protocol for evaluation backends.

    ``evaluate`` computes ``problem.fitness(X[i], limits[i])`` for every row
    and stores the value in slot ``i`` of the returned array. It returns only
    after every row has been evaluated.
    """

    def evaluate(self, problem: Any, X: np.ndarray, limits: np.ndarray | None = None) -> np.ndarray: ...


from .backends import SerialEvalBackend, ThreadPoolEvalBackend, resolve_eval_backend  # noqa: E402

__all__ = ["EvaluationBackend", "SerialEvalBackend", "ThreadPoolEvalBackend", "resolve_eval_backend"]
