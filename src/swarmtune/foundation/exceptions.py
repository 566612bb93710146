"""
swarmtune exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All swarmtune-specific exceptions inherit from SwarmTuneError for easy catching.

Only precondition violations are raised. Out-of-bounds candidates and
denormalized velocities are repaired in place by the optimizers, and a run that
misses its acceptable fitness is an ordinary Result, not an error.

Example:
    try:
        result = optimizer.optimize(parameters)
    except SwarmTuneError as e:
        logger.error("Optimization failed: %s", e)
"""

from __future__ import annotations

from typing import Any


class SwarmTuneError(Exception):
    """
    Base exception for all swarmtune errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SwarmTuneError, ValueError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidAlgorithmError(ConfigurationError):
    """Raised when an unknown optimizer is requested from the registry."""

    def __init__(self, algorithm: str, available: list[str] | None = None, did_you_mean: str | None = None) -> None:
        available = available or ["de", "de-par", "pso", "pso-par", "lus"]
        message = f"Unknown optimizer '{algorithm}'."
        suggestion = f"Available optimizers: {', '.join(available)}"
        if did_you_mean:
            suggestion = f"Did you mean '{did_you_mean}'? " + suggestion
        super().__init__(message, suggestion, {"algorithm": algorithm, "available": available})


class ParameterDimensionError(ConfigurationError):
    """Raised when a control-parameter vector does not match the optimizer's schema."""

    def __init__(self, optimizer: str, expected: int, got: int) -> None:
        message = f"{optimizer} expects {expected} control parameters, got {got}."
        suggestion = "Use optimizer.parameter_names to see the expected order"
        super().__init__(message, suggestion, {"optimizer": optimizer, "expected": expected, "got": got})


class MissingRunConditionError(ConfigurationError):
    """Raised when neither the optimizer nor its problem carries a run condition."""

    def __init__(self, optimizer: str) -> None:
        message = f"No run condition bound to {optimizer} or its problem."
        suggestion = "Pass run_condition=RunConditionIterations(n) to the optimizer or the problem"
        super().__init__(message, suggestion, {"optimizer": optimizer})


class MissingProblemError(ConfigurationError):
    """Raised when an optimizer is run without a problem."""

    def __init__(self, optimizer: str) -> None:
        message = f"{optimizer} has no problem bound."
        suggestion = "Set optimizer.problem before calling optimize()"
        super().__init__(message, suggestion, {"optimizer": optimizer})


# =============================================================================
# Problem Errors
# =============================================================================


class ProblemError(SwarmTuneError, ValueError):
    """Base class for problem-related errors."""

    pass


class InvalidProblemError(ProblemError):
    """Raised when an unknown benchmark problem is requested."""

    def __init__(self, problem: str, available: list[str] | None = None) -> None:
        message = f"Unknown problem '{problem}'."
        if available:
            suggestion = f"Available problems: {', '.join(available)}"
        else:
            suggestion = "Use BENCHMARKS.list() to see registered problems."
        super().__init__(message, suggestion, {"problem": problem})


class ProblemDimensionError(ProblemError):
    """Raised when a candidate vector does not match the problem dimensionality."""

    def __init__(self, message: str, dimensionality: int | None = None) -> None:
        suggestion = "Check problem.dimensionality against the length of the candidate vector"
        super().__init__(message, suggestion, {"dimensionality": dimensionality})


class BoundsError(ProblemError):
    """Raised when bounds are invalid or inconsistent."""

    def __init__(self, message: str) -> None:
        suggestion = "Ensure lower <= upper for all variables and bounds have length == dimensionality"
        super().__init__(message, suggestion)


# =============================================================================
# Data/IO Errors
# =============================================================================


class DataError(SwarmTuneError):
    """Base class for data-related errors."""

    pass


class ResultsNotAvailableError(DataError):
    """Raised when statistics are requested before any run was recorded."""

    def __init__(self, what: str) -> None:
        message = f"No results recorded for {what}."
        suggestion = "Run optimize() at least once before calling compute()"
        super().__init__(message, suggestion, {"what": what})


__all__ = [
    "SwarmTuneError",
    "ConfigurationError",
    "InvalidAlgorithmError",
    "ParameterDimensionError",
    "MissingRunConditionError",
    "MissingProblemError",
    "ProblemError",
    "InvalidProblemError",
    "ProblemDimensionError",
    "BoundsError",
    "DataError",
    "ResultsNotAvailableError",
]
