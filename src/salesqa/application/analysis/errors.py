"""Failure taxonomy for the interpretation pipeline."""

from __future__ import annotations

__all__ = ["AnalysisError", "PlanGenerationError", "ExecutionError"]


class AnalysisError(RuntimeError):
    """Base error for failures that end a request."""


class PlanGenerationError(AnalysisError):
    """Raised when no valid query text can be produced for an intent."""


class ExecutionError(AnalysisError):
    """Raised when the store rejects or fails a query."""

    def __init__(self, message: str, sql: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.sql = sql
