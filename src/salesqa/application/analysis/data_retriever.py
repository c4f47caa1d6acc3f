"""Execute a query plan against the sales store."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

import duckdb
import pandas as pd

from salesqa.application.analysis.errors import ExecutionError
from salesqa.application.analysis.schemas import QueryPlan

__all__ = ["SalesRepository", "DataRetriever"]

LOGGER = logging.getLogger(__name__)


class SalesRepository(Protocol):
    def execute(self, sql: str) -> pd.DataFrame:  # pragma: no cover - protocol
        ...


class DataRetriever:
    """Single attempt, no caching: any store failure becomes ``ExecutionError``."""

    def __init__(self, repository: SalesRepository, clock: Callable[[], float] | None = None) -> None:
        self._repository = repository
        self._clock = clock or time.perf_counter

    def execute(self, plan: QueryPlan) -> pd.DataFrame:
        started = self._clock()
        try:
            frame = self._repository.execute(plan.sql)
        except duckdb.Error as exc:
            raise ExecutionError(str(exc), sql=plan.sql) from exc
        LOGGER.debug(
            "Executed %s plan: %d rows in %.3fs",
            plan.intent_kind,
            len(frame),
            self._clock() - started,
        )
        return frame
