from __future__ import annotations

import duckdb
import pandas as pd
import pytest

from salesqa.application.analysis.data_retriever import DataRetriever
from salesqa.application.analysis.errors import ExecutionError
from salesqa.application.analysis.schemas import QueryPlan


class FakeRepository:
    def __init__(self, frame: pd.DataFrame | None = None, error: Exception | None = None) -> None:
        self.queries: list[str] = []
        self._frame = frame
        self._error = error

    def execute(self, sql: str) -> pd.DataFrame:
        self.queries.append(sql)
        if self._error:
            raise self._error
        return self._frame


def test_execute_runs_plan_once():
    repository = FakeRepository(frame=pd.DataFrame({"value": [1]}))
    retriever = DataRetriever(repository, clock=iter(range(10)).__next__)

    frame = retriever.execute(QueryPlan(intent_kind="general_analysis", sql="SELECT 1 AS value"))

    assert frame["value"].tolist() == [1]
    assert repository.queries == ["SELECT 1 AS value"]


def test_store_errors_become_execution_errors():
    repository = FakeRepository(error=duckdb.CatalogException("Table with name orders does not exist!"))
    retriever = DataRetriever(repository)

    with pytest.raises(ExecutionError) as excinfo:
        retriever.execute(QueryPlan(intent_kind="general_analysis", sql="SELECT * FROM orders"))

    assert "orders does not exist" in excinfo.value.message
    assert excinfo.value.sql == "SELECT * FROM orders"
    assert len(repository.queries) == 1
