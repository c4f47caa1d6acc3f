"""DuckDB persistence adapter for the sales store."""

from __future__ import annotations

from pathlib import Path

import duckdb
import pandas as pd

__all__ = ["DuckDBSalesRepository", "connect"]


def connect(path: str | Path, read_only: bool = True) -> duckdb.DuckDBPyConnection:
    """Open the store. ``:memory:`` is passed through untouched."""

    if str(path) == ":memory:":
        return duckdb.connect(database=":memory:")
    location = Path(path).expanduser()
    if not read_only:
        location.parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(database=str(location), read_only=read_only)


class DuckDBSalesRepository:
    """Run read queries and report the schema. Never writes."""

    def __init__(self, connection: duckdb.DuckDBPyConnection) -> None:
        self._connection = connection

    def execute(self, sql: str) -> pd.DataFrame:
        return self._connection.execute(sql).fetchdf()

    def describe_schema(self) -> dict[str, list[dict[str, object]]]:
        """Return ``{table: [{name, type, notnull, pk}, ...]}`` for the main schema."""

        rows = self._connection.execute(
            """
            SELECT table_name, column_name, data_type, is_nullable
            FROM information_schema.columns
            WHERE table_schema = 'main'
            ORDER BY table_name, ordinal_position
            """
        ).fetchall()
        primary_keys = self._primary_keys()
        schema: dict[str, list[dict[str, object]]] = {}
        for table, column, data_type, nullable in rows:
            schema.setdefault(table, []).append(
                {
                    "name": column,
                    "type": data_type,
                    "notnull": nullable == "NO",
                    "pk": (table, column) in primary_keys,
                }
            )
        return schema

    def _primary_keys(self) -> set[tuple[str, str]]:
        rows = self._connection.execute(
            """
            SELECT table_name, constraint_column_names
            FROM duckdb_constraints()
            WHERE constraint_type = 'PRIMARY KEY'
            """
        ).fetchall()
        return {(table, column) for table, columns in rows for column in (columns or [])}
