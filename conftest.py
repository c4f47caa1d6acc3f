"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
import os

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

_ENV_VARS = ["SALESQA_CONFIG_FILE", "SALESQA_DATABASE__DUCKDB__PATH", "SALESQA_LOGGING__DIRECTORY"]
_BASE_ENV = {var: os.environ.get(var) for var in _ENV_VARS}

import duckdb
import pandas as pd
import pytest

from salesqa.application.analysis.data_retriever import DataRetriever
from salesqa.application.analysis.intent_classifier import IntentClassifier
from salesqa.application.analysis.orchestrator import AnalysisOrchestrator
from salesqa.application.analysis.query_planner import QueryPlanner
from salesqa.application.analysis.response_composer import ResponseComposer
from salesqa.infrastructure.persistence.duckdb_repository import DuckDBSalesRepository

SCHEMA_DDL = (
    """
    CREATE TABLE products (
        product_id INTEGER PRIMARY KEY,
        product_name VARCHAR NOT NULL,
        category VARCHAR,
        product_cost DOUBLE
    )
    """,
    """
    CREATE TABLE customers (
        customer_id INTEGER PRIMARY KEY,
        customer_name VARCHAR NOT NULL,
        segment VARCHAR,
        region VARCHAR
    )
    """,
    """
    CREATE TABLE orders (
        order_id INTEGER PRIMARY KEY,
        customer_id INTEGER,
        order_date DATE
    )
    """,
    """
    CREATE TABLE order_items (
        order_item_id INTEGER PRIMARY KEY,
        order_id INTEGER,
        product_id INTEGER,
        quantity INTEGER,
        unit_price DOUBLE
    )
    """,
)


def sales_frames() -> dict[str, pd.DataFrame]:
    """Small fixed dataset spanning January to March 2023."""

    return {
        "products": pd.DataFrame(
            {
                "product_id": [1, 2, 3, 4, 5],
                "product_name": ["Laptop", "Headphones", "T-Shirt", "Desk", "Novel"],
                "category": ["Electronics", "Electronics", "Clothing", "Furniture", "Books"],
                "product_cost": [700.0, 40.0, 5.0, 120.0, 6.0],
            }
        ),
        "customers": pd.DataFrame(
            {
                "customer_id": [1, 2, 3, 4],
                "customer_name": ["Alice Smith", "Bob Jones", "Carol White", "Dan Brown"],
                "segment": ["Consumer", "Corporate", "Consumer", "Home Office"],
                "region": ["North", "South", "East", "West"],
            }
        ),
        "orders": pd.DataFrame(
            {
                "order_id": [101, 102, 103, 104, 105],
                "customer_id": [1, 2, 3, 1, 4],
                "order_date": pd.to_datetime(["2023-01-15", "2023-01-20", "2023-02-10", "2023-03-05", "2023-03-18"]),
            }
        ),
        "order_items": pd.DataFrame(
            {
                "order_item_id": [1, 2, 3, 4, 5, 6, 7, 8, 9],
                "order_id": [101, 101, 102, 102, 103, 103, 104, 105, 105],
                "product_id": [1, 2, 4, 3, 3, 5, 1, 4, 2],
                "quantity": [1, 2, 1, 5, 3, 2, 1, 2, 1],
                "unit_price": [1000.0, 100.0, 300.0, 20.0, 20.0, 15.0, 1000.0, 300.0, 100.0],
            }
        ),
    }


def seed_sales_store(conn: duckdb.DuckDBPyConnection) -> duckdb.DuckDBPyConnection:
    for statement in SCHEMA_DDL:
        conn.execute(statement)
    for table, frame in sales_frames().items():
        conn.register(f"{table}_frame", frame)
        conn.execute(f"INSERT INTO {table} SELECT * FROM {table}_frame")
        conn.unregister(f"{table}_frame")
    return conn


@pytest.fixture(autouse=True)
def _reset_env_vars():
    for var, value in _BASE_ENV.items():
        if value is None:
            os.environ.pop(var, None)
        else:
            os.environ[var] = value
    try:
        yield
    finally:
        for var, value in _BASE_ENV.items():
            if value is None:
                os.environ.pop(var, None)
            else:
                os.environ[var] = value


@pytest.fixture
def sales_connection():
    conn = seed_sales_store(duckdb.connect(database=":memory:"))
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def sales_repository(sales_connection):
    return DuckDBSalesRepository(sales_connection)


@pytest.fixture
def orchestrator(sales_repository):
    return AnalysisOrchestrator(
        intent_classifier=IntentClassifier(),
        query_planner=QueryPlanner(),
        data_retriever=DataRetriever(repository=sales_repository),
        response_composer=ResponseComposer(),
    )
