from __future__ import annotations

import json
import logging

import duckdb
import pytest
from dependency_injector import providers

from salesqa.cli import main
from salesqa.shared.config import load_config
from salesqa.shared.dependency_injection import Container


@pytest.fixture(autouse=True)
def _isolated_logging(tmp_path, monkeypatch):
    monkeypatch.setenv("SALESQA_CONFIG_FILE", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("SALESQA_LOGGING__DIRECTORY", str(tmp_path / "logs"))
    load_config(reload=True)
    yield
    logger = logging.getLogger("salesqa")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def container(sales_connection) -> Container:
    container = Container()
    container.duckdb_connection.override(providers.Object(sales_connection))
    return container


def test_ask_prints_narrative(container, capsys):
    exit_code = main(["ask", "show me top 5 products by profit"], container=container)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Your most profitable product is **Laptop** with a total profit of **$600.00**." in out
    assert "-- SQL --" not in out


def test_ask_json_and_show_sql(container, capsys):
    assert main(["ask", "top 5 products by profit", "--json"], container=container) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["error"] is None
    assert "LIMIT 5" in payload["sql"]
    assert [viz["type"] for viz in payload["visualizations"]] == ["chart", "table"]

    assert main(["ask", "top 5 products by profit", "--show-sql"], container=container) == 0
    assert "-- SQL --" in capsys.readouterr().out


def test_ask_exits_non_zero_on_store_error(container, sales_connection, capsys):
    sales_connection.execute("DROP TABLE order_items")

    assert main(["ask", "top products"], container=container) == 1
    assert "I encountered an error when trying to analyze the data" in capsys.readouterr().out


def test_plan_json_does_not_need_the_store(capsys):
    assert main(["plan", "show me top 5 products by profit", "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["intent"] == {"kind": "product_analysis", "metric": "profit", "limit": 5}
    assert "ORDER BY total_profit DESC" in payload["sql"]


def test_schema_lists_tables(container, capsys):
    assert main(["schema"], container=container) == 0

    out = capsys.readouterr().out
    assert "products\n" in out
    assert "  product_id: INTEGER (PRIMARY KEY" in out


def test_database_override(tmp_path, capsys):
    path = tmp_path / "override.duckdb"
    conn = duckdb.connect(str(path))
    conn.execute("CREATE TABLE regions (name VARCHAR)")
    conn.close()

    assert main(["--database", str(path), "schema", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "regions": [{"name": "name", "type": "VARCHAR", "notnull": False, "pk": False}]
    }


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: salesqa" in capsys.readouterr().out


def test_missing_config_file_is_rejected(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path / "typo.yaml"), "plan", "top products"])

    assert excinfo.value.code == 2
    assert "config file not found" in capsys.readouterr().err
