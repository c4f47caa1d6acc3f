"""Integration tests for the typed configuration loader."""

from __future__ import annotations

from textwrap import dedent

from salesqa.shared.config import load_config


def test_defaults_without_yaml(tmp_path, monkeypatch):
    monkeypatch.setenv("SALESQA_CONFIG_FILE", str(tmp_path / "missing.yaml"))

    config = load_config(reload=True)

    assert config.analysis.default_limit == 10
    assert config.analysis.max_limit == 100
    assert config.visualization.bar_row_threshold == 15
    assert config.visualization.pie_max_rows == 5
    assert config.database.duckdb.read_only is True


def test_env_overrides_yaml(tmp_path, monkeypatch):
    yaml_contents = dedent(
        """
        analysis:
          default_limit: 4
          currency_symbol: "EUR "
        database:
          duckdb:
            path: ":memory:"
        """
    )
    yaml_path = tmp_path / "config.yaml"
    yaml_path.write_text(yaml_contents, encoding="utf-8")

    monkeypatch.setenv("SALESQA_CONFIG_FILE", str(yaml_path))

    config = load_config(reload=True)
    assert config.analysis.default_limit == 4
    assert config.analysis.currency_symbol == "EUR "
    assert config.database.duckdb.path == ":memory:"

    monkeypatch.setenv("SALESQA_ANALYSIS__DEFAULT_LIMIT", "9")
    config = load_config(reload=True)
    assert config.analysis.default_limit == 9


def test_load_config_is_cached(tmp_path, monkeypatch):
    monkeypatch.setenv("SALESQA_CONFIG_FILE", str(tmp_path / "missing.yaml"))
    first = load_config(reload=True)
    assert load_config() is first
