"""Typed configuration objects and loader for salesqa."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import YamlConfigSettingsSource

__all__ = [
    "AppConfig",
    "AnalysisConfig",
    "DuckDBConfig",
    "LoggingConfig",
    "VisualizationConfig",
    "load_config",
]


class DuckDBConfig(BaseModel):
    path: str = Field(default="./data/analytics.duckdb")
    read_only: bool = True


class DatabaseConfig(BaseModel):
    duckdb: DuckDBConfig = Field(default_factory=DuckDBConfig)


class AnalysisConfig(BaseModel):
    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=100, ge=1)
    currency_symbol: str = "$"


class VisualizationConfig(BaseModel):
    bar_row_threshold: int = 15
    pie_max_rows: int = 5


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: Literal["json", "text"] = Field(default="json")
    directory: str = Field(default="./data/logs")
    max_file_size_mb: float = 10
    backup_count: int = 5
    console_output: bool = False


class AppConfig(BaseSettings):
    """Application configuration loaded from YAML, env vars, and defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SALESQA_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    visualization: VisualizationConfig = Field(default_factory=VisualizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    _yaml_env_var: ClassVar[str] = "SALESQA_CONFIG_FILE"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        yaml_path = cls._determine_yaml_path()
        yaml_source = ()
        if yaml_path is not None:
            yaml_source = (YamlConfigSettingsSource(settings_cls, yaml_file=yaml_path),)

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            *yaml_source,
            file_secret_settings,
        )

    @classmethod
    def _determine_yaml_path(cls) -> Path | None:
        override = os.getenv(cls._yaml_env_var)
        if override:
            candidate = Path(override).expanduser()
            if candidate.is_file():
                return candidate
        repo_root = Path(__file__).resolve().parents[3]
        candidates = [
            repo_root / "config" / "config.yaml",
            repo_root / "config.yaml",
        ]
        for path in candidates:
            if path.is_file():
                return path
        return None


_CONFIG_CACHE: AppConfig | None = None


def load_config(*, reload: bool = False) -> AppConfig:
    """Load the application configuration with caching."""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is None or reload:
        _CONFIG_CACHE = AppConfig()
    return _CONFIG_CACHE
