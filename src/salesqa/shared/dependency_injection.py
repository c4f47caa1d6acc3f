"""Dependency injection container wiring the question answering pipeline."""

from __future__ import annotations

from dependency_injector import containers, providers

from salesqa.application.analysis.data_retriever import DataRetriever
from salesqa.application.analysis.intent_classifier import IntentClassifier
from salesqa.application.analysis.orchestrator import AnalysisOrchestrator
from salesqa.application.analysis.query_planner import QueryPlanner
from salesqa.application.analysis.response_composer import ResponseComposer
from salesqa.application.analysis.visualization_detector import VisualizationDetector
from salesqa.infrastructure.persistence.duckdb_repository import DuckDBSalesRepository, connect

from .config import load_config

__all__ = ["Container"]


class Container(containers.DeclarativeContainer):
    """Config -> DuckDB connection -> repository -> pipeline stages -> orchestrator."""

    config = providers.Singleton(load_config)

    # Infrastructure
    duckdb_connection = providers.Singleton(
        connect,
        config.provided.database.duckdb.path,
        read_only=config.provided.database.duckdb.read_only,
    )

    sales_repository = providers.Factory(
        DuckDBSalesRepository,
        connection=duckdb_connection,
    )

    # Application - Analysis Components
    intent_classifier = providers.Factory(
        IntentClassifier,
        default_limit=config.provided.analysis.default_limit,
        max_limit=config.provided.analysis.max_limit,
    )

    query_planner = providers.Factory(QueryPlanner)

    data_retriever = providers.Factory(
        DataRetriever,
        repository=sales_repository,
    )

    visualization_detector = providers.Factory(
        VisualizationDetector,
        bar_row_threshold=config.provided.visualization.bar_row_threshold,
        pie_max_rows=config.provided.visualization.pie_max_rows,
    )

    response_composer = providers.Factory(
        ResponseComposer,
        detector=visualization_detector,
        currency_symbol=config.provided.analysis.currency_symbol,
    )

    analysis_orchestrator = providers.Factory(
        AnalysisOrchestrator,
        intent_classifier=intent_classifier,
        query_planner=query_planner,
        data_retriever=data_retriever,
        response_composer=response_composer,
    )
