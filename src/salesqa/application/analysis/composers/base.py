"""Shared building blocks for the per-intent response composers."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import pandas as pd

from salesqa.application.analysis.schemas import (
    ChartPayload,
    ChartSeries,
    ChartType,
    ResponseBundle,
    TablePayload,
    Visualization,
)
from salesqa.application.analysis.visualization_detector import VisualizationDetector
from salesqa.domain.formatting import MISSING, format_currency, format_number
from salesqa.domain.metrics import MetricSpec

__all__ = [
    "NO_DATA",
    "SectionComposer",
    "numeric",
    "labels",
    "records",
    "unique",
    "embed",
    "text_cell",
]

NO_DATA = "No matching data was found for this question.\n\n"


def numeric(frame: pd.DataFrame, column: str) -> pd.Series:
    """Float view of ``column``; a missing column or null cell reads as zero."""

    if column not in frame.columns:
        return pd.Series([0.0] * len(frame), index=frame.index, dtype="float64")
    return pd.to_numeric(frame[column], errors="coerce").fillna(0.0).astype("float64")


def labels(frame: pd.DataFrame, column: str, missing: str = "") -> list[str]:
    if column not in frame.columns:
        return [missing] * len(frame)
    return [missing if pd.isna(value) else str(value) for value in frame[column]]


def text_cell(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return MISSING
    return str(value)


def records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    return frame.to_dict(orient="records")


def unique(columns: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(columns))


def embed(visualization: Visualization) -> str:
    """Serialize a visualization as a fenced, labelled narrative block."""

    payload = visualization.payload.model_dump_json()
    return f"```visualization:{visualization.type}:{visualization.title}\n{payload}\n```\n\n"


class SectionComposer:
    """Base class: subclasses turn one intent variant plus rows into a bundle."""

    def __init__(self, detector: VisualizationDetector, currency_symbol: str = "$") -> None:
        self._detector = detector
        self._currency_symbol = currency_symbol

    def compose(self, intent, frame: pd.DataFrame) -> ResponseBundle:  # pragma: no cover - abstract
        raise NotImplementedError

    def _money(self, value: Any) -> str:
        return format_currency(value, self._currency_symbol)

    def _metric_text(self, spec: MetricSpec, value: Any) -> str:
        return self._money(value) if spec.is_currency else format_number(value)

    def _chart(
        self,
        title: str,
        chart_type: ChartType,
        chart_labels: Sequence[str],
        series: Sequence[ChartSeries],
        **options: Any,
    ) -> Visualization:
        payload = ChartPayload(
            chart_type=chart_type,
            labels=list(chart_labels),
            series=list(series),
            options=options,
        )
        return Visualization(type="chart", title=title, payload=payload)

    @staticmethod
    def _table(title: str, columns: Sequence[str], rows: Sequence[dict[str, str]]) -> Visualization:
        return Visualization(type="table", title=title, payload=TablePayload(columns=list(columns), rows=list(rows)))

    @staticmethod
    def _series(label: str, values: Iterable[float], **style: Any) -> ChartSeries:
        return ChartSeries(label=label, values=[float(value) for value in values], style=style)

    def _finish(self, intent, lines: list[str], chart: Visualization, table: Visualization) -> ResponseBundle:
        narrative = "".join(lines) + embed(chart) + embed(table)
        return ResponseBundle(
            narrative=narrative,
            visualizations=[chart, table],
            suggestions=self._detector.suggest(intent),
        )
