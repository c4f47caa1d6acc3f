"""Chart-kind selection and follow-up visualization suggestions."""

from __future__ import annotations

from typing import Mapping

from salesqa.application.analysis.schemas import ChartType, VisualizationSuggestion
from salesqa.domain.value_objects import (
    Comparison,
    CustomerAnalysis,
    Intent,
    ProductAnalysis,
    RegionalAnalysis,
    RevenueAnalysis,
)
from salesqa.domain.vocabulary import TIME_GROUP_BYS

__all__ = ["VisualizationDetector", "PALETTE", "color"]

PALETTE: tuple[tuple[str, str], ...] = (
    ("rgba(54, 162, 235, 1)", "rgba(54, 162, 235, 0.2)"),
    ("rgba(255, 99, 132, 1)", "rgba(255, 99, 132, 0.2)"),
    ("rgba(255, 206, 86, 1)", "rgba(255, 206, 86, 0.2)"),
    ("rgba(75, 192, 192, 1)", "rgba(75, 192, 192, 0.2)"),
    ("rgba(153, 102, 255, 1)", "rgba(153, 102, 255, 0.2)"),
    ("rgba(255, 159, 64, 1)", "rgba(255, 159, 64, 0.2)"),
    ("rgba(199, 199, 199, 1)", "rgba(199, 199, 199, 0.2)"),
    ("rgba(83, 102, 255, 1)", "rgba(83, 102, 255, 0.2)"),
    ("rgba(255, 99, 71, 1)", "rgba(255, 99, 71, 0.2)"),
    ("rgba(144, 238, 144, 1)", "rgba(144, 238, 144, 0.2)"),
)


def color(index: int, part: str = "border") -> str:
    border, background = PALETTE[index % len(PALETTE)]
    return border if part == "border" else background


_SUGGESTIONS: Mapping[type, VisualizationSuggestion] = {
    RevenueAnalysis: VisualizationSuggestion(chart_type="line", description="Trend over time"),
    CustomerAnalysis: VisualizationSuggestion(chart_type="pie", description="Customer segment distribution"),
    ProductAnalysis: VisualizationSuggestion(chart_type="bar", description="Product performance comparison"),
    RegionalAnalysis: VisualizationSuggestion(chart_type="map", description="Geographic distribution"),
}


class VisualizationDetector:
    """Pick chart kinds from grouping and row count."""

    def __init__(self, bar_row_threshold: int = 15, pie_max_rows: int = 5) -> None:
        self._bar_row_threshold = bar_row_threshold
        self._pie_max_rows = pie_max_rows

    def select_chart_type(self, group_by: str | None, row_count: int) -> ChartType:
        if row_count > self._bar_row_threshold:
            return "bar"
        if group_by in TIME_GROUP_BYS:
            return "line"
        if row_count <= self._pie_max_rows and group_by in ("category", "region"):
            return "pie"
        return "bar"

    def chart_type_for(self, intent: Intent, group_by: str | None, row_count: int) -> ChartType:
        """Multi-series comparisons are always lines, regional shares always pies."""

        if isinstance(intent, Comparison):
            return "line"
        if isinstance(intent, RegionalAnalysis):
            return "pie"
        return self.select_chart_type(group_by, row_count)

    def suggest(self, intent: Intent) -> list[VisualizationSuggestion]:
        suggestion = _SUGGESTIONS.get(type(intent))
        return [suggestion.model_copy()] if suggestion else []
