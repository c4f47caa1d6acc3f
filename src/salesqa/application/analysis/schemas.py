"""Shared Pydantic schemas for plans, visualizations and responses."""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, Field

__all__ = [
    "ChartType",
    "QueryPlan",
    "ChartSeries",
    "ChartPayload",
    "TablePayload",
    "Visualization",
    "VisualizationSuggestion",
    "ResponseBundle",
]

ChartType = Literal["bar", "line", "pie", "map"]


class QueryPlan(BaseModel):
    """A fully resolved read query for one classified intent."""

    model_config = {"frozen": True}

    intent_kind: str
    sql: str


class ChartSeries(BaseModel):
    label: str
    values: list[float]
    style: dict[str, Any] = Field(default_factory=dict)


class ChartPayload(BaseModel):
    chart_type: ChartType
    labels: list[str]
    series: list[ChartSeries]
    options: dict[str, Any] = Field(default_factory=dict)


class TablePayload(BaseModel):
    columns: list[str]
    rows: list[dict[str, str]]


class Visualization(BaseModel):
    type: Literal["chart", "table"]
    title: str
    payload: Union[ChartPayload, TablePayload]


class VisualizationSuggestion(BaseModel):
    chart_type: ChartType
    description: str


class ResponseBundle(BaseModel):
    narrative: str
    visualizations: list[Visualization] = Field(default_factory=list)
    suggestions: list[VisualizationSuggestion] = Field(default_factory=list)
    sql: str | None = None
    error: Literal["plan_generation", "execution"] | None = None
