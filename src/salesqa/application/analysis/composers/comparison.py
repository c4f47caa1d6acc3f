"""Narrative for multi-entity comparisons over time."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from salesqa.application.analysis.composers.base import NO_DATA, SectionComposer, labels, numeric
from salesqa.application.analysis.schemas import ResponseBundle
from salesqa.application.analysis.visualization_detector import color
from salesqa.domain.formatting import describe_change
from salesqa.domain.metrics import COMPARISON_METRICS, MetricSpec, resolve_metric
from salesqa.domain.services import SalesCalculator
from salesqa.domain.value_objects import Comparison
from salesqa.domain.vocabulary import resolve_entity_dimension

__all__ = ["ComparisonComposer", "describe_entity_trend"]

_ENTITY_TYPES = {"category": ("Product Categories", "product category"), "region": ("Regions", "region")}
TREND_ENTITIES = 3


def describe_entity_trend(entity: str, points: Sequence[tuple[str, float]]) -> str:
    """First-to-last growth line for one entity's ``(month, value)`` series."""

    ordered = sorted(points, key=lambda point: point[0])
    if len(ordered) < 2:
        return f"- **{entity}**: Not enough data to calculate trend"
    (first_month, first_value), (last_month, last_value) = ordered[0], ordered[-1]
    change = describe_change(SalesCalculator.growth_percent(first_value, last_value))
    if change is None:
        return f"- **{entity}**: No data available for the first month"
    return f"- **{entity}** has {change} from {first_month} to {last_month}"


class ComparisonComposer(SectionComposer):
    def compose(self, intent: Comparison, frame: pd.DataFrame) -> ResponseBundle:
        spec = resolve_metric(COMPARISON_METRICS, intent.metric)
        plural, singular = _ENTITY_TYPES[resolve_entity_dimension(intent.entities)]
        data = pd.DataFrame(
            {
                "name": labels(frame, "name", missing="Unknown"),
                "month": labels(frame, "month", missing="Unknown"),
                "value": numeric(frame, spec.alias).to_numpy(),
            }
        )
        totals = data.groupby("name", sort=False)["value"].sum().sort_values(ascending=False, kind="stable")
        entities = totals.index.tolist()

        lines = [f"## Comparison of {plural} by {spec.heading}\n\n"]
        if data.empty:
            lines.append(NO_DATA)
        else:
            top = entities[0]
            lines.append(
                f"Based on the analysis, **{top}** has the highest {spec.noun} "
                f"with **{self._metric_text(spec, totals[top])}**.\n\n"
            )
            if len(entities) > 1:
                lines.append("### Comparison Summary\n\n")
                lines.extend(f"- **{entity}**: {self._metric_text(spec, totals[entity])}\n" for entity in entities)
                lines.append("\n")
            lines.append("### Trend Analysis\n\n")
            for entity in entities[:TREND_ENTITIES]:
                series = data[data["name"] == entity]
                lines.append(describe_entity_trend(entity, list(zip(series["month"], series["value"]))) + "\n")
            lines.append("\n")
            lines.append("### Details\n\n")
            lines.append(
                f"I've analyzed the performance of different {plural.lower()} based on {spec.noun}.\n"
                f"The line chart below shows the trend over time for each {singular}.\n\n"
            )

        months = sorted(data["month"].unique().tolist())
        chart = self._chart(
            "Comparison Over Time",
            self._detector.chart_type_for(intent, None, len(frame)),
            months,
            self._entity_series(data, entities, months),
            value_format="currency" if spec.is_currency else "number",
        )
        table = self._table(
            "Performance Summary",
            ["name", "total", "average", "max", "min"],
            self._summary_rows(data, entities, spec),
        )
        return self._finish(intent, lines, chart, table)

    def _entity_series(self, data: pd.DataFrame, entities: list[str], months: list[str]) -> list:
        if data.empty:
            return []
        pivot = data.pivot_table(index="name", columns="month", values="value", aggfunc="sum", fill_value=0.0)
        pivot = pivot.reindex(index=entities, columns=months, fill_value=0.0)
        return [
            self._series(
                entity,
                pivot.loc[entity].tolist(),
                border_color=color(index),
                background_color=color(index, "background"),
                border_width=1,
                fill=False,
                tension=0.1,
            )
            for index, entity in enumerate(entities)
        ]

    def _summary_rows(self, data: pd.DataFrame, entities: list[str], spec: MetricSpec) -> list[dict[str, str]]:
        rows = []
        for entity in entities:
            values = data.loc[data["name"] == entity, "value"]
            total = float(values.sum())
            average = SalesCalculator.ratio(total, len(values))
            rows.append(
                {
                    "name": entity,
                    "total": self._metric_text(spec, total),
                    "average": self._metric_text(spec, average),
                    "max": self._metric_text(spec, values.max()),
                    "min": self._metric_text(spec, values.min()),
                }
            )
        return rows
