"""Narrative for regional breakdowns."""

from __future__ import annotations

from decimal import Decimal

import pandas as pd

from salesqa.application.analysis.composers.base import (
    NO_DATA,
    SectionComposer,
    labels,
    numeric,
    records,
    unique,
)
from salesqa.application.analysis.schemas import ResponseBundle
from salesqa.application.analysis.visualization_detector import color
from salesqa.domain.formatting import format_integer, format_percent
from salesqa.domain.metrics import REGIONAL_METRICS, resolve_metric
from salesqa.domain.services import SalesCalculator
from salesqa.domain.value_objects import RegionalAnalysis

__all__ = ["RegionalComposer"]

_ZERO_SHARE = Decimal("0.0")


class RegionalComposer(SectionComposer):
    def compose(self, intent: RegionalAnalysis, frame: pd.DataFrame) -> ResponseBundle:
        spec = resolve_metric(REGIONAL_METRICS, intent.metric)
        regions = labels(frame, "region", missing="Unknown")
        values = numeric(frame, spec.alias)

        lines = [f"## Regional Analysis by {spec.heading}\n\n"]
        if frame.empty:
            lines.append(NO_DATA)
        else:
            lines.append(self._top_sentence(spec.key, regions[0], values.iloc[0]))
            lines.extend(self._distribution(spec, regions, values))
            lines.extend(self._customer_insights(frame, regions))
            lines.append("### Details\n\n")
            lines.append(
                f"I've analyzed your regional performance based on {spec.basis}.\n"
                "The pie chart shows how each region contributes to the total.\n\n"
            )

        chart = self._chart(
            "Regional Distribution",
            self._detector.chart_type_for(intent, "region", len(frame)),
            regions,
            [
                self._series(
                    spec.series_label,
                    values,
                    background_color=[color(index, "background") for index in range(len(frame))],
                    border_color=[color(index) for index in range(len(frame))],
                    border_width=1,
                )
            ],
            value_format="currency" if spec.is_currency else "number",
        )
        columns = unique(["region", spec.alias, "customer_count", "order_count", "total_units", "avg_order_value"])
        rows = []
        for region, row in zip(regions, records(frame)):
            cells = {
                "region": region,
                spec.alias: self._metric_text(spec, row.get(spec.alias)),
                "customer_count": format_integer(row.get("customer_count")),
                "order_count": format_integer(row.get("order_count")),
                "total_units": format_integer(row.get("total_units")),
                "avg_order_value": self._money(row.get("avg_order_value")),
            }
            rows.append({column: cells[column] for column in columns})
        table = self._table("Regional Details", columns, rows)
        return self._finish(intent, lines, chart, table)

    def _top_sentence(self, key: str, region: str, value: float) -> str:
        if key == "profit":
            return f"Your most profitable region is **{region}** with a total profit of **{self._money(value)}**.\n\n"
        if key == "orders":
            return f"Your region with the highest order count is **{region}** with **{format_integer(value)}** orders.\n\n"
        return f"Your top performing region is **{region}** with a total revenue of **{self._money(value)}**.\n\n"

    def _distribution(self, spec, regions: list[str], values: pd.Series) -> list[str]:
        total = float(values.sum())
        lines = ["### Regional Distribution\n\n", "Here's how your business is distributed across regions:\n\n"]
        for region, value in zip(regions, values):
            share = SalesCalculator.share_percent(value, total)
            lines.append(f"- **{region}**: {self._metric_text(spec, value)} ({format_percent(share or _ZERO_SHARE)})\n")
        lines.append("\n")
        return lines

    def _customer_insights(self, frame: pd.DataFrame, regions: list[str]) -> list[str]:
        customers = numeric(frame, "customer_count")
        orders = numeric(frame, "order_count")
        units = numeric(frame, "total_units")
        average_order = numeric(frame, "avg_order_value")
        lines = ["### Customer Insights\n\n"]
        for index, region in enumerate(regions):
            line = (
                f"- **{region}** has {format_integer(customers.iloc[index])} customers "
                f"with an average order value of {self._money(average_order.iloc[index])}"
            )
            units_per_order = SalesCalculator.ratio(units.iloc[index], orders.iloc[index])
            if units_per_order is not None:
                line += f", averaging {units_per_order:.2f} units per order"
            lines.append(line + "\n")
        lines.append("\n")
        return lines
