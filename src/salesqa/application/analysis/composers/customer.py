"""Narrative for top-customer questions."""

from __future__ import annotations

import pandas as pd

from salesqa.application.analysis.composers.base import (
    NO_DATA,
    SectionComposer,
    labels,
    numeric,
    records,
    text_cell,
    unique,
)
from salesqa.application.analysis.schemas import ResponseBundle
from salesqa.domain.formatting import format_date, format_integer, format_percent
from salesqa.domain.metrics import CUSTOMER_METRICS, resolve_metric
from salesqa.domain.services import SalesCalculator
from salesqa.domain.value_objects import CustomerAnalysis

__all__ = ["CustomerComposer"]


def _point_colors(count: int, alpha: str) -> list[str]:
    return [f"rgba(54, 162, {max(235 - index * 10, 0)}, {alpha})" for index in range(count)]


class CustomerComposer(SectionComposer):
    def compose(self, intent: CustomerAnalysis, frame: pd.DataFrame) -> ResponseBundle:
        spec = resolve_metric(CUSTOMER_METRICS, intent.metric)
        names = labels(frame, "customer_name", missing="Unknown")
        values = numeric(frame, spec.alias)

        lines = [f"## Top {intent.limit} Customers by {spec.heading}\n\n"]
        if frame.empty:
            lines.append(NO_DATA)
        else:
            lines.append(self._top_sentence(spec.key, names[0], values.iloc[0]))
            share = SalesCalculator.share_percent(values.iloc[0], values.sum())
            if share is not None and len(frame) > 1:
                lines.append(f"That is {format_percent(share)} of the combined {spec.noun} of the customers listed.\n\n")
            lines.extend(self._segments(frame))
            lines.append("### Details\n\n")
            lines.append(
                f"I've analyzed your top {intent.limit} customers based on {spec.basis}.\n"
                "You can see the detailed breakdown in the visualizations below.\n\n"
            )

        chart = self._chart(
            "Top Customers",
            self._detector.chart_type_for(intent, "customer", len(frame)),
            names,
            [
                self._series(
                    spec.series_label,
                    values,
                    background_color=_point_colors(len(frame), "0.6"),
                    border_color=_point_colors(len(frame), "1"),
                    border_width=1,
                )
            ],
            index_axis="y",
            value_format="currency" if spec.is_currency else "number",
        )
        columns = unique(
            ["customer_name", "segment", "region", spec.alias, "order_count", "avg_order_value", "last_purchase_date"]
        )
        rows = []
        for name, row in zip(names, records(frame)):
            cells = {
                "customer_name": name,
                "segment": text_cell(row.get("segment")),
                "region": text_cell(row.get("region")),
                "order_count": format_integer(row.get("order_count")),
                spec.alias: self._metric_text(spec, row.get(spec.alias)),
                "avg_order_value": self._money(row.get("avg_order_value")),
                "last_purchase_date": format_date(row.get("last_purchase_date")),
            }
            rows.append({column: cells[column] for column in columns})
        table = self._table("Customer Details", columns, rows)
        return self._finish(intent, lines, chart, table)

    def _top_sentence(self, key: str, name: str, value: float) -> str:
        if key == "orders":
            return f"Your top customer by order count is **{name}** with **{format_integer(value)}** orders.\n\n"
        if key == "quantity":
            return f"Your top customer by purchase volume is **{name}** who purchased **{format_integer(value)}** items.\n\n"
        return f"Your top customer is **{name}** with a total revenue of **{self._money(value)}**.\n\n"

    def _segments(self, frame: pd.DataFrame) -> list[str]:
        data = pd.DataFrame(
            {
                "segment": labels(frame, "segment", missing="Unknown"),
                "orders": numeric(frame, "order_count").to_numpy(),
                "revenue": numeric(frame, "total_revenue").to_numpy(),
            }
        )
        grouped = data.groupby("segment", sort=False).agg(
            customers=("orders", "size"),
            orders=("orders", "sum"),
            revenue=("revenue", "sum"),
        )
        has_revenue = "total_revenue" in frame.columns
        lines = ["### Customer Segments\n\n"]
        for segment, stats in grouped.iterrows():
            line = f"- {segment}: {format_integer(stats['customers'])} customers, {format_integer(stats['orders'])} orders"
            if has_revenue:
                line += f", {self._money(stats['revenue'])} total revenue"
            lines.append(line + "\n")
        lines.append("\n")
        return lines

