"""Narrative for top-product questions."""

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
from salesqa.domain.formatting import format_integer
from salesqa.domain.metrics import PRODUCT_METRICS, resolve_metric
from salesqa.domain.value_objects import ProductAnalysis

__all__ = ["ProductComposer"]


def _point_colors(count: int, alpha: str) -> list[str]:
    return [f"rgba(75, 192, {min(100 + index * 10, 255)}, {alpha})" for index in range(count)]


class ProductComposer(SectionComposer):
    def compose(self, intent: ProductAnalysis, frame: pd.DataFrame) -> ResponseBundle:
        spec = resolve_metric(PRODUCT_METRICS, intent.metric)
        names = labels(frame, "product_name", missing="Unknown")
        values = numeric(frame, spec.alias)

        lines = [f"## Top {intent.limit} Products by {spec.heading}\n\n"]
        if frame.empty:
            lines.append(NO_DATA)
        else:
            lines.append(self._top_sentence(spec.key, names[0], values.iloc[0]))
            lines.extend(self._categories(frame, spec))
            lines.append("### Details\n\n")
            lines.append(
                f"I've analyzed your top {intent.limit} products based on {spec.basis}.\n"
                "You can see the detailed breakdown in the visualizations below.\n\n"
            )

        chart = self._chart(
            "Top Products",
            self._detector.chart_type_for(intent, "product", len(frame)),
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
        columns = unique(["product_name", "category", spec.alias, "order_count", "avg_selling_price"])
        rows = []
        for name, row in zip(names, records(frame)):
            cells = {
                "product_name": name,
                "category": text_cell(row.get("category")),
                spec.alias: self._metric_text(spec, row.get(spec.alias)),
                "order_count": format_integer(row.get("order_count")),
                "avg_selling_price": self._money(row.get("avg_selling_price")),
            }
            rows.append({column: cells[column] for column in columns})
        table = self._table("Product Details", columns, rows)
        return self._finish(intent, lines, chart, table)

    def _top_sentence(self, key: str, name: str, value: float) -> str:
        if key == "profit":
            return f"Your most profitable product is **{name}** with a total profit of **{self._money(value)}**.\n\n"
        if key == "quantity":
            return f"Your best-selling product by volume is **{name}** with **{format_integer(value)}** units sold.\n\n"
        return f"Your top product is **{name}** with a total revenue of **{self._money(value)}**.\n\n"

    def _categories(self, frame: pd.DataFrame, spec) -> list[str]:
        data = pd.DataFrame(
            {
                "category": labels(frame, "category", missing="Unknown"),
                "value": numeric(frame, spec.alias).to_numpy(),
                "units": numeric(frame, "units_sold").to_numpy(),
            }
        )
        grouped = data.groupby("category", sort=False).agg(
            products=("value", "size"),
            value=("value", "sum"),
            units=("units", "sum"),
        )
        lines = ["### Product Categories\n\n"]
        for category, stats in grouped.iterrows():
            line = f"- {category}: {format_integer(stats['products'])} products"
            if spec.is_currency:
                line += f", {self._money(stats['value'])} total {spec.noun}"
            if stats["units"]:
                line += f", {format_integer(stats['units'])} units sold"
            lines.append(line + "\n")
        lines.append("\n")
        return lines
