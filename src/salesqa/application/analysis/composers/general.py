"""Business overview for questions that match no specific intent."""

from __future__ import annotations

import pandas as pd

from salesqa.application.analysis.composers.base import NO_DATA, SectionComposer, labels, numeric, records
from salesqa.application.analysis.schemas import ResponseBundle
from salesqa.application.analysis.visualization_detector import color
from salesqa.domain.formatting import MISSING, describe_change, format_integer
from salesqa.domain.services import SalesCalculator
from salesqa.domain.value_objects import General

__all__ = ["GeneralComposer"]

TABLE_COLUMNS = ["month", "total_revenue", "order_count", "customer_count", "units_sold", "avg_order_value"]


def _ratio_text(numerator: float, denominator: float) -> str:
    ratio = SalesCalculator.ratio(numerator, denominator)
    return MISSING if ratio is None else f"{ratio:.2f}"


class GeneralComposer(SectionComposer):
    def compose(self, intent: General, frame: pd.DataFrame) -> ResponseBundle:
        if not frame.empty and "month" in frame.columns:
            frame = frame.sort_values("month", kind="stable").reset_index(drop=True)
        months = labels(frame, "month", missing="Unknown")
        revenue = numeric(frame, "total_revenue")
        orders = numeric(frame, "order_count")

        lines = ["## Business Overview Analysis\n\n"]
        if frame.empty:
            lines.append(NO_DATA)
        else:
            lines.extend(self._overview(frame, months, revenue, orders))
            lines.append("### Details\n\n")
            lines.append(
                "I've analyzed your overall business performance month by month.\n"
                "The chart below shows revenue and order volume over time.\n\n"
            )

        chart = self._chart(
            "Business Performance Over Time",
            self._detector.chart_type_for(intent, "month", len(frame)),
            months,
            [
                self._series(
                    "Revenue",
                    revenue,
                    border_color=color(0),
                    background_color=color(0, "background"),
                    border_width=1,
                    y_axis_id="y",
                ),
                self._series(
                    "Orders",
                    orders,
                    border_color=color(1),
                    background_color=color(1, "background"),
                    border_width=1,
                    y_axis_id="y1",
                ),
            ],
            value_format="currency",
            secondary_axis="Orders",
        )
        rows = [
            {
                "month": month,
                "total_revenue": self._money(row.get("total_revenue")),
                "order_count": format_integer(row.get("order_count")),
                "customer_count": format_integer(row.get("customer_count")),
                "units_sold": format_integer(row.get("units_sold")),
                "avg_order_value": self._money(row.get("avg_order_value")),
            }
            for month, row in zip(months, records(frame))
        ]
        table = self._table("Monthly Performance Metrics", TABLE_COLUMNS, rows)
        return self._finish(intent, lines, chart, table)

    def _overview(self, frame: pd.DataFrame, months: list[str], revenue: pd.Series, orders: pd.Series) -> list[str]:
        total_revenue = float(revenue.sum())
        total_orders = float(orders.sum())
        total_customers = float(numeric(frame, "customer_count").sum())
        total_units = float(numeric(frame, "units_sold").sum())

        lines = [
            "Here's an overview of your business performance:\n\n",
            f"- Total revenue: **{self._money(total_revenue)}**\n",
            f"- Total orders: **{format_integer(total_orders)}**\n",
            f"- Active customers (summed by month): **{format_integer(total_customers)}**\n",
            f"- Total units sold: **{format_integer(total_units)}**\n\n",
        ]

        if len(months) >= 2:
            lines.append("### Trend Analysis\n\n")
            lines.append(f"From {months[0]} to {months[-1]}:\n\n")
            for label, series in (("Revenue", revenue), ("Order count", orders)):
                change = describe_change(
                    SalesCalculator.growth_percent(series.iloc[0], series.iloc[-1]),
                    emphasize=True,
                )
                if change is None:
                    lines.append(f"- {label}: No data available for the first month\n")
                else:
                    lines.append(f"- {label} has {change}\n")
            lines.append("\n")

        average_order = SalesCalculator.ratio(total_revenue, total_orders)
        lines.extend(
            [
                "### Key Performance Indicators\n\n",
                f"- Average Order Value (AOV): **{self._money(average_order)}**\n",
                f"- Average Units per Order: **{_ratio_text(total_units, total_orders)}**\n",
                f"- Orders per Customer: **{_ratio_text(total_orders, total_customers)}**\n\n",
            ]
        )
        return lines
