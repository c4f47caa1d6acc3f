"""Narrative for revenue questions."""

from __future__ import annotations

from typing import Mapping

import pandas as pd

from salesqa.application.analysis.composers.base import NO_DATA, SectionComposer, labels, numeric, records
from salesqa.application.analysis.schemas import ResponseBundle
from salesqa.application.analysis.visualization_detector import color
from salesqa.domain.formatting import describe_change, format_integer, format_percent
from salesqa.domain.services import SalesCalculator
from salesqa.domain.value_objects import RevenueAnalysis
from salesqa.domain.vocabulary import TIME_GROUP_BYS

__all__ = ["RevenueComposer", "TIMEFRAME_DESCRIPTIONS", "GROUP_DESCRIPTIONS"]

TIMEFRAME_DESCRIPTIONS: Mapping[str, str] = {
    "all_time": "all time",
    "last_year": "last year",
    "this_year": "this year",
    "last_month": "last month",
    "this_month": "this month",
    "last_quarter": "last quarter",
    "this_quarter": "this quarter",
    "last_3_months": "the last 3 months",
    "last_6_months": "the last 6 months",
}

GROUP_DESCRIPTIONS: Mapping[str | None, str] = {
    "product": "by product",
    "category": "by product category",
    "region": "by region",
    "customer": "by customer",
    "month": "by month",
    "quarter": "by quarter",
    "year": "by year",
    None: "over time",
}


class RevenueComposer(SectionComposer):
    def compose(self, intent: RevenueAnalysis, frame: pd.DataFrame) -> ResponseBundle:
        group = GROUP_DESCRIPTIONS.get(intent.group_by, "over time")
        period = TIMEFRAME_DESCRIPTIONS.get(intent.timeframe, "all time")
        over_time = intent.group_by is None or intent.group_by in TIME_GROUP_BYS
        if over_time and not frame.empty and "name" in frame.columns:
            frame = frame.sort_values("name", kind="stable").reset_index(drop=True)

        names = labels(frame, "name", missing="Unknown")
        revenue = numeric(frame, "revenue")
        units = numeric(frame, "units_sold")
        total = float(revenue.sum())

        lines = [
            f"## Revenue Analysis {group} for {period}\n\n",
            f"The total revenue for {period} was **{self._money(total)}**.\n\n",
        ]
        if frame.empty:
            lines.append(NO_DATA)
        else:
            lines.extend(self._highlights(intent, names, revenue, units, total, over_time))
            lines.append("### Details\n\n")
            lines.append(
                f"I've analyzed the revenue data {group} for {period} and created the visualizations below.\n"
                "You can see the detailed breakdown in the chart and table.\n\n"
            )

        chart = self._chart(
            "Revenue Analysis",
            self._detector.chart_type_for(intent, intent.group_by, len(frame)),
            names,
            [
                self._series(
                    "Revenue",
                    revenue,
                    border_color=color(0),
                    background_color=color(0, "background"),
                    border_width=1,
                )
            ],
            value_format="currency",
            begin_at_zero=True,
        )
        rows = [
            {
                "name": name,
                "revenue": self._money(row.get("revenue")),
                "units_sold": format_integer(row.get("units_sold")),
            }
            for name, row in zip(names, records(frame))
        ]
        table = self._table("Detailed Revenue Data", ["name", "revenue", "units_sold"], rows)
        return self._finish(intent, lines, chart, table)

    def _highlights(self, intent, names, revenue, units, total, over_time) -> list[str]:
        top = int(revenue.values.argmax())
        noun = "period" if intent.group_by is None else intent.group_by
        sentence = f"The highest revenue {noun} was **{names[top]}** with **{self._money(revenue.iloc[top])}**"
        share = SalesCalculator.share_percent(revenue.iloc[top], total)
        if share is not None:
            sentence += f" ({format_percent(share)} of the total)"
        if units.iloc[top]:
            sentence += f", selling {format_integer(units.iloc[top])} units"
        lines = [sentence + ".\n\n"]

        if over_time and len(names) >= 2:
            growth = SalesCalculator.growth_percent(revenue.iloc[0], revenue.iloc[-1])
            change = describe_change(growth, emphasize=True)
            lines.append("### Trend\n\n")
            if change is None:
                lines.append(f"No revenue was recorded in {names[0]}, so growth to {names[-1]} cannot be calculated.\n\n")
            else:
                lines.append(f"From {names[0]} to {names[-1]}, revenue has {change}.\n\n")
        return lines
