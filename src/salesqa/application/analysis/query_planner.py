"""Template-driven SQL generation, one builder per intent variant."""

from __future__ import annotations

import logging
import re
from typing import Callable, Mapping

from salesqa.application.analysis.errors import PlanGenerationError
from salesqa.application.analysis.schemas import QueryPlan
from salesqa.domain.metrics import (
    AVG_ORDER_VALUE_EXPR,
    COMPARISON_METRICS,
    CUSTOMER_METRICS,
    ORDER_COUNT_EXPR,
    PRODUCT_METRICS,
    REGIONAL_METRICS,
    REVENUE_EXPR,
    UNITS_EXPR,
    MetricSpec,
    resolve_metric,
)
from salesqa.domain.value_objects import (
    Comparison,
    CustomerAnalysis,
    General,
    Intent,
    ProductAnalysis,
    RegionalAnalysis,
    RevenueAnalysis,
)
from salesqa.domain.vocabulary import resolve_entity_dimension

__all__ = ["QueryPlanner", "ORDER_DATE", "TIMEFRAME_FILTERS", "GROUPINGS", "quote_literal"]

LOGGER = logging.getLogger(__name__)

ORDER_DATE = "CAST(o.order_date AS DATE)"
ORDER_MONTH = f"strftime({ORDER_DATE}, '%Y-%m')"


def _months_ago(months: int) -> str:
    return f"CAST(current_date - INTERVAL {months} MONTH AS DATE)"


TIMEFRAME_FILTERS: Mapping[str, str] = {
    "all_time": "",
    "last_year": f"WHERE strftime({ORDER_DATE}, '%Y') = strftime(current_date - INTERVAL 1 YEAR, '%Y')",
    "this_year": f"WHERE strftime({ORDER_DATE}, '%Y') = strftime(current_date, '%Y')",
    "last_month": f"WHERE {ORDER_MONTH} = strftime(current_date - INTERVAL 1 MONTH, '%Y-%m')",
    "this_month": f"WHERE {ORDER_MONTH} = strftime(current_date, '%Y-%m')",
    "last_quarter": f"WHERE {ORDER_DATE} BETWEEN {_months_ago(6)} AND {_months_ago(3)}",
    "this_quarter": f"WHERE {ORDER_DATE} BETWEEN {_months_ago(3)} AND current_date",
    "last_3_months": f"WHERE {ORDER_DATE} BETWEEN {_months_ago(3)} AND current_date",
    "last_6_months": f"WHERE {ORDER_DATE} BETWEEN {_months_ago(6)} AND current_date",
}

# group-by facet -> label expression; the query groups by the same expression
GROUPINGS: Mapping[str | None, str] = {
    "product": "p.product_name",
    "category": "p.category",
    "region": "c.region",
    "customer": "c.customer_name",
    "month": ORDER_MONTH,
    "quarter": f"strftime({ORDER_DATE}, '%Y') || '-Q' || CAST(quarter({ORDER_DATE}) AS VARCHAR)",
    "year": f"strftime({ORDER_DATE}, '%Y')",
    None: ORDER_MONTH,
}

ENTITY_COLUMNS: Mapping[str, str] = {"category": "p.category", "region": "c.region"}

SALES_JOINS = """
    FROM orders o
    JOIN order_items oi ON o.order_id = oi.order_id
    JOIN products p ON oi.product_id = p.product_id
    JOIN customers c ON o.customer_id = c.customer_id
"""

_UNRESOLVED = re.compile(r"\{[^}]*\}|\?|:[a-z_]+\b|\$\d+")
_STRING_LITERAL = re.compile(r"'(?:[^']|'')*'")
_CLAUSES = ("SELECT", "FROM ", "JOIN ", "WHERE ", "GROUP BY ", "ORDER BY ", "LIMIT ")


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _select_list(columns: list[tuple[str, str]]) -> str:
    """Render ``expr AS alias`` pairs, keeping the first use of each alias."""

    seen: set[str] = set()
    rendered = []
    for expression, alias in columns:
        if alias in seen:
            continue
        seen.add(alias)
        rendered.append(f"{expression} AS {alias}" if expression != alias else expression)
    return ",\n".join(rendered)


def _compact(sql: str) -> str:
    """Drop blank lines; clauses start at column 0, their bodies are indented."""

    rendered = []
    for line in sql.splitlines():
        text = line.strip()
        if not text:
            continue
        rendered.append(text if text.startswith(_CLAUSES) else f"    {text}")
    return "\n".join(rendered)


class QueryPlanner:
    """Turn a classified intent into a single read-only query string."""

    def __init__(self) -> None:
        self._builders: Mapping[type, Callable[[Intent], str]] = {
            RevenueAnalysis: self._revenue_sql,
            CustomerAnalysis: self._customer_sql,
            ProductAnalysis: self._product_sql,
            RegionalAnalysis: self._regional_sql,
            Comparison: self._comparison_sql,
            General: self._general_sql,
        }

    def create_plan(self, intent: Intent) -> QueryPlan:
        builder = self._builders.get(type(intent))
        if builder is None:
            raise PlanGenerationError(f"No query template for intent {type(intent).__name__}")
        try:
            sql = _compact(builder(intent))
        except (KeyError, TypeError, ValueError) as exc:
            raise PlanGenerationError(f"Could not build query for {intent.kind}: {exc}") from exc
        self._ensure_resolved(sql)
        LOGGER.debug("Generated plan for %s", intent.kind)
        return QueryPlan(intent_kind=intent.kind, sql=sql)

    @staticmethod
    def _ensure_resolved(sql: str) -> None:
        if not sql.strip():
            raise PlanGenerationError("Generated query is empty")
        leftover = _UNRESOLVED.search(_STRING_LITERAL.sub("''", sql))
        if leftover:
            raise PlanGenerationError(f"Generated query has an unbound parameter: {leftover.group(0)}")

    def _revenue_sql(self, intent: RevenueAnalysis) -> str:
        label = GROUPINGS[intent.group_by]
        return f"""
            SELECT
                {label} AS name,
                {REVENUE_EXPR} AS revenue,
                {UNITS_EXPR} AS units_sold
            {SALES_JOINS}
            {TIMEFRAME_FILTERS[intent.timeframe]}
            GROUP BY {label}
            ORDER BY revenue DESC, name
        """

    def _customer_sql(self, intent: CustomerAnalysis) -> str:
        metric = resolve_metric(CUSTOMER_METRICS, intent.metric)
        columns = [
            ("c.customer_id", "c.customer_id"),
            ("c.customer_name", "c.customer_name"),
            ("c.segment", "c.segment"),
            ("c.region", "c.region"),
            (metric.expression, metric.alias),
            (ORDER_COUNT_EXPR, "order_count"),
            (AVG_ORDER_VALUE_EXPR, "avg_order_value"),
            (f"MAX({ORDER_DATE})", "last_purchase_date"),
        ]
        return f"""
            SELECT
                {_select_list(columns)}
            FROM customers c
            JOIN orders o ON c.customer_id = o.customer_id
            JOIN order_items oi ON o.order_id = oi.order_id
            GROUP BY c.customer_id, c.customer_name, c.segment, c.region
            ORDER BY {metric.alias} DESC, c.customer_id
            LIMIT {int(intent.limit)}
        """

    def _product_sql(self, intent: ProductAnalysis) -> str:
        metric = resolve_metric(PRODUCT_METRICS, intent.metric)
        columns = [
            ("p.product_id", "p.product_id"),
            ("p.product_name", "p.product_name"),
            ("p.category", "p.category"),
            (metric.expression, metric.alias),
            (UNITS_EXPR, "units_sold"),
            (ORDER_COUNT_EXPR, "order_count"),
            ("ROUND(AVG(oi.unit_price), 2)", "avg_selling_price"),
        ]
        return f"""
            SELECT
                {_select_list(columns)}
            FROM products p
            JOIN order_items oi ON p.product_id = oi.product_id
            JOIN orders o ON oi.order_id = o.order_id
            GROUP BY p.product_id, p.product_name, p.category
            ORDER BY {metric.alias} DESC, p.product_id
            LIMIT {int(intent.limit)}
        """

    def _regional_sql(self, intent: RegionalAnalysis) -> str:
        metric = resolve_metric(REGIONAL_METRICS, intent.metric)
        columns = [
            ("c.region", "c.region"),
            (metric.expression, metric.alias),
            ("COUNT(DISTINCT c.customer_id)", "customer_count"),
            (ORDER_COUNT_EXPR, "order_count"),
            (UNITS_EXPR, "total_units"),
            (AVG_ORDER_VALUE_EXPR, "avg_order_value"),
        ]
        return f"""
            SELECT
                {_select_list(columns)}
            {SALES_JOINS}
            GROUP BY c.region
            ORDER BY {metric.alias} DESC, c.region
        """

    def _comparison_sql(self, intent: Comparison) -> str:
        metric: MetricSpec = resolve_metric(COMPARISON_METRICS, intent.metric)
        column = ENTITY_COLUMNS[resolve_entity_dimension(intent.entities)]
        entity_list = ", ".join(quote_literal(entity) for entity in intent.entities)
        return f"""
            SELECT
                {column} AS name,
                {ORDER_MONTH} AS month,
                {metric.expression} AS {metric.alias}
            {SALES_JOINS}
            WHERE {column} IN ({entity_list})
            GROUP BY {column}, {ORDER_MONTH}
            ORDER BY name, month
        """

    def _general_sql(self, intent: General) -> str:
        return f"""
            SELECT
                {ORDER_MONTH} AS month,
                {REVENUE_EXPR} AS total_revenue,
                {ORDER_COUNT_EXPR} AS order_count,
                COUNT(DISTINCT o.customer_id) AS customer_count,
                {UNITS_EXPR} AS units_sold,
                {AVG_ORDER_VALUE_EXPR} AS avg_order_value
            FROM orders o
            JOIN order_items oi ON o.order_id = oi.order_id
            GROUP BY {ORDER_MONTH}
            ORDER BY month
        """
