"""Per-intent metric tables shared by the query planner and the composers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

__all__ = [
    "MetricSpec",
    "REVENUE",
    "PROFIT",
    "ORDERS",
    "CUSTOMER_METRICS",
    "PRODUCT_METRICS",
    "REGIONAL_METRICS",
    "COMPARISON_METRICS",
    "resolve_metric",
    "REVENUE_EXPR",
    "PROFIT_EXPR",
    "ORDER_COUNT_EXPR",
    "UNITS_EXPR",
    "AVG_ORDER_VALUE_EXPR",
]

REVENUE_EXPR = "SUM(oi.quantity * oi.unit_price)"
PROFIT_EXPR = "SUM(oi.quantity * (oi.unit_price - p.product_cost))"
ORDER_COUNT_EXPR = "COUNT(DISTINCT o.order_id)"
UNITS_EXPR = "SUM(oi.quantity)"
AVG_ORDER_VALUE_EXPR = f"ROUND({REVENUE_EXPR} / NULLIF({ORDER_COUNT_EXPR}, 0), 2)"


@dataclass(frozen=True)
class MetricSpec:
    key: str
    alias: str
    expression: str
    heading: str
    series_label: str
    basis: str
    noun: str
    is_currency: bool


REVENUE = MetricSpec(
    key="revenue",
    alias="total_revenue",
    expression=REVENUE_EXPR,
    heading="Revenue",
    series_label="Revenue",
    basis="revenue generated",
    noun="revenue",
    is_currency=True,
)
PROFIT = MetricSpec(
    key="profit",
    alias="total_profit",
    expression=PROFIT_EXPR,
    heading="Profit",
    series_label="Profit",
    basis="profit",
    noun="profit",
    is_currency=True,
)
ORDERS = MetricSpec(
    key="orders",
    alias="order_count",
    expression=ORDER_COUNT_EXPR,
    heading="Order Count",
    series_label="Order Count",
    basis="number of orders placed",
    noun="orders",
    is_currency=False,
)

CUSTOMER_METRICS: Mapping[str, MetricSpec] = {
    "revenue": REVENUE,
    "orders": ORDERS,
    "quantity": MetricSpec(
        key="quantity",
        alias="total_items",
        expression=UNITS_EXPR,
        heading="Purchase Volume",
        series_label="Items Purchased",
        basis="quantity of items purchased",
        noun="items",
        is_currency=False,
    ),
}

PRODUCT_METRICS: Mapping[str, MetricSpec] = {
    "revenue": REVENUE,
    "profit": MetricSpec(
        key="profit",
        alias="total_profit",
        expression=PROFIT_EXPR,
        heading="Profit",
        series_label="Profit",
        basis="profit margin",
        noun="profit",
        is_currency=True,
    ),
    "quantity": MetricSpec(
        key="quantity",
        alias="units_sold",
        expression=UNITS_EXPR,
        heading="Units Sold",
        series_label="Units Sold",
        basis="quantity sold",
        noun="units sold",
        is_currency=False,
    ),
}

REGIONAL_METRICS: Mapping[str, MetricSpec] = {
    "revenue": REVENUE,
    "profit": PROFIT,
    "orders": MetricSpec(
        key="orders",
        alias="order_count",
        expression=ORDER_COUNT_EXPR,
        heading="Order Count",
        series_label="Order Count",
        basis="number of orders",
        noun="orders",
        is_currency=False,
    ),
}

COMPARISON_METRICS: Mapping[str, MetricSpec] = {
    "revenue": REVENUE,
    "profit": PROFIT,
    "quantity": MetricSpec(
        key="quantity",
        alias="total_units",
        expression=UNITS_EXPR,
        heading="Units Sold",
        series_label="Units Sold",
        basis="units sold",
        noun="units sold",
        is_currency=False,
    ),
    "orders": MetricSpec(
        key="orders",
        alias="order_count",
        expression=ORDER_COUNT_EXPR,
        heading="Order Count",
        series_label="Order Count",
        basis="orders",
        noun="orders",
        is_currency=False,
    ),
}


def resolve_metric(table: Mapping[str, MetricSpec], metric: str) -> MetricSpec:
    """Return the table entry for ``metric``; unsupported metrics mean revenue."""

    return table.get(metric, REVENUE)
