from __future__ import annotations

from salesqa.domain.metrics import (
    COMPARISON_METRICS,
    CUSTOMER_METRICS,
    PRODUCT_METRICS,
    REGIONAL_METRICS,
    REVENUE,
    resolve_metric,
)
from salesqa.domain.vocabulary import resolve_entity_dimension


def test_unsupported_metrics_resolve_to_revenue():
    assert resolve_metric(CUSTOMER_METRICS, "profit") is REVENUE
    assert resolve_metric(PRODUCT_METRICS, "orders") is REVENUE
    assert resolve_metric(REGIONAL_METRICS, "quantity") is REVENUE
    assert resolve_metric(COMPARISON_METRICS, "satisfaction") is REVENUE


def test_metric_aliases_per_intent():
    assert resolve_metric(CUSTOMER_METRICS, "quantity").alias == "total_items"
    assert resolve_metric(PRODUCT_METRICS, "quantity").alias == "units_sold"
    assert resolve_metric(PRODUCT_METRICS, "profit").alias == "total_profit"
    assert resolve_metric(REGIONAL_METRICS, "orders").alias == "order_count"
    assert resolve_metric(COMPARISON_METRICS, "quantity").alias == "total_units"


def test_entity_dimension_prefers_categories():
    assert resolve_entity_dimension(["North", "South"]) == "region"
    assert resolve_entity_dimension(["Electronics", "North"]) == "category"
    assert resolve_entity_dimension(["Unknown"]) == "category"
