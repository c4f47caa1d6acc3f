from __future__ import annotations

import pytest

from salesqa.application.analysis.entity_extractors import (
    extract_comparison_entities,
    extract_group_by,
    extract_keywords,
    extract_limit,
    extract_metric,
    extract_timeframe,
)


def test_extract_limit_reads_top_n_or_defaults():
    assert extract_limit("top 25 customers") == 25
    assert extract_limit("who are our best customers") == 10
    assert extract_limit("show the 3 top products") == 3


def test_extract_limit_handles_words_zero_and_cap():
    assert extract_limit("top five products") == 5
    assert extract_limit("top 0 products") == 10
    assert extract_limit("top 500 products") == 100
    assert extract_limit("top 500 products", maximum=50) == 50
    assert extract_limit("best products", default=7) == 7


def test_extract_limit_clamps_very_long_digit_runs():
    digits = "9" * 5000
    assert extract_limit(f"top {digits} customers") == 100
    assert extract_limit(f"{digits} top products") == 100
    assert extract_limit("top 0007 products") == 7
    assert extract_limit("top " + "0" * 5000 + " products") == 10


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("revenue last quarter", "last_quarter"),
        ("revenue", "all_time"),
        ("sales in the last six months", "last_6_months"),
        ("income this year", "this_year"),
    ],
)
def test_extract_timeframe(text, expected):
    assert extract_timeframe(text) == expected


def test_extract_group_by():
    assert extract_group_by("revenue by category") == "category"
    assert extract_group_by("monthly sales") == "month"
    assert extract_group_by("sales by region") == "region"
    assert extract_group_by("total sales") is None


def test_extract_metric_defaults_to_revenue():
    assert extract_metric("top products by profit") == "profit"
    assert extract_metric("customers with the most orders") == "orders"
    assert extract_metric("best items by volume") == "quantity"
    assert extract_metric("top customers") == "revenue"


def test_extract_comparison_entities_keeps_vocabulary_order():
    assert extract_comparison_entities("compare furniture vs electronics") == ["Electronics", "Furniture"]
    assert extract_comparison_entities("compare north and west") == ["North", "West"]
    assert extract_comparison_entities("compare everything") == ["Electronics", "Clothing", "Furniture"]


def test_extract_keywords_drops_short_and_stop_words():
    assert extract_keywords("what about our business health") == ["business", "health"]
