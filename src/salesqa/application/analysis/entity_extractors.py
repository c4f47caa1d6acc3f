"""Pure facet extractors over lower-cased question text.

Every extractor is total: when nothing matches it returns a default.
"""

from __future__ import annotations

import re

from salesqa.domain.value_objects import DEFAULT_LIMIT
from salesqa.domain.vocabulary import (
    CATEGORY_TERMS,
    DEFAULT_COMPARISON_ENTITIES,
    REGION_TERMS,
    STOP_WORDS,
    GroupBy,
    Metric,
    Timeframe,
)

__all__ = [
    "extract_timeframe",
    "extract_group_by",
    "extract_limit",
    "extract_metric",
    "extract_comparison_entities",
    "extract_keywords",
]

# Phrases are disjoint, so the order only matters for readability.
TIMEFRAME_PHRASES: tuple[tuple[tuple[str, ...], Timeframe], ...] = (
    (("last year",), "last_year"),
    (("this year",), "this_year"),
    (("last month",), "last_month"),
    (("this month",), "this_month"),
    (("last quarter",), "last_quarter"),
    (("this quarter",), "this_quarter"),
    (("last 6 months", "last six months"), "last_6_months"),
    (("last 3 months", "last three months"), "last_3_months"),
)

GROUP_BY_PHRASES: tuple[tuple[tuple[str, ...], GroupBy], ...] = (
    (("by product", "by each product"), "product"),
    (("by category", "by product category"), "category"),
    (("by region", "by location"), "region"),
    (("by customer", "by client"), "customer"),
    (("by month", "monthly"), "month"),
    (("by quarter", "quarterly"), "quarter"),
    (("by year", "yearly"), "year"),
)

METRIC_PHRASES: tuple[tuple[tuple[str, ...], Metric], ...] = (
    (("revenue", "sales"), "revenue"),
    (("profit", "margin"), "profit"),
    (("quantity", "volume"), "quantity"),
    (("orders", "purchases"), "orders"),
    (("satisfaction", "rating"), "satisfaction"),
)

LIMIT_PATTERNS = (re.compile(r"top (\d+)"), re.compile(r"(\d+) top"))
LIMIT_PHRASES: tuple[tuple[str, int], ...] = (
    ("top five", 5),
    ("top ten", 10),
    ("top twenty", 20),
)
MAX_LIMIT = 100


def _first_match(text: str, table, default):
    for phrases, value in table:
        if any(phrase in text for phrase in phrases):
            return value
    return default


def extract_timeframe(text: str) -> Timeframe:
    return _first_match(text, TIMEFRAME_PHRASES, "all_time")


def extract_group_by(text: str) -> GroupBy | None:
    """``None`` means the planner falls back to a monthly time series."""

    return _first_match(text, GROUP_BY_PHRASES, None)


def extract_limit(text: str, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    for pattern in LIMIT_PATTERNS:
        match = pattern.search(text)
        if match:
            digits = match.group(1).lstrip("0")
            if not digits:
                return default
            # oversized runs would exceed int()'s digit limit
            if len(digits) > len(str(maximum)):
                return maximum
            return min(int(digits), maximum)
    for phrase, value in LIMIT_PHRASES:
        if phrase in text:
            return min(value, maximum)
    return default


def extract_metric(text: str) -> Metric:
    return _first_match(text, METRIC_PHRASES, "revenue")


def extract_comparison_entities(text: str) -> list[str]:
    """Scan the category vocabulary, then the region vocabulary.

    Matches keep vocabulary order. With no match the fixed category triple
    is returned.
    """

    entities = [name for term, name in (*CATEGORY_TERMS, *REGION_TERMS) if term in text]
    return entities or list(DEFAULT_COMPARISON_ENTITIES)


def extract_keywords(text: str) -> list[str]:
    return [word for word in text.split() if len(word) > 3 and word not in STOP_WORDS]
