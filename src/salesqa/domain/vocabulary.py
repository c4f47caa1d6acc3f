"""Closed vocabularies shared by the extractors, the planner and the composers."""

from __future__ import annotations

from typing import Literal

__all__ = [
    "Timeframe",
    "Metric",
    "GroupBy",
    "EntityDimension",
    "TIMEFRAMES",
    "METRICS",
    "GROUP_BYS",
    "TIME_GROUP_BYS",
    "CATEGORY_TERMS",
    "REGION_TERMS",
    "CATEGORY_NAMES",
    "REGION_NAMES",
    "DEFAULT_COMPARISON_ENTITIES",
    "STOP_WORDS",
    "resolve_entity_dimension",
]

Timeframe = Literal[
    "all_time",
    "last_year",
    "this_year",
    "last_month",
    "this_month",
    "last_quarter",
    "this_quarter",
    "last_3_months",
    "last_6_months",
]
Metric = Literal["revenue", "profit", "quantity", "orders", "satisfaction"]
GroupBy = Literal["product", "category", "region", "customer", "month", "quarter", "year"]
EntityDimension = Literal["category", "region"]

TIMEFRAMES: tuple[str, ...] = (
    "all_time",
    "last_year",
    "this_year",
    "last_month",
    "this_month",
    "last_quarter",
    "this_quarter",
    "last_3_months",
    "last_6_months",
)
METRICS: tuple[str, ...] = ("revenue", "profit", "quantity", "orders", "satisfaction")
GROUP_BYS: tuple[str, ...] = ("product", "category", "region", "customer", "month", "quarter", "year")
TIME_GROUP_BYS = frozenset({"month", "quarter", "year"})

# (lower-case term, canonical store value), in scan order
CATEGORY_TERMS: tuple[tuple[str, str], ...] = (
    ("electronics", "Electronics"),
    ("clothing", "Clothing"),
    ("furniture", "Furniture"),
    ("books", "Books"),
    ("food", "Food & Beverage"),
)
REGION_TERMS: tuple[tuple[str, str], ...] = (
    ("north", "North"),
    ("south", "South"),
    ("east", "East"),
    ("west", "West"),
    ("central", "Central"),
)

CATEGORY_NAMES = frozenset(name for _, name in CATEGORY_TERMS)
REGION_NAMES = frozenset(name for _, name in REGION_TERMS)

DEFAULT_COMPARISON_ENTITIES: tuple[str, ...] = ("Electronics", "Clothing", "Furniture")

STOP_WORDS = frozenset({"what", "which", "when", "where", "show", "tell", "give", "find", "about"})


def resolve_entity_dimension(entities: tuple[str, ...] | list[str]) -> EntityDimension:
    """Pick the column family a comparison filters on.

    Any category name wins; otherwise any region name selects regions.
    Mixed or unknown entity lists fall back to categories.
    """

    if any(entity in CATEGORY_NAMES for entity in entities):
        return "category"
    if any(entity in REGION_NAMES for entity in entities):
        return "region"
    return "category"
