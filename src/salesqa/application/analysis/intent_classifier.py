"""Keyword-driven intent classification.

Rules are evaluated in a fixed order and the first match wins. The keyword
sets overlap ("sales by region" is a revenue question, not a regional one),
so the order is part of the behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from salesqa.application.analysis.entity_extractors import (
    MAX_LIMIT,
    extract_comparison_entities,
    extract_group_by,
    extract_keywords,
    extract_limit,
    extract_metric,
    extract_timeframe,
)
from salesqa.domain.value_objects import (
    DEFAULT_LIMIT,
    Comparison,
    CustomerAnalysis,
    General,
    Intent,
    ProductAnalysis,
    Query,
    RegionalAnalysis,
    RevenueAnalysis,
)

__all__ = ["IntentRule", "IntentClassifier"]


@dataclass(frozen=True)
class IntentRule:
    keywords: tuple[str, ...]
    build: Callable[[str], Intent]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


class IntentClassifier:
    """Map question text to exactly one intent variant. Never fails."""

    def __init__(self, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        self._rules: tuple[IntentRule, ...] = (
            IntentRule(("revenue", "sales", "income"), self._revenue),
            IntentRule(("customer", "client"), self._customer),
            IntentRule(("product", "item", "merchandise"), self._product),
            IntentRule(("region", "location", "country", "state"), self._regional),
            IntentRule(("comparison", "compare", "versus", "vs"), self._comparison),
        )

    @property
    def rules(self) -> tuple[IntentRule, ...]:
        return self._rules

    def classify(self, query: Query | str) -> Intent:
        if not isinstance(query, Query):
            query = Query(query)
        text = query.normalized
        for rule in self._rules:
            if rule.matches(text):
                return rule.build(text)
        return General(keywords=tuple(extract_keywords(text)))

    def _limit(self, text: str) -> int:
        return extract_limit(text, default=self._default_limit, maximum=self._max_limit)

    def _revenue(self, text: str) -> Intent:
        return RevenueAnalysis(timeframe=extract_timeframe(text), group_by=extract_group_by(text))

    def _customer(self, text: str) -> Intent:
        return CustomerAnalysis(limit=self._limit(text), metric=extract_metric(text))

    def _product(self, text: str) -> Intent:
        return ProductAnalysis(metric=extract_metric(text), limit=self._limit(text))

    def _regional(self, text: str) -> Intent:
        return RegionalAnalysis(metric=extract_metric(text))

    def _comparison(self, text: str) -> Intent:
        return Comparison(
            entities=tuple(extract_comparison_entities(text)),
            metric=extract_metric(text),
        )
