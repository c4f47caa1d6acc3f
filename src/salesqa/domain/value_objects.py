"""Immutable value objects describing a question and its classified intent."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import ClassVar, Union

from .vocabulary import (
    DEFAULT_COMPARISON_ENTITIES,
    GROUP_BYS,
    METRICS,
    TIMEFRAMES,
    GroupBy,
    Metric,
    Timeframe,
)

__all__ = [
    "Query",
    "RevenueAnalysis",
    "CustomerAnalysis",
    "ProductAnalysis",
    "RegionalAnalysis",
    "Comparison",
    "General",
    "Intent",
    "DEFAULT_LIMIT",
    "intent_to_dict",
]

DEFAULT_LIMIT = 10


def _known_or(value, allowed: tuple[str, ...], default):
    return value if value in allowed else default


def _positive_or_default(limit) -> int:
    try:
        number = int(limit)
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    return number if number >= 1 else DEFAULT_LIMIT


@dataclass(frozen=True)
class Query:
    """A raw analytic question. Lower-casing happens once, here."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError("query text must be a string")

    @property
    def normalized(self) -> str:
        return self.text.lower()


@dataclass(frozen=True)
class RevenueAnalysis:
    kind: ClassVar[str] = "revenue_analysis"

    timeframe: Timeframe = "all_time"
    group_by: GroupBy | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timeframe", _known_or(self.timeframe, TIMEFRAMES, "all_time"))
        object.__setattr__(self, "group_by", _known_or(self.group_by, GROUP_BYS, None))


@dataclass(frozen=True)
class CustomerAnalysis:
    kind: ClassVar[str] = "customer_analysis"

    limit: int = DEFAULT_LIMIT
    metric: Metric = "revenue"

    def __post_init__(self) -> None:
        object.__setattr__(self, "limit", _positive_or_default(self.limit))
        object.__setattr__(self, "metric", _known_or(self.metric, METRICS, "revenue"))


@dataclass(frozen=True)
class ProductAnalysis:
    kind: ClassVar[str] = "product_analysis"

    metric: Metric = "revenue"
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        object.__setattr__(self, "limit", _positive_or_default(self.limit))
        object.__setattr__(self, "metric", _known_or(self.metric, METRICS, "revenue"))


@dataclass(frozen=True)
class RegionalAnalysis:
    kind: ClassVar[str] = "regional_analysis"

    metric: Metric = "revenue"

    def __post_init__(self) -> None:
        object.__setattr__(self, "metric", _known_or(self.metric, METRICS, "revenue"))


@dataclass(frozen=True)
class Comparison:
    kind: ClassVar[str] = "comparison"

    entities: tuple[str, ...] = DEFAULT_COMPARISON_ENTITIES
    metric: Metric = "revenue"

    def __post_init__(self) -> None:
        entities = tuple(entity for entity in (self.entities or ()) if entity)
        object.__setattr__(self, "entities", entities or DEFAULT_COMPARISON_ENTITIES)
        object.__setattr__(self, "metric", _known_or(self.metric, METRICS, "revenue"))


@dataclass(frozen=True)
class General:
    kind: ClassVar[str] = "general_analysis"

    keywords: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", tuple(self.keywords or ()))


Intent = Union[
    RevenueAnalysis,
    CustomerAnalysis,
    ProductAnalysis,
    RegionalAnalysis,
    Comparison,
    General,
]


def intent_to_dict(intent: Intent) -> dict:
    """Flat, JSON-friendly view of an intent including its ``kind`` tag."""

    fields = asdict(intent)
    for key, value in fields.items():
        if isinstance(value, tuple):
            fields[key] = list(value)
    return {"kind": intent.kind, **fields}
