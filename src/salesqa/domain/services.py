"""Domain services encapsulating the arithmetic behind narrative highlights."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

__all__ = ["SalesCalculator", "as_number"]

_ONE_DECIMAL = Decimal("0.1")


def as_number(value: Any) -> float:
    """Coerce a result cell to float; nulls, NaN and garbage count as zero."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


class SalesCalculator:
    """Pure calculation helpers. Every baseline may be zero, so every helper
    returns ``None`` instead of dividing by it."""

    @staticmethod
    def growth_percent(first: Any, last: Any) -> Decimal | None:
        """Percentage change from ``first`` to ``last`` rounded to one decimal."""

        baseline = as_number(first)
        if baseline == 0:
            return None
        raw = (as_number(last) - baseline) / baseline * 100
        return SalesCalculator._round(raw)

    @staticmethod
    def share_percent(value: Any, total: Any) -> Decimal | None:
        """``value`` as a percentage of ``total`` rounded to one decimal."""

        denominator = as_number(total)
        if denominator == 0:
            return None
        return SalesCalculator._round(as_number(value) / denominator * 100)

    @staticmethod
    def ratio(numerator: Any, denominator: Any) -> float | None:
        base = as_number(denominator)
        if base == 0:
            return None
        return as_number(numerator) / base

    @staticmethod
    def _round(value: float) -> Decimal:
        try:
            return Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
        except InvalidOperation:  # pragma: no cover - as_number filters non-finite input
            return Decimal("0.0")
