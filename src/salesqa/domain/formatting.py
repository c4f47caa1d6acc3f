"""Display formatting for currency, counts, percentages and dates."""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

__all__ = [
    "MISSING",
    "format_currency",
    "format_integer",
    "format_number",
    "format_percent",
    "format_date",
    "describe_change",
]

MISSING = "N/A"
_CENTS = Decimal("0.01")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(float(value))
    except (TypeError, ValueError):
        return True


def format_currency(value: Any, symbol: str = "$") -> str:
    """Two decimals, thousands separators, symbol prefix: ``-$1,234.50``."""

    if _is_missing(value):
        return MISSING
    amount = Decimal(repr(float(value))).quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_integer(value: Any) -> str:
    if _is_missing(value):
        return MISSING
    rounded = Decimal(repr(float(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{int(rounded):,}"


def format_number(value: Any) -> str:
    """Integral values like :func:`format_integer`, others with up to 3 decimals."""

    if _is_missing(value):
        return MISSING
    number = float(value)
    if number.is_integer():
        return format_integer(number)
    text = f"{number:,.3f}".rstrip("0").rstrip(".")
    return text


def format_percent(value: Decimal | float | None) -> str:
    if value is None:
        return MISSING
    return f"{Decimal(value).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%"


def format_date(value: Any) -> str:
    # NaN and NaT are the only values unequal to themselves
    if value is None or value != value:
        return MISSING
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


def describe_change(growth: Decimal | None, *, emphasize: bool = False) -> str | None:
    """Sign-aware growth phrasing; ``None`` when there is no usable baseline."""

    if growth is None:
        return None
    if growth > 0:
        phrase = f"increased by {format_percent(growth)}"
    elif growth < 0:
        phrase = f"decreased by {format_percent(abs(growth))}"
    else:
        phrase = "remained stable"
    return f"**{phrase}**" if emphasize else phrase
