from __future__ import annotations

from decimal import Decimal

from salesqa.domain.services import SalesCalculator, as_number


def test_growth_percent_rounds_half_up_to_one_decimal():
    assert SalesCalculator.growth_percent(100, 150) == Decimal("50.0")
    assert SalesCalculator.growth_percent(1600, 1700) == Decimal("6.3")
    assert SalesCalculator.growth_percent(1200, 1100) == Decimal("-8.3")


def test_growth_percent_with_zero_baseline_is_none():
    assert SalesCalculator.growth_percent(0, 150) is None
    assert SalesCalculator.growth_percent(None, 150) is None


def test_share_percent_guards_zero_total():
    assert SalesCalculator.share_percent(2200, 3390) == Decimal("64.9")
    assert SalesCalculator.share_percent(5, 0) is None


def test_ratio_guards_zero_denominator():
    assert SalesCalculator.ratio(9, 3) == 3.0
    assert SalesCalculator.ratio(9, 0) is None


def test_as_number_treats_missing_values_as_zero():
    assert as_number(None) == 0.0
    assert as_number(float("nan")) == 0.0
    assert as_number(float("inf")) == 0.0
    assert as_number("oops") == 0.0
    assert as_number(True) == 0.0
    assert as_number("12.5") == 12.5
