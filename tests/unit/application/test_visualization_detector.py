from __future__ import annotations

from salesqa.application.analysis.visualization_detector import PALETTE, VisualizationDetector, color
from salesqa.domain.value_objects import (
    Comparison,
    CustomerAnalysis,
    General,
    ProductAnalysis,
    RegionalAnalysis,
    RevenueAnalysis,
)


def test_select_chart_type_precedence():
    detector = VisualizationDetector()
    assert detector.select_chart_type(None, 20) == "bar"
    assert detector.select_chart_type("region", 4) == "pie"
    assert detector.select_chart_type("month", 3) == "line"
    assert detector.select_chart_type("month", 15) == "line"
    assert detector.select_chart_type("month", 16) == "bar"
    assert detector.select_chart_type("category", 6) == "bar"
    assert detector.select_chart_type(None, 3) == "bar"


def test_comparison_and_regional_overrides():
    detector = VisualizationDetector()
    assert detector.chart_type_for(Comparison(), None, 40) == "line"
    assert detector.chart_type_for(RegionalAnalysis(), "region", 40) == "pie"
    assert detector.chart_type_for(RevenueAnalysis(group_by="year"), "year", 2) == "line"


def test_thresholds_are_configurable():
    detector = VisualizationDetector(bar_row_threshold=3, pie_max_rows=2)
    assert detector.select_chart_type("month", 4) == "bar"
    assert detector.select_chart_type("region", 3) == "bar"


def test_suggestions_per_intent():
    detector = VisualizationDetector()
    assert [s.chart_type for s in detector.suggest(RevenueAnalysis())] == ["line"]
    assert detector.suggest(CustomerAnalysis())[0].description == "Customer segment distribution"
    assert detector.suggest(ProductAnalysis())[0].chart_type == "bar"
    assert detector.suggest(RegionalAnalysis())[0].chart_type == "map"
    assert detector.suggest(Comparison()) == []
    assert detector.suggest(General()) == []


def test_palette_cycles():
    assert color(0) == PALETTE[0][0]
    assert color(len(PALETTE), "background") == PALETTE[0][1]
