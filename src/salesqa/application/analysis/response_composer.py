"""Route result rows to the composer for their intent variant."""

from __future__ import annotations

from typing import Mapping

import pandas as pd

from salesqa.application.analysis.composers.base import SectionComposer
from salesqa.application.analysis.composers.comparison import ComparisonComposer
from salesqa.application.analysis.composers.customer import CustomerComposer
from salesqa.application.analysis.composers.general import GeneralComposer
from salesqa.application.analysis.composers.product import ProductComposer
from salesqa.application.analysis.composers.regional import RegionalComposer
from salesqa.application.analysis.composers.revenue import RevenueComposer
from salesqa.application.analysis.schemas import ResponseBundle
from salesqa.application.analysis.visualization_detector import VisualizationDetector
from salesqa.domain.value_objects import (
    Comparison,
    CustomerAnalysis,
    General,
    Intent,
    ProductAnalysis,
    RegionalAnalysis,
    RevenueAnalysis,
)

__all__ = ["ResponseComposer"]


class ResponseComposer:
    """Deterministic narrative and visualization assembly; never raises on odd rows."""

    def __init__(self, detector: VisualizationDetector | None = None, currency_symbol: str = "$") -> None:
        detector = detector or VisualizationDetector()
        self._composers: Mapping[type, SectionComposer] = {
            RevenueAnalysis: RevenueComposer(detector, currency_symbol),
            CustomerAnalysis: CustomerComposer(detector, currency_symbol),
            ProductAnalysis: ProductComposer(detector, currency_symbol),
            RegionalAnalysis: RegionalComposer(detector, currency_symbol),
            Comparison: ComparisonComposer(detector, currency_symbol),
            General: GeneralComposer(detector, currency_symbol),
        }
        self._fallback = self._composers[General]

    def compose(self, intent: Intent, frame: pd.DataFrame) -> ResponseBundle:
        composer = self._composers.get(type(intent), self._fallback)
        return composer.compose(intent, frame)
