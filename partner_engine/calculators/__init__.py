"""
Calculators Package

Provides all calculation components for the metrics pipeline.
"""

from .book import BookAggregator
from .conversion import ConversionEngine
from .opportunity import OpportunitySizer
from .scenarios import ScenarioComparator, commission_from_rate

__all__ = [
    "BookAggregator",
    "OpportunitySizer",
    "ConversionEngine",
    "ScenarioComparator",
    "commission_from_rate",
]
