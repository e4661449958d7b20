"""
CHANNEL PARTNER REVENUE ENGINE
Blended book + management-fee revenue calculator
"""

from .models import CalculatorInputs, DerivedMetrics
from .processor import MetricsProcessor, compute_metrics
from .session import CalculatorSession

__all__ = ['MetricsProcessor', 'CalculatorInputs', 'DerivedMetrics', 'CalculatorSession', 'compute_metrics']
