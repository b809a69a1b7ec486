"""
KPI Outlier Patterns

Patterns combine primitives into a complete analysis with a validated output model.
"""

from .base import Pattern
from .outliers import OutlierDetectionPattern

__all__ = [
    "Pattern",
    "OutlierDetectionPattern",
]
