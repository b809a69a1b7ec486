"""
Models module for the kpi_outliers package.

This module contains Pydantic models used throughout the package.
"""

from .enums import (
    ComparisonMode,
    Dimension,
    MetricCategory,
    MetricFormat,
    PeriodType,
    VarianceStatus,
)
from .common import BaseModel
from .metrics import (
    DimensionRecord,
    MetricDefinition,
    MetricObservation,
    MetricTimeSeries,
    TimeSeriesPoint,
)
from .policy import DefaultPolicy, MetricPolicy, PolicyBook
from .outliers import OutlierEntry, OutliersResult, Variance, VarianceResult

__all__ = [
    # Enums
    "ComparisonMode",
    "Dimension",
    "MetricCategory",
    "MetricFormat",
    "PeriodType",
    "VarianceStatus",
    # Common models
    "BaseModel",
    # Metric models
    "DimensionRecord",
    "MetricDefinition",
    "MetricObservation",
    "MetricTimeSeries",
    "TimeSeriesPoint",
    # Policy models
    "DefaultPolicy",
    "MetricPolicy",
    "PolicyBook",
    # Output models
    "OutlierEntry",
    "OutliersResult",
    "Variance",
    "VarianceResult",
]
