"""
KPI Outliers: variance and outlier detection for property performance metrics.
"""

from kpi_outliers.api import KpiOutliers
from kpi_outliers.exceptions import (
    ConfigurationAbsentError,
    DataSourceError,
    KpiOutliersError,
    PatternError,
    ValidationError,
)

__version__ = "0.1.0"
__all__ = [
    "KpiOutliers",
    "KpiOutliersError",
    "ValidationError",
    "DataSourceError",
    "ConfigurationAbsentError",
    "PatternError",
]
