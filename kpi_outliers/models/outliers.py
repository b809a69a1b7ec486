"""
Output models of the variance and outlier computations.
"""

from datetime import date, datetime

from pydantic import Field

from kpi_outliers.models.common import BaseModel
from kpi_outliers.models.enums import ComparisonMode, MetricCategory, MetricFormat, VarianceStatus


class Variance(BaseModel):
    """Deviation of an actual value from its baseline"""

    # actual - baseline, in the metric's own unit (points for percentage metrics)
    amount: float
    # amount relative to |baseline|; absent for percentage metrics and zero baselines
    percent: float | None = None
    # polarity normalized score, positive means better than baseline
    favorability: float


class VarianceResult(Variance):
    """Variance with its threshold classification"""

    status: VarianceStatus


class OutlierEntry(BaseModel):
    """A metric joined with the variance computed for it"""

    metric_id: str
    code: str
    name: str
    category: MetricCategory
    format: MetricFormat
    sort_order: int = 0

    actual_value: float
    baseline_value: float
    comparison_mode: ComparisonMode

    amount: float
    percent: float | None = None
    favorability: float
    status: VarianceStatus


class OutliersResult(BaseModel):
    """Top and bottom performing metrics of a property"""

    pattern: str = "kpi_outliers"
    version: str = "1.0"
    property_id: str
    fund_id: str | None = None
    top_performers: list[OutlierEntry] = Field(default_factory=list)
    bottom_performers: list[OutlierEntry] = Field(default_factory=list)
    top_count: int
    eligible_count: int = 0
    comparison_period: date | None = None
    evaluated_at: datetime = Field(default_factory=datetime.now)
