"""
Models for metric catalog entries and recorded observations.
"""

from datetime import date, datetime

from pydantic import ConfigDict, Field

from kpi_outliers.models.common import BaseModel
from kpi_outliers.models.enums import Dimension, MetricCategory, MetricFormat, PeriodType


class MetricDefinition(BaseModel):
    """Catalog entry describing a metric"""

    model_config = ConfigDict(frozen=True)

    id: str
    code: str
    name: str
    category: MetricCategory
    format: MetricFormat
    description: str | None = None
    # Display order, used to break ranking ties
    sort_order: int = 0


class MetricObservation(BaseModel):
    """One recorded value of a metric for a property and period"""

    id: str | None = None
    metric_id: str
    property_id: str
    period_date: date
    dimension: Dimension
    value: float
    period_type: PeriodType | None = None
    recorded_at: datetime | None = None


class DimensionRecord(BaseModel):
    """Latest observations of a single metric, per dimension"""

    metric_id: str
    actual: MetricObservation | None = None
    prior_period: MetricObservation | None = None
    forecast: MetricObservation | None = None
    budget: MetricObservation | None = None


class TimeSeriesPoint(BaseModel):
    """Values of a metric on a single period date"""

    period_date: date
    actual: float | None = None
    forecast: float | None = None
    budget: float | None = None


class MetricTimeSeries(BaseModel):
    """Chart ready series of a metric across dimensions"""

    metric_id: str
    points: list[TimeSeriesPoint] = Field(default_factory=list)
