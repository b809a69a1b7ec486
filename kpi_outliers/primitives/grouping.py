"""
Metric dimension grouping primitives.
=============================================================================

This module turns flat collections of dated metric observations into per-metric
views: the latest actual, the actual immediately preceding it, and the latest
forecast and budget values. It also pivots observations into chart series.

"Latest" is decided by a total order so results never depend on input order:
period date, then recording time (missing sorts oldest), then observation id,
then value, all descending.

Dependencies:
  - pandas as pd
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from kpi_outliers.exceptions import ValidationError
from kpi_outliers.models import (
    Dimension,
    DimensionRecord,
    MetricObservation,
    MetricTimeSeries,
    TimeSeriesPoint,
)

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["position", "metric_id", "period_date", "dimension", "value", "recorded_at", "observation_id"]
RECENCY_ORDER = ["period_date", "recorded_at", "observation_id", "value"]


def _coerce_observations(observations: Iterable[MetricObservation | Mapping[str, Any]]) -> list[MetricObservation]:
    coerced = []
    for observation in observations:
        if isinstance(observation, MetricObservation):
            coerced.append(observation)
            continue
        try:
            coerced.append(MetricObservation.model_validate(observation))
        except PydanticValidationError as exc:
            raise ValidationError("Invalid metric observation", {"validation_errors": exc.errors()}) from exc
    return coerced


def observations_to_frame(observations: list[MetricObservation]) -> pd.DataFrame:
    """
    Build a DataFrame from observations, one row per observation.

    Family: grouping
    Version: 1.0

    Args:
        observations: Metric observations

    Returns:
        DataFrame with columns [position, metric_id, period_date, dimension, value,
        recorded_at, observation_id]. `position` indexes back into `observations`.
    """
    rows = [
        {
            "position": position,
            "metric_id": observation.metric_id,
            "period_date": observation.period_date,
            "dimension": Dimension(observation.dimension).value,
            "value": observation.value,
            "recorded_at": observation.recorded_at,
            "observation_id": observation.id or "",
        }
        for position, observation in enumerate(observations)
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["period_date"] = pd.to_datetime(df["period_date"])
    df["recorded_at"] = pd.to_datetime(df["recorded_at"], utc=True)
    return df


def filter_by_period(df: pd.DataFrame, start_date: date | None = None, end_date: date | None = None) -> pd.DataFrame:
    """
    Keep rows whose period date falls within the inclusive bounds.

    Family: grouping
    Version: 1.0

    Args:
        df: DataFrame with a `period_date` column
        start_date: Lower bound, unbounded when None
        end_date: Upper bound, unbounded when None

    Returns:
        Filtered DataFrame

    Raises:
        ValidationError: If start_date is after end_date
    """
    if start_date and end_date and start_date > end_date:
        raise ValidationError(
            "Start date must be on or before end date",
            {"start_date": str(start_date), "end_date": str(end_date)},
        )

    mask = pd.Series(True, index=df.index)
    if start_date is not None:
        mask &= df["period_date"] >= pd.Timestamp(start_date)
    if end_date is not None:
        mask &= df["period_date"] <= pd.Timestamp(end_date)
    return df[mask]


def sort_latest_first(df: pd.DataFrame) -> pd.DataFrame:
    """
    Sort observations from most to least recent using the total recency order.

    Family: grouping
    Version: 1.0
    """
    return df.sort_values(by=RECENCY_ORDER, ascending=False, na_position="last", kind="mergesort")


def group_observations_by_dimension(
    observations: Iterable[MetricObservation | Mapping[str, Any]],
    start_date: date | None = None,
    end_date: date | None = None,
) -> dict[str, DimensionRecord]:
    """
    Group observations into the latest actual, prior period, forecast and budget per metric.

    Family: grouping
    Version: 1.0

    Args:
        observations: Unordered observations of a single property
        start_date: Optional inclusive lower bound on period date
        end_date: Optional inclusive upper bound on period date

    Returns:
        Mapping of metric id to its DimensionRecord. Metrics without any actual
        observation are left out.

    Raises:
        ValidationError: If an observation is invalid or the bounds are inverted
    """
    items = _coerce_observations(observations)
    if not items:
        return {}

    df = sort_latest_first(filter_by_period(observations_to_frame(items), start_date, end_date))

    grouped: dict[str, DimensionRecord] = {}
    for metric_id, metric_df in df.groupby("metric_id", sort=True):
        by_dimension = {
            dimension: metric_df.loc[metric_df["dimension"] == dimension, "position"].tolist()
            for dimension in (Dimension.ACTUAL.value, Dimension.FORECAST.value, Dimension.BUDGET.value)
        }

        actual_positions = by_dimension[Dimension.ACTUAL.value]
        if not actual_positions:
            logger.debug("Metric %s has no actual observation, skipping", metric_id)
            continue

        def latest(positions: list[int], offset: int = 0) -> MetricObservation | None:
            return items[positions[offset]] if len(positions) > offset else None

        grouped[str(metric_id)] = DimensionRecord(
            metric_id=str(metric_id),
            actual=latest(actual_positions),
            prior_period=latest(actual_positions, offset=1),
            forecast=latest(by_dimension[Dimension.FORECAST.value]),
            budget=latest(by_dimension[Dimension.BUDGET.value]),
        )

    return grouped


def build_metric_time_series(
    observations: Iterable[MetricObservation | Mapping[str, Any]],
    metric_id: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[MetricTimeSeries]:
    """
    Pivot observations into per-date actual/forecast/budget points for each metric.

    Family: grouping
    Version: 1.0

    Args:
        observations: Observations of a single property
        metric_id: Restrict the output to one metric
        start_date: Optional inclusive lower bound on period date
        end_date: Optional inclusive upper bound on period date

    Returns:
        One MetricTimeSeries per metric, ordered by metric id, points ascending by date.
        When several observations share a metric, date and dimension the most recent wins.
    """
    items = _coerce_observations(observations)
    if metric_id is not None:
        items = [item for item in items if item.metric_id == metric_id]
    if not items:
        return []

    df = sort_latest_first(filter_by_period(observations_to_frame(items), start_date, end_date))
    df = df.drop_duplicates(subset=["metric_id", "period_date", "dimension"], keep="first")
    if df.empty:
        return []

    pivoted = df.pivot(index=["metric_id", "period_date"], columns="dimension", values="value")
    pivoted = pivoted.reindex(columns=[dimension.value for dimension in Dimension]).sort_index()
    pivoted = pivoted.astype(object).where(pivoted.notna(), None)

    series = []
    for series_metric_id, metric_df in pivoted.groupby(level="metric_id", sort=True):
        points = [
            TimeSeriesPoint(
                period_date=period_date.date(),
                actual=row[Dimension.ACTUAL.value],
                forecast=row[Dimension.FORECAST.value],
                budget=row[Dimension.BUDGET.value],
            )
            for (_, period_date), row in metric_df.iterrows()
        ]
        series.append(MetricTimeSeries(metric_id=str(series_metric_id), points=points))
    return series
