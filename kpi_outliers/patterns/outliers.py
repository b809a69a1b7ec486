"""
Outlier Detection Pattern

This module implements the OutlierDetectionPattern which compares the latest actual
value of every metric of a property against the baseline chosen by the fund's policy,
classifies each variance and surfaces the most and least favorable metrics.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from kpi_outliers.exceptions import KpiOutliersError, PatternError
from kpi_outliers.models import (
    DimensionRecord,
    MetricDefinition,
    MetricObservation,
    MetricPolicy,
    OutlierEntry,
    OutliersResult,
    PolicyBook,
)
from kpi_outliers.patterns.base import Pattern
from kpi_outliers.primitives import (
    calculate_variance,
    classify_variance,
    exceeds_alert_threshold,
    group_observations_by_dimension,
    rank_outliers,
    resolve_baseline,
)

logger = logging.getLogger(__name__)


class OutlierDetectionPattern(Pattern[OutliersResult]):
    """Pattern for surfacing the best and worst performing metrics of a property."""

    name = "kpi_outliers"
    version = "1.0"
    description = "Ranks a property's metrics by polarity-aware variance against their baselines"
    required_primitives = [
        "group_observations_by_dimension",
        "resolve_baseline",
        "calculate_variance",
        "classify_variance",
        "exceeds_alert_threshold",
        "rank_outliers",
    ]
    output_model: type[OutliersResult] = OutliersResult

    def analyze(  # type: ignore
        self,
        property_id: str,
        observations: Iterable[MetricObservation | Mapping[str, Any]],
        definitions: Iterable[MetricDefinition],
        policies: PolicyBook,
        top_count: int = 5,
        comparison_period: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        fund_id: str | None = None,
        evaluated_at: datetime | None = None,
    ) -> OutliersResult:
        """
        Execute the outlier detection pattern.

        Args:
            property_id: The property (deal) being analyzed
            observations: Observations of the property, in any order
            definitions: Metric catalog; observations of unknown metrics are ignored
            policies: Policies of the property's fund, with their default
            top_count: Maximum number of entries in each list
            comparison_period: Reporting period shown with the result; defaults to the
                latest actual period among the evaluated metrics
            start_date: Optional inclusive lower bound on period date
            end_date: Optional inclusive upper bound on period date
            fund_id: The fund owning the policies
            evaluated_at: Evaluation timestamp, defaults to now

        Returns:
            OutliersResult with the top and bottom performers

        Raises:
            ConfigurationAbsentError: If a metric has no policy and there is no default
            ValidationError: If inputs are invalid
            PatternError: If the evaluation fails unexpectedly
        """
        try:
            self.validate_date_range(start_date, end_date)

            records = group_observations_by_dimension(observations, start_date=start_date, end_date=end_date)
            definitions_by_id = {definition.id: definition for definition in definitions}

            entries: list[OutlierEntry] = []
            latest_period: date | None = None
            for metric_id, record in records.items():
                definition = definitions_by_id.get(metric_id)
                if definition is None:
                    logger.debug("No definition for metric %s, skipping", metric_id)
                    continue

                entry = self._evaluate_metric(definition, record, policies.policy_for(definition))
                if entry is None:
                    continue

                entries.append(entry)
                actual_period = record.actual.period_date  # type: ignore[union-attr]
                if latest_period is None or actual_period > latest_period:
                    latest_period = actual_period

            top_performers, bottom_performers = rank_outliers(entries, top_count=top_count)

            logger.info(
                "Evaluated outliers for property %s: %d metrics grouped, %d eligible",
                property_id,
                len(records),
                len(entries),
            )

            result = {
                "pattern": self.name,
                "version": self.version,
                "property_id": property_id,
                "fund_id": fund_id if fund_id is not None else policies.fund_id,
                "top_performers": top_performers,
                "bottom_performers": bottom_performers,
                "top_count": top_count,
                "eligible_count": len(entries),
                "comparison_period": comparison_period or latest_period,
                "evaluated_at": evaluated_at or datetime.now(),
            }
            return self.validate_output(result)

        except KpiOutliersError:
            raise
        except Exception as e:
            raise PatternError(
                f"Error in outlier detection: {str(e)}",
                self.name,
                {"property_id": property_id, "original_error": type(e).__name__},
            ) from e

    def _evaluate_metric(
        self, definition: MetricDefinition, record: DimensionRecord, policy: MetricPolicy
    ) -> OutlierEntry | None:
        """
        Compute the outlier entry of one metric.

        Returns:
            The entry, or None when the metric is disabled, has no usable baseline,
            holds a non-finite value, or stays under its alert threshold
        """
        if not policy.enabled:
            logger.debug("Metric %s is disabled for outliers, skipping", definition.code)
            return None

        if record.actual is None:
            return None

        baseline = resolve_baseline(record, policy.comparison_mode)
        if baseline is None:
            logger.debug("Metric %s has no %s baseline, skipping", definition.code, policy.comparison_mode)
            return None

        if not (math.isfinite(record.actual.value) and math.isfinite(baseline)):
            logger.debug("Metric %s has a non-finite actual or baseline, skipping", definition.code)
            return None

        variance = calculate_variance(record.actual.value, baseline, definition.format, policy.is_inverse)
        if not exceeds_alert_threshold(variance.favorability, policy.alert_threshold):
            logger.debug("Metric %s is within its alert threshold, skipping", definition.code)
            return None

        result = classify_variance(variance, policy.green_threshold, policy.red_threshold)

        return OutlierEntry(
            metric_id=definition.id,
            code=definition.code,
            name=definition.name,
            category=definition.category,
            format=definition.format,
            sort_order=definition.sort_order,
            actual_value=record.actual.value,
            baseline_value=baseline,
            comparison_mode=policy.comparison_mode,
            amount=result.amount,
            percent=result.percent,
            favorability=result.favorability,
            status=result.status,
        )
