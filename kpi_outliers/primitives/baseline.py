"""
Baseline resolution primitives.
=============================================================================

Pick the comparison value of a metric out of its dimension record. A missing
slot means the baseline is unavailable; no other dimension is substituted.

Dependencies:
  - None (standard Python)
"""

from kpi_outliers.exceptions import ValidationError
from kpi_outliers.models import ComparisonMode, DimensionRecord, MetricObservation

# Slot of the dimension record read for each comparison mode
BASELINE_SLOTS: dict[str, str] = {
    ComparisonMode.FORECAST: "forecast",
    ComparisonMode.BUDGET: "budget",
    ComparisonMode.PRIOR_PERIOD: "prior_period",
}


def resolve_baseline_observation(
    record: DimensionRecord, comparison_mode: ComparisonMode | str
) -> MetricObservation | None:
    """
    Get the observation used as baseline for the given comparison mode.

    Family: baseline
    Version: 1.0

    Args:
        record: Grouped observations of one metric
        comparison_mode: forecast, budget or prior_period

    Returns:
        The baseline observation, or None if unavailable

    Raises:
        ValidationError: If the comparison mode is unknown
    """
    try:
        mode = ComparisonMode(comparison_mode)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown comparison mode: {comparison_mode}",
            {"comparison_mode": comparison_mode, "allowed": [mode.value for mode in ComparisonMode]},
        ) from exc

    return getattr(record, BASELINE_SLOTS[mode])


def resolve_baseline(record: DimensionRecord, comparison_mode: ComparisonMode | str) -> float | None:
    """
    Get the baseline value of a metric for the given comparison mode.

    Family: baseline
    Version: 1.0

    Args:
        record: Grouped observations of one metric
        comparison_mode: forecast, budget or prior_period

    Returns:
        The baseline value, or None if unavailable

    Raises:
        ValidationError: If the comparison mode is unknown
    """
    observation = resolve_baseline_observation(record, comparison_mode)
    return observation.value if observation is not None else None
