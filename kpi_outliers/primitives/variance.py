"""
Variance calculation primitives.
=============================================================================

This module compares an actual value against its baseline in a unit-aware way:

- percentage metrics are already expressed in points, so their variance is the
  point difference and no relative percent is derived from them
- every other format gets a percent-of-baseline, absent when the baseline is zero

Favorability folds the metric polarity into a single signed score where a
positive value always means "better than baseline".

Dependencies:
  - None (standard Python)
"""

import math

from kpi_outliers.exceptions import ValidationError
from kpi_outliers.models import MetricFormat, Variance


def _as_finite_float(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be numeric", {name: value}) from exc
    if not math.isfinite(number):
        raise ValidationError(f"{name} must be a finite number", {name: value})
    return number


def calculate_difference(value: float, reference_value: float) -> float:
    """
    Calculate the signed difference between two values.

    Family: variance
    Version: 1.0

    Args:
        value: The value to compare
        reference_value: The reference value

    Returns:
        value - reference_value

    Raises:
        ValidationError: If inputs are not finite numbers
    """
    return _as_finite_float("value", value) - _as_finite_float("reference_value", reference_value)


def safe_divide(
    numerator: float, denominator: float, default_value: float | None = None, as_percentage: bool = False
) -> float | None:
    """
    Safely divide two numbers, handling zero denominator cases.

    Family: variance
    Version: 1.0

    Args:
        numerator: The numerator value
        denominator: The denominator value
        default_value: Value to return if denominator is zero
        as_percentage: If True, multiply the result by 100

    Returns:
        The division result, or default_value if denominator is zero

    Raises:
        ValidationError: If inputs are not finite numbers
    """
    numerator = _as_finite_float("numerator", numerator)
    denominator = _as_finite_float("denominator", denominator)

    if denominator == 0:
        return default_value

    result = numerator / denominator
    return result * 100.0 if as_percentage else result


def calculate_percent_of_baseline(amount: float, baseline: float) -> float | None:
    """
    Express a difference relative to the magnitude of its baseline.

    Family: variance
    Version: 1.0

    Args:
        amount: actual - baseline
        baseline: The baseline value

    Returns:
        amount / |baseline| * 100, or None when the baseline is zero
    """
    return safe_divide(amount, abs(_as_finite_float("baseline", baseline)), default_value=None, as_percentage=True)


def apply_polarity(score: float, is_inverse: bool = False) -> float:
    """
    Orient a signed score so that positive means better.

    Family: variance
    Version: 1.0

    Args:
        score: Signed deviation from baseline
        is_inverse: True when lower values of the metric are better

    Returns:
        The oriented score
    """
    oriented = -score if is_inverse else score
    # avoid reporting -0.0 for unchanged inverse metrics
    return oriented + 0.0


def calculate_variance(
    actual: float, baseline: float, metric_format: MetricFormat | str, is_inverse: bool = False
) -> Variance:
    """
    Compute the deviation of an actual value from its baseline.

    Family: variance
    Version: 1.0

    Args:
        actual: The actual value
        baseline: The baseline value
        metric_format: Display format of the metric
        is_inverse: True when lower values of the metric are better

    Returns:
        Variance with the signed amount, the optional percent and the favorability.
        Favorability is on the percent scale when a percent exists, otherwise on
        the amount (point difference) scale.

    Raises:
        ValidationError: If inputs are not finite numbers or the format is unknown
    """
    try:
        fmt = MetricFormat(metric_format)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown metric format: {metric_format}",
            {"metric_format": metric_format, "allowed": [fmt.value for fmt in MetricFormat]},
        ) from exc

    amount = calculate_difference(actual, baseline)

    if fmt == MetricFormat.PERCENTAGE:
        percent = None
    else:
        percent = calculate_percent_of_baseline(amount, baseline)

    basis = percent if percent is not None else amount
    return Variance(amount=amount, percent=percent, favorability=apply_polarity(basis, is_inverse))
