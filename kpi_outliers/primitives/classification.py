"""
Outlier classification and ranking primitives.
=============================================================================

This module turns favorability scores into three-level statuses using per-metric
thresholds, and selects the most and least favorable metrics of a property.

Dependencies:
  - None (standard Python)
"""

from collections.abc import Iterable

from kpi_outliers.exceptions import ValidationError
from kpi_outliers.models import OutlierEntry, Variance, VarianceResult, VarianceStatus


def _validate_thresholds(green_threshold: float, red_threshold: float) -> None:
    invalid = {}
    if green_threshold < 0:
        invalid["green_threshold"] = green_threshold
    if red_threshold < 0:
        invalid["red_threshold"] = red_threshold
    if invalid:
        raise ValidationError("Thresholds must be non-negative", invalid)


def classify_variance_status(favorability: float, green_threshold: float, red_threshold: float) -> VarianceStatus:
    """
    Classify a favorability score as favorable, borderline or unfavorable.

    Family: classification
    Version: 1.0

    Args:
        favorability: Polarity normalized score, positive means better than baseline
        green_threshold: Minimum score to be favorable
        red_threshold: Score at or below its negation is unfavorable

    Returns:
        The variance status

    Raises:
        ValidationError: If a threshold is negative

    Notes:
        favorable   if favorability >= green_threshold
        unfavorable if favorability <= -red_threshold
        borderline  otherwise
    """
    _validate_thresholds(green_threshold, red_threshold)

    if favorability >= green_threshold:
        return VarianceStatus.FAVORABLE
    if favorability <= -red_threshold:
        return VarianceStatus.UNFAVORABLE
    return VarianceStatus.BORDERLINE


def classify_variance(variance: Variance, green_threshold: float, red_threshold: float) -> VarianceResult:
    """
    Attach a status to a computed variance.

    Family: classification
    Version: 1.0

    Args:
        variance: Output of calculate_variance
        green_threshold: Minimum score to be favorable
        red_threshold: Score at or below its negation is unfavorable

    Returns:
        VarianceResult with the status set
    """
    status = classify_variance_status(variance.favorability, green_threshold, red_threshold)
    return VarianceResult(
        amount=variance.amount,
        percent=variance.percent,
        favorability=variance.favorability,
        status=status,
    )


def exceeds_alert_threshold(favorability: float, alert_threshold: float | None) -> bool:
    """
    Check whether a score is large enough to be surfaced as an outlier.

    Family: classification
    Version: 1.0

    Args:
        favorability: Polarity normalized score
        alert_threshold: Minimum absolute score, None disables the check

    Returns:
        True when there is no alert threshold or |favorability| reaches it
    """
    if alert_threshold is None:
        return True
    return abs(favorability) >= alert_threshold


def rank_outliers(
    entries: Iterable[OutlierEntry], top_count: int = 5
) -> tuple[list[OutlierEntry], list[OutlierEntry]]:
    """
    Select the most and least favorable entries.

    Family: classification
    Version: 1.0

    Args:
        entries: Eligible outlier entries
        top_count: Maximum number of entries in each list

    Returns:
        Tuple of (top_performers, bottom_performers). Top performers are sorted by
        favorability descending, bottom performers ascending; ties are broken by
        display order then code. Lists are never padded, and share no entry as
        long as there are at least 2 * top_count entries.

    Raises:
        ValidationError: If top_count is negative
    """
    if top_count < 0:
        raise ValidationError("top_count must be non-negative", {"top_count": top_count})

    pool = list(entries)

    top = sorted(pool, key=lambda entry: (-entry.favorability, entry.sort_order, entry.code))[:top_count]

    # With a large enough pool, tied scores must not land in both lists
    candidates = pool
    if len(pool) >= 2 * top_count:
        selected = {id(entry) for entry in top}
        candidates = [entry for entry in pool if id(entry) not in selected]
    bottom = sorted(candidates, key=lambda entry: (entry.favorability, entry.sort_order, entry.code))[:top_count]

    return top, bottom
