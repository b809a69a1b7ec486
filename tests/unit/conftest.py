"""
Fixtures specific to unit tests.
"""

import pytest

from kpi_outliers.models import OutlierEntry
from kpi_outliers.primitives import classify_variance_status


@pytest.fixture
def make_entry():
    """Factory fixture building outlier entries with a given favorability."""

    def _make(code, favorability, sort_order=0):
        return OutlierEntry(
            metric_id=code,
            code=code,
            name=code.replace("_", " ").title(),
            category="financial",
            format="currency",
            sort_order=sort_order,
            actual_value=100 + favorability,
            baseline_value=100,
            comparison_mode="forecast",
            amount=favorability,
            percent=favorability,
            favorability=favorability,
            status=classify_variance_status(favorability, 20, 20),
        )

    return _make


@pytest.fixture
def entry_pool(make_entry):
    """Fixture providing ten entries with distinct favorabilities."""
    scores = [35, -40, 12, 0, -5, 22, -18, 7, 50, -25]
    return [make_entry(f"metric_{i}", score, sort_order=i) for i, score in enumerate(scores)]
