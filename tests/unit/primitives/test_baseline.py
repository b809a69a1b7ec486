"""
Unit tests for the baseline primitives.
"""

from datetime import date

import pytest

from kpi_outliers.exceptions import ValidationError
from kpi_outliers.models import ComparisonMode, DimensionRecord
from kpi_outliers.primitives import resolve_baseline, resolve_baseline_observation


@pytest.fixture
def full_record(make_observation):
    """Fixture providing a record with every slot filled."""
    return DimensionRecord(
        metric_id="noi",
        actual=make_observation("noi", "actual", date(2024, 3, 31), 120),
        prior_period=make_observation("noi", "actual", date(2024, 2, 29), 100),
        forecast=make_observation("noi", "forecast", date(2024, 3, 31), 110),
        budget=make_observation("noi", "budget", date(2024, 3, 31), 115),
    )


class TestResolveBaseline:
    """Tests for the resolve_baseline function."""

    @pytest.mark.parametrize(
        "mode, expected",
        [
            (ComparisonMode.FORECAST, 110),
            (ComparisonMode.BUDGET, 115),
            (ComparisonMode.PRIOR_PERIOD, 100),
            ("prior_period", 100),
        ],
    )
    def test_reads_slot_of_mode(self, full_record, mode, expected):
        """Test that each mode reads its own slot."""
        assert resolve_baseline(full_record, mode) == expected

    @pytest.mark.parametrize("mode", ["forecast", "budget", "prior_period"])
    def test_missing_slot_is_unavailable(self, make_observation, mode):
        """Test that an empty slot is never replaced by another dimension."""
        # Arrange
        record = DimensionRecord(metric_id="noi", actual=make_observation("noi", "actual", date(2024, 3, 31), 120))

        # Act & Assert
        assert resolve_baseline(record, mode) is None

    def test_no_substitution(self, make_observation):
        """Test that a present budget does not stand in for a missing forecast."""
        record = DimensionRecord(
            metric_id="noi",
            actual=make_observation("noi", "actual", date(2024, 3, 31), 120),
            budget=make_observation("noi", "budget", date(2024, 3, 31), 115),
        )

        assert resolve_baseline(record, "forecast") is None
        assert resolve_baseline(record, "budget") == 115

    def test_unknown_mode(self, full_record):
        """Test that an unknown comparison mode is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_baseline(full_record, "target")

        assert exc_info.value.invalid_fields["comparison_mode"] == "target"


class TestResolveBaselineObservation:
    """Tests for the resolve_baseline_observation function."""

    def test_returns_observation(self, full_record):
        """Test that the whole observation is returned."""
        observation = resolve_baseline_observation(full_record, "budget")

        assert observation.dimension == "budget"
        assert observation.period_date == date(2024, 3, 31)
