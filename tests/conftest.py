"""
Common fixtures for all tests in the kpi_outliers package.
"""

from datetime import date, datetime

import pytest

from kpi_outliers.config import Settings
from kpi_outliers.models import (
    DefaultPolicy,
    MetricDefinition,
    MetricObservation,
    MetricPolicy,
    PolicyBook,
)

PROPERTY_ID = "deal-1"
FUND_ID = "fund-1"


@pytest.fixture
def make_observation():
    """Factory fixture building observations of the test property."""

    def _make(metric_id, dimension, period_date, value, **kwargs):
        return MetricObservation(
            metric_id=metric_id,
            property_id=kwargs.pop("property_id", PROPERTY_ID),
            period_date=period_date,
            dimension=dimension,
            value=value,
            **kwargs,
        )

    return _make


@pytest.fixture
def definitions():
    """Fixture providing a small metric catalog."""
    return [
        MetricDefinition(
            id="occupancy", code="occupancy", name="Occupancy", category="occupancy", format="percentage", sort_order=1
        ),
        MetricDefinition(
            id="vacancy_rate",
            code="vacancy_rate",
            name="Vacancy Rate",
            category="occupancy",
            format="percentage",
            sort_order=2,
        ),
        MetricDefinition(
            id="noi",
            code="noi",
            name="Net Operating Income",
            category="property_performance",
            format="currency",
            sort_order=3,
        ),
        MetricDefinition(
            id="dscr",
            code="dscr",
            name="Debt Service Coverage Ratio",
            category="debt_service",
            format="ratio",
            sort_order=4,
        ),
    ]


@pytest.fixture
def scenario_observations(make_observation):
    """Observations matching the documented scenarios."""
    march, february = date(2024, 3, 31), date(2024, 2, 29)
    return [
        # occupancy: actual 94 vs forecast 90
        make_observation("occupancy", "actual", march, 94),
        make_observation("occupancy", "forecast", march, 90),
        # vacancy_rate: actual 8 vs budget 5
        make_observation("vacancy_rate", "actual", march, 8),
        make_observation("vacancy_rate", "budget", march, 5),
        # noi: actual 120000 vs prior period 100000
        make_observation("noi", "actual", march, 120000),
        make_observation("noi", "actual", february, 100000),
        # dscr: actual only, forecast mode has nothing to compare against
        make_observation("dscr", "actual", march, 1.4),
        make_observation("dscr", "budget", march, 1.2),
    ]


@pytest.fixture
def scenario_policies():
    """Policies matching the documented scenarios."""
    return [
        MetricPolicy(metric_id="occupancy", comparison_mode="forecast", green_threshold=2, red_threshold=2),
        MetricPolicy(
            metric_id="vacancy_rate", comparison_mode="budget", green_threshold=2, red_threshold=2, is_inverse=True
        ),
        MetricPolicy(metric_id="noi", comparison_mode="prior_period", green_threshold=10, red_threshold=10),
        MetricPolicy(metric_id="dscr", comparison_mode="forecast"),
    ]


@pytest.fixture
def default_policy():
    """Fixture providing the system fallback policy."""
    return DefaultPolicy(inverse_metric_codes=frozenset({"vacancy_rate"}))


@pytest.fixture
def policy_book(scenario_policies, default_policy):
    """Fixture providing the scenario policies with a default."""
    return PolicyBook.from_policies(scenario_policies, default=default_policy, fund_id=FUND_ID)


@pytest.fixture
def settings():
    """Settings isolated from the environment."""
    return Settings(_env_file=None, CACHE_TTL_SECONDS=60)


@pytest.fixture
def evaluated_at():
    return datetime(2024, 4, 1, 9, 30, 0)
