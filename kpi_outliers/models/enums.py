from enum import Enum


class MetricFormat(str, Enum):
    """Display format of a metric value"""

    CURRENCY = "currency"
    PERCENTAGE = "percentage"  # values are already expressed in percentage points
    NUMBER = "number"
    RATIO = "ratio"


class MetricCategory(str, Enum):
    """Catalog grouping of metrics"""

    RENT_REVENUE = "rent_revenue"
    OCCUPANCY = "occupancy"
    PROPERTY_PERFORMANCE = "property_performance"
    FINANCIAL = "financial"
    DEBT_SERVICE = "debt_service"
    FUND_OVERVIEW = "fund_overview"


class Dimension(str, Enum):
    """Which version of a metric value an observation records"""

    ACTUAL = "actual"
    FORECAST = "forecast"
    BUDGET = "budget"


class PeriodType(str, Enum):
    """Reporting period of an observation"""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class ComparisonMode(str, Enum):
    """Baseline an actual value is compared against"""

    FORECAST = "forecast"
    BUDGET = "budget"
    PRIOR_PERIOD = "prior_period"


class VarianceStatus(str, Enum):
    """Classification of a variance once polarity has been applied."""

    FAVORABLE = "favorable"  # Better than baseline by at least the green threshold
    BORDERLINE = "borderline"  # Between the two thresholds
    UNFAVORABLE = "unfavorable"  # Worse than baseline by at least the red threshold
