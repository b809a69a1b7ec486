"""
Per-fund outlier policies and the system-wide fallback.
"""

import logging

from pydantic import ConfigDict, Field

from kpi_outliers.exceptions import ConfigurationAbsentError
from kpi_outliers.models.common import BaseModel
from kpi_outliers.models.enums import ComparisonMode
from kpi_outliers.models.metrics import MetricDefinition

logger = logging.getLogger(__name__)

DEFAULT_GREEN_THRESHOLD = 20.0
DEFAULT_RED_THRESHOLD = 20.0


class MetricPolicy(BaseModel):
    """Outlier configuration of one metric within a fund"""

    model_config = ConfigDict(frozen=True)

    metric_id: str
    comparison_mode: ComparisonMode = ComparisonMode.FORECAST
    green_threshold: float = Field(default=DEFAULT_GREEN_THRESHOLD, ge=0)
    red_threshold: float = Field(default=DEFAULT_RED_THRESHOLD, ge=0)
    # Lower actual values are better (expenses, vacancy, ...)
    is_inverse: bool = False
    enabled: bool = True
    # Minimum absolute favorability for the metric to be surfaced at all
    alert_threshold: float | None = Field(default=None, ge=0)


class DefaultPolicy(BaseModel):
    """System-wide settings applied to metrics without a policy"""

    comparison_mode: ComparisonMode = ComparisonMode.FORECAST
    green_threshold: float = Field(default=DEFAULT_GREEN_THRESHOLD, ge=0)
    red_threshold: float = Field(default=DEFAULT_RED_THRESHOLD, ge=0)
    alert_threshold: float | None = Field(default=None, ge=0)
    inverse_metric_codes: frozenset[str] = Field(default_factory=frozenset)

    def for_metric(self, definition: MetricDefinition) -> MetricPolicy:
        """Build the fallback policy of a metric."""
        return MetricPolicy(
            metric_id=definition.id,
            comparison_mode=self.comparison_mode,
            green_threshold=self.green_threshold,
            red_threshold=self.red_threshold,
            is_inverse=definition.code in self.inverse_metric_codes,
            enabled=True,
            alert_threshold=self.alert_threshold,
        )


class PolicyBook(BaseModel):
    """
    Policies of a fund keyed by metric id, with an optional default.

    Lookups never consult another fund; a metric without its own policy falls back
    to the default, and without a default the configuration is considered absent.
    """

    fund_id: str | None = None
    policies: dict[str, MetricPolicy] = Field(default_factory=dict)
    default: DefaultPolicy | None = None

    @classmethod
    def from_policies(
        cls, policies: list[MetricPolicy], default: DefaultPolicy | None = None, fund_id: str | None = None
    ) -> "PolicyBook":
        """
        Index a list of policies by metric id.

        When a metric appears more than once, the last policy wins.
        """
        indexed: dict[str, MetricPolicy] = {}
        for policy in policies:
            if policy.metric_id in indexed:
                logger.warning(
                    "Duplicate policy for metric %s in fund %s, keeping the last one", policy.metric_id, fund_id
                )
            indexed[policy.metric_id] = policy
        return cls(fund_id=fund_id, policies=indexed, default=default)

    def policy_for(self, definition: MetricDefinition) -> MetricPolicy:
        """
        Get the effective policy of a metric.

        Args:
            definition: Catalog entry of the metric

        Returns:
            The configured policy, or the default one

        Raises:
            ConfigurationAbsentError: If the metric has no policy and there is no default
        """
        policy = self.policies.get(definition.id)
        if policy is not None:
            return policy
        if self.default is None:
            raise ConfigurationAbsentError(
                f"No outlier policy configured for metric '{definition.code}' and no default available",
                metric_id=definition.id,
                details={"fund_id": self.fund_id, "code": definition.code},
            )
        return self.default.for_metric(definition)
