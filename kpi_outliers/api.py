"""
Main API for the kpi_outliers package.
"""

import logging
from datetime import date, datetime
from typing import Any

from kpi_outliers.cache import ResultCache
from kpi_outliers.config import Settings, get_settings
from kpi_outliers.exceptions import DataSourceError, KpiOutliersError
from kpi_outliers.models import DefaultPolicy, MetricDefinition, OutliersResult, PolicyBook
from kpi_outliers.patterns import OutlierDetectionPattern
from kpi_outliers.primitives import get_primitive_metadata, list_primitives_by_family
from kpi_outliers.sources import (
    CachedPolicySource,
    DefinitionSource,
    InMemoryDefinitionSource,
    ObservationSource,
    PolicySource,
)

logger = logging.getLogger(__name__)


class KpiOutliers:
    """Entry point tying the external data sources to the outlier detection pattern."""

    def __init__(
        self,
        observation_source: ObservationSource,
        policy_source: PolicySource,
        definition_source: DefinitionSource | None = None,
        settings: Settings | None = None,
        cache: ResultCache | None = None,
    ) -> None:
        """
        Initialize the API.

        Args:
            observation_source: Source of recorded metric values
            policy_source: Source of per-fund policies
            definition_source: Metric catalog, the built-in catalog when omitted
            settings: Settings, read from the environment when omitted
            cache: Cache for fund policies. When omitted and caching is enabled,
                a private cache with the configured TTL is created.
        """
        self.settings = settings or get_settings()
        self.observation_source = observation_source
        self.definition_source = definition_source or InMemoryDefinitionSource()

        if cache is None and self.settings.CACHE_ENABLED:
            cache = ResultCache(ttl_seconds=self.settings.CACHE_TTL_SECONDS)
        self.cache = cache
        self.policy_source: PolicySource = (
            CachedPolicySource(policy_source, cache) if cache is not None else policy_source
        )

        self._pattern = OutlierDetectionPattern()

    def default_policy(self) -> DefaultPolicy:
        """Get the system-wide fallback policy."""
        return self.settings.default_policy()

    def get_outliers(
        self,
        property_id: str,
        fund_id: str,
        top_count: int | None = None,
        comparison_period: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        evaluated_at: datetime | None = None,
    ) -> OutliersResult:
        """
        Get the top and bottom performing metrics of a property.

        Args:
            property_id: The property (deal) id
            fund_id: The fund whose policies apply
            top_count: Maximum entries per list, the configured default when omitted
            comparison_period: Reporting period shown with the result
            start_date: Optional inclusive lower bound on period date
            end_date: Optional inclusive upper bound on period date
            evaluated_at: Evaluation timestamp, defaults to now

        Returns:
            OutliersResult

        Raises:
            DataSourceError: If observations, policies or definitions cannot be loaded
            ConfigurationAbsentError: If a metric has no policy and no default
            ValidationError: If inputs are invalid
        """
        observations = self._load(
            "observations", lambda: self.observation_source.fetch(property_id, start_date, end_date)
        )
        policies = self._load("policies", lambda: self.policy_source.fetch(fund_id))
        definitions: list[MetricDefinition] = self._load("definitions", self.definition_source.fetch)

        policy_book = PolicyBook.from_policies(policies, default=self.default_policy(), fund_id=fund_id)

        return self._pattern.analyze(
            property_id=property_id,
            observations=observations,
            definitions=definitions,
            policies=policy_book,
            top_count=self.settings.DEFAULT_TOP_COUNT if top_count is None else top_count,
            comparison_period=comparison_period,
            start_date=start_date,
            end_date=end_date,
            fund_id=fund_id,
            evaluated_at=evaluated_at,
        )

    def invalidate_policies(self, fund_id: str | None = None) -> None:
        """Drop cached policies of a fund (or all funds) after they change."""
        if isinstance(self.policy_source, CachedPolicySource):
            self.policy_source.invalidate(fund_id)

    def get_pattern_info(self) -> dict[str, Any]:
        """Get metadata and output schema of the outlier detection pattern."""
        return self._pattern.get_info()

    def list_primitives(self) -> list[str]:
        """
        List all available primitive names.

        Returns:
            List of primitive names
        """
        all_primitives = []
        for primitives in list_primitives_by_family().values():
            all_primitives.extend(primitives)
        return all_primitives

    def list_primitives_by_family(self) -> dict[str, list[str]]:
        """List all primitives organized by family."""
        return list_primitives_by_family()

    def get_primitive_info(self, primitive_name: str) -> dict[str, Any]:
        """
        Get detailed information about a primitive.

        Raises:
            PrimitiveError: If primitive not found
        """
        return get_primitive_metadata(primitive_name)

    @staticmethod
    def _load(source_name: str, loader):
        try:
            return loader()
        except KpiOutliersError:
            raise
        except Exception as e:
            logger.error("Failed to load %s: %s", source_name, e)
            raise DataSourceError(f"Could not load {source_name}: {str(e)}", source_name) from e
