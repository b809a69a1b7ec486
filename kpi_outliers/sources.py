"""
Read-only data sources consumed by the outlier engine.

Storage lives outside this package; these interfaces describe what the engine
needs from it. In-memory implementations are provided for tests, scripts and
callers that already hold the data.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date

from kpi_outliers.cache import ResultCache
from kpi_outliers.catalog import default_metric_definitions
from kpi_outliers.models import MetricDefinition, MetricObservation, MetricPolicy

logger = logging.getLogger(__name__)


class ObservationSource(ABC):
    """Source of recorded metric values."""

    @abstractmethod
    def fetch(
        self, property_id: str, start_date: date | None = None, end_date: date | None = None
    ) -> list[MetricObservation]:
        """
        Fetch the observations of a property, in any order.

        Args:
            property_id: The property (deal) id
            start_date: Optional inclusive lower bound on period date
            end_date: Optional inclusive upper bound on period date
        """


class PolicySource(ABC):
    """Source of per-fund outlier policies."""

    @abstractmethod
    def fetch(self, fund_id: str) -> list[MetricPolicy]:
        """Fetch the policies configured for a fund, at most one per metric."""


class DefinitionSource(ABC):
    """Source of the metric catalog."""

    @abstractmethod
    def fetch(self) -> list[MetricDefinition]:
        """Fetch every metric definition."""


class InMemoryObservationSource(ObservationSource):
    def __init__(self, observations: Iterable[MetricObservation] = ()) -> None:
        self._observations: dict[str, list[MetricObservation]] = {}
        for observation in observations:
            self.add(observation)

    def add(self, observation: MetricObservation) -> None:
        self._observations.setdefault(observation.property_id, []).append(observation)

    def fetch(
        self, property_id: str, start_date: date | None = None, end_date: date | None = None
    ) -> list[MetricObservation]:
        return [
            observation
            for observation in self._observations.get(property_id, [])
            if (start_date is None or observation.period_date >= start_date)
            and (end_date is None or observation.period_date <= end_date)
        ]


class InMemoryPolicySource(PolicySource):
    def __init__(self, policies_by_fund: dict[str, list[MetricPolicy]] | None = None) -> None:
        self._policies = {fund_id: list(policies) for fund_id, policies in (policies_by_fund or {}).items()}

    def upsert(self, fund_id: str, policy: MetricPolicy) -> None:
        """Replace the fund's policy for the same metric, or add it."""
        policies = [existing for existing in self._policies.get(fund_id, []) if existing.metric_id != policy.metric_id]
        policies.append(policy)
        self._policies[fund_id] = policies

    def delete(self, fund_id: str, metric_id: str) -> None:
        """Remove a fund's policy for a metric, reverting it to the defaults."""
        self._policies[fund_id] = [
            existing for existing in self._policies.get(fund_id, []) if existing.metric_id != metric_id
        ]

    def fetch(self, fund_id: str) -> list[MetricPolicy]:
        return list(self._policies.get(fund_id, []))


class InMemoryDefinitionSource(DefinitionSource):
    def __init__(self, definitions: Iterable[MetricDefinition] | None = None) -> None:
        self._definitions = list(definitions) if definitions is not None else default_metric_definitions()

    def fetch(self) -> list[MetricDefinition]:
        return list(self._definitions)


class CachedPolicySource(PolicySource):
    """Policy source that memoizes another one per fund in a ResultCache."""

    namespace = "policies"

    def __init__(self, source: PolicySource, cache: ResultCache) -> None:
        self.source = source
        self.cache = cache

    def fetch(self, fund_id: str) -> list[MetricPolicy]:
        policies = self.cache.get_or_load(self.namespace, fund_id, lambda: self.source.fetch(fund_id))
        return list(policies)

    def invalidate(self, fund_id: str | None = None) -> None:
        """Forget the cached policies of one fund, or of every fund."""
        if fund_id is None:
            self.cache.invalidate_namespace(self.namespace)
        else:
            self.cache.invalidate(self.namespace, fund_id)
            logger.debug("Invalidated cached policies of fund %s", fund_id)
