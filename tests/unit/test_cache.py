"""
Unit tests for the result cache.
"""

from unittest.mock import MagicMock

import pytest

from kpi_outliers.cache import ResultCache


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(ttl_seconds=60, clock=clock)


class TestResultCache:
    """Tests for the ResultCache class."""

    def test_set_and_get(self, cache):
        """Test a stored value is returned."""
        cache.set("policies", "fund-1", ["a"])

        assert cache.get("policies", "fund-1") == ["a"]
        assert cache.get("policies", "fund-2") is None
        assert cache.get("policies", "fund-2", default=[]) == []

    def test_namespaces_are_separate(self, cache):
        """Test that keys are scoped by namespace."""
        cache.set("policies", "fund-1", 1)
        cache.set("definitions", "fund-1", 2)

        assert cache.get("policies", "fund-1") == 1
        assert cache.get("definitions", "fund-1") == 2

    def test_expiry(self, cache, clock):
        """Test that entries expire after their TTL."""
        # Arrange
        cache.set("policies", "fund-1", 1)

        # Act & Assert
        clock.advance(59)
        assert cache.get("policies", "fund-1") == 1
        clock.advance(1)
        assert cache.get("policies", "fund-1") is None
        assert len(cache) == 0

    def test_zero_ttl_disables_caching(self, clock):
        """Test that a zero TTL stores nothing."""
        cache = ResultCache(ttl_seconds=0, clock=clock)

        cache.set("policies", "fund-1", 1)

        assert cache.get("policies", "fund-1") is None
        assert len(cache) == 0

    def test_negative_ttl(self):
        with pytest.raises(ValueError):
            ResultCache(ttl_seconds=-1)

    def test_get_or_load(self, cache, clock):
        """Test that the loader only runs on a miss."""
        # Arrange
        loader = MagicMock(return_value=["policy"])

        # Act
        first = cache.get_or_load("policies", "fund-1", loader)
        second = cache.get_or_load("policies", "fund-1", loader)
        clock.advance(61)
        third = cache.get_or_load("policies", "fund-1", loader)

        # Assert
        assert first == second == third == ["policy"]
        assert loader.call_count == 2

    def test_get_or_load_caches_falsy_values(self, cache):
        """Test that empty results are cached too."""
        loader = MagicMock(return_value=[])

        cache.get_or_load("policies", "fund-1", loader)
        cache.get_or_load("policies", "fund-1", loader)

        loader.assert_called_once()

    def test_get_or_load_error_is_not_cached(self, cache):
        """Test that loader exceptions propagate and store nothing."""
        loader = MagicMock(side_effect=[ConnectionError("down"), ["policy"]])

        with pytest.raises(ConnectionError):
            cache.get_or_load("policies", "fund-1", loader)

        assert cache.get_or_load("policies", "fund-1", loader) == ["policy"]

    def test_invalidate(self, cache):
        """Test dropping a single entry."""
        cache.set("policies", "fund-1", 1)

        assert cache.invalidate("policies", "fund-1") is True
        assert cache.invalidate("policies", "fund-1") is False
        assert cache.get("policies", "fund-1") is None

    def test_invalidate_namespace(self, cache):
        """Test dropping every entry of a namespace."""
        # Arrange
        cache.set("policies", "fund-1", 1)
        cache.set("policies", "fund-2", 2)
        cache.set("definitions", "all", 3)

        # Act
        removed = cache.invalidate_namespace("policies")

        # Assert
        assert removed == 2
        assert len(cache) == 1
        assert cache.get("definitions", "all") == 3

    def test_clear(self, cache):
        cache.set("policies", "fund-1", 1)

        cache.clear()

        assert len(cache) == 0
