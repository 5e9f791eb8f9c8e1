"""Tests for the engine result cache."""

import pytest

from bjodds.cache import ResultCache


class TestResultCache:
    """Tests for ResultCache."""

    def test_miss_then_hit(self):
        """Test a value is computed once and then reused."""
        cache = ResultCache()
        calls = []

        def compute():
            calls.append(1)
            return "value"

        assert cache.get_or_compute(("16", 10), compute) == "value"
        assert cache.get_or_compute(("16", 10), compute) == "value"
        assert len(calls) == 1
        assert cache.hits == 1
        assert cache.misses == 1

    def test_new_version_drops_entries(self):
        """Test moving to a new shoe version invalidates older results."""
        cache = ResultCache()
        cache.get_or_compute("k", lambda: 1, version=1)
        assert "k" in cache

        assert cache.get_or_compute("k", lambda: 2, version=2) == 2
        assert cache.version == 2
        assert len(cache) == 1

    def test_same_version_keeps_entries(self):
        """Test lookups at the same version share entries."""
        cache = ResultCache()
        cache.get_or_compute("a", lambda: 1, version=5)
        cache.get_or_compute("b", lambda: 2, version=5)
        assert len(cache) == 2

    def test_lru_eviction(self):
        """Test the least recently used entry is evicted first."""
        cache = ResultCache(maxsize=2)
        cache.get_or_compute("a", lambda: 1)
        cache.get_or_compute("b", lambda: 2)
        cache.get_or_compute("a", lambda: 1)  # refresh a
        cache.get_or_compute("c", lambda: 3)

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_clear(self):
        """Test clear empties the cache and its statistics."""
        cache = ResultCache()
        cache.get_or_compute("a", lambda: 1, version=3)
        cache.clear()
        assert len(cache) == 0
        assert cache.version is None
        assert cache.misses == 0

    def test_rejects_zero_size(self):
        """Test maxsize must be positive."""
        with pytest.raises(ValueError):
            ResultCache(maxsize=0)
