"""
Unit tests for the cache store.
"""

import json

import pytest
from prometheus_client import CollectorRegistry

from graphql_cache.app.cache import (
    Cache,
    cache_delete,
    cache_entry_delete,
    cache_entry_prune,
    cache_entry_set,
    cache_entry_stale,
    cache_prune,
    cache_stale,
)
from shared.errors import ArgumentError, NotFoundError
from shared.metrics import MetricsCollector


def record(cache, *topics):
    """Record events dispatched on the given topics as (topic, detail) tuples."""
    events = []
    for topic in topics:
        cache.add_listener(topic, lambda event: events.append((event.type, event.detail)))
    return events


class TestCacheConstruction:
    """Test cases for Cache construction."""

    def test_default_store_is_empty(self):
        """Test a cache without an initial store starts empty."""
        assert Cache().store == {}

    def test_initial_store_held_by_reference(self):
        """Test hydrating from an existing store keeps the same dict."""
        store = {"a": 1}
        cache = Cache(store)

        assert cache.store is store
        assert cache.get("a") == 1
        assert "a" in cache

    def test_store_not_a_dict(self):
        """Test a non-dict store is rejected."""
        with pytest.raises(ArgumentError) as exc_info:
            Cache(["a"])

        assert str(exc_info.value) == "Argument 1 `store` must be a dict."
        assert isinstance(exc_info.value, TypeError)


class TestCacheSetDelete:
    """Test cases for set and delete."""

    @pytest.fixture
    def cache(self):
        """Create Cache instance."""
        return Cache()

    def test_set_then_read(self, cache):
        """Test a set value is immediately readable."""
        events = record(cache, "a/set")

        cache.set("a", {"data": {"x": 1}})

        assert cache.store["a"] == {"data": {"x": 1}}
        assert events == [("a/set", {"cache_value": {"data": {"x": 1}}})]

    def test_set_overwrites(self, cache):
        """Test set replaces an existing value."""
        cache.set("a", 1)
        cache.set("a", 2)

        assert cache.store == {"a": 2}

    def test_set_key_not_a_string(self, cache):
        """Test set rejects non-string keys."""
        with pytest.raises(ArgumentError, match="Argument 1 `cache_key` must be a string."):
            cache.set(1, "value")

    def test_delete_present(self, cache):
        """Test delete removes the entry and dispatches delete."""
        cache.set("a", 1)
        events = record(cache, "a/delete")

        cache.delete("a")

        assert "a" not in cache.store
        assert events == [("a/delete", None)]

    def test_delete_absent_is_silent(self, cache):
        """Test deleting a missing entry dispatches nothing."""
        events = record(cache, "a/delete")

        cache.delete("a")

        assert events == []

    def test_delete_matching_default_all(self, cache):
        """Test delete_matching with no matcher deletes everything."""
        cache.set("a", 1)
        cache.set("b", 2)
        events = record(cache, "a/delete", "b/delete")

        cache.delete_matching()

        assert cache.store == {}
        assert events == [("a/delete", None), ("b/delete", None)]

    def test_delete_matching_with_matcher(self, cache):
        """Test delete_matching only deletes matched keys."""
        cache.set("user:1", 1)
        cache.set("public:1", 2)

        cache.delete_matching(lambda key: key.startswith("user:"))

        assert cache.store == {"public:1": 2}

    def test_delete_matching_matcher_not_callable(self, cache):
        """Test a non-callable matcher is rejected."""
        with pytest.raises(ArgumentError, match="must be a function"):
            cache.delete_matching("user:")

    def test_delete_matching_tolerates_listener_deletes(self, cache):
        """Test keys deleted by a listener mid-iteration are skipped."""
        cache.set("a", 1)
        cache.set("b", 2)
        cache.add_listener("a/delete", lambda event: cache.delete("b"))
        events = record(cache, "b/delete")

        cache.delete_matching()

        assert cache.store == {}
        assert events == [("b/delete", None)]


class TestCacheStale:
    """Test cases for stale."""

    @pytest.fixture
    def cache(self):
        """Create Cache instance with entries."""
        return Cache({"a": 1, "b": 2})

    def test_stale_present(self, cache):
        """Test stale dispatches without mutating the store."""
        events = record(cache, "a/stale")

        cache.stale("a")

        assert events == [("a/stale", None)]
        assert cache.store == {"a": 1, "b": 2}

    def test_stale_absent(self, cache):
        """Test stale on a missing entry raises NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            cache.stale("missing")

        assert str(exc_info.value) == "Cache key `missing` isn't in the store."
        assert exc_info.value.code == "NOT_FOUND"

    def test_stale_matching(self, cache):
        """Test stale_matching stales only matched keys."""
        events = record(cache, "a/stale", "b/stale")

        cache.stale_matching(lambda key: key == "b")

        assert events == [("b/stale", None)]

    def test_stale_matching_default_all(self, cache):
        """Test stale_matching with no matcher stales everything in order."""
        events = record(cache, "a/stale", "b/stale")

        cache.stale_matching()

        assert events == [("a/stale", None), ("b/stale", None)]


class TestCachePrune:
    """Test cases for prune."""

    @pytest.fixture
    def cache(self):
        """Create Cache instance with an entry."""
        return Cache({"a": 1})

    def test_prune_not_vetoed(self, cache):
        """Test prune deletes when no listener vetoes."""
        events = record(cache, "a/prune", "a/delete")

        cache.prune("a")

        assert "a" not in cache.store
        assert events == [("a/prune", None), ("a/delete", None)]

    def test_prune_vetoed(self, cache):
        """Test a vetoed prune keeps the entry and skips delete."""
        cache.add_listener("a/prune", lambda event: event.prevent_default())
        events = record(cache, "a/delete")

        cache.prune("a")

        assert cache.store == {"a": 1}
        assert events == []

    def test_prune_absent_is_silent(self, cache):
        """Test pruning a missing entry dispatches nothing."""
        events = record(cache, "b/prune", "b/delete")

        cache.prune("b")

        assert events == []

    def test_prune_matching_respects_veto(self):
        """Test prune_matching deletes only entries nobody keeps alive."""
        cache = Cache({"a": 1, "b": 2, "c": 3})
        cache.add_listener("b/prune", lambda event: event.prevent_default())

        cache.prune_matching()

        assert cache.store == {"b": 2}


class TestCacheFunctions:
    """Test cases for the function forms of cache operations."""

    def test_cache_argument_validated(self):
        """Test functions reject something that isn't a Cache."""
        for call in (
            lambda: cache_entry_set({}, "a", 1),
            lambda: cache_entry_delete({}, "a"),
            lambda: cache_entry_stale({}, "a"),
            lambda: cache_entry_prune({}, "a"),
            lambda: cache_delete({}),
            lambda: cache_stale({}),
            lambda: cache_prune({}),
        ):
            with pytest.raises(ArgumentError, match="Argument 1 `cache` must be a `Cache` instance."):
                call()

    def test_cache_key_validated(self):
        """Test functions report the key as argument 2."""
        with pytest.raises(ArgumentError, match="Argument 2 `cache_key` must be a string."):
            cache_entry_set(Cache(), None, 1)

    def test_matcher_validated(self):
        """Test bulk functions report the matcher as argument 2."""
        with pytest.raises(ArgumentError, match="Argument 2 `matcher` must be a function."):
            cache_delete(Cache(), True)

    def test_functions_delegate(self):
        """Test the function forms behave like the methods."""
        cache = Cache()

        cache_entry_set(cache, "a", 1)
        cache_entry_set(cache, "b", 2)
        assert cache.store == {"a": 1, "b": 2}

        stale = record(cache, "a/stale")
        cache_entry_stale(cache, "a")
        cache_stale(cache, lambda key: key == "a")
        assert len(stale) == 2

        cache_entry_prune(cache, "a")
        assert cache.store == {"b": 2}

        cache_entry_delete(cache, "b")
        assert cache.store == {}

        cache_entry_set(cache, "c", 3)
        cache_prune(cache)
        cache_delete(cache)
        assert cache.store == {}


class TestCacheMetricsAndSerialization:
    """Test cases for metrics and hydration snapshots."""

    def test_metrics_recorded(self):
        """Test cache events are counted."""
        registry = CollectorRegistry()
        cache = Cache(metrics=MetricsCollector("test", registry))

        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")

        assert registry.get_sample_value("cache_events_total", {"event": "set"}) == 2
        assert registry.get_sample_value("cache_events_total", {"event": "delete"}) == 1
        assert registry.get_sample_value("cache_entries") == 1

    def test_store_round_trips_through_json(self):
        """Test a serializable store can hydrate a fresh cache."""
        cache = Cache()
        cache.set("a", {"data": {"x": 1}})

        hydrated = Cache(json.loads(json.dumps(cache.store)))

        assert hydrated.store == cache.store
