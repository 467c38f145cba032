"""
Function forms of the cache store operations.

Each validates that the first argument is a :class:`Cache` and delegates to
the matching method, so callers holding a cache of unknown provenance get an
argument error rather than an attribute error.
"""

from typing import Optional

from ..validation import require_callable, require_instance, require_string
from .store import Cache, CacheKey, CacheKeyMatcher, CacheValue


def cache_entry_set(cache: Cache, cache_key: CacheKey, cache_value: CacheValue) -> None:
    require_instance(cache, Cache, 1, "cache")
    require_string(cache_key, 2, "cache_key")
    cache.set(cache_key, cache_value)


def cache_entry_delete(cache: Cache, cache_key: CacheKey) -> None:
    require_instance(cache, Cache, 1, "cache")
    require_string(cache_key, 2, "cache_key")
    cache.delete(cache_key)


def cache_entry_stale(cache: Cache, cache_key: CacheKey) -> None:
    require_instance(cache, Cache, 1, "cache")
    require_string(cache_key, 2, "cache_key")
    cache.stale(cache_key)


def cache_entry_prune(cache: Cache, cache_key: CacheKey) -> None:
    require_instance(cache, Cache, 1, "cache")
    require_string(cache_key, 2, "cache_key")
    cache.prune(cache_key)


def cache_delete(cache: Cache, matcher: Optional[CacheKeyMatcher] = None) -> None:
    """Delete matching entries. Useful after a user logs out."""
    require_instance(cache, Cache, 1, "cache")
    require_callable(matcher, 2, "matcher", optional=True)
    cache.delete_matching(matcher)


def cache_stale(cache: Cache, matcher: Optional[CacheKeyMatcher] = None) -> None:
    """Stale matching entries. Useful after a mutation."""
    require_instance(cache, Cache, 1, "cache")
    require_callable(matcher, 2, "matcher", optional=True)
    cache.stale_matching(matcher)


def cache_prune(cache: Cache, matcher: Optional[CacheKeyMatcher] = None) -> None:
    """Prune matching entries. Useful after a mutation."""
    require_instance(cache, Cache, 1, "cache")
    require_callable(matcher, 2, "matcher", optional=True)
    cache.prune_matching(matcher)
