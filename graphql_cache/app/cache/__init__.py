"""
Cache store package.

Holds committed cache values and broadcasts their lifecycle. Entries are
never evicted on a schedule; callers stale, prune or delete them explicitly.
"""

from .store import (
    Cache,
    CacheKey,
    CacheKeyMatcher,
    CacheValue,
    EVENT_DELETE,
    EVENT_PRUNE,
    EVENT_SET,
    EVENT_STALE,
    event_topic,
)
from .operations import (
    cache_delete,
    cache_entry_delete,
    cache_entry_prune,
    cache_entry_set,
    cache_entry_stale,
    cache_prune,
    cache_stale,
)

__all__ = [
    "Cache",
    "CacheKey",
    "CacheKeyMatcher",
    "CacheValue",
    "EVENT_DELETE",
    "EVENT_PRUNE",
    "EVENT_SET",
    "EVENT_STALE",
    "event_topic",
    "cache_delete",
    "cache_entry_delete",
    "cache_entry_prune",
    "cache_entry_set",
    "cache_entry_stale",
    "cache_prune",
    "cache_stale",
]
