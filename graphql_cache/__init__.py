"""
Client-side GraphQL request cache.

Loads of the same cache key may run concurrently; their results commit to
the cache in the order the loads started, so the cache converges on the
result of the most recently started load that wasn't canceled.
"""

from .app.cache import (
    Cache,
    cache_delete,
    cache_entry_delete,
    cache_entry_prune,
    cache_entry_set,
    cache_entry_stale,
    cache_prune,
    cache_stale,
)
from .app.events import Event, EventEmitter
from .app.loading import CancellationHandle, LoadController, Loading
from .app.subscriptions import cancel_on_replace, load_on_delete, load_on_stale, prevent_prune
from .app.transport import GraphQLResult, fetch_graphql, fetch_options_graphql, load_graphql

__all__ = [
    "Cache",
    "CancellationHandle",
    "Event",
    "EventEmitter",
    "GraphQLResult",
    "LoadController",
    "Loading",
    "cache_delete",
    "cache_entry_delete",
    "cache_entry_prune",
    "cache_entry_set",
    "cache_entry_stale",
    "cache_prune",
    "cache_stale",
    "cancel_on_replace",
    "fetch_graphql",
    "fetch_options_graphql",
    "load_graphql",
    "load_on_delete",
    "load_on_stale",
    "prevent_prune",
]
