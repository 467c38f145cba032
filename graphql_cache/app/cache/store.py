"""
Cache store of committed values with per-key lifecycle events.

Events are dispatched on topics named ``{cache_key}/{event}``:

- ``set``: an entry was set. Detail: ``{"cache_value": value}``.
- ``stale``: an entry should probably be reloaded (advisory only).
- ``prune``: an entry is about to be deleted unless a listener vetoes the
  event with ``event.prevent_default()``.
- ``delete``: an entry was deleted.
"""

from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from shared.errors import NotFoundError
from shared.logging import get_logger
from ..events import EventEmitter
from ..validation import require_callable, require_mapping, require_string

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


CacheKey = str
CacheValue = Any
CacheKeyMatcher = Callable[[CacheKey], bool]

EVENT_SET = "set"
EVENT_STALE = "stale"
EVENT_PRUNE = "prune"
EVENT_DELETE = "delete"


def event_topic(cache_key: CacheKey, event: str) -> str:
    """Topic name for a cache key event."""
    return f"{cache_key}/{event}"


class Cache(EventEmitter):
    """Store of cache keys and their committed values.

    The ``store`` dict is held by reference, so a snapshot from a server
    side render can be passed in to hydrate a fresh cache. Values should be
    JSON serializable if the store is to be sent to a client for hydration.
    """

    def __init__(
        self,
        store: Optional[Dict[CacheKey, CacheValue]] = None,
        *,
        metrics: Optional["MetricsCollector"] = None,
    ):
        super().__init__()

        if store is None:
            store = {}
        require_mapping(store, 1, "store")

        self.store: Dict[CacheKey, CacheValue] = store
        self.metrics = metrics
        self.logger = get_logger("graphql_cache.cache")

    def _record(self, event: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("cache_events_total", event=event)
            self.metrics.set_gauge("cache_entries", len(self.store))

    def get(self, cache_key: CacheKey, default: Any = None) -> CacheValue:
        """Current value for a key, or ``default`` if absent."""
        return self.store.get(cache_key, default)

    def __contains__(self, cache_key: object) -> bool:
        return cache_key in self.store

    def set(self, cache_key: CacheKey, cache_value: CacheValue) -> None:
        """Set an entry, dispatching ``set``."""
        require_string(cache_key, 1, "cache_key")

        self.store[cache_key] = cache_value
        self._record(EVENT_SET)
        self.logger.debug("Cache entry set", cache_key=cache_key)

        self.emit(event_topic(cache_key, EVENT_SET), {"cache_value": cache_value})

    def delete(self, cache_key: CacheKey) -> None:
        """Delete an entry if present, dispatching ``delete``."""
        require_string(cache_key, 1, "cache_key")

        if cache_key not in self.store:
            return

        del self.store[cache_key]
        self._record(EVENT_DELETE)
        self.logger.debug("Cache entry deleted", cache_key=cache_key)

        self.emit(event_topic(cache_key, EVENT_DELETE))

    def stale(self, cache_key: CacheKey) -> None:
        """Dispatch ``stale`` for an entry to signal it should be reloaded.

        Raises:
            NotFoundError: The entry isn't in the store.
        """
        require_string(cache_key, 1, "cache_key")

        if cache_key not in self.store:
            raise NotFoundError(
                f"Cache key `{cache_key}` isn't in the store.",
                details={"cache_key": cache_key}
            )

        self._record(EVENT_STALE)
        self.emit(event_topic(cache_key, EVENT_STALE))

    def prune(self, cache_key: CacheKey) -> None:
        """Delete an entry if present, unless a ``prune`` listener vetoes it."""
        require_string(cache_key, 1, "cache_key")

        if cache_key not in self.store:
            return

        self._record(EVENT_PRUNE)
        not_vetoed = self.emit(event_topic(cache_key, EVENT_PRUNE), cancelable=True)

        if not_vetoed:
            self.delete(cache_key)
        else:
            self.logger.debug("Cache entry prune vetoed", cache_key=cache_key)

    def _matching(self, matcher: Optional[CacheKeyMatcher], action: Callable[[CacheKey], None]) -> None:
        require_callable(matcher, 1, "matcher", optional=True)

        # Listeners may remove entries mid-iteration; skip keys gone by then.
        for cache_key in list(self.store):
            if cache_key in self.store and (matcher is None or matcher(cache_key)):
                action(cache_key)

    def delete_matching(self, matcher: Optional[CacheKeyMatcher] = None) -> None:
        """Delete every entry whose key matches (all by default), e.g. on logout."""
        self._matching(matcher, self.delete)

    def stale_matching(self, matcher: Optional[CacheKeyMatcher] = None) -> None:
        """Stale every entry whose key matches (all by default), e.g. after a mutation."""
        self._matching(matcher, self.stale)

    def prune_matching(self, matcher: Optional[CacheKeyMatcher] = None) -> None:
        """Prune every entry whose key matches (all by default)."""
        self._matching(matcher, self.prune)
