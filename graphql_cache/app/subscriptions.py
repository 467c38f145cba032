"""
Subscription helpers for UI bindings.

Each helper subscribes to a store topic and returns a function that
unsubscribes, so a binding can tie the subscription to a component's
lifetime.
"""

from typing import Any, Callable

from .cache import Cache, EVENT_DELETE, EVENT_PRUNE, EVENT_STALE, event_topic
from .events import Event
from .loading import EVENT_START, Loading
from .validation import require_callable, require_instance, require_string

Unsubscribe = Callable[[], None]
Loader = Callable[[], Any]


def _subscribe(emitter, topic: str, listener: Callable[[Event], Any]) -> Unsubscribe:
    emitter.add_listener(topic, listener)

    def unsubscribe() -> None:
        emitter.remove_listener(topic, listener)

    return unsubscribe


def prevent_prune(cache: Cache, cache_key: str) -> Unsubscribe:
    """Keep an entry alive by vetoing its ``prune`` events."""
    require_instance(cache, Cache, 1, "cache")
    require_string(cache_key, 2, "cache_key")

    def veto(event: Event) -> None:
        event.prevent_default()

    return _subscribe(cache, event_topic(cache_key, EVENT_PRUNE), veto)


def load_on_stale(cache: Cache, cache_key: str, load: Loader) -> Unsubscribe:
    """Call ``load()`` whenever the entry becomes stale."""
    require_instance(cache, Cache, 1, "cache")
    require_string(cache_key, 2, "cache_key")
    require_callable(load, 3, "load")

    return _subscribe(cache, event_topic(cache_key, EVENT_STALE), lambda event: load())


def load_on_delete(cache: Cache, cache_key: str, load: Loader) -> Unsubscribe:
    """Call ``load()`` whenever the entry is deleted."""
    require_instance(cache, Cache, 1, "cache")
    require_string(cache_key, 2, "cache_key")
    require_callable(load, 3, "load")

    return _subscribe(cache, event_topic(cache_key, EVENT_DELETE), lambda event: load())


def cancel_on_replace(loading: Loading, cache_key: str) -> Unsubscribe:
    """Cancel earlier in-flight loads for a key whenever a newer one starts."""
    require_instance(loading, Loading, 1, "loading")
    require_string(cache_key, 2, "cache_key")

    def on_start(event: Event) -> None:
        started = event.detail["load_controller"]
        for controller in loading.get(cache_key):
            if controller is started:
                break
            controller.cancellation.cancel("replaced")

    return _subscribe(loading, f"{cache_key}/{EVENT_START}", on_start)
