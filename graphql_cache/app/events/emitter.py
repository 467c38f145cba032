"""
Per-instance publish/subscribe channel keyed by string topic.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from shared.logging import get_logger


@dataclass
class Event:
    """A dispatched notification.

    ``cancelable`` events may be vetoed by a listener calling
    :meth:`prevent_default`, which stops the emitter's default follow-up
    action (e.g. deleting a pruned cache entry).
    """
    type: str
    detail: Any = None
    cancelable: bool = False
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        """Veto the default follow-up action, if the event is cancelable."""
        if self.cancelable:
            self.default_prevented = True


Listener = Callable[[Event], Any]


class EventEmitter:
    """Dispatches events to synchronous listeners registered per topic."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}
        self._emitter_logger = get_logger("graphql_cache.events")

    def add_listener(self, topic: str, listener: Listener) -> None:
        """Register a listener for a topic. Registering twice is a no-op."""
        listeners = self._listeners.setdefault(topic, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_listener(self, topic: str, listener: Listener) -> None:
        """Unregister a listener for a topic, if registered."""
        listeners = self._listeners.get(topic)
        if not listeners or listener not in listeners:
            return

        listeners.remove(listener)
        if not listeners:
            del self._listeners[topic]

    def listener_count(self, topic: str) -> int:
        """Number of listeners registered for a topic."""
        return len(self._listeners.get(topic, ()))

    def emit(self, topic: str, detail: Optional[Any] = None, cancelable: bool = False) -> bool:
        """Dispatch an event on a topic.

        Listeners registered at dispatch time are called in registration
        order. A listener that raises is logged and dispatch continues.

        Returns:
            ``False`` if the event was cancelable and a listener vetoed it,
            otherwise ``True``.
        """
        event = Event(type=topic, detail=detail, cancelable=cancelable)

        for listener in list(self._listeners.get(topic, ())):
            try:
                listener(event)
            except Exception as exc:
                self._emitter_logger.error(
                    "Event listener failed",
                    topic=topic,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(exc),
                    exc_info=True
                )

        return not event.default_prevented
