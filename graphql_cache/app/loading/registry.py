"""
Loading registry of in-flight load controllers per cache key.
"""

import time
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from shared.logging import get_logger
from ..events import EventEmitter

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector
    from .controller import LoadController


EVENT_START = "start"
EVENT_END = "end"


class Loading(EventEmitter):
    """Tracks which load controllers are running for each cache key.

    Controllers for the same key are kept in the order they started. Events
    are dispatched on ``{cache_key}/start`` and ``{cache_key}/end`` with
    detail ``{"load_controller": controller}``. Only load controllers
    register and unregister themselves; everyone else reads or listens.
    """

    def __init__(self, *, metrics: Optional["MetricsCollector"] = None):
        super().__init__()

        # Insertion-ordered dicts used as ordered sets of controllers.
        self.store: Dict[str, Dict["LoadController", None]] = {}
        self.metrics = metrics
        self.logger = get_logger("graphql_cache.loading")

    def get(self, cache_key: str) -> Tuple["LoadController", ...]:
        """Snapshot of the controllers in flight for a key, in start order."""
        return tuple(self.store.get(cache_key, ()))

    def __contains__(self, cache_key: object) -> bool:
        return cache_key in self.store

    def in_flight_count(self) -> int:
        return sum(len(controllers) for controllers in self.store.values())

    def predecessor(self, cache_key: str, load_controller: "LoadController") -> Optional["LoadController"]:
        """The nearest controller still in flight that started before this one."""
        previous = None
        for controller in self.store.get(cache_key, ()):
            if controller is load_controller:
                return previous
            previous = controller
        return None

    def register(self, cache_key: str, load_controller: "LoadController") -> None:
        """Append a controller to the key's collection and dispatch ``start``."""
        self.store.setdefault(cache_key, {})[load_controller] = None

        if self.metrics:
            self.metrics.increment_counter("loads_started_total")
            self.metrics.set_gauge("loads_in_flight", self.in_flight_count())

        self.logger.debug(
            "Load started",
            cache_key=cache_key,
            load_id=load_controller.load_id,
            in_flight=len(self.store[cache_key])
        )

        self.emit(f"{cache_key}/{EVENT_START}", {"load_controller": load_controller})

    def unregister(self, cache_key: str, load_controller: "LoadController") -> None:
        """Remove a controller from the key's collection and dispatch ``end``."""
        controllers = self.store.get(cache_key)
        if controllers is None or load_controller not in controllers:
            return

        del controllers[load_controller]
        if not controllers:
            del self.store[cache_key]

        if self.metrics:
            outcome = "committed" if load_controller.committed else "discarded"
            self.metrics.increment_counter("loads_finished_total", outcome=outcome)
            self.metrics.observe_histogram(
                "load_duration_seconds",
                time.monotonic() - load_controller.started_at
            )
            self.metrics.set_gauge("loads_in_flight", self.in_flight_count())

        self.logger.debug(
            "Load ended",
            cache_key=cache_key,
            load_id=load_controller.load_id,
            committed=load_controller.committed
        )

        self.emit(f"{cache_key}/{EVENT_END}", {"load_controller": load_controller})
