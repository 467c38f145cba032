"""
Cooperative cancellation handle.
"""

from typing import Any, Callable, Optional

from ..events import EventEmitter, Listener
from ..validation import require_instance


EVENT_CANCEL = "cancel"


class CancellationHandle(EventEmitter):
    """A flag the owner of a load sets to skip committing its result.

    Cancelling never stops work by itself. Whoever runs the work listens
    for ``cancel`` and makes it settle early, e.g. with an error-shaped
    result. Cancelling more than once has no further effect.
    """

    def __init__(self):
        super().__init__()
        self._canceled = False
        self.reason: Optional[Any] = None

    @property
    def canceled(self) -> bool:
        return self._canceled

    def cancel(self, reason: Optional[Any] = None) -> None:
        if self._canceled:
            return

        self._canceled = True
        self.reason = reason
        self.emit(EVENT_CANCEL, {"reason": reason})

    def add_cancel_listener(self, listener: Listener) -> None:
        self.add_listener(EVENT_CANCEL, listener)

    def remove_cancel_listener(self, listener: Listener) -> None:
        self.remove_listener(EVENT_CANCEL, listener)

    def follow(self, other: "CancellationHandle") -> Callable[[], None]:
        """Cancel this handle when ``other`` is or becomes canceled.

        Returns:
            A function that stops following ``other``.
        """
        require_instance(other, CancellationHandle, 1, "other")

        if other.canceled:
            self.cancel(other.reason)
            return lambda: None

        def on_cancel(event):
            other.remove_cancel_listener(on_cancel)
            self.cancel(event.detail["reason"])

        other.add_cancel_listener(on_cancel)
        return lambda: other.remove_cancel_listener(on_cancel)

    def __repr__(self) -> str:
        return f"<CancellationHandle canceled={self._canceled}>"
