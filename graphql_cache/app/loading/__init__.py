"""
Loading package.

Coordinates concurrent loads of the same cache key so results commit to the
cache in start order, with cooperative cancellation.
"""

from .cancellation import CancellationHandle, EVENT_CANCEL
from .controller import LoadController
from .registry import EVENT_END, EVENT_START, Loading

__all__ = [
    "CancellationHandle",
    "EVENT_CANCEL",
    "EVENT_END",
    "EVENT_START",
    "LoadController",
    "Loading",
]
