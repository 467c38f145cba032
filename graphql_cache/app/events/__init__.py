"""
Event dispatch primitives shared by the cache and loading stores.
"""

from .emitter import Event, EventEmitter, Listener

__all__ = ["Event", "EventEmitter", "Listener"]
