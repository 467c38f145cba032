"""
Load controller: ties one in-flight load to the cache and loading stores.
"""

import asyncio
import time
import uuid
from typing import Any, Optional

from shared.errors import ArgumentError
from shared.logging import bind_load_context, get_logger
from ..cache import Cache, CacheKey, CacheValue
from ..validation import require_instance, require_string
from .cancellation import CancellationHandle
from .registry import Loading


class LoadController:
    """Controls loading a cache value, dispatching in order:

    1. :class:`Loading` ``start``.
    2. :class:`Cache` ``set``, unless the load was canceled.
    3. :class:`Loading` ``end``.

    Results commit to the cache in the order loads for the key started, not
    the order their work settles: before committing, a controller waits for
    the nearest earlier controller still in flight for the same key.

    Args:
        loading: Loading registry to update.
        cache: Cache to commit the result to.
        cache_key: Cache key.
        work: An already started asyncio future or task resolving the load
            result, with any errors folded into the value. If it raises,
            ``outcome`` raises too and nothing is committed.
        cancellation: Canceling it before ``work`` settles skips the commit.
            Has no effect after the load ends.

    Canceling ``outcome`` itself (e.g. an ``asyncio.wait_for`` timeout)
    discards the load without canceling ``work``. The controller always
    unregisters, and later loads of the key treat it as finished.
    """

    def __init__(
        self,
        loading: Loading,
        cache: Cache,
        cache_key: CacheKey,
        work: "asyncio.Future[CacheValue]",
        cancellation: CancellationHandle,
    ):
        require_instance(loading, Loading, 1, "loading")
        require_instance(cache, Cache, 2, "cache")
        require_string(cache_key, 3, "cache_key")
        if not asyncio.isfuture(work):
            raise ArgumentError(
                "Argument 4 `work` must be an asyncio future or task.",
                details={"argument": "work", "position": 4, "received": type(work).__name__}
            )
        require_instance(cancellation, CancellationHandle, 5, "cancellation")

        self.started_at = time.monotonic()
        self.load_id = str(uuid.uuid4())
        self.cache_key = cache_key
        self.cancellation = cancellation
        self.committed: Optional[bool] = None
        self.logger = get_logger("graphql_cache.loading.controller")

        self._loading = loading
        self._cache = cache
        self._work = work

        # The task can't run before this constructor returns, so the
        # registration below is always visible to the commit pipeline.
        self.outcome: "asyncio.Task[CacheValue]" = work.get_loop().create_task(self._commit_pipeline())
        # A task canceled before its first step never runs the pipeline.
        self.outcome.add_done_callback(self._on_outcome_done)

        loading.register(cache_key, self)

    @property
    def finished(self) -> bool:
        return self.outcome.done()

    async def _commit_pipeline(self) -> Any:
        bind_load_context(self.cache_key, self.load_id)

        try:
            # Canceling the outcome must not cancel the caller's work.
            result = await asyncio.shield(self._work)

            if self.cancellation.canceled:
                self.committed = False
                self.logger.debug("Load result discarded", reason=self.cancellation.reason)
            else:
                predecessor = self._loading.predecessor(self.cache_key, self)
                if predecessor is not None:
                    self.logger.debug("Awaiting earlier load", predecessor=predecessor.load_id)
                    await self._wait_for(predecessor)

                self._cache.set(self.cache_key, result)
                self.committed = True
                self.logger.debug("Load result committed")
        finally:
            self._finish()

        return result

    async def _wait_for(self, predecessor: "LoadController") -> None:
        try:
            await asyncio.shield(predecessor.outcome)
        except asyncio.CancelledError:
            # Only a canceled predecessor counts as finished; our own
            # cancellation propagates.
            if not predecessor.outcome.cancelled():
                raise
            self.logger.debug("Earlier load was canceled", predecessor=predecessor.load_id)
        except Exception as exc:
            self.logger.warning("Earlier load failed", predecessor=predecessor.load_id, error=str(exc))

    def _finish(self) -> None:
        if self.committed is None:
            self.committed = False
        self._loading.unregister(self.cache_key, self)

    def _on_outcome_done(self, outcome: "asyncio.Task[CacheValue]") -> None:
        self._finish()

    def __repr__(self) -> str:
        if self.committed is None:
            state = "pending"
        else:
            state = "committed" if self.committed else "discarded"
        return f"<LoadController {self.cache_key!r} {state} {self.load_id}>"
