"""
Loads GraphQL operations into the cache through load controllers.
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

import httpx

from ..cache import Cache
from ..loading import CancellationHandle, LoadController, Loading
from ..validation import require_instance, require_mapping, require_string
from .fetch_graphql import GraphQLResult, fetch_graphql


def start_graphql_fetch(
    fetch_uri: str,
    fetch_options: Dict[str, Any],
    cancellation: Optional[CancellationHandle] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple["asyncio.Task[GraphQLResult]", CancellationHandle]:
    """Start fetching a GraphQL operation on the running event loop.

    Returns:
        The started fetch task, which never raises, and a fresh cancellation
        handle bound to it. The handle follows ``cancellation`` if given, so
        an existing handle still aborts the fetch. It stops following once
        the fetch ends.
    """
    handle = CancellationHandle()

    work = asyncio.get_running_loop().create_task(
        fetch_graphql(fetch_uri, fetch_options, client=client, cancellation=handle)
    )

    if cancellation is not None:
        unfollow = handle.follow(cancellation)
        work.add_done_callback(lambda _: unfollow())

    return work, handle


def load_graphql(
    loading: Loading,
    cache: Cache,
    cache_key: str,
    fetch_uri: str,
    fetch_options: Dict[str, Any],
    cancellation: Optional[CancellationHandle] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> LoadController:
    """Load a GraphQL operation into the cache under ``cache_key``.

    Must be called from a running event loop.
    """
    require_instance(loading, Loading, 1, "loading")
    require_instance(cache, Cache, 2, "cache")
    require_string(cache_key, 3, "cache_key")
    require_string(fetch_uri, 4, "fetch_uri")
    require_mapping(fetch_options, 5, "fetch_options")
    if cancellation is not None:
        require_instance(cancellation, CancellationHandle, 6, "cancellation")

    work, handle = start_graphql_fetch(fetch_uri, fetch_options, cancellation, client=client)
    return LoadController(loading, cache, cache_key, work, handle)
