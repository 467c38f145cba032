"""
GraphQL-over-HTTP fetch that always resolves a cacheable result.
"""

import asyncio
from typing import Any, Dict, List, Optional

import httpx

from shared.config import get_config
from shared.logging import get_logger
from ..loading import CancellationHandle

ERROR_CODE_FETCH_ERROR = "FETCH_ERROR"
ERROR_CODE_RESPONSE_HTTP_STATUS = "RESPONSE_HTTP_STATUS"
ERROR_CODE_RESPONSE_JSON_PARSE_ERROR = "RESPONSE_JSON_PARSE_ERROR"
ERROR_CODE_RESPONSE_MALFORMED = "RESPONSE_MALFORMED"

logger = get_logger("graphql_cache.transport")


class GraphQLResult(dict):
    """A GraphQL result with optional ``data`` and ``errors`` keys.

    The httpx response is kept on the ``response`` attribute rather than as
    a key, so it can be read from the cache value but doesn't serialize when
    the cache store is sent to a client for hydration.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.response: Optional[httpx.Response] = None


def _client_error(message: str, code: str, **details: Any) -> Dict[str, Any]:
    return {
        "message": message,
        "extensions": {"client": True, "code": code, **details},
    }


def _read_payload(response: httpx.Response, result: GraphQLResult, errors: List[Dict[str, Any]]) -> None:
    # The server may not return a well formed GraphQL response.
    try:
        payload = response.json()
    except ValueError as exc:
        errors.append(_client_error(
            "Response JSON parse error.",
            ERROR_CODE_RESPONSE_JSON_PARSE_ERROR,
            jsonParseErrorMessage=str(exc)
        ))
        return

    if not isinstance(payload, dict):
        errors.append(_client_error("Response JSON isn't an object.", ERROR_CODE_RESPONSE_MALFORMED))
        return

    has_errors = "errors" in payload
    has_data = "data" in payload

    if not has_errors and not has_data:
        errors.append(_client_error(
            "Response JSON is missing an `errors` or `data` property.",
            ERROR_CODE_RESPONSE_MALFORMED
        ))
        return

    if has_errors:
        if isinstance(payload["errors"], list):
            errors.extend(payload["errors"])
        else:
            errors.append(_client_error(
                "Response JSON `errors` property isn't an array.",
                ERROR_CODE_RESPONSE_MALFORMED
            ))

    if has_data:
        if payload["data"] is None or isinstance(payload["data"], dict):
            result["data"] = payload["data"]
        else:
            errors.append(_client_error(
                "Response JSON `data` property isn't an object or null.",
                ERROR_CODE_RESPONSE_MALFORMED
            ))


async def _send(
    fetch_uri: str,
    method: str,
    options: Dict[str, Any],
    client: Optional[httpx.AsyncClient],
    timeout: float,
) -> httpx.Response:
    if client is not None:
        return await client.request(method, fetch_uri, timeout=timeout, **options)

    async with httpx.AsyncClient(timeout=timeout) as owned_client:
        return await owned_client.request(method, fetch_uri, **options)


async def fetch_graphql(
    fetch_uri: str,
    fetch_options: Optional[Dict[str, Any]] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    cancellation: Optional[CancellationHandle] = None,
    timeout: Optional[float] = None,
) -> GraphQLResult:
    """Fetch a GraphQL operation, resolving a result suitable for caching.

    Never raises for transport, HTTP, or response format problems; they are
    added to the result ``errors`` as client errors with an
    ``extensions.code``. Canceling ``cancellation`` stops the request and
    resolves a ``FETCH_ERROR`` result.

    Args:
        fetch_uri: GraphQL API URI.
        fetch_options: ``method`` plus keyword arguments for
            ``httpx.AsyncClient.request``, e.g. from
            :func:`fetch_options_graphql`. Defaults to an empty ``POST``.
        client: Client to send with. A short-lived client is used if omitted.
        cancellation: Handle that aborts the request when canceled.
        timeout: Request timeout in seconds. Defaults to configuration.
    """
    result = GraphQLResult()
    errors: List[Dict[str, Any]] = []

    options = dict(fetch_options or {})
    method = options.pop("method", "POST")
    if timeout is None:
        timeout = get_config().fetch_timeout_seconds

    request = asyncio.ensure_future(_send(fetch_uri, method, options, client, timeout))

    def on_cancel(event):
        request.cancel()

    if cancellation is not None:
        if cancellation.canceled:
            request.cancel()
        cancellation.add_cancel_listener(on_cancel)

    try:
        response = await request
    except asyncio.CancelledError:
        if cancellation is None or not cancellation.canceled:
            raise
        logger.debug("GraphQL fetch canceled", fetch_uri=fetch_uri)
        errors.append(_client_error(
            "Fetch error.",
            ERROR_CODE_FETCH_ERROR,
            fetchErrorMessage="The operation was canceled."
        ))
    except Exception as exc:
        logger.warning("GraphQL fetch failed", fetch_uri=fetch_uri, error=str(exc))
        errors.append(_client_error("Fetch error.", ERROR_CODE_FETCH_ERROR, fetchErrorMessage=str(exc)))
    else:
        result.response = response

        if not response.is_success:
            errors.append(_client_error(
                f"HTTP {response.status_code} status.",
                ERROR_CODE_RESPONSE_HTTP_STATUS,
                statusCode=response.status_code,
                statusText=response.reason_phrase
            ))

        _read_payload(response, result, errors)
    finally:
        if cancellation is not None:
            cancellation.remove_cancel_listener(on_cancel)

    if errors:
        result["errors"] = errors

    return result
