"""
GraphQL-over-HTTP transport.

Produces already-started, never-raising fetches whose results, including any
errors, are shaped for use as cache values.
"""

from .fetch_graphql import (
    ERROR_CODE_FETCH_ERROR,
    ERROR_CODE_RESPONSE_HTTP_STATUS,
    ERROR_CODE_RESPONSE_JSON_PARSE_ERROR,
    ERROR_CODE_RESPONSE_MALFORMED,
    GraphQLResult,
    fetch_graphql,
)
from .fetch_options import extract_files, fetch_options_graphql
from .loader import load_graphql, start_graphql_fetch

__all__ = [
    "ERROR_CODE_FETCH_ERROR",
    "ERROR_CODE_RESPONSE_HTTP_STATUS",
    "ERROR_CODE_RESPONSE_JSON_PARSE_ERROR",
    "ERROR_CODE_RESPONSE_MALFORMED",
    "GraphQLResult",
    "extract_files",
    "fetch_graphql",
    "fetch_options_graphql",
    "load_graphql",
    "start_graphql_fetch",
]
