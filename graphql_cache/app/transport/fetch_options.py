"""
Default httpx request options for a GraphQL operation.
"""

import io
import json
from typing import Any, Dict, List, Tuple

from ..validation import require_mapping


def is_extractable_file(value: Any) -> bool:
    """Whether a value should be uploaded as a file rather than sent as JSON."""
    return isinstance(value, io.IOBase)


def extract_files(value: Any, path: str = "") -> Tuple[Any, Dict[Any, List[str]]]:
    """Replace files in a JSON-like structure with ``None``.

    Returns:
        A clone of ``value`` without files, and a mapping of each file to the
        object paths (``variables.files.0``) it was found at. The input is
        not mutated.
    """
    files: Dict[Any, List[str]] = {}

    def recurse(node: Any, node_path: str) -> Any:
        if is_extractable_file(node):
            files.setdefault(node, []).append(node_path)
            return None

        if isinstance(node, dict):
            prefix = f"{node_path}." if node_path else ""
            return {key: recurse(child, f"{prefix}{key}") for key, child in node.items()}

        if isinstance(node, (list, tuple)):
            prefix = f"{node_path}." if node_path else ""
            return [recurse(child, f"{prefix}{index}") for index, child in enumerate(node)]

        return node

    return recurse(value, path), files


def fetch_options_graphql(operation: Dict[str, Any]) -> Dict[str, Any]:
    """Create httpx request options for a GraphQL operation.

    If the operation contains files the options are for a GraphQL multipart
    request (https://github.com/jaydenseric/graphql-multipart-request-spec),
    otherwise for a regular GraphQL ``POST`` request with a JSON body.

    Args:
        operation: GraphQL operation with a ``query`` and optional
            ``variables``. Additional properties are sent as well.

    Returns:
        Keyword arguments for ``httpx.AsyncClient.request`` plus ``method``.
    """
    require_mapping(operation, 1, "operation")

    clone, files = extract_files(operation)
    operation_json = json.dumps(clone)

    fetch_options: Dict[str, Any] = {
        "method": "POST",
        "headers": {"Accept": "application/json"},
    }

    if files:
        file_map = {}
        upload_files = {}
        for index, (file, paths) in enumerate(files.items(), start=1):
            file_map[str(index)] = paths
            upload_files[str(index)] = file

        fetch_options["data"] = {
            "operations": operation_json,
            "map": json.dumps(file_map),
        }
        fetch_options["files"] = upload_files
    else:
        fetch_options["headers"]["Content-Type"] = "application/json"
        fetch_options["content"] = operation_json

    return fetch_options
