"""
Unit tests for GraphQL fetch options.
"""

import io
import json

import pytest

from graphql_cache.app.transport import extract_files, fetch_options_graphql
from shared.errors import ArgumentError


class TestFetchOptionsGraphQL:
    """Test cases for fetch_options_graphql."""

    def test_regular_request(self):
        """Test an operation without files is sent as JSON."""
        operation = {"query": "query ($id: ID!) { pokemon(id: $id) { name } }", "variables": {"id": "1"}}

        options = fetch_options_graphql(operation)

        assert options["method"] == "POST"
        assert options["headers"] == {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        assert json.loads(options["content"]) == operation
        assert "files" not in options

    def test_multipart_request(self):
        """Test an operation with a file becomes a multipart request."""
        upload = io.BytesIO(b"avatar")
        operation = {"query": "mutation ($file: Upload!) { upload(file: $file) }", "variables": {"file": upload}}

        options = fetch_options_graphql(operation)

        assert options["headers"] == {"Accept": "application/json"}
        assert json.loads(options["data"]["operations"]) == {
            "query": operation["query"],
            "variables": {"file": None},
        }
        assert json.loads(options["data"]["map"]) == {"1": ["variables.file"]}
        assert options["files"] == {"1": upload}
        assert "content" not in options

    def test_same_file_sent_once(self):
        """Test a file used at several paths is uploaded once."""
        upload = io.BytesIO(b"data")
        other = io.BytesIO(b"other")
        operation = {"query": "{ a }", "variables": {"files": [upload, other, upload]}}

        options = fetch_options_graphql(operation)

        assert json.loads(options["data"]["map"]) == {
            "1": ["variables.files.0", "variables.files.2"],
            "2": ["variables.files.1"],
        }
        assert options["files"] == {"1": upload, "2": other}

    def test_operation_not_mutated(self):
        """Test extracting files leaves the operation untouched."""
        upload = io.BytesIO(b"data")
        operation = {"query": "{ a }", "variables": {"file": upload}}

        fetch_options_graphql(operation)

        assert operation["variables"]["file"] is upload

    def test_operation_must_be_dict(self):
        """Test a non-dict operation is rejected."""
        with pytest.raises(ArgumentError, match="Argument 1 `operation` must be a dict."):
            fetch_options_graphql("{ a }")


class TestExtractFiles:
    """Test cases for extract_files."""

    def test_no_files(self):
        """Test a structure without files is cloned unchanged."""
        value = {"a": [1, {"b": "c"}]}

        clone, files = extract_files(value)

        assert clone == value
        assert clone is not value
        assert files == {}

    def test_nested_paths(self):
        """Test file paths use dot notation through lists and dicts."""
        upload = io.BytesIO(b"x")

        clone, files = extract_files({"a": [{"b": upload}]})

        assert clone == {"a": [{"b": None}]}
        assert files == {upload: ["a.0.b"]}
