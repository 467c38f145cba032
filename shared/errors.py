"""
Shared error handling for the GraphQL cache layer.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class CacheLayerException(Exception):
    """Base exception for the cache layer."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ArgumentError(CacheLayerException, TypeError):
    """A public operation was called with an argument of the wrong type."""

    def __init__(self, message: str = "Invalid argument", details: Optional[Dict[str, Any]] = None):
        super().__init__("ARGUMENT_ERROR", message, details)


class NotFoundError(CacheLayerException, LookupError):
    """A cache key required by an operation isn't in the store."""

    def __init__(self, message: str = "Not found", details: Optional[Dict[str, Any]] = None):
        super().__init__("NOT_FOUND", message, details)
