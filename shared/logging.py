"""
Shared logging configuration for the GraphQL cache layer.
"""

import sys
import structlog
import logging
import time
from typing import Any, Dict, Optional
from contextvars import ContextVar

# Context variables for load correlation
cache_key_var: ContextVar[Optional[str]] = ContextVar('cache_key', default=None)
load_id_var: ContextVar[Optional[str]] = ContextVar('load_id', default=None)


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure structured logging for a service."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            add_load_context,
            add_timestamp,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add service context to log events."""
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        event_dict["service"] = logger_name.split(".")[0]

    return event_dict


def add_load_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add the cache key and load ID of the running load to log events."""
    cache_key = cache_key_var.get()
    if cache_key is not None:
        event_dict.setdefault("cache_key", cache_key)

    load_id = load_id_var.get()
    if load_id:
        event_dict.setdefault("load_id", load_id)

    return event_dict


def add_timestamp(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add high-precision timestamp to log events."""
    event_dict["timestamp"] = time.time()
    return event_dict


def bind_load_context(cache_key: str, load_id: str) -> None:
    """Set load context for the current task."""
    cache_key_var.set(cache_key)
    load_id_var.set(load_id)


def clear_context():
    """Clear all context variables."""
    cache_key_var.set(None)
    load_id_var.set(None)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
