"""
Wires the cache and loading stores with configured logging and metrics.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from prometheus_client import CollectorRegistry

from shared.config import BaseConfig, get_config
from shared.logging import configure_logging, get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from .cache import Cache
from .loading import Loading


@dataclass
class CacheContext:
    """A cache and loading registry shared by everything using one logical cache."""
    cache: Cache
    loading: Loading
    config: BaseConfig
    metrics: Optional[MetricsCollector] = None


def create_cache_context(
    store: Optional[Dict[str, Any]] = None,
    *,
    config: Optional[BaseConfig] = None,
    registry: Optional[CollectorRegistry] = None,
) -> CacheContext:
    """Create the stores for one logical cache.

    Args:
        store: Initial cache store, e.g. a server side render snapshot to
            hydrate from.
        config: Configuration. Defaults to the process configuration.
        registry: Prometheus registry for the metrics, when enabled.
    """
    config = config or get_config()
    configure_logging(config.service_name, config.log_level)
    logger = get_logger("graphql_cache.main")

    metrics = None
    if config.enable_metrics:
        metrics = get_metrics_collector(config.service_name, registry)

    cache = Cache(store, metrics=metrics)
    loading = Loading(metrics=metrics)

    logger.info(
        "Cache context created",
        env=config.env,
        hydrated_entries=len(cache.store),
        metrics_enabled=metrics is not None
    )

    return CacheContext(cache=cache, loading=loading, config=config, metrics=metrics)
