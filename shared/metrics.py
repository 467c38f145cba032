"""
Shared metrics configuration for the GraphQL cache layer.
"""

from prometheus_client import Counter, Histogram, Gauge, Info, CollectorRegistry
from typing import Dict, Any, Optional
import threading


class MetricsCollector:
    """Centralized metrics collector for cache and loading activity."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up cache and loading metrics."""

        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # Cache store metrics
        self._metrics["cache_events_total"] = Counter(
            "cache_events_total",
            "Total cache store events dispatched",
            ["event"],
            registry=self.registry
        )

        self._metrics["cache_entries"] = Gauge(
            "cache_entries",
            "Number of entries in the cache store",
            registry=self.registry
        )

        # Loading metrics
        self._metrics["loads_started_total"] = Counter(
            "loads_started_total",
            "Total loads started",
            registry=self.registry
        )

        self._metrics["loads_finished_total"] = Counter(
            "loads_finished_total",
            "Total loads finished",
            ["outcome"],
            registry=self.registry
        )

        self._metrics["loads_in_flight"] = Gauge(
            "loads_in_flight",
            "Number of loads currently in flight",
            registry=self.registry
        )

        self._metrics["load_duration_seconds"] = Histogram(
            "load_duration_seconds",
            "Load duration from start to end in seconds",
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def _labeled(self, metric_name: str, labels: Dict[str, Any]):
        metric = self._metrics[metric_name]
        return metric.labels(**labels) if labels else metric

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        if metric_name in self._metrics:
            with self._lock:
                self._labeled(metric_name, labels).inc()

    def set_gauge(self, metric_name: str, value: float, **labels):
        """Set a gauge metric value."""
        if metric_name in self._metrics:
            with self._lock:
                self._labeled(metric_name, labels).set(value)

    def observe_histogram(self, metric_name: str, value: float, **labels):
        """Observe a histogram metric."""
        if metric_name in self._metrics:
            with self._lock:
                self._labeled(metric_name, labels).observe(value)


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
