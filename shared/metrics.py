"""
Shared metrics configuration for the AciTracker Gateway.
"""

from typing import Any, Dict
import time
from contextlib import contextmanager

from prometheus_client import CollectorRegistry, Counter, Histogram, start_http_server


class MetricsCollector:
    """Prometheus metrics for one service, registered on its own registry.

    A private registry per collector lets several services coexist in one
    process (tests build many).
    """

    def __init__(self, service_name: str, registry: CollectorRegistry):
        self.service_name = service_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )
        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )

        # Rejected requests, by error code
        self._metrics["errors_total"] = Counter(
            "errors_total",
            "Total errors",
            ["error_type", "service"],
            registry=self.registry
        )

        # Cache and upstream
        for name, description in (
            ("cache_hits_total", "Total cache hits"),
            ("cache_misses_total", "Total cache misses"),
            ("upstream_errors_total", "Total failed upstream round trips"),
        ):
            self._metrics[name] = Counter(name, description, ["route"], registry=self.registry)

        self._metrics["upstream_requests_total"] = Counter(
            "upstream_requests_total",
            "Total upstream round trips",
            ["route", "status_code"],
            registry=self.registry
        )
        self._metrics["upstream_request_duration_seconds"] = Histogram(
            "upstream_request_duration_seconds",
            "Upstream request duration in seconds",
            ["route"],
            registry=self.registry
        )

    def start_metrics_server(self, port: int):
        """Expose this collector's registry on a separate port."""
        start_http_server(port, registry=self.registry)

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()
        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def record_error(self, error_type: str):
        self._metrics["errors_total"].labels(error_type=error_type, service=self.service_name).inc()

    @contextmanager
    def time_operation(self, operation_name: str, **labels):
        """Observe the duration of the wrapped block, even when it raises."""
        start_time = time.time()
        try:
            yield
        finally:
            self._metrics[operation_name].labels(**labels).observe(time.time() - start_time)

    def increment_counter(self, metric_name: str, **labels):
        self._metrics[metric_name].labels(**labels).inc()

    def get_counter_value(self, metric_name: str, **labels) -> float:
        """Current value of a counter sample, 0.0 if it was never incremented."""
        value = self.registry.get_sample_value(metric_name, labels)
        return value if value is not None else 0.0

    def get_histogram_count(self, metric_name: str, **labels) -> float:
        value = self.registry.get_sample_value(f"{metric_name}_count", labels)
        return value if value is not None else 0.0


def get_metrics_collector(service_name: str, registry: CollectorRegistry) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
