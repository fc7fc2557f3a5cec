"""Prometheus instrumentation for outbound API calls.

Metrics are registered on a dedicated registry rather than the global one so
that several clients (and tests) can coexist in one process.
"""

import prometheus_client
import prometheus_client.core


class ClientMetrics:
    """Request counters and latency histogram for a Client."""

    def __init__(
        self,
        registry: prometheus_client.core.CollectorRegistry | None = None,
        namespace: str = "idp_client",
    ):
        """Initialize and register the metrics.

        Args:
            registry: Registry to register on. A private registry is created
                when omitted.
            namespace: Metric name prefix.
        """
        self.registry = (
            registry if registry is not None else prometheus_client.core.CollectorRegistry()
        )
        self.requests = prometheus_client.Counter(
            "requests",
            "API requests by HTTP method and status class",
            labelnames=("method", "status_class"),
            namespace=namespace,
            registry=self.registry,
        )
        self.duration = prometheus_client.Histogram(
            "request_duration_seconds",
            "Time from dispatch to fully read response",
            labelnames=("method",),
            namespace=namespace,
            registry=self.registry,
        )
        self.errors = prometheus_client.Counter(
            "request_errors",
            "API requests that failed before a response was received",
            labelnames=("method", "kind"),
            namespace=namespace,
            registry=self.registry,
        )

    def observe_response(self, method: str, status_code: int, duration: float) -> None:
        self.requests.labels(method=method, status_class=f"{status_code // 100}xx").inc()
        self.duration.labels(method=method).observe(duration)

    def observe_error(self, method: str, error: Exception) -> None:
        self.errors.labels(method=method, kind=type(error).__name__).inc()
