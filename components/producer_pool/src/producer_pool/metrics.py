"""Prometheus metrics for the producer pool."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram


class PoolMetrics:
    """
    Collectors for one pool, registered on ``registry``.

    Defaults to a private registry so several pools can live in one process;
    pass ``prometheus_client.REGISTRY`` to expose them on the default endpoint.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        # Counters
        self.producers_created_total = Counter(
            "producer_pool_producers_created_total",
            "Producer handles created",
            ["mode"],
            registry=self.registry,
        )
        self.requests_sent_total = Counter(
            "producer_pool_requests_sent_total",
            "Calls made on producer handles",
            ["mode", "call"],  # send | multi_send | enqueue
            registry=self.registry,
        )
        self.messages_sent_total = Counter(
            "producer_pool_messages_sent_total",
            "Payloads handed to producer handles",
            ["mode"],
            registry=self.registry,
        )
        self.groups_dropped_total = Counter(
            "producer_pool_groups_dropped_total",
            "Broker groups skipped because no producer is registered",
            ["mode"],
            registry=self.registry,
        )
        self.delivery_errors_total = Counter(
            "producer_pool_delivery_errors_total",
            "Broker groups whose dispatch raised",
            ["mode"],
            registry=self.registry,
        )
        self.close_errors_total = Counter(
            "producer_pool_close_errors_total",
            "Producer handles that failed to close",
            ["mode"],
            registry=self.registry,
        )

        # Gauges
        self.producers_registered = Gauge(
            "producer_pool_producers_registered",
            "Producer handles currently registered",
            ["mode"],
            registry=self.registry,
        )

        # Histograms
        self.dispatch_duration_seconds = Histogram(
            "producer_pool_dispatch_duration_seconds",
            "Time spent dispatching one broker group",
            ["mode"],
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0),
            registry=self.registry,
        )

    def value(self, name: str, labels: dict[str, str] | None = None) -> float:
        """Current sample value, 0.0 when the series has not been observed yet."""
        sample = self.registry.get_sample_value(name, labels or {})
        return sample if sample is not None else 0.0
