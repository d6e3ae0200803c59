"""
Metrics Collection
Prometheus metrics for pipeline performance tracking
"""

import time
from contextlib import contextmanager
from typing import Callable, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the generation pipeline.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry or REGISTRY

        # Pipeline metrics
        self.requests_total = Counter(
            "intentui_requests_total",
            "Total number of pipeline requests",
            ["status", "mode"],
            registry=self.registry,
        )
        self.stage_duration = Histogram(
            "intentui_stage_duration_seconds",
            "Pipeline stage duration in seconds",
            ["stage"],
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=self.registry,
        )

        # Patch metrics
        self.patch_operations_total = Counter(
            "intentui_patch_operations_total",
            "Total number of patch operations applied",
            ["kind"],
            registry=self.registry,
        )
        self.patch_fallbacks_total = Counter(
            "intentui_patch_fallbacks_total",
            "Total number of patch failures recovered by full compilation",
            registry=self.registry,
        )

        # Error metrics
        self.errors_total = Counter(
            "intentui_errors_total",
            "Total number of fatal pipeline errors",
            ["stage"],
            registry=self.registry,
        )

        # System metrics
        self.uptime = Gauge(
            "intentui_uptime_seconds",
            "Process uptime in seconds",
            registry=self.registry,
        )
        self.start_time = time.time()

    def record_request(self, status: str, mode: str) -> None:
        """Record a finished pipeline request."""
        self.requests_total.labels(status=status, mode=mode).inc()

    def record_stage(self, stage: str, duration: float) -> None:
        """Record a stage duration."""
        self.stage_duration.labels(stage=stage).observe(duration)

    def record_patch_operation(self, kind: str) -> None:
        self.patch_operations_total.labels(kind=kind).inc()

    def record_patch_fallback(self) -> None:
        self.patch_fallbacks_total.inc()

    def record_error(self, stage: str) -> None:
        """Record a fatal error."""
        self.errors_total.labels(stage=stage).inc()

    def update_uptime(self) -> None:
        """Update the uptime metric."""
        self.uptime.set(time.time() - self.start_time)

    @contextmanager
    def measure_duration(self, callback: Callable[[float], None]):
        """Context manager to measure operation duration."""
        start = time.perf_counter()
        try:
            yield
        finally:
            callback(time.perf_counter() - start)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        self.update_uptime()
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
