"""
Metrics Collection
Prometheus metrics for editing activity
"""

import time
from prometheus_client import Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the editing engine.
    """

    def __init__(self) -> None:
        # Operation metrics
        self.operations_applied = Counter(
            "editor_operations_applied_total",
            "Total number of operations applied to a document",
            ["op"],
        )
        self.operations_skipped = Counter(
            "editor_operations_skipped_total",
            "Total number of operations skipped (unknown or unresolved)",
            ["op", "reason"],
        )

        # Interpretation metrics
        self.interpretations_total = Counter(
            "editor_interpretations_total",
            "Total number of command interpretations",
            ["strategy", "status"],
        )
        self.interpretation_duration = Histogram(
            "editor_interpretation_duration_seconds",
            "Command interpretation duration in seconds",
            ["strategy"],
            buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
        )

        # History metrics
        self.history_actions = Counter(
            "editor_history_actions_total",
            "Total number of history actions",
            ["action"],
        )

        # Blueprint metrics
        self.blueprint_imports = Counter(
            "editor_blueprint_imports_total",
            "Total number of blueprint imports",
            ["status"],
        )
        self.blueprint_screens = Histogram(
            "editor_blueprint_screens",
            "Screens built per blueprint import",
            buckets=[1, 2, 3, 5, 8, 13, 21, 50],
        )

        # Persistence metrics
        self.persistence_requests = Counter(
            "editor_persistence_requests_total",
            "Total number of persistence requests",
            ["method", "status"],
        )

        # Error metrics
        self.errors_total = Counter(
            "editor_errors_total",
            "Total number of errors",
            ["error_type", "component"],
        )

        # System metrics
        self.uptime = Gauge(
            "editor_uptime_seconds",
            "Engine uptime in seconds",
        )
        self.start_time = time.time()

    def record_operation(self, op: str) -> None:
        """Record an applied operation."""
        self.operations_applied.labels(op=op).inc()

    def record_skipped_operation(self, op: str, reason: str) -> None:
        """Record a skipped operation."""
        self.operations_skipped.labels(op=op, reason=reason).inc()

    def record_interpretation(self, strategy: str, status: str, duration: float) -> None:
        """Record a command interpretation."""
        self.interpretations_total.labels(strategy=strategy, status=status).inc()
        self.interpretation_duration.labels(strategy=strategy).observe(duration)

    def record_history(self, action: str) -> None:
        """Record an undo/redo/commit/reset."""
        self.history_actions.labels(action=action).inc()

    def record_blueprint_import(self, status: str, screens: int = 0) -> None:
        """Record a blueprint import."""
        self.blueprint_imports.labels(status=status).inc()
        if screens:
            self.blueprint_screens.observe(screens)

    def record_persistence(self, method: str, status: str) -> None:
        """Record a persistence request."""
        self.persistence_requests.labels(method=method, status=status).inc()

    def record_error(self, error_type: str, component: str) -> None:
        """Record an error."""
        self.errors_total.labels(error_type=error_type, component=component).inc()

    def update_uptime(self) -> None:
        """Update the uptime metric."""
        self.uptime.set(time.time() - self.start_time)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        self.update_uptime()
        return generate_latest()


# Global metrics collector instance
metrics_collector = MetricsCollector()
