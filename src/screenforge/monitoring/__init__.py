"""
Engine Monitoring
Prometheus-based metrics for the editing engine
"""

from .metrics import MetricsCollector, metrics_collector

__all__ = [
    "MetricsCollector",
    "metrics_collector",
]
