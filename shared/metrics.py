"""
Shared metrics configuration for the pickup catalog client.
"""

from typing import Any, Dict, Optional
from prometheus_client import CollectorRegistry, Counter, Histogram


class CatalogMetrics:
    """Prometheus metrics for catalog cache decisions and fetches."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up cache and fetch metrics."""
        self._metrics["catalog_cache_hits_total"] = Counter(
            "catalog_cache_hits_total",
            "Total catalog queries served from the cached snapshot",
            registry=self.registry
        )

        self._metrics["catalog_cache_misses_total"] = Counter(
            "catalog_cache_misses_total",
            "Total catalog queries that required a fetch",
            registry=self.registry
        )

        self._metrics["catalog_fetch_total"] = Counter(
            "catalog_fetch_total",
            "Total catalog fetches",
            ["status"],
            registry=self.registry
        )

        self._metrics["catalog_fetch_duration_seconds"] = Histogram(
            "catalog_fetch_duration_seconds",
            "Catalog fetch duration in seconds",
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_cache_hit(self):
        self._metrics["catalog_cache_hits_total"].inc()

    def record_cache_miss(self):
        self._metrics["catalog_cache_misses_total"].inc()

    def record_fetch(self, status: str, duration: float):
        """Record the outcome and duration of one catalog fetch."""
        self._metrics["catalog_fetch_total"].labels(status=status).inc()
        self._metrics["catalog_fetch_duration_seconds"].observe(duration)
