"""Prometheus metrics for the catalog service."""

import platform
import time
from contextlib import contextmanager

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, Info


class CatalogMetrics:
    """
    Metric instruments bound to one registry.

    Each application builds its own instance and hands it to the middleware
    and services, so several apps (or tests) never collide on a shared
    process-wide registry.
    """

    def __init__(self, registry: CollectorRegistry | None = None, version: str = "1.0.0",
                 environment: str = "production"):
        self.registry = registry or CollectorRegistry()

        self.app_info = Info(
            "application",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({
            "version": version,
            "environment": environment,
            "python_version": platform.python_version(),
        })

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "status", "route"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            ["method", "status", "route"],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10],
            registry=self.registry,
        )

        self.active_http_connections = Gauge(
            "http_active_connections",
            "Number of active HTTP connections",
            registry=self.registry,
        )

        self.db_query_duration = Histogram(
            "database_query_duration_seconds",
            "Duration of database queries in seconds",
            ["operation", "table"],
            buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5],
            registry=self.registry,
        )

        self.db_errors_total = Counter(
            "database_errors_total",
            "Total number of failed database operations",
            registry=self.registry,
        )

        self.contact_submissions = Counter(
            "contact_form_submissions_total",
            "Total number of contact form submissions",
            ["status"],
            registry=self.registry,
        )

    def observe_request(self, method: str, status: int, route: str, duration: float):
        labels = {"method": method, "status": str(status), "route": route}
        self.http_requests_total.labels(**labels).inc()
        self.http_request_duration.labels(**labels).observe(duration)

    @contextmanager
    def time_query(self, operation: str, table: str):
        start = time.perf_counter()
        try:
            yield
        except Exception:
            self.db_errors_total.inc()
            raise
        finally:
            self.db_query_duration.labels(operation=operation, table=table).observe(
                time.perf_counter() - start
            )

    def record_contact_submission(self, status: str):
        self.contact_submissions.labels(status=status).inc()
