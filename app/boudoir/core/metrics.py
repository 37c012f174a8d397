from __future__ import annotations

from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST

from app.boudoir.core.config import settings


@dataclass
class MetricsSnapshot:
    content: bytes
    content_type: str


class Metrics:
    def __init__(self) -> None:
        self.enabled = settings.METRICS_ENABLED
        self._registry = None
        self._http_requests_total = None
        self._http_request_duration_ms = None
        self._db_retry_total = None
        self._db_unavailable_total = None
        self._permission_denied_total = None
        self._moderation_decisions_total = None
        if self.enabled:
            self._initialize_registry()

    def _initialize_registry(self) -> None:
        self._registry = CollectorRegistry()
        self._http_requests_total = Counter(
            "http_requests_total",
            "HTTP requests by route/method/status.",
            ["route", "method", "status"],
            registry=self._registry,
        )
        self._http_request_duration_ms = Histogram(
            "http_request_duration_ms",
            "HTTP request latency in milliseconds.",
            ["route", "method", "status"],
            buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000, 10000),
            registry=self._registry,
        )
        self._db_retry_total = Counter(
            "db_retry_total",
            "Database operations retried after a transient connection error.",
            ["operation"],
            registry=self._registry,
        )
        self._db_unavailable_total = Counter(
            "db_unavailable_total",
            "Requests answered with DB_UNAVAILABLE after retries were exhausted.",
            registry=self._registry,
        )
        self._permission_denied_total = Counter(
            "permission_denied_total",
            "Role checks that denied access.",
            registry=self._registry,
        )
        self._moderation_decisions_total = Counter(
            "moderation_decisions_total",
            "Moderation decisions by action.",
            ["action"],
            registry=self._registry,
        )

    def reset(self) -> None:
        if not self.enabled:
            return
        self._initialize_registry()

    def record_http_request(self, *, route: str, method: str, status_code: int, latency_ms: float) -> None:
        if not self.enabled:
            return
        labels = {"route": route, "method": method, "status": str(status_code)}
        self._http_requests_total.labels(**labels).inc()
        self._http_request_duration_ms.labels(**labels).observe(latency_ms)

    def increment_db_retry(self, operation: str) -> None:
        if not self.enabled:
            return
        self._db_retry_total.labels(operation=operation).inc()

    def increment_db_unavailable(self) -> None:
        if not self.enabled:
            return
        self._db_unavailable_total.inc()

    def increment_permission_denied(self) -> None:
        if not self.enabled:
            return
        self._permission_denied_total.inc()

    def increment_moderation_decision(self, action: str) -> None:
        if not self.enabled:
            return
        self._moderation_decisions_total.labels(action=action).inc()

    def render(self) -> MetricsSnapshot:
        if not self.enabled:
            return MetricsSnapshot(content=b"metrics_disabled\n", content_type="text/plain")
        return MetricsSnapshot(content=generate_latest(self._registry), content_type=CONTENT_TYPE_LATEST)


metrics = Metrics()
