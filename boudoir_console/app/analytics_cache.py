"""Client-side cache for the admin analytics endpoints.

Entries are keyed by ``(endpoint, period)`` and expire after a per-endpoint
TTL. Payloads are decoded on their ``kind`` into the result types below so
dashboard code never indexes raw dicts.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Union

ANALYTICS_TTL_SECONDS: dict[str, float] = {
    "overview": 180.0,
    "users": 300.0,
    "articles": 240.0,
    "revenue": 120.0,
    "activities": 60.0,
}


def _decimal(value: Any) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


@dataclass(frozen=True)
class OverviewResult:
    period_days: int
    total_users: int
    total_articles: int
    active_users: int
    total_sales: int
    total_revenue: Decimal
    conversion_rate: float
    pending_moderation: int
    top_articles: list[dict[str, Any]] = field(default_factory=list)
    kind: str = "overview"


@dataclass(frozen=True)
class UsersResult:
    period_days: int
    total_users: int
    active_users: int
    retention_rate: float
    new_users_this_period: int
    by_role: dict[str, int] = field(default_factory=dict)
    by_status: dict[str, int] = field(default_factory=dict)
    kind: str = "users"


@dataclass(frozen=True)
class ArticlesResult:
    period_days: int
    total_articles: int
    total_views: int
    average_price: Decimal | None
    by_status: dict[str, int] = field(default_factory=dict)
    by_category: list[dict[str, Any]] = field(default_factory=list)
    kind: str = "articles"


@dataclass(frozen=True)
class RevenueResult:
    period_days: int
    total_revenue: Decimal
    transaction_count: int
    current_month_revenue: Decimal
    last_month_revenue: Decimal
    growth_rate: float
    by_method: dict[str, Decimal] = field(default_factory=dict)
    kind: str = "revenue"


@dataclass(frozen=True)
class ActivitiesResult:
    period_days: int
    total_activities: int
    unique_users: int
    action_breakdown: dict[str, int] = field(default_factory=dict)
    activities: list[dict[str, Any]] = field(default_factory=list)
    kind: str = "activities"


AnalyticsResult = Union[OverviewResult, UsersResult, ArticlesResult, RevenueResult, ActivitiesResult]


def _label_counts(items: list[dict[str, Any]] | None) -> dict[str, int]:
    return {str(item["label"]): int(item["count"]) for item in items or []}


def decode_result(payload: dict[str, Any]) -> AnalyticsResult:
    kind = payload.get("kind")
    period = int(payload.get("period_days", 0))
    if kind == "overview":
        return OverviewResult(
            period_days=period,
            total_users=int(payload["total_users"]),
            total_articles=int(payload["total_articles"]),
            active_users=int(payload["active_users"]),
            total_sales=int(payload["total_sales"]),
            total_revenue=_decimal(payload.get("total_revenue")),
            conversion_rate=float(payload.get("conversion_rate", 0)),
            pending_moderation=int(payload.get("pending_moderation", 0)),
            top_articles=list(payload.get("top_articles") or []),
        )
    if kind == "users":
        return UsersResult(
            period_days=period,
            total_users=int(payload["total_users"]),
            active_users=int(payload["active_users"]),
            retention_rate=float(payload.get("retention_rate", 0)),
            new_users_this_period=int(payload.get("new_users_this_period", 0)),
            by_role=_label_counts(payload.get("by_role")),
            by_status=_label_counts(payload.get("by_status")),
        )
    if kind == "articles":
        average = payload.get("average_price")
        return ArticlesResult(
            period_days=period,
            total_articles=int(payload["total_articles"]),
            total_views=int(payload.get("total_views", 0)),
            average_price=_decimal(average) if average is not None else None,
            by_status=_label_counts(payload.get("by_status")),
            by_category=list(payload.get("by_category") or []),
        )
    if kind == "revenue":
        return RevenueResult(
            period_days=period,
            total_revenue=_decimal(payload.get("total_revenue")),
            transaction_count=int(payload.get("transaction_count", 0)),
            current_month_revenue=_decimal(payload.get("current_month_revenue")),
            last_month_revenue=_decimal(payload.get("last_month_revenue")),
            growth_rate=float(payload.get("growth_rate", 0)),
            by_method={str(item["method"]): _decimal(item["revenue"]) for item in payload.get("by_method") or []},
        )
    if kind == "activities":
        return ActivitiesResult(
            period_days=period,
            total_activities=int(payload.get("total_activities", 0)),
            unique_users=int(payload.get("unique_users", 0)),
            action_breakdown=_label_counts(payload.get("action_breakdown")),
            activities=list(payload.get("activities") or []),
        )
    raise ValueError(f"unknown analytics result kind: {kind!r}")


@dataclass(frozen=True)
class CacheEntry:
    value: AnalyticsResult
    expires_at: float


class AnalyticsCache:
    def __init__(
        self,
        fetch: Callable[[str, int], dict[str, Any]],
        ttl_seconds: dict[str, float] | None = None,
        now: Callable[[], float] | None = None,
    ) -> None:
        self._fetch = fetch
        self.ttl_seconds = dict(ANALYTICS_TTL_SECONDS)
        self.ttl_seconds.update(ttl_seconds or {})
        self._now = now or time.monotonic
        self._entries: dict[tuple[str, int], CacheEntry] = {}

    def _ttl(self, endpoint: str) -> float:
        if endpoint not in self.ttl_seconds:
            raise ValueError(f"unknown analytics endpoint: {endpoint}")
        return self.ttl_seconds[endpoint]

    def peek(self, endpoint: str, period: int) -> AnalyticsResult | None:
        key = (endpoint, period)
        entry = self._entries.get(key)
        if not entry:
            return None
        if entry.expires_at <= self._now():
            self._entries.pop(key, None)
            return None
        return entry.value

    def get(self, endpoint: str, period: int = 30, *, force: bool = False) -> AnalyticsResult:
        ttl = self._ttl(endpoint)
        if not force:
            cached = self.peek(endpoint, period)
            if cached is not None:
                return cached
        result = decode_result(self._fetch(endpoint, period))
        self._entries[(endpoint, period)] = CacheEntry(value=result, expires_at=self._now() + ttl)
        return result

    def invalidate(self, endpoint: str | None = None) -> None:
        if endpoint is None:
            self._entries.clear()
            return
        for key in [key for key in self._entries if key[0] == endpoint]:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
