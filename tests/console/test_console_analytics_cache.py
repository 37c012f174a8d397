from decimal import Decimal

import pytest

from boudoir_console.app.analytics_cache import (
    AnalyticsCache,
    OverviewResult,
    RevenueResult,
    UsersResult,
    decode_result,
)

PAYLOADS = {
    "overview": {
        "kind": "overview",
        "period_days": 30,
        "total_users": 12,
        "total_articles": 40,
        "active_users": 7,
        "total_sales": 3,
        "total_revenue": "1500.00",
        "conversion_rate": 25.0,
        "pending_moderation": 2,
        "top_articles": [],
    },
    "users": {
        "kind": "users",
        "period_days": 30,
        "total_users": 12,
        "active_users": 4,
        "retention_rate": 33.33,
        "new_users_this_period": 5,
        "by_role": [{"label": "SELLER", "count": 4}, {"label": "BUYER", "count": 8}],
        "by_status": [{"label": "ACTIVE", "count": 12}],
    },
    "revenue": {
        "kind": "revenue",
        "period_days": 30,
        "total_revenue": "5000.00",
        "transaction_count": 2,
        "current_month_revenue": "3000.00",
        "last_month_revenue": "2000.00",
        "growth_rate": 50.0,
        "by_method": [{"method": "MOBILE_MONEY", "count": 1, "revenue": "3000.00"}],
    },
}


class _Clock:
    def __init__(self) -> None:
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value


class _Fetcher:
    def __init__(self) -> None:
        self.calls = []

    def __call__(self, endpoint, period):
        self.calls.append((endpoint, period))
        return PAYLOADS[endpoint]


def test_decode_result_by_kind() -> None:
    overview = decode_result(PAYLOADS["overview"])
    users = decode_result(PAYLOADS["users"])
    revenue = decode_result(PAYLOADS["revenue"])

    assert isinstance(overview, OverviewResult)
    assert overview.total_revenue == Decimal("1500.00")
    assert isinstance(users, UsersResult)
    assert users.by_role == {"SELLER": 4, "BUYER": 8}
    assert isinstance(revenue, RevenueResult)
    assert revenue.by_method == {"MOBILE_MONEY": Decimal("3000.00")}


def test_decode_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        decode_result({"kind": "sales"})


def test_entries_expire_after_endpoint_ttl() -> None:
    clock = _Clock()
    fetcher = _Fetcher()
    cache = AnalyticsCache(fetch=fetcher, now=clock)

    first = cache.get("revenue")
    clock.value += 119
    assert cache.get("revenue") is first
    clock.value += 1
    cache.get("revenue")

    assert fetcher.calls == [("revenue", 30), ("revenue", 30)]


def test_period_is_part_of_the_key_and_force_refetches() -> None:
    fetcher = _Fetcher()
    cache = AnalyticsCache(fetch=fetcher, now=_Clock())

    cache.get("users", 7)
    cache.get("users", 30)
    cache.get("users", 7, force=True)

    assert fetcher.calls == [("users", 7), ("users", 30), ("users", 7)]
    assert len(cache) == 2


def test_invalidate_one_endpoint_or_all() -> None:
    cache = AnalyticsCache(fetch=_Fetcher(), now=_Clock(), ttl_seconds={"overview": 10})
    cache.get("overview")
    cache.get("users")

    cache.invalidate("overview")
    assert cache.peek("overview", 30) is None
    assert cache.peek("users", 30) is not None

    cache.invalidate()
    assert len(cache) == 0


def test_unknown_endpoint_rejected() -> None:
    cache = AnalyticsCache(fetch=_Fetcher())

    with pytest.raises(ValueError):
        cache.get("sales")
