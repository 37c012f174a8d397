from datetime import datetime
from decimal import Decimal

from app.boudoir.db.models import Payment
from app.boudoir.services.analytics import AnalyticsService
from tests.marketplace_helpers import auth_headers, create_article, create_category, create_user


def _paid(db_session, article, seller, *, amount, method="MOBILE_MONEY", when=None):
    when = when or datetime.utcnow()
    payment = Payment(
        article_id=article.id,
        user_id=seller.id,
        amount=Decimal(amount),
        method=method,
        status="COMPLETED",
        created_at=when,
        completed_at=when,
    )
    db_session.add(payment)
    db_session.commit()
    return payment


def test_analytics_requires_admin(client, db_session):
    moderator = create_user(db_session, role="MODERATOR")

    response = client.get("/api/admin/analytics/overview", headers=auth_headers(client, moderator))

    assert response.status_code == 403


def test_unknown_endpoint_and_period_bounds(client, db_session):
    admin = create_user(db_session, role="ADMIN")
    headers = auth_headers(client, admin)

    assert client.get("/api/admin/analytics/sales", headers=headers).status_code == 422
    assert client.get("/api/admin/analytics/users", params={"period": 0}, headers=headers).status_code == 422


def test_overview_result(client, db_session):
    admin = create_user(db_session, role="ADMIN")
    seller = create_user(db_session, role="SELLER")
    category = create_category(db_session)
    first = create_article(db_session, seller, category, title="Caftan", views=12)
    create_article(db_session, seller, category, title="Pagne", status="PENDING_MODERATION", is_available=False)
    _paid(db_session, first, seller, amount="500")

    response = client.get("/api/admin/analytics/overview", headers=auth_headers(client, admin))

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["kind"] == "overview"
    assert result["period_days"] == 30
    assert result["total_users"] == 2
    assert result["total_articles"] == 2
    assert result["total_sales"] == 1
    assert Decimal(str(result["total_revenue"])) == Decimal("500")
    assert result["pending_moderation"] == 1
    assert result["active_users"] == 1
    assert result["conversion_rate"] == 50.0
    assert result["top_articles"][0]["title"] == "Caftan"


def test_users_articles_and_activities_results(client, db_session):
    admin = create_user(db_session, role="ADMIN")
    seller = create_user(db_session, role="SELLER")
    create_user(db_session, role="BUYER", status="SUSPENDED")
    category = create_category(db_session, name="Soirée")
    create_article(db_session, seller, category, price="1000", condition="GOOD")
    create_article(db_session, seller, category, price="3000", condition="EXCELLENT")
    headers = auth_headers(client, admin)

    users = client.get("/api/admin/analytics/users", params={"period": 7}, headers=headers).json()["result"]
    assert users["kind"] == "users"
    assert {item["label"]: item["count"] for item in users["by_role"]} == {"ADMIN": 1, "BUYER": 1, "SELLER": 1}
    assert {item["label"]: item["count"] for item in users["by_status"]} == {"ACTIVE": 2, "SUSPENDED": 1}
    assert users["most_active_sellers"][0]["articles_count"] == 2

    articles = client.get("/api/admin/analytics/articles", headers=headers).json()["result"]
    assert articles["kind"] == "articles"
    assert articles["total_articles"] == 2
    assert Decimal(str(articles["average_price"])) == Decimal("2000.00")
    assert articles["by_category"][0]["category"] == "Soirée"

    activities = client.get("/api/admin/analytics/activities", params={"action": "LOGIN"}, headers=headers).json()["result"]
    assert activities["kind"] == "activities"
    assert activities["activities"][0]["action"] == "LOGIN"
    assert activities["activities"][0]["user_role"] == "ADMIN"
    assert {item["label"] for item in activities["action_breakdown"]} == {"LOGIN"}


def test_revenue_month_over_month_growth(client, db_session):
    seller = create_user(db_session, role="SELLER")
    category = create_category(db_session)
    march = create_article(db_session, seller, category)
    february = create_article(db_session, seller, category)
    _paid(db_session, march, seller, amount="3000", when=datetime(2026, 3, 5, 10, 0))
    _paid(db_session, february, seller, amount="2000", method="CARD", when=datetime(2026, 2, 10, 10, 0))

    result = AnalyticsService(db_session, now=datetime(2026, 3, 15, 12, 0)).revenue(60)

    assert result.kind == "revenue"
    assert result.transaction_count == 2
    assert result.total_revenue == Decimal("5000")
    assert result.current_month_revenue == Decimal("3000")
    assert result.last_month_revenue == Decimal("2000")
    assert result.growth_rate == 50.0
    assert {item.method: item.count for item in result.by_method} == {"CARD": 1, "MOBILE_MONEY": 1}
    assert result.top_sellers[0].seller_id == seller.id
