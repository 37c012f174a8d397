from app.boudoir.db.models import Notification
from tests.marketplace_helpers import auth_headers, create_article, create_category, create_user


def test_favorite_roundtrip_notifies_seller(client, db_session):
    seller = create_user(db_session, role="SELLER")
    buyer = create_user(db_session, name="Khady")
    article = create_article(db_session, seller, create_category(db_session), title="Robe de soirée")
    headers = auth_headers(client, buyer)

    added = client.post(f"/api/articles/{article.id}/favorite", headers=headers)
    assert added.status_code == 201
    assert added.json()["is_favorited"] is True

    duplicate = client.post(f"/api/articles/{article.id}/favorite", headers=headers)
    assert duplicate.status_code == 400
    assert duplicate.json()["code"] == "ALREADY_FAVORITED"

    favorites = client.get("/api/user/favorites", headers=headers).json()
    assert [item["title"] for item in favorites["articles"]] == ["Robe de soirée"]
    assert favorites["articles"][0]["is_favorited"] is True

    db_session.expire_all()
    notification = db_session.query(Notification).one()
    assert notification.user_id == seller.id
    assert notification.type == "ARTICLE_LIKED"
    assert "Khady" in notification.message

    removed = client.delete(f"/api/articles/{article.id}/favorite", headers=headers)
    assert removed.status_code == 200
    assert removed.json()["is_favorited"] is False

    missing = client.delete(f"/api/articles/{article.id}/favorite", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["code"] == "FAVORITE_NOT_FOUND"


def test_cannot_favorite_unpublished_article(client, db_session):
    seller = create_user(db_session, role="SELLER")
    buyer = create_user(db_session)
    article = create_article(db_session, seller, create_category(db_session), status="PENDING_MODERATION", is_available=False)

    response = client.post(f"/api/articles/{article.id}/favorite", headers=auth_headers(client, buyer))

    assert response.status_code == 404


def test_favorites_require_auth(client):
    assert client.get("/api/user/favorites").status_code == 401
