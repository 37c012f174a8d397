from app.boudoir.db.models import Follow, ModerationLog, Notification
from tests.marketplace_helpers import auth_headers, create_article, create_category, create_user, days_ago


def _pending(db_session, seller, **kwargs):
    return create_article(
        db_session,
        seller,
        kwargs.pop("category", None) or create_category(db_session),
        status="PENDING_MODERATION",
        is_available=False,
        **kwargs,
    )


def test_queue_lists_pending_oldest_first(client, db_session):
    seller = create_user(db_session, role="SELLER")
    moderator = create_user(db_session, role="MODERATOR")
    category = create_category(db_session)
    _pending(db_session, seller, category=category, title="Récent", created_at=days_ago(1))
    _pending(db_session, seller, category=category, title="Ancien", created_at=days_ago(4))
    create_article(db_session, seller, category, title="Déjà en ligne")

    response = client.get("/api/moderation", headers=auth_headers(client, moderator))

    assert response.status_code == 200
    payload = response.json()
    assert [item["title"] for item in payload["articles"]] == ["Ancien", "Récent"]
    assert payload["total"] == 2


def test_queue_forbidden_for_sellers(client, db_session):
    seller = create_user(db_session, role="SELLER")

    response = client.get("/api/moderation", headers=auth_headers(client, seller))

    assert response.status_code == 403
    assert response.json()["code"] == "PERMISSION_DENIED"


def test_approve_publishes_and_notifies(client, db_session):
    seller = create_user(db_session, role="SELLER", name="Awa")
    follower = create_user(db_session, name="Fatou")
    moderator = create_user(db_session, role="MODERATOR")
    db_session.add(Follow(follower_id=follower.id, following_id=seller.id))
    db_session.commit()
    article = _pending(db_session, seller, title="Boubou wax")

    response = client.post(
        "/api/moderation",
        json={"articleId": str(article.id), "action": "APPROVE", "notes": "RAS"},
        headers=auth_headers(client, moderator),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["action"] == "APPROVE"
    assert body["article"]["status"] == "APPROVED"
    assert body["article"]["is_available"] is True
    assert body["article"]["published_at"] is not None

    db_session.expire_all()
    logs = db_session.query(ModerationLog).all()
    assert [(log.action, log.notes) for log in logs] == [("APPROVE", "RAS")]
    by_user = {(row.user_id, row.type) for row in db_session.query(Notification).all()}
    assert by_user == {(seller.id, "ARTICLE_APPROVED"), (follower.id, "NEW_ARTICLE_FROM_FOLLOWED")}

    assert client.get(f"/api/articles/{article.id}").status_code == 200


def test_reject_requires_reason(client, db_session):
    seller = create_user(db_session, role="SELLER")
    admin = create_user(db_session, role="ADMIN")
    article = _pending(db_session, seller)
    headers = auth_headers(client, admin)

    missing = client.post("/api/moderation", json={"article_id": str(article.id), "action": "REJECT"}, headers=headers)
    assert missing.status_code == 422

    response = client.post(
        "/api/moderation",
        json={"article_id": str(article.id), "action": "REJECT", "rejectionReason": "Photos floues"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["article"]["status"] == "REJECTED"
    assert response.json()["article"]["rejection_reason"] == "Photos floues"

    db_session.expire_all()
    notification = db_session.query(Notification).one()
    assert notification.type == "ARTICLE_REJECTED"
    assert "Photos floues" in notification.message


def test_moderation_only_acts_on_pending_articles(client, db_session):
    seller = create_user(db_session, role="SELLER")
    moderator = create_user(db_session, role="MODERATOR")
    article = create_article(db_session, seller, create_category(db_session), status="PENDING_PAYMENT", is_available=False)
    headers = auth_headers(client, moderator)

    response = client.post("/api/moderation", json={"article_id": str(article.id), "action": "APPROVE"}, headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "ARTICLE_NOT_PENDING_MODERATION"
    assert response.json()["details"] == {"status": "PENDING_PAYMENT"}

    unknown = client.post(
        "/api/moderation",
        json={"article_id": "4f7f2c5e-9cfd-4efa-a575-2a0ad38df4e8", "action": "APPROVE"},
        headers=headers,
    )
    assert unknown.status_code == 404


def test_moderation_history_admin_only_with_filter(client, db_session):
    seller = create_user(db_session, role="SELLER")
    admin = create_user(db_session, role="ADMIN")
    moderator = create_user(db_session, role="MODERATOR", name="Modo")
    first = _pending(db_session, seller, title="Premier")
    second = _pending(db_session, seller, title="Second")
    mod_headers = auth_headers(client, moderator)
    client.post("/api/moderation", json={"article_id": str(first.id), "action": "APPROVE"}, headers=mod_headers)
    client.post(
        "/api/moderation",
        json={"article_id": str(second.id), "action": "REJECT", "rejection_reason": "Hors sujet"},
        headers=mod_headers,
    )

    assert client.get("/api/admin/moderation-history", headers=mod_headers).status_code == 403

    admin_headers = auth_headers(client, admin)
    everything = client.get("/api/admin/moderation-history", headers=admin_headers).json()
    assert everything["pagination"]["total"] == 2

    rejected = client.get("/api/admin/moderation-history", params={"action": "REJECT"}, headers=admin_headers).json()
    assert len(rejected["logs"]) == 1
    log = rejected["logs"][0]
    assert log["article_title"] == "Second"
    assert log["moderator_name"] == "Modo"
    assert log["rejection_reason"] == "Hors sujet"
