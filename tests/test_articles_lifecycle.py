from app.boudoir.db.models import Article, Payment
from tests.marketplace_helpers import article_payload, auth_headers, create_article, create_category, create_user


def test_seller_creates_article_pending_payment(client, db_session):
    seller = create_user(db_session, role="SELLER")
    category = create_category(db_session)

    response = client.post("/api/articles", json=article_payload(category.id), headers=auth_headers(client, seller))

    assert response.status_code == 201
    article = response.json()["article"]
    assert article["status"] == "PENDING_PAYMENT"
    assert article["is_available"] is False
    assert article["images"] == ["https://cdn.example.com/boubou.jpg"]
    assert article["seller"]["id"] == str(seller.id)


def test_buyer_cannot_create_article(client, db_session):
    buyer = create_user(db_session, role="BUYER")
    category = create_category(db_session)

    response = client.post("/api/articles", json=article_payload(category.id), headers=auth_headers(client, buyer))

    assert response.status_code == 403
    payload = response.json()
    assert payload["code"] == "PERMISSION_DENIED"
    assert payload["details"] == {"required_roles": ["SELLER"]}


def test_create_article_validation(client, db_session):
    seller = create_user(db_session, role="SELLER")
    category = create_category(db_session)
    headers = auth_headers(client, seller)

    too_expensive = client.post("/api/articles", json=article_payload(category.id, price="10001"), headers=headers)
    assert too_expensive.status_code == 422
    assert [error["field"] for error in too_expensive.json()["details"]["errors"]] == ["price"]

    no_images = client.post("/api/articles", json=article_payload(category.id, images=[]), headers=headers)
    assert no_images.status_code == 422

    bad_url = client.post("/api/articles", json=article_payload(category.id, images=["ftp://x/y.jpg"]), headers=headers)
    assert bad_url.status_code == 422

    too_many = client.post(
        "/api/articles",
        json=article_payload(category.id, images=[f"https://cdn.example.com/{i}.jpg" for i in range(9)]),
        headers=headers,
    )
    assert too_many.status_code == 422


def test_create_article_unknown_category(client, db_session):
    seller = create_user(db_session, role="SELLER")

    response = client.post(
        "/api/articles",
        json=article_payload("4f7f2c5e-9cfd-4efa-a575-2a0ad38df4e8"),
        headers=auth_headers(client, seller),
    )

    assert response.status_code == 404
    assert response.json()["code"] == "CATEGORY_NOT_FOUND"


def test_payment_moves_article_to_moderation(client, db_session):
    seller = create_user(db_session, role="SELLER")
    category = create_category(db_session)
    headers = auth_headers(client, seller)
    article_id = client.post("/api/articles", json=article_payload(category.id), headers=headers).json()["article"]["id"]

    response = client.post(
        f"/api/articles/{article_id}/payment",
        json={"method": "MOBILE_MONEY", "transaction_id": "OM-123"},
        headers=headers,
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["payment"]["status"] == "COMPLETED"
    assert float(payload["payment"]["amount"]) == 8500
    assert payload["article"]["status"] == "PENDING_MODERATION"

    again = client.post(f"/api/articles/{article_id}/payment", json={"method": "CASH"}, headers=headers)
    assert again.status_code == 400
    assert again.json()["code"] == "ARTICLE_NOT_AWAITING_PAYMENT"


def test_payment_requires_owner(client, db_session):
    seller = create_user(db_session, role="SELLER")
    other = create_user(db_session, role="SELLER")
    article = create_article(db_session, seller, create_category(db_session), status="PENDING_PAYMENT", is_available=False)

    response = client.post(f"/api/articles/{article.id}/payment", json={"method": "CARD"}, headers=auth_headers(client, other))

    assert response.status_code == 403
    assert response.json()["code"] == "ARTICLE_NOT_OWNED"


def test_owner_toggles_availability(client, db_session):
    seller = create_user(db_session, role="SELLER")
    article = create_article(db_session, seller, create_category(db_session))
    headers = auth_headers(client, seller)

    paused = client.patch(f"/api/articles/{article.id}", json={"is_available": False}, headers=headers)
    assert paused.status_code == 200
    assert paused.json()["article"]["is_available"] is False

    listing = client.get("/api/seller/articles", headers=headers).json()["articles"]
    assert listing[0]["display_status"] == "PAUSED"


def test_availability_ignored_before_approval(client, db_session):
    seller = create_user(db_session, role="SELLER")
    article = create_article(db_session, seller, create_category(db_session), status="PENDING_MODERATION", is_available=False)

    response = client.patch(
        f"/api/articles/{article.id}",
        json={"is_available": True, "title": "Nouveau titre"},
        headers=auth_headers(client, seller),
    )

    assert response.status_code == 200
    assert response.json()["article"]["is_available"] is False
    assert response.json()["article"]["title"] == "Nouveau titre"


def test_editing_rejected_article_resubmits(client, db_session):
    seller = create_user(db_session, role="SELLER")
    article = create_article(db_session, seller, create_category(db_session), status="REJECTED", is_available=False)
    article.rejection_reason = "Photos floues"
    db_session.commit()

    response = client.patch(
        f"/api/articles/{article.id}",
        json={"images": ["https://cdn.example.com/nette.jpg"]},
        headers=auth_headers(client, seller),
    )

    body = response.json()["article"]
    assert body["status"] == "PENDING_MODERATION"
    assert body["rejection_reason"] is None


def test_update_requires_owner(client, db_session):
    seller = create_user(db_session, role="SELLER")
    other = create_user(db_session, role="SELLER")
    article = create_article(db_session, seller, create_category(db_session))

    response = client.patch(f"/api/articles/{article.id}", json={"title": "Volé"}, headers=auth_headers(client, other))

    assert response.status_code == 403
    assert response.json()["code"] == "ARTICLE_NOT_OWNED"


def test_delete_by_owner_and_admin(client, db_session):
    seller = create_user(db_session, role="SELLER")
    admin = create_user(db_session, role="ADMIN")
    buyer = create_user(db_session)
    category = create_category(db_session)
    first = create_article(db_session, seller, category)
    second = create_article(db_session, seller, category)
    db_session.add(Payment(article_id=first.id, user_id=seller.id, amount=first.price, method="CASH", status="COMPLETED"))
    db_session.commit()

    denied = client.delete(f"/api/articles/{first.id}", headers=auth_headers(client, buyer))
    assert denied.status_code == 403

    assert client.delete(f"/api/articles/{first.id}", headers=auth_headers(client, seller)).status_code == 204
    assert client.delete(f"/api/articles/{second.id}", headers=auth_headers(client, admin)).status_code == 204

    db_session.expire_all()
    assert db_session.query(Article).count() == 0
    assert db_session.query(Payment).count() == 0


def test_seller_listing_filters_and_display_status(client, db_session):
    seller = create_user(db_session, role="SELLER")
    category = create_category(db_session)
    create_article(db_session, seller, category, title="En ligne", price="3000")
    create_article(db_session, seller, category, title="À payer", status="PENDING_PAYMENT", is_available=False, price="1000")
    create_article(db_session, seller, category, title="Refusé", status="REJECTED", is_available=False, price="2000")
    create_article(db_session, create_user(db_session, role="SELLER"), category, title="Pas à moi")
    headers = auth_headers(client, seller)

    everything = client.get("/api/seller/articles", params={"sortBy": "price-high"}, headers=headers).json()
    assert [item["title"] for item in everything["articles"]] == ["En ligne", "Refusé", "À payer"]
    assert [item["display_status"] for item in everything["articles"]] == ["ACTIVE", "REJECTED", "PENDING_PAYMENT"]

    rejected = client.get("/api/seller/articles", params={"status": "rejected"}, headers=headers).json()
    assert [item["title"] for item in rejected["articles"]] == ["Refusé"]

    buyer = create_user(db_session)
    assert client.get("/api/seller/articles", headers=auth_headers(client, buyer)).status_code == 403


def test_seller_duplicates_own_article(client, db_session):
    seller = create_user(db_session, role="SELLER")
    rival = create_user(db_session, role="SELLER")
    buyer = create_user(db_session)
    category = create_category(db_session)
    original = create_article(db_session, seller, category, title="Grand boubou bazin", price="7500")

    response = client.post(f"/api/articles/{original.id}/duplicate", headers=auth_headers(client, seller))

    assert response.status_code == 201
    copy = response.json()["article"]
    assert copy["id"] != str(original.id)
    assert copy["title"] == "Grand boubou bazin (Copie)"
    assert copy["status"] == "PENDING_PAYMENT"
    assert copy["is_available"] is False
    assert copy["images"] == ["https://cdn.example.com/boubou.jpg"]
    assert db_session.query(Article).filter_by(seller_id=seller.id).count() == 2

    other = client.post(f"/api/articles/{original.id}/duplicate", headers=auth_headers(client, rival))
    assert other.status_code == 404
    assert other.json()["code"] == "ARTICLE_NOT_FOUND"

    denied = client.post(f"/api/articles/{original.id}/duplicate", headers=auth_headers(client, buyer))
    assert denied.status_code == 403
