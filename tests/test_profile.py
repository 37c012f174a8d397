from app.boudoir.db.models import UserActivity
from tests.marketplace_helpers import auth_headers, create_user


def test_profile_read_and_update(client, db_session):
    user = create_user(db_session, name="Awa Diop")
    headers = auth_headers(client, user)

    current = client.get("/api/user/profile", headers=headers)
    assert current.status_code == 200
    assert current.json()["user"]["name"] == "Awa Diop"

    response = client.patch(
        "/api/user/profile",
        json={"name": "  Awa Ndiaye ", "phone": "+221771234567", "location": "Thiès"},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()["user"]
    assert body["name"] == "Awa Ndiaye"
    assert body["phone"] == "+221771234567"
    assert body["location"] == "Thiès"
    assert body["role"] == "BUYER"

    db_session.expire_all()
    activity = db_session.query(UserActivity).filter_by(user_id=user.id, action="PROFILE_UPDATE").one()
    assert activity.entity_id == str(user.id)


def test_profile_rejects_invalid_phone(client, db_session):
    user = create_user(db_session)

    response = client.patch("/api/user/profile", json={"phone": "12-34"}, headers=auth_headers(client, user))

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_profile_phone_must_be_unique(client, db_session):
    create_user(db_session, phone="771234567")
    user = create_user(db_session)

    response = client.patch("/api/user/profile", json={"phone": "771234567"}, headers=auth_headers(client, user))

    assert response.status_code == 409
    assert response.json()["code"] == "PHONE_ALREADY_USED"


def test_profile_keeps_own_phone_and_requires_token(client, db_session):
    user = create_user(db_session, phone="771234567")

    response = client.patch(
        "/api/user/profile",
        json={"phone": "771234567", "location": "Saint-Louis"},
        headers=auth_headers(client, user),
    )

    assert response.status_code == 200
    assert response.json()["user"]["location"] == "Saint-Louis"
    assert client.get("/api/user/profile").status_code == 401
