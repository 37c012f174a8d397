from app.boudoir.db.models import UserActivity
from tests.marketplace_helpers import DEFAULT_PASSWORD, auth_headers, create_user, login


def _register(client, **overrides):
    payload = {
        "name": "Awa Diop",
        "email": "Awa@Example.com",
        "password": DEFAULT_PASSWORD,
        "role": "SELLER",
        "location": "Dakar",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_normalizes_email(client):
    response = _register(client)

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["email"] == "awa@example.com"
    assert user["role"] == "SELLER"
    assert user["status"] == "ACTIVE"
    assert "hashed_password" not in user


def test_register_duplicate_email_conflicts(client):
    assert _register(client).status_code == 201

    response = _register(client, email="awa@example.com")

    assert response.status_code == 409
    assert response.json()["code"] == "EMAIL_ALREADY_REGISTERED"


def test_register_rejects_weak_password(client):
    short = _register(client, password="abc12")
    assert short.status_code == 400
    assert short.json()["code"] == "PASSWORD_TOO_SHORT"

    letters_only = _register(client, email="other@example.com", password="abcdefghij")
    assert letters_only.status_code == 400
    assert letters_only.json()["code"] == "PASSWORD_COMPLEXITY"


def test_register_cannot_self_assign_admin(client):
    response = _register(client, role="ADMIN")

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_login_success_records_activity(client, db_session):
    user = create_user(db_session, role="BUYER", email="fatou@example.com")

    response = client.post("/api/auth/login", json={"email": "FATOU@example.com", "password": DEFAULT_PASSWORD})

    assert response.status_code == 200
    payload = response.json()
    assert payload["access_token"]
    assert payload["token_type"] == "bearer"
    assert payload["user"]["id"] == str(user.id)
    assert payload["user"]["last_login_at"] is not None

    db_session.expire_all()
    actions = [row.action for row in db_session.query(UserActivity).filter(UserActivity.user_id == user.id)]
    assert "LOGIN" in actions


def test_login_invalid_password(client, db_session):
    user = create_user(db_session)

    response = client.post("/api/auth/login", json={"email": user.email, "password": "wrong-pass1"})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"
    db_session.expire_all()
    actions = [row.action for row in db_session.query(UserActivity).filter(UserActivity.user_id == user.id)]
    assert actions == ["LOGIN_FAILED"]


def test_login_blocked_suspended(client, db_session):
    user = create_user(db_session, status="SUSPENDED")

    response = client.post("/api/auth/login", json={"email": user.email, "password": DEFAULT_PASSWORD})

    assert response.status_code == 403
    assert response.json()["code"] == "USER_INACTIVE"


def test_me_requires_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_me_rejects_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_TOKEN"


def test_me_returns_current_user(client, db_session):
    user = create_user(db_session, role="SELLER", name="Mariama")

    response = client.get("/api/auth/me", headers=auth_headers(client, user))

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Mariama"


def test_oauth2_token_form(client, db_session):
    user = create_user(db_session)

    response = client.post(
        "/api/auth/token",
        data={"username": user.email, "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 200
    assert response.json()["access_token"]


def test_change_password_flow(client, db_session):
    user = create_user(db_session)
    headers = auth_headers(client, user)

    wrong = client.post(
        "/api/auth/change-password",
        json={"current_password": "nope12345", "new_password": "Nouveau2025"},
        headers=headers,
    )
    assert wrong.status_code == 400
    assert wrong.json()["code"] == "CURRENT_PASSWORD_INVALID"

    same = client.post(
        "/api/auth/change-password",
        json={"current_password": DEFAULT_PASSWORD, "new_password": DEFAULT_PASSWORD},
        headers=headers,
    )
    assert same.json()["code"] == "PASSWORD_MUST_DIFFER"

    ok = client.post(
        "/api/auth/change-password",
        json={"current_password": DEFAULT_PASSWORD, "new_password": "Nouveau2025"},
        headers=headers,
    )
    assert ok.status_code == 200
    assert ok.json()["ok"] is True

    assert login(client, user, "Nouveau2025")
