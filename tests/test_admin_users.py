from tests.marketplace_helpers import DEFAULT_PASSWORD, auth_headers, create_user


def test_admin_lists_users_with_filters(client, db_session):
    admin = create_user(db_session, role="ADMIN", name="Admin")
    create_user(db_session, role="SELLER", name="Awa Seck")
    create_user(db_session, role="SELLER", name="Binta", status="SUSPENDED")
    create_user(db_session, role="BUYER", name="Coumba")
    headers = auth_headers(client, admin)

    sellers = client.get("/api/admin/users", params={"role": "SELLER"}, headers=headers).json()
    assert sellers["pagination"]["total"] == 2

    suspended = client.get("/api/admin/users", params={"status": "SUSPENDED"}, headers=headers).json()
    assert [user["name"] for user in suspended["users"]] == ["Binta"]

    search = client.get("/api/admin/users", params={"search": "seck"}, headers=headers).json()
    assert [user["name"] for user in search["users"]] == ["Awa Seck"]

    by_name = client.get("/api/admin/users", params={"sortBy": "name", "sortOrder": "asc"}, headers=headers).json()
    assert [user["name"] for user in by_name["users"]] == ["Admin", "Awa Seck", "Binta", "Coumba"]


def test_admin_endpoints_reject_other_roles(client, db_session):
    moderator = create_user(db_session, role="MODERATOR")

    response = client.get("/api/admin/users", headers=auth_headers(client, moderator))

    assert response.status_code == 403


def test_admin_creates_moderator(client, db_session):
    admin = create_user(db_session, role="ADMIN")

    response = client.post(
        "/api/admin/users",
        json={"name": "Modératrice", "email": "modo@example.com", "password": DEFAULT_PASSWORD, "role": "MODERATOR"},
        headers=auth_headers(client, admin),
    )

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "MODERATOR"
    assert auth_headers(client, "modo@example.com")


def test_admin_suspends_user_and_blocks_login(client, db_session):
    admin = create_user(db_session, role="ADMIN")
    seller = create_user(db_session, role="SELLER")
    seller_headers = auth_headers(client, seller)

    response = client.patch(
        f"/api/admin/users/{seller.id}",
        json={"status": "SUSPENDED"},
        headers=auth_headers(client, admin),
    )

    assert response.status_code == 200
    assert response.json()["user"]["status"] == "SUSPENDED"
    assert response.json()["user"]["is_active"] is False

    assert client.get("/api/auth/me", headers=seller_headers).json()["code"] == "USER_INACTIVE"
    blocked = client.post("/api/auth/login", json={"email": seller.email, "password": DEFAULT_PASSWORD})
    assert blocked.status_code == 403


def test_admin_update_validation(client, db_session):
    admin = create_user(db_session, role="ADMIN")
    headers = auth_headers(client, admin)

    empty = client.patch(f"/api/admin/users/{admin.id}", json={}, headers=headers)
    assert empty.status_code == 422

    own = client.patch(f"/api/admin/users/{admin.id}", json={"role": "BUYER"}, headers=headers)
    assert own.status_code == 403
    assert own.json()["details"] == {"reason": "self_update"}

    missing = client.patch(
        "/api/admin/users/4f7f2c5e-9cfd-4efa-a575-2a0ad38df4e8",
        json={"role": "SELLER"},
        headers=headers,
    )
    assert missing.status_code == 404
