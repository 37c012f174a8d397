from app.boudoir.db.models import Notification
from tests.marketplace_helpers import auth_headers, create_user


def _notify(db_session, user, count, **kwargs):
    rows = [
        Notification(user_id=user.id, type="NEW_FOLLOWER", title="Nouvel abonné", message=f"Message {index}", **kwargs)
        for index in range(count)
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


def test_list_with_unread_count(client, db_session):
    user = create_user(db_session)
    _notify(db_session, user, 3)
    _notify(db_session, user, 1, is_read=True)
    _notify(db_session, create_user(db_session), 2)
    headers = auth_headers(client, user)

    everything = client.get("/api/notifications", headers=headers).json()
    assert everything["pagination"]["total"] == 4
    assert everything["unread_count"] == 3

    unread = client.get("/api/notifications", params={"unreadOnly": "true"}, headers=headers).json()
    assert len(unread["notifications"]) == 3
    assert all(item["is_read"] is False for item in unread["notifications"])


def test_mark_one_read(client, db_session):
    user = create_user(db_session)
    stranger = create_user(db_session)
    (notification,) = _notify(db_session, user, 1)

    foreign = client.post(f"/api/notifications/{notification.id}/read", headers=auth_headers(client, stranger))
    assert foreign.status_code == 404
    assert foreign.json()["code"] == "NOTIFICATION_NOT_FOUND"

    response = client.post(f"/api/notifications/{notification.id}/read", headers=auth_headers(client, user))
    assert response.status_code == 200
    body = response.json()["notification"]
    assert body["is_read"] is True
    assert body["read_at"] is not None


def test_mark_all_read(client, db_session):
    user = create_user(db_session)
    _notify(db_session, user, 2)
    headers = auth_headers(client, user)

    response = client.patch("/api/notifications", headers=headers)

    assert response.status_code == 200
    assert response.json()["updated"] == 2
    assert client.get("/api/notifications", headers=headers).json()["unread_count"] == 0
