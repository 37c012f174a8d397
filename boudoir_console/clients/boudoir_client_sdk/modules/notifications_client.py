from boudoir_console.clients.boudoir_client_sdk.auth_store import AuthStore
from boudoir_console.clients.boudoir_client_sdk.http_client import HttpClient


class NotificationsClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    def list(self, page: int = 1, limit: int = 20, unread_only: bool = False) -> dict:
        params = {"page": page, "limit": limit, "unreadOnly": str(unread_only).lower()}
        return self.http.request("GET", "/api/notifications", token=self.auth_store.get_token(), params=params)

    def mark_read(self, notification_id: str) -> dict:
        return self.http.request("POST", f"/api/notifications/{notification_id}/read", token=self.auth_store.get_token())

    def mark_all_read(self) -> dict:
        return self.http.request("PATCH", "/api/notifications", token=self.auth_store.get_token())
