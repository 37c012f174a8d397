from typing import Any

from boudoir_console.clients.boudoir_client_sdk.auth_store import AuthStore
from boudoir_console.clients.boudoir_client_sdk.http_client import HttpClient


class UsersClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    def list(self, query: dict[str, Any] | None = None) -> dict:
        return self.http.request("GET", "/api/admin/users", token=self.auth_store.get_token(), params=query or {})

    def create(self, *, name: str, email: str, password: str, role: str) -> dict:
        payload = {"name": name, "email": email, "password": password, "role": role}
        return self.http.request("POST", "/api/admin/users", token=self.auth_store.get_token(), json=payload)

    def set_status(self, user_id: str, status: str) -> dict:
        return self.http.request("PATCH", f"/api/admin/users/{user_id}", token=self.auth_store.get_token(), json={"status": status})

    def set_role(self, user_id: str, role: str) -> dict:
        return self.http.request("PATCH", f"/api/admin/users/{user_id}", token=self.auth_store.get_token(), json={"role": role})

    def follow(self, user_id: str) -> dict:
        return self._toggle_follow(user_id, "follow")

    def unfollow(self, user_id: str) -> dict:
        return self._toggle_follow(user_id, "unfollow")

    def _toggle_follow(self, user_id: str, action: str) -> dict:
        return self.http.request("POST", f"/api/users/{user_id}/follow", token=self.auth_store.get_token(), json={"action": action})
