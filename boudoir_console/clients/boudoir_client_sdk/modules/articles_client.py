from typing import Any

from boudoir_console.clients.boudoir_client_sdk.auth_store import AuthStore
from boudoir_console.clients.boudoir_client_sdk.http_client import HttpClient


class ArticlesClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    def list(self, query: dict[str, Any] | None = None) -> dict:
        return self.http.request("GET", "/api/articles", token=self.auth_store.get_token(), params=query or {})

    def list_mine(self, query: dict[str, Any] | None = None) -> dict:
        return self.http.request("GET", "/api/seller/articles", token=self.auth_store.get_token(), params=query or {})

    def get(self, article_id: str) -> dict:
        return self.http.request("GET", f"/api/articles/{article_id}", token=self.auth_store.get_token())

    def create(self, payload: dict[str, Any]) -> dict:
        return self.http.request("POST", "/api/articles", token=self.auth_store.get_token(), json=payload)

    def update(self, article_id: str, payload: dict[str, Any]) -> dict:
        return self.http.request("PATCH", f"/api/articles/{article_id}", token=self.auth_store.get_token(), json=payload)

    def delete(self, article_id: str) -> None:
        self.http.request("DELETE", f"/api/articles/{article_id}", token=self.auth_store.get_token())

    def pay(self, article_id: str, method: str, transaction_id: str | None = None) -> dict:
        return self.http.request(
            "POST",
            f"/api/articles/{article_id}/payment",
            token=self.auth_store.get_token(),
            json={"method": method, "transaction_id": transaction_id},
        )

    def favorite(self, article_id: str) -> dict:
        return self.http.request("POST", f"/api/articles/{article_id}/favorite", token=self.auth_store.get_token())

    def unfavorite(self, article_id: str) -> dict:
        return self.http.request("DELETE", f"/api/articles/{article_id}/favorite", token=self.auth_store.get_token())
