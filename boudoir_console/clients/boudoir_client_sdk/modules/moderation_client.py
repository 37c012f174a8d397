from boudoir_console.clients.boudoir_client_sdk.auth_store import AuthStore
from boudoir_console.clients.boudoir_client_sdk.http_client import HttpClient


class ModerationClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    def pending(self) -> list[dict]:
        result = self.http.request("GET", "/api/moderation", token=self.auth_store.get_token())
        return result.get("articles", [])

    def approve(self, article_id: str, notes: str | None = None) -> dict:
        return self._decide(article_id, "APPROVE", notes=notes)

    def reject(self, article_id: str, reason: str, notes: str | None = None) -> dict:
        return self._decide(article_id, "REJECT", notes=notes, rejection_reason=reason)

    def history(self, action: str | None = None, page: int = 1, limit: int = 20) -> dict:
        return self.http.request(
            "GET",
            "/api/admin/moderation-history",
            token=self.auth_store.get_token(),
            params={"action": action, "page": page, "limit": limit},
        )

    def _decide(self, article_id: str, action: str, **extra) -> dict:
        payload = {"article_id": article_id, "action": action}
        payload.update({key: value for key, value in extra.items() if value is not None})
        return self.http.request("POST", "/api/moderation", token=self.auth_store.get_token(), json=payload)
