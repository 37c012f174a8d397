from boudoir_console.clients.boudoir_client_sdk.auth_store import AuthStore
from boudoir_console.clients.boudoir_client_sdk.http_client import HttpClient

ANALYTICS_ENDPOINTS = ("overview", "users", "articles", "revenue", "activities")


class AnalyticsClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    def fetch(self, endpoint: str, period: int = 30) -> dict:
        if endpoint not in ANALYTICS_ENDPOINTS:
            raise ValueError(f"unknown analytics endpoint: {endpoint}")
        result = self.http.request(
            "GET",
            f"/api/admin/analytics/{endpoint}",
            token=self.auth_store.get_token(),
            params={"period": period},
        )
        return result.get("result", {})
