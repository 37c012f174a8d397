from boudoir_console.clients.boudoir_client_sdk.auth_store import AuthStore
from boudoir_console.clients.boudoir_client_sdk.http_client import HttpClient


class AuthClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    def login(self, email: str, password: str) -> dict:
        result = self.http.request("POST", "/api/auth/login", json={"email": email, "password": password})
        token = result.get("access_token")
        if token:
            self.auth_store.set_token(token, result.get("user"))
        return result

    def register(self, *, name: str, email: str, password: str, role: str = "BUYER") -> dict:
        payload = {"name": name, "email": email, "password": password, "role": role}
        return self.http.request("POST", "/api/auth/register", json=payload)

    def me(self) -> dict:
        return self.http.request("GET", "/api/auth/me", token=self.auth_store.get_token())

    def logout(self) -> None:
        self.auth_store.clear()
