import time
from dataclasses import dataclass
from typing import Any, Callable

import httpx

TIMEOUT_MESSAGE = "La requête a expiré. Vérifiez votre réseau puis réessayez."
NETWORK_MESSAGE = "Impossible de joindre l'API du Boudoir."


@dataclass
class APIError(Exception):
    code: str
    message: str
    details: dict[str, Any] | None = None
    trace_id: str | None = None
    status_code: int | None = None


class HttpClient:
    """JSON client for the marketplace API.

    Only GET requests are retried, on timeouts, transport failures and 5xx
    answers. Any other failure surfaces as :class:`APIError` on the first
    attempt. A 401 answer is reported to ``on_unauthorized`` before raising,
    so the caller can drop a stale token.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 20,
        verify_ssl: bool = True,
        retry_max_attempts: int = 3,
        retry_backoff_ms: int = 150,
        transport: Callable[..., httpx.Response] | None = None,
        on_unauthorized: Callable[[APIError], None] | None = None,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.verify_ssl = verify_ssl
        self.retry_max_attempts = max(1, retry_max_attempts)
        self.retry_backoff_ms = max(0, retry_backoff_ms)
        self.transport = transport or httpx.request
        self.on_unauthorized = on_unauthorized
        self.sleep = sleeper or time.sleep

    def request(self, method: str, path: str, token: str | None = None, **kwargs: Any) -> dict[str, Any]:
        headers = {"Accept": "application/json", **kwargs.pop("headers", {})}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if kwargs.get("params") is not None:
            kwargs["params"] = {key: value for key, value in kwargs["params"].items() if value is not None}
        url = f"{self.base_url}{path}"
        retryable_method = method.upper() == "GET"

        attempt = 0
        while True:
            attempt += 1
            can_retry = retryable_method and attempt < self.retry_max_attempts
            try:
                response = self.transport(
                    method,
                    url,
                    timeout=self.timeout_seconds,
                    verify=self.verify_ssl,
                    headers=headers,
                    **kwargs,
                )
            except httpx.TimeoutException as exc:
                if not can_retry:
                    raise APIError(code="TIMEOUT_ERROR", message=TIMEOUT_MESSAGE) from exc
                self._backoff(attempt)
                continue
            except httpx.TransportError as exc:
                if not can_retry:
                    raise APIError(code="NETWORK_ERROR", message=NETWORK_MESSAGE) from exc
                self._backoff(attempt)
                continue

            if response.status_code == 204:
                return {}
            if response.status_code < 400:
                return self._safe_json(response)
            if can_retry and 500 <= response.status_code <= 599:
                self._backoff(attempt)
                continue

            error = self._to_api_error(response)
            if response.status_code == 401 and self.on_unauthorized is not None:
                self.on_unauthorized(error)
            raise error

    def _backoff(self, attempt: int) -> None:
        self.sleep((self.retry_backoff_ms * attempt) / 1000)

    @classmethod
    def _to_api_error(cls, response: httpx.Response) -> APIError:
        payload = cls._safe_json(response)
        return APIError(
            code=payload.get("code", "HTTP_ERROR"),
            message=payload.get("message", response.text),
            details=payload.get("details"),
            trace_id=payload.get("trace_id") or response.headers.get("X-Trace-ID"),
            status_code=response.status_code,
        )

    @staticmethod
    def _safe_json(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
            return payload if isinstance(payload, dict) else {"items": payload}
        except ValueError:
            return {"message": response.text}
