import httpx
import pytest

from boudoir_console.clients.boudoir_client_sdk.http_client import APIError, HttpClient


class _Transport:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, method, url, **kwargs):
        result = self.responses[len(self.calls)]
        self.calls.append((method, url, kwargs))
        if isinstance(result, Exception):
            raise result
        return result


def _response(status_code: int, payload=None, headers=None) -> httpx.Response:
    if payload is None:
        return httpx.Response(status_code=status_code, headers=headers)
    return httpx.Response(status_code=status_code, json=payload, headers=headers)


def test_get_retries_timeouts_and_5xx() -> None:
    transport = _Transport(
        [
            httpx.ReadTimeout("timeout"),
            _response(503, {"code": "DB_UNAVAILABLE", "message": "down"}),
            _response(200, {"status": "ok"}),
        ]
    )
    client = HttpClient("http://api/", retry_max_attempts=3, retry_backoff_ms=0, transport=transport)

    assert client.request("GET", "/health") == {"status": "ok"}
    assert len(transport.calls) == 3
    assert transport.calls[0][1] == "http://api/health"


def test_writes_are_not_retried() -> None:
    transport = _Transport([httpx.ConnectError("refused"), _response(201, {"id": "a"})])
    client = HttpClient("http://api", retry_max_attempts=3, retry_backoff_ms=0, transport=transport)

    with pytest.raises(APIError) as exc:
        client.request("POST", "/api/articles", json={"title": "Boubou"})

    assert exc.value.code == "NETWORK_ERROR"
    assert len(transport.calls) == 1


def test_error_envelope_is_mapped_to_api_error() -> None:
    transport = _Transport(
        [
            _response(
                403,
                {"code": "PERMISSION_DENIED", "message": "Interdit", "details": {"required_roles": ["SELLER"]}, "trace_id": "t-1"},
            )
        ]
    )
    client = HttpClient("http://api", retry_backoff_ms=0, transport=transport)

    with pytest.raises(APIError) as exc:
        client.request("GET", "/api/seller/articles", token="jwt")

    assert exc.value.status_code == 403
    assert exc.value.details == {"required_roles": ["SELLER"]}
    assert exc.value.trace_id == "t-1"
    assert len(transport.calls) == 1
    assert transport.calls[0][2]["headers"]["Authorization"] == "Bearer jwt"


def test_trace_id_falls_back_to_header() -> None:
    transport = _Transport([_response(404, {"code": "NOT_FOUND", "message": "x"}, headers={"X-Trace-ID": "t-h"})])
    client = HttpClient("http://api", transport=transport)

    with pytest.raises(APIError) as exc:
        client.request("GET", "/api/articles/123")

    assert exc.value.trace_id == "t-h"


def test_none_params_are_dropped_and_no_content_is_empty() -> None:
    transport = _Transport([_response(204)])
    client = HttpClient("http://api", transport=transport)

    assert client.request("DELETE", "/api/articles/a", params={"keep": 1, "drop": None}) == {}
    assert transport.calls[0][2]["params"] == {"keep": 1}


def test_timeout_after_last_attempt() -> None:
    transport = _Transport([httpx.ReadTimeout("t"), httpx.ReadTimeout("t")])
    client = HttpClient("http://api", retry_max_attempts=2, retry_backoff_ms=0, transport=transport)

    with pytest.raises(APIError) as exc:
        client.request("GET", "/api/articles")

    assert exc.value.code == "TIMEOUT_ERROR"


def test_unauthorized_answer_is_reported_before_raising() -> None:
    seen = []
    transport = _Transport([_response(401, {"code": "INVALID_TOKEN", "message": "expired"})])
    client = HttpClient("http://api", transport=transport, on_unauthorized=seen.append)

    with pytest.raises(APIError):
        client.request("GET", "/api/auth/me", token="old")

    assert [error.code for error in seen] == ["INVALID_TOKEN"]


def test_backoff_grows_with_attempt_number() -> None:
    waits = []
    transport = _Transport([httpx.ConnectError("x"), httpx.ConnectError("x"), _response(200, {"ok": True})])
    client = HttpClient("http://api", retry_backoff_ms=100, transport=transport, sleeper=waits.append)

    client.request("GET", "/health")

    assert waits == [0.1, 0.2]
