from app.boudoir.core.metrics import metrics


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope", headers={"X-Trace-Id": "trace-404"})

    assert response.status_code == 404
    payload = response.json()
    assert payload["code"] == "NOT_FOUND"
    assert payload["trace_id"] == "trace-404"
    assert set(payload) == {"code", "message", "details", "trace_id"}


def test_method_not_allowed_code(client):
    response = client.delete("/health")

    assert response.status_code == 405
    assert response.json()["code"] == "METHOD_NOT_ALLOWED"


def test_validation_error_lists_fields(client):
    response = client.post("/api/auth/login", json={"email": "pas-un-email"})

    assert response.status_code == 422
    payload = response.json()
    assert payload["code"] == "VALIDATION_ERROR"
    fields = {error["field"] for error in payload["details"]["errors"]}
    assert "password" in fields
    for error in payload["details"]["errors"]:
        assert error["loc"][0] == "body"
        assert error["message"]


def test_query_validation_error_strips_location_prefix(client):
    response = client.get("/api/articles", params={"page": 0})

    assert response.status_code == 422
    errors = response.json()["details"]["errors"]
    assert errors[0]["field"] == "page"
    assert errors[0]["loc"] == ["query", "page"]


def test_metrics_endpoint_exposes_request_counters(client):
    client.get("/health")

    response = client.get("/api/ops/metrics")

    assert response.status_code == 200
    if metrics.enabled:
        assert "http_requests_total" in response.text
    else:
        assert response.text == "metrics_disabled\n"


def test_ready_reports_database_failure(client, monkeypatch):
    from sqlalchemy.orm import Session

    def _broken(self, *args, **kwargs):
        raise ConnectionError("connection refused")

    monkeypatch.setattr(Session, "execute", _broken)

    response = client.get("/ready")

    assert response.status_code == 503
    assert response.json()["code"] == "DB_UNAVAILABLE"
    assert response.json()["details"] == {"type": "ConnectionError"}


def test_openapi_documents_error_envelope(client):
    schema = client.get("/openapi.json").json()

    assert "ApiErrorResponse" in schema["components"]["schemas"]
    responses = schema["paths"]["/api/articles"]["post"]["responses"]
    assert responses["403"]["content"]["application/json"]["schema"]["$ref"].endswith("/ApiErrorResponse")
    assert responses["422"]["content"]["application/json"]["schema"]["$ref"].endswith("/ApiValidationErrorResponse")
