from boudoir_console.app.infrastructure.errors.error_mapper import ErrorMapper
from boudoir_console.clients.boudoir_client_sdk.http_client import APIError


def test_known_codes_use_friendly_message() -> None:
    payload = ErrorMapper.to_payload(
        APIError(code="PERMISSION_DENIED", message="raw", trace_id="trace-1", details={"required_roles": ["ADMIN"]})
    )

    assert payload["code"] == "PERMISSION_DENIED"
    assert payload["trace_id"] == "trace-1"
    assert payload["details"] == {"required_roles": ["ADMIN"]}
    assert payload["suggestion"]
    assert payload["message"] != "raw"


def test_status_hints_for_generic_http_codes() -> None:
    unauthorized = ErrorMapper.to_payload(APIError(code="UNAUTHORIZED", message="x", status_code=401))
    gateway = ErrorMapper.to_payload(APIError(code="HTTP_ERROR", message="bad gateway", status_code=502))
    unavailable = ErrorMapper.to_payload(APIError(code="DB_UNAVAILABLE", message="x", status_code=503))

    assert unauthorized["code"] == "INVALID_TOKEN"
    assert gateway["code"] == "INTERNAL_ERROR"
    assert unavailable["code"] == "DB_UNAVAILABLE"


def test_unknown_code_keeps_server_message() -> None:
    payload = ErrorMapper.to_payload(APIError(code="CONFLICT", message="Email déjà utilisé", status_code=409))

    assert payload["code"] == "CONFLICT"
    assert payload["message"] == "Email déjà utilisé"
    assert "trace_id" in payload["suggestion"]


def test_non_api_error_falls_back_to_internal_error() -> None:
    payload = ErrorMapper.to_payload(RuntimeError("boom"))

    assert payload["code"] == "INTERNAL_ERROR"
    assert payload["message"] == "boom"


def test_field_errors_from_validation_envelope() -> None:
    error = APIError(
        code="VALIDATION_ERROR",
        message="Validation error",
        status_code=422,
        details={
            "errors": [
                {"field": "price", "message": "Le prix doit être positif"},
                {"field": "price", "message": "second"},
                {"field": None, "message": "body"},
            ]
        },
    )

    assert ErrorMapper.field_errors(error) == {"price": "Le prix doit être positif"}
    assert ErrorMapper.field_errors(RuntimeError("x")) == {}


def test_display_message_includes_code_and_trace() -> None:
    message = ErrorMapper.to_display_message(APIError(code="ARTICLE_NOT_FOUND", message="x", trace_id="t-1"))

    assert message.startswith("[ARTICLE_NOT_FOUND]")
    assert message.endswith("(trace_id=t-1)")
