from datetime import datetime
import pytest
from pydantic import ValidationError
from app.core.config import Settings
from app.main import MAX_BODY_BYTES


def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["timestamp"].endswith("Z")
    parsed = datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))
    assert parsed.utcoffset().total_seconds() == 0


def test_security_headers_present(client):
    response = client.get("/api/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-XSS-Protection"] == "1; mode=block"


def test_security_headers_on_error_responses(client):
    response = client.post("/api/verify-payment", json={})

    assert response.status_code == 400
    assert response.headers["X-Frame-Options"] == "DENY"


def test_cors_allows_listed_origin(client):
    response = client.get("/api/health", headers={"Origin": "http://localhost:3000"})

    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_cors_ignores_unknown_origin(client):
    response = client.get("/api/health", headers={"Origin": "https://evil.example.com"})

    assert "access-control-allow-origin" not in response.headers


def test_cors_preflight_rejects_unknown_origin(client):
    response = client.options(
        "/api/create-order",
        headers={"Origin": "https://evil.example.com", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 400


def test_request_without_origin_allowed(client):
    response = client.get("/api/health")

    assert response.status_code == 200


def test_cors_origins_unify_allow_list_and_frontend_url():
    config = Settings(
        BACKEND_CORS_ORIGINS="https://examnest.vercel.app/, http://localhost:3000",
        FRONTEND_URL="https://staging.examnest.app/",
    )

    assert config.cors_origins == [
        "https://examnest.vercel.app",
        "http://localhost:3000",
        "https://staging.examnest.app",
    ]


def test_cors_origins_deduplicate_frontend_url():
    config = Settings(BACKEND_CORS_ORIGINS=["http://localhost:5173"], FRONTEND_URL="http://localhost:5173")

    assert config.cors_origins == ["http://localhost:5173"]


def test_settings_are_immutable(test_settings):
    with pytest.raises(ValidationError):
        test_settings.RAZORPAY_KEY_SECRET = "changed"


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", "https://a.example, https://b.example/")

    config = Settings()

    assert config.BACKEND_CORS_ORIGINS == ["https://a.example", "https://b.example/"]
    assert config.cors_origins[:2] == ["https://a.example", "https://b.example"]


def test_cors_origins_from_json_env(monkeypatch):
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", '["https://a.example", "https://b.example"]')

    config = Settings()

    assert config.BACKEND_CORS_ORIGINS == ["https://a.example", "https://b.example"]


def test_oversized_body_rejected(client, razorpay_client):
    body = b"x" * (MAX_BODY_BYTES + 1)

    response = client.post(
        "/api/create-order",
        content=body,
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 413
    assert response.json() == {"success": False, "message": "Request body too large"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    razorpay_client.order.create.assert_not_called()
