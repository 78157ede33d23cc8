import logging

from faystar.core.config import DEFAULT_JWT_SECRET
from tests.conftest import make_settings


def test_unknown_route_returns_envelope(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["errorType"] == "NOT_FOUND"
    assert body["requestId"]
    assert body["timestamp"]


def test_correlation_id_is_echoed(client):
    response = client.get("/health/ping", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"
    assert response.json()["data"]["message"] == "pong"


def test_correlation_id_is_generated(client):
    assert client.get("/health/ping").headers["X-Correlation-ID"]


def test_health_reports_configuration(build_client):
    client = build_client(make_settings(FAL_KEY=None))

    data = client.get("/health").json()["data"]

    assert data["status"] == "healthy"
    assert data["services"] == {
        "openai": "configured",
        "fal": "disabled",
        "elevenlabs": "configured",
    }


def test_detailed_health_probes_providers(build_client, stub):
    client = build_client(make_settings(FAL_KEY=None))
    stub.respond("GET", "/v1/models", json={"data": []})
    stub.respond("GET", "/v1/voices", status_code=503)

    response = client.get("/health/detailed")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["providers"]["openai"]["status"] == "healthy"
    assert data["providers"]["fal"]["status"] == "disabled"
    assert data["providers"]["elevenlabs"]["status"] == "unhealthy"
    assert data["status"] == "degraded"
    assert "POST /api/ai/chat" in data["endpoints"]
    assert len(stub.requests) == 2


def test_default_jwt_secret_is_flagged_outside_development(build_client, caplog):
    with caplog.at_level(logging.WARNING, logger="faystar.main"):
        build_client(make_settings(ENVIRONMENT="production", JWT_SECRET=DEFAULT_JWT_SECRET))

    assert any("JWT_SECRET" in record.getMessage() for record in caplog.records)


def test_default_jwt_secret_is_quiet_in_development(build_client, caplog):
    with caplog.at_level(logging.WARNING, logger="faystar.main"):
        build_client(make_settings(JWT_SECRET=DEFAULT_JWT_SECRET))

    assert not any("JWT_SECRET" in record.getMessage() for record in caplog.records)
