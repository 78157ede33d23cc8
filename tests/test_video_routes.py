import json

from faystar.adapters.provider_client import ProviderResponse
from faystar.adapters.interfaces.normalizer import ProviderRequest
from faystar.services.response_adapter import video_data

GENERATE_PATH = "/fal-ai/pika-1.0"


def test_generate(client, stub, auth_headers):
    stub.respond(
        "POST",
        GENERATE_PATH,
        json={"video_url": "https://cdn.test/v.mp4", "request_id": "fal-123"},
    )

    response = client.post(
        "/api/video/generate",
        json={"prompt": "A fox in snow", "duration": 4, "aspectRatio": "1:1"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["requestId"].startswith("video_")
    assert body["data"] == {
        "videoUrl": "https://cdn.test/v.mp4",
        "providerRequestId": "fal-123",
        "estimatedTime": "30-60 seconds",
        "duration": 4,
        "aspectRatio": "1:1",
        "prompt": "A fox in snow",
    }
    sent = json.loads(stub.requests[0].content)
    assert sent["num_frames"] == 96
    assert stub.requests[0].headers["Authorization"].startswith("Key ")


def test_generate_validation(client, stub, auth_headers):
    response = client.post(
        "/api/video/generate", json={"prompt": "ok", "duration": 30}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["details"]["field"] == "duration"
    assert stub.requests == []


def test_generate_rejects_non_integer_duration(client, stub, auth_headers):
    response = client.post(
        "/api/video/generate", json={"prompt": "ok", "duration": 2.5}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["errorType"] == "VALIDATION_ERROR"
    assert stub.requests == []


def test_status(client, stub, auth_headers):
    stub.respond(
        "GET",
        "/fal-ai/pika-1.0/status/fal-123",
        json={"status": "processing", "progress": 40},
    )

    response = client.get("/api/video/status/fal-123", headers=auth_headers)

    data = response.json()["data"]
    assert data["requestId"] == "fal-123"
    assert data["status"] == "processing"
    assert data["progress"] == 40
    assert stub.requests[0].method == "GET"


def test_payment_required(client, stub, auth_headers):
    stub.respond("POST", GENERATE_PATH, status_code=402, json={"detail": "no credits"})

    response = client.post("/api/video/generate", json={"prompt": "A fox"}, headers=auth_headers)

    assert response.status_code == 402
    body = response.json()
    assert body["errorType"] == "PAYMENT_REQUIRED"
    assert body["details"] == "no credits"
    assert len(stub.requests) == 1


def test_config_hides_key(client, auth_headers):
    response = client.get("/api/video/config", headers=auth_headers)

    data = response.json()["data"]
    assert data["baseUrl"] == "https://fal.run"
    assert data["hasApiKey"] is True
    assert "apiKey" not in data
    assert client.get("/api/video/config").status_code == 401


def test_health(client, stub):
    stub.respond("GET", "/health", json={"status": "ok"})

    response = client.get("/api/video/health")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "healthy"


def test_response_adapter_is_deterministic():
    response = ProviderResponse(200, {"content-type": "application/json"}, b'{"video_url": "u"}')
    request = ProviderRequest(
        endpoint=GENERATE_PATH,
        payload={"prompt": "p", "num_frames": 48, "aspect_ratio": "16:9"},
    )

    assert video_data(response, request) == video_data(response, request)


def test_status_with_non_object_body(client, stub, auth_headers):
    stub.respond("GET", "/fal-ai/pika-1.0/status/fal-123", json=["processing"])

    response = client.get("/api/video/status/fal-123", headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["errorType"] == "UNKNOWN_ERROR"
