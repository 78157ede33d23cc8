import httpx
import pytest

from faystar.adapters.provider_client import ProviderClient
from faystar.adapters.providers import (
    AuthScheme,
    ProviderConfig,
    default_registry,
    elevenlabs_config,
    fal_config,
)
from faystar.core.exceptions import ProviderCallError, ProviderDisabledError
from faystar.infrastructure.error.handler import ErrorClassifier, ErrorKind
from tests.conftest import ELEVENLABS_KEY, FAL_KEY, ProviderStub, make_settings


def make_client(stub: ProviderStub, **overrides) -> ProviderClient:
    values = dict(
        name="example",
        base_url="https://provider.test/v1",
        credential_env_var="EXAMPLE_KEY",
        credential="example-key-0001",
        retry_delay=0,
    )
    values.update(overrides)
    return ProviderClient(
        ProviderConfig(**values),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(stub)),
    )


async def test_success_is_single_attempt(stub):
    stub.respond("POST", "/v1/things", json={"ok": True})
    client = make_client(stub)

    response = await client.call("/things", {"a": 1})

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert len(stub.requests) == 1
    assert stub.requests[0].headers["Authorization"] == "Bearer example-key-0001"
    assert stub.requests[0].headers["User-Agent"] == "FayStar-Backend/1.0"


async def test_server_error_is_retried_once(stub):
    stub.respond("POST", "/v1/things", status_code=500, json={"error": "down"})
    client = make_client(stub)

    with pytest.raises(ProviderCallError) as exc_info:
        await client.call("/things", {})

    assert len(stub.requests) == 2
    assert exc_info.value.attempts == 2
    assert ErrorClassifier().classify(exc_info.value).kind == ErrorKind.SERVER_ERROR


async def test_client_error_is_never_retried(stub):
    stub.respond("POST", "/v1/things", status_code=401, json={"error": "bad key"})
    client = make_client(stub)

    with pytest.raises(ProviderCallError) as exc_info:
        await client.call("/things", {})

    assert len(stub.requests) == 1
    assert exc_info.value.status_code == 401


async def test_connection_error_is_retried_once(stub):
    stub.fail("POST", "/v1/things", httpx.ConnectError("refused"))
    client = make_client(stub)

    with pytest.raises(ProviderCallError) as exc_info:
        await client.call("/things", {})

    assert len(stub.requests) == 2
    assert ErrorClassifier().classify(exc_info.value).kind == ErrorKind.NETWORK_ERROR


async def test_retry_recovers(stub):
    stub.respond_sequence("POST", "/v1/things", [httpx.Response(503), httpx.Response(200, json={"ok": True})])
    client = make_client(stub)

    response = await client.call("/things", {})

    assert response.json() == {"ok": True}
    assert len(stub.requests) == 2


async def test_retries_can_be_disabled(stub):
    stub.respond("POST", "/v1/things", status_code=502)
    client = make_client(stub, max_retries=0)

    with pytest.raises(ProviderCallError):
        await client.call("/things", {})

    assert len(stub.requests) == 1


@pytest.mark.parametrize(
    "credential, reason",
    [(None, "MISSING_API_KEY"), ("short", "INVALID_API_KEY")],
)
async def test_credential_guard_disables_without_io(stub, credential, reason):
    client = make_client(stub, credential=credential)

    assert client.is_enabled is False
    assert client.credential_status == reason
    with pytest.raises(ProviderDisabledError):
        await client.call("/things", {})
    with pytest.raises(ProviderDisabledError):
        await client.probe()
    assert stub.requests == []


async def test_probe_is_single_attempt(stub):
    stub.respond("GET", "/v1/health", status_code=500)
    client = make_client(stub)

    with pytest.raises(ProviderCallError):
        await client.probe()

    assert len(stub.requests) == 1


def test_get_config_hides_credential(stub):
    config = make_client(stub).get_config()

    assert config["hasApiKey"] is True
    assert config["apiKeyLength"] == len("example-key-0001")
    assert "example-key-0001" not in repr(config)


async def test_auth_header_schemes(stub):
    settings = make_settings()
    stub.respond("POST", "/fal-ai/pika-1.0", json={})
    stub.respond("POST", "/v1/text-to-speech/abc", content=b"")
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))

    await ProviderClient(fal_config(settings), http_client=http_client).call("/fal-ai/pika-1.0", {})
    await ProviderClient(elevenlabs_config(settings), http_client=http_client).call("/text-to-speech/abc", {})

    assert fal_config(settings).auth_scheme == AuthScheme.KEY
    assert stub.requests[0].headers["Authorization"] == f"Key {FAL_KEY}"
    assert stub.requests[1].headers["xi-api-key"] == ELEVENLABS_KEY
    assert "Authorization" not in stub.requests[1].headers


def test_registry():
    registry = default_registry()

    assert registry.list() == ["openai", "fal", "elevenlabs"]
    assert registry.is_registered("fal")
    with pytest.raises(ValueError):
        registry.register("fal", fal_config)
    with pytest.raises(ValueError):
        registry.create_client("stability", make_settings())
