import random
from typing import Callable, Dict, List, Tuple, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from faystar.core.config import Settings
from faystar.main import create_application
from faystar.services.container import build_container

OPENAI_KEY = "sk-test-openai-key-0001"
FAL_KEY = "fal-test-key-0001"
ELEVENLABS_KEY = "el-test-key-0001"


class ProviderStub:
    """
    httpx mock transport handler that records every outbound request.

    Responses are registered per (method, path) as factories so each call
    gets a fresh httpx.Response; a registered exception is raised instead.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Union[Callable[[httpx.Request], httpx.Response], Exception]] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"detail": "not stubbed"})
        if isinstance(route, Exception):
            raise route
        return route(request)

    def respond(self, method: str, path: str, status_code: int = 200, **kwargs) -> None:
        self._routes[(method, path)] = lambda request: httpx.Response(status_code, **kwargs)

    def respond_sequence(self, method: str, path: str, responses: List[httpx.Response]) -> None:
        remaining = iter(responses)
        self._routes[(method, path)] = lambda request: next(remaining)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self._routes[(method, path)] = error

    def calls_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


def make_settings(**overrides) -> Settings:
    values = dict(
        OPENAI_API_KEY=OPENAI_KEY,
        FAL_KEY=FAL_KEY,
        ELEVENLABS_API_KEY=ELEVENLABS_KEY,
        PROVIDER_RETRY_DELAY_SECONDS=0,
        BCRYPT_ROUNDS=4,
        JWT_SECRET="test-secret-key-with-enough-length",
        ENABLE_STRUCTURED_LOGGING=False,
        ENABLE_TEST_ROUTES=True,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def stub() -> ProviderStub:
    return ProviderStub()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def build_client(stub):
    """Factory for a TestClient over an app whose providers all talk to ``stub``."""
    clients = []

    def _build(settings: Settings) -> TestClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        container = build_container(settings, http_client=http_client, rng=random.Random(7))
        client = TestClient(create_application(settings, container))
        client.__enter__()
        clients.append(client)
        return client

    yield _build

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(build_client, settings) -> TestClient:
    return build_client(settings)


@pytest.fixture
def auth_headers(client) -> Dict[str, str]:
    token = client.app.state.container.tokens.issue("user-1", "user@example.com")
    return {"Authorization": f"Bearer {token}"}
