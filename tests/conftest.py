import httpx
import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from dependencies.services import get_http_client, get_settings
from main import app


def make_settings(**overrides) -> Settings:
    values = {"OPENAI_API_KEY": "sk-test"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def completion_body(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class FakeUpstream:
    """Records outbound requests and answers them with ``handler``."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, json=completion_body("Sounds good."))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def make_client(http_client):
    def _make(raise_server_exceptions: bool = True, **overrides) -> TestClient:
        config = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: config
        app.dependency_overrides[get_http_client] = lambda: http_client
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
