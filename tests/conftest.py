from typing import Callable, Dict, List

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_upstream_transport
from app.main import app

Responder = Callable[[httpx.Request], httpx.Response]


class FakeUpstream:
    """Records outbound requests and answers them per endpoint path."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responders: Dict[str, Responder] = {}

    def on(self, path: str, responder: Responder) -> None:
        self.responders[path] = responder

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.responders.get(request.url.path)
        if responder is None:
            return httpx.Response(500, json={"error": "unexpected path"})
        return responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("API_KEY", "test-key")
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("UPSTREAM_BASE_URL", raising=False)
    return "test-key"


@pytest.fixture
def upstream():
    fake = FakeUpstream()
    app.dependency_overrides[get_upstream_transport] = lambda: fake.transport
    yield fake
    app.dependency_overrides.pop(get_upstream_transport, None)


@pytest.fixture
def client_factory():
    def make() -> AsyncClient:
        transport = ASGITransport(app=app)
        return AsyncClient(transport=transport, base_url="http://test")
    return make
