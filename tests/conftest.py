"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - relay_config: Configuration pointing at a fake backend
    - backend_stub: Recording stand-in for the question-answering backend
    - relay_app: Relay application wired to the stand-in backend
    - async_client: HTTPX client for relay API testing
"""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from docrelay.api.app import create_app
from docrelay.backend.client import BackendClient, get_backend_client
from docrelay.config import RelayConfig

BACKEND_URL = "http://backend.test"


class BackendStub:
    """Stand-in for the question-answering backend.

    Records every request it receives and answers with the configured reply,
    or raises the configured error to simulate transport failures.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None
        self._reply: dict[str, Any] = {"status_code": 200, "json": {"message": "ok"}}

    def respond(self, status_code: int = 200, **kwargs: Any) -> None:
        self._reply = {"status_code": status_code, **kwargs}

    def fail(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(**self._reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def relay_config() -> RelayConfig:
    """Return configuration pointing at the fake backend."""
    return RelayConfig(
        backend_url=BACKEND_URL,
        relay_url="http://relay.test",
        backend_timeout=None,
    )


@pytest.fixture
def backend_stub() -> BackendStub:
    return BackendStub()


@pytest.fixture
def backend_client(relay_config: RelayConfig, backend_stub: BackendStub) -> BackendClient:
    """Backend client that talks to the stand-in backend."""
    return BackendClient(relay_config, transport=backend_stub.transport)


@pytest.fixture
def relay_app(backend_client: BackendClient) -> FastAPI:
    """Relay application with the backend client overridden.

    Returns:
        FastAPI app forwarding to the stand-in backend.
    """
    app = create_app()
    app.dependency_overrides[get_backend_client] = lambda: backend_client
    return app


@pytest.fixture
async def async_client(relay_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for relay API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=relay_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
