"""Shared test fixtures for the dashboard test suite."""

from __future__ import annotations

import json
import os
from collections.abc import Callable

import httpx
import pytest
import pytest_asyncio

from etl_dashboard.config.settings import DashboardSettings
from etl_dashboard.main import Dashboard, create_dashboard
from etl_dashboard.stub_backend import SampleStore, create_stub_app

BASE_URL = "http://testserver"


# ---------------------------------------------------------------------------
# Keep the developer's environment out of DashboardSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear DASHBOARD_* overrides and point the client at the test server."""
    for key in list(os.environ):
        if key.startswith("DASHBOARD_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("DASHBOARD_API_URL", BASE_URL)


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> DashboardSettings:
    """Test settings with safe defaults."""
    return DashboardSettings(api_url=BASE_URL, log_level="DEBUG", log_json=False)


# ---------------------------------------------------------------------------
# Mock backend helpers
# ---------------------------------------------------------------------------

class RecordingBackend:
    """httpx.MockTransport handler that records requests and replays routes.

    ``routes`` maps ``"METHOD /path?query"`` (or ``"METHOD /path"``) to a
    JSON body, an ``httpx.Response`` or a callable taking the request.
    Unrouted requests get a 404.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, object] = {}

    def route(self, method: str, target: str, reply: object) -> None:
        self.routes[f"{method} {target}"] = reply

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        target = request.url.raw_path.decode()
        reply = self.routes.get(f"{request.method} {target}")
        if reply is None:
            reply = self.routes.get(f"{request.method} {request.url.path}")
        if reply is None:
            return httpx.Response(404, json={"success": False, "data": None, "message": "Not Found"})
        if callable(reply):
            reply = reply(request)
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> object:
        return json.loads(request.content)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


# ---------------------------------------------------------------------------
# Stub backend fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> SampleStore:
    return SampleStore()


@pytest.fixture
def stub_transport(store: SampleStore) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_stub_app(store))


@pytest_asyncio.fixture
async def dashboard(settings: DashboardSettings, stub_transport: httpx.ASGITransport):
    """Dashboard wired to an in-process stub backend."""
    board: Dashboard = create_dashboard(settings, transport=stub_transport, configure_logs=False)
    yield board
    await board.aclose()


@pytest.fixture
def make_dashboard(settings: DashboardSettings) -> Callable[[httpx.AsyncBaseTransport], Dashboard]:
    """Factory for dashboards wired to an arbitrary transport."""

    def _make(transport: httpx.AsyncBaseTransport) -> Dashboard:
        return create_dashboard(settings, transport=transport, configure_logs=False)

    return _make

