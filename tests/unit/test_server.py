from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from live_proxy.server import app
from live_proxy.runtime.dependencies import build_runtime_deps
from tests.utils.fakes import FakeConnector, make_settings


@pytest.fixture
def client():
    connector = FakeConnector()
    app.state.runtime_deps = build_runtime_deps(make_settings(api_key=""), connect_upstream=connector)
    try:
        yield TestClient(app), connector
    finally:
        app.state.runtime_deps = None


def test_health_endpoints(client) -> None:
    http, _ = client
    for path in ("/", "/health", "/healthz"):
        resp = http.get(path)
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


def test_websocket_without_key_is_closed_with_policy_violation(client) -> None:
    http, connector = client
    with http.websocket_connect("/?model=gemini-2.5-flash") as ws:
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_text()
    assert exc.value.code == 1008
    assert exc.value.reason == "missing api key"
    assert connector.attempts == []
