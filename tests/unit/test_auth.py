from __future__ import annotations

from live_proxy.handlers.websocket.auth import resolve_model, get_client_key, resolve_credential
from tests.utils.fakes import FakeClientWebSocket


def test_client_key_prefers_query_param() -> None:
    ws = FakeClientWebSocket(query={"key": " q-key "}, headers={"x-goog-api-key": "h-key"})
    assert get_client_key(ws) == "q-key"


def test_client_key_falls_back_to_header() -> None:
    ws = FakeClientWebSocket(headers={"x-goog-api-key": "h-key"})
    assert get_client_key(ws) == "h-key"


def test_resolve_credential_precedence() -> None:
    assert resolve_credential("client", "server") == "client"
    assert resolve_credential("", "server") == "server"
    assert resolve_credential("  ", "") == ""


def test_resolve_model_defaults() -> None:
    assert resolve_model(FakeClientWebSocket(query={"model": "gemini-2.5-flash"}), "default") == "gemini-2.5-flash"
    assert resolve_model(FakeClientWebSocket(query={"model": ""}), "default") == "default"
