"""Session parameter resolution (credential and model)."""

from __future__ import annotations

from typing import Any

from live_proxy.config.websocket import WS_QUERY_MODEL
from live_proxy.config.secrets import CREDENTIAL_HEADER, CLIENT_KEY_QUERY_PARAM


def get_client_key(ws: Any) -> str:
    # Browsers cannot set headers on a WS upgrade, so the query param comes first.
    key = (ws.query_params.get(CLIENT_KEY_QUERY_PARAM) or "").strip()
    if key:
        return key
    return (ws.headers.get(CREDENTIAL_HEADER) or "").strip()


def resolve_credential(client_key: str, fallback: str) -> str:
    return (client_key or "").strip() or (fallback or "").strip()


def resolve_model(ws: Any, default: str) -> str:
    return (ws.query_params.get(WS_QUERY_MODEL) or "").strip() or default


__all__ = ["get_client_key", "resolve_credential", "resolve_model"]
