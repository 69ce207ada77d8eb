"""Environment parsing for runtime settings.

Env names and defaults live in `live_proxy/config/*`; this module resolves
them into the frozen dataclasses from `live_proxy.state.settings`.
"""

from __future__ import annotations

import os

from live_proxy.config.secrets import ENV_GEMINI_API_KEY, ENV_GOOGLE_API_KEY
from live_proxy.config.limits import ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS
from live_proxy.state.settings import (
    AppSettings,
    AuthSettings,
    LimitsSettings,
    ServerSettings,
    UpstreamSettings,
    WebSocketSettings,
)
from live_proxy.config.server import (
    ENV_LIVE_PROXY_HOST,
    ENV_LIVE_PROXY_PORT,
    ENV_LEGACY_PROXY_PORT,
    DEFAULT_LIVE_PROXY_HOST,
    DEFAULT_LIVE_PROXY_PORT,
)
from live_proxy.config.websocket import (
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)
from live_proxy.config.upstream import (
    ENV_GEMINI_LIVE_HOST,
    ENV_FORWARD_MALFORMED,
    ENV_GEMINI_LIVE_MODEL,
    ENV_UPSTREAM_KEY_IN_URL,
    DEFAULT_GEMINI_LIVE_HOST,
    DEFAULT_FORWARD_MALFORMED,
    ENV_UPSTREAM_JSON_AS_TEXT,
    DEFAULT_GEMINI_LIVE_MODEL,
    DEFAULT_UPSTREAM_KEY_IN_URL,
    DEFAULT_UPSTREAM_JSON_AS_TEXT,
    ENV_GEMINI_LIVE_LANGUAGE_CODE,
    ENV_UPSTREAM_CONNECT_TIMEOUT_S,
    DEFAULT_GEMINI_LIVE_LANGUAGE_CODE,
    DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _load_server_settings() -> ServerSettings:
    port = _int_env(ENV_LIVE_PROXY_PORT, _int_env(ENV_LEGACY_PROXY_PORT, DEFAULT_LIVE_PROXY_PORT))
    return ServerSettings(
        host=_str_env(ENV_LIVE_PROXY_HOST, DEFAULT_LIVE_PROXY_HOST),
        port=port,
    )


def _load_auth_settings() -> AuthSettings:
    # A missing key is fine at startup; sessions without a client key are refused later.
    api_key = _str_env(ENV_GEMINI_API_KEY, _str_env(ENV_GOOGLE_API_KEY, ""))
    return AuthSettings(api_key=api_key)


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    return LimitsSettings(max_concurrent_connections=max(1, max_connections))


def _load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        idle_timeout_s=_float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S),
        watchdog_tick_s=_float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S),
        max_connection_duration_s=_float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S),
    )


def _load_upstream_settings() -> UpstreamSettings:
    connect_timeout = _float_env(ENV_UPSTREAM_CONNECT_TIMEOUT_S, DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S)
    if connect_timeout <= 0:
        connect_timeout = DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S
    return UpstreamSettings(
        default_model=_str_env(ENV_GEMINI_LIVE_MODEL, DEFAULT_GEMINI_LIVE_MODEL),
        host=_str_env(ENV_GEMINI_LIVE_HOST, DEFAULT_GEMINI_LIVE_HOST),
        language_code=_str_env(ENV_GEMINI_LIVE_LANGUAGE_CODE, DEFAULT_GEMINI_LIVE_LANGUAGE_CODE),
        connect_timeout_s=connect_timeout,
        key_in_url=_bool_env(ENV_UPSTREAM_KEY_IN_URL, DEFAULT_UPSTREAM_KEY_IN_URL),
        json_as_text=_bool_env(ENV_UPSTREAM_JSON_AS_TEXT, DEFAULT_UPSTREAM_JSON_AS_TEXT),
        forward_malformed=_bool_env(ENV_FORWARD_MALFORMED, DEFAULT_FORWARD_MALFORMED),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        server=_load_server_settings(),
        auth=_load_auth_settings(),
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
        upstream=_load_upstream_settings(),
    )


__all__ = ["load_settings"]
