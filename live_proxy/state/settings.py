"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True, slots=True)
class AuthSettings:
    api_key: str


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    default_model: str
    host: str
    language_code: str
    connect_timeout_s: float
    key_in_url: bool
    json_as_text: bool
    forward_malformed: bool


@dataclass(frozen=True, slots=True)
class AppSettings:
    server: ServerSettings
    auth: AuthSettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    upstream: UpstreamSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "LimitsSettings",
    "ServerSettings",
    "UpstreamSettings",
    "WebSocketSettings",
]
