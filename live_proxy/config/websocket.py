"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

# Browsers connect to ws://host:port/?model=...&key=...
WS_ENDPOINT_PATH: str = (os.getenv("WS_ENDPOINT_PATH") or "").strip() or "/"

# Query params
WS_QUERY_MODEL = "model"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_POLICY_VIOLATION_CODE = 1008
WS_CLOSE_INTERNAL_ERROR_CODE = 1011
WS_CLOSE_TRY_AGAIN_LATER_CODE = 1013
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_MISSING_KEY_REASON = "missing api key"
WS_CLOSE_NO_UPSTREAM_REASON = "no upstream available"
WS_CLOSE_BUSY_REASON = "server at capacity"
WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration"
WS_CLOSE_UPSTREAM_ERROR_REASON = "upstream error"

# Reserved codes that must never appear in a close frame (RFC 6455 7.4.1).
WS_CLOSE_UNSENDABLE_CODES = frozenset({1004, 1005, 1006, 1015})

# Idle watchdog
ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
ENV_WS_MAX_CONNECTION_DURATION_S = "WS_MAX_CONNECTION_DURATION_S"

DEFAULT_WS_IDLE_TIMEOUT_S = 150.0
DEFAULT_WS_WATCHDOG_TICK_S = 5.0
DEFAULT_WS_MAX_CONNECTION_DURATION_S = 3600.0

__all__ = [
    "WS_ENDPOINT_PATH",
    "WS_QUERY_MODEL",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_POLICY_VIOLATION_CODE",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
    "WS_CLOSE_TRY_AGAIN_LATER_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_MISSING_KEY_REASON",
    "WS_CLOSE_NO_UPSTREAM_REASON",
    "WS_CLOSE_BUSY_REASON",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_CLOSE_UPSTREAM_ERROR_REASON",
    "WS_CLOSE_UNSENDABLE_CODES",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
]
