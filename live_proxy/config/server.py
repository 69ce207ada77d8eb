"""Listener configuration."""

from __future__ import annotations

ENV_LIVE_PROXY_HOST = "LIVE_PROXY_HOST"
ENV_LIVE_PROXY_PORT = "LIVE_PROXY_PORT"
# Older deployments set the port under this name.
ENV_LEGACY_PROXY_PORT = "GEMINI_LIVE_PROXY_PORT"

DEFAULT_LIVE_PROXY_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_LIVE_PROXY_PORT = 3001

__all__ = [
    "DEFAULT_LIVE_PROXY_HOST",
    "DEFAULT_LIVE_PROXY_PORT",
    "ENV_LEGACY_PROXY_PORT",
    "ENV_LIVE_PROXY_HOST",
    "ENV_LIVE_PROXY_PORT",
]
