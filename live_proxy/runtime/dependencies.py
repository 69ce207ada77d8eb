"""Runtime dependency construction (upstream connector + admission control)."""

from __future__ import annotations

import logging

from live_proxy.state import RuntimeDeps
from live_proxy.state.settings import AppSettings
from live_proxy.upstream.connector import ConnectFn, build_websocket_connector
from live_proxy.handlers.connections import ConnectionManager

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(
    settings: AppSettings | None = None,
    *,
    connect_upstream: ConnectFn | None = None,
) -> RuntimeDeps:
    settings = settings or load_settings()
    if connect_upstream is None:
        connect_upstream = build_websocket_connector(open_timeout_s=settings.upstream.connect_timeout_s)

    logger.info(
        "runtime: default_model=%s upstream_host=%s fallback_key=%s max_connections=%s",
        settings.upstream.default_model,
        settings.upstream.host,
        "set" if settings.auth.api_key else "unset",
        settings.limits.max_concurrent_connections,
    )

    return RuntimeDeps(
        connections=ConnectionManager(max_connections=settings.limits.max_concurrent_connections),
        connect_upstream=connect_upstream,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
