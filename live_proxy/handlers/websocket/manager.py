"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from live_proxy.state import RuntimeDeps, SessionState
from live_proxy.upstream import EndpointResolver
from live_proxy.config.websocket import (
    WS_CLOSE_BUSY_CODE,
    WS_CLOSE_BUSY_REASON,
    WS_CLOSE_MISSING_KEY_REASON,
    WS_CLOSE_POLICY_VIOLATION_CODE,
)

from .relay import run_session
from .errors import reject_connection
from .lifecycle import WebSocketLifecycle
from .auth import resolve_model, get_client_key, resolve_credential

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, state: SessionState, runtime_deps: RuntimeDeps) -> bool:
    if not state.credential:
        logger.warning("session=%s rejected: no api key from client or server", state.session_id)
        state.terminate(WS_CLOSE_POLICY_VIOLATION_CODE, WS_CLOSE_MISSING_KEY_REASON)
        await reject_connection(ws, close_code=WS_CLOSE_POLICY_VIOLATION_CODE, reason=WS_CLOSE_MISSING_KEY_REASON)
        return False

    if not await runtime_deps.connections.admit(state.session_id):
        logger.warning("session=%s rejected: server at capacity", state.session_id)
        state.terminate(WS_CLOSE_BUSY_CODE, WS_CLOSE_BUSY_REASON)
        await reject_connection(ws, close_code=WS_CLOSE_BUSY_CODE, reason=WS_CLOSE_BUSY_REASON)
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.release(state.session_id)
        raise
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> SessionState:
    settings = runtime_deps.settings
    state = SessionState(
        model=resolve_model(ws, settings.upstream.default_model),
        credential=resolve_credential(get_client_key(ws), settings.auth.api_key),
    )
    lifecycle: WebSocketLifecycle | None = None
    admitted = False
    try:
        if not await _prepare_connection(ws, state, runtime_deps):
            return state
        admitted = True

        lifecycle = WebSocketLifecycle(
            ws,
            idle_timeout_s=settings.websocket.idle_timeout_s,
            watchdog_tick_s=settings.websocket.watchdog_tick_s,
            max_connection_duration_s=settings.websocket.max_connection_duration_s,
        )
        state.touch = lifecycle.touch
        lifecycle.start()

        logger.info(
            "session=%s accepted model=%s. Active: %s",
            state.session_id,
            state.model,
            runtime_deps.connections.get_connection_count(),
        )
        resolver = EndpointResolver(runtime_deps.connect_upstream, settings.upstream)
        await run_session(ws, state, resolver, settings.upstream)
        return state
    finally:
        if lifecycle is not None:
            with contextlib.suppress(Exception):
                await lifecycle.stop()

        if admitted:
            with contextlib.suppress(Exception):
                await runtime_deps.connections.release(state.session_id)
            logger.info(
                "session=%s closed via=%s code=%s. Active: %s",
                state.session_id,
                state.candidate_label,
                state.close_code,
                runtime_deps.connections.get_connection_count(),
            )


__all__ = ["handle_websocket_connection"]
