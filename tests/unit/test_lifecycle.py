from __future__ import annotations

import asyncio

import pytest

from live_proxy.handlers.websocket.lifecycle import WebSocketLifecycle
from live_proxy.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)
from tests.utils.fakes import FakeClientWebSocket


@pytest.mark.asyncio
async def test_websocket_lifecycle_closes_on_max_duration() -> None:
    ws = FakeClientWebSocket()
    lifecycle = WebSocketLifecycle(
        ws,
        idle_timeout_s=9999.0,
        watchdog_tick_s=0.01,
        max_connection_duration_s=0.05,
    )
    lifecycle.start()

    await asyncio.wait_for(ws.closed.wait(), timeout=1.0)
    assert ws.close_code == WS_CLOSE_MAX_DURATION_CODE
    assert ws.close_reason == WS_CLOSE_MAX_DURATION_REASON

    await lifecycle.stop()


def test_websocket_lifecycle_idle_verdict_resets_on_touch() -> None:
    now = 0.0

    def clock() -> float:
        return now

    lifecycle = WebSocketLifecycle(
        FakeClientWebSocket(),
        idle_timeout_s=10.0,
        watchdog_tick_s=1.0,
        max_connection_duration_s=0.0,
        now_fn=clock,
    )
    now = 9.0
    assert lifecycle.expired() is None
    lifecycle.touch()
    now = 18.0
    assert lifecycle.expired() is None
    now = 19.0
    assert lifecycle.expired() == (WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON)
