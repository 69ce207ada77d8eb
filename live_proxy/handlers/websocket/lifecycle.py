"""Per-session watchdog (idle and max-duration enforcement)."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from live_proxy.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class WebSocketLifecycle:
    """Closes the client socket once the session is idle or too old.

    Closing the client is enough: the relay mirrors the close upstream.
    A non-positive timeout disables that check.
    """

    def __init__(
        self,
        websocket: Any,
        *,
        idle_timeout_s: float,
        watchdog_tick_s: float,
        max_connection_duration_s: float,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._ws = websocket
        self._idle_timeout_s = float(idle_timeout_s)
        self._watchdog_tick_s = max(0.001, float(watchdog_tick_s))
        self._max_connection_duration_s = float(max_connection_duration_s)
        self._now = now_fn or time.monotonic
        self._connection_start = self._now()
        self._last_activity = self._connection_start
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    def touch(self) -> None:
        self._last_activity = self._now()

    def expired(self) -> tuple[int, str] | None:
        now = self._now()
        if self._max_connection_duration_s > 0 and now - self._connection_start >= self._max_connection_duration_s:
            return WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON
        if self._idle_timeout_s > 0 and now - self._last_activity >= self._idle_timeout_s:
            return WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON
        return None

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None

    async def _watchdog_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._watchdog_tick_s)
                verdict = self.expired()
                if verdict is None:
                    continue
                code, reason = verdict
                logger.info("WebSocket %s reached; closing connection", reason)
                self._stop_event.set()
                with contextlib.suppress(Exception):
                    await self._ws.close(code=code, reason=reason)
                break
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("watchdog exiting due to unexpected error", exc_info=True)


__all__ = ["WebSocketLifecycle"]
