"""Close and best-effort send helpers for both sides of a session."""

from __future__ import annotations

import logging
import contextlib
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from live_proxy.upstream.connector import UpstreamSocket
from live_proxy.config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_UNSENDABLE_CODES,
    WS_CLOSE_INTERNAL_ERROR_CODE,
    WS_CLOSE_UPSTREAM_ERROR_REASON,
)

logger = logging.getLogger(__name__)

# Close frame payload is 125 bytes: 2 for the code, the rest for the reason.
_MAX_REASON_BYTES = 123


def sendable_close(code: int | None, reason: str | None) -> tuple[int, str]:
    """Map a received close code to one that may be sent in a close frame."""
    reason = reason or ""
    if code is None or code == 1005:
        return WS_CLOSE_NORMAL_CODE, reason
    if code in WS_CLOSE_UNSENDABLE_CODES or not (1000 <= code <= 1014 or 3000 <= code <= 4999):
        return WS_CLOSE_INTERNAL_ERROR_CODE, reason or WS_CLOSE_UPSTREAM_ERROR_REASON
    return code, reason


def clip_reason(reason: str) -> str:
    encoded = reason.encode("utf-8")
    if len(encoded) <= _MAX_REASON_BYTES:
        return reason
    return encoded[:_MAX_REASON_BYTES].decode("utf-8", errors="ignore")


async def close_client(ws: WebSocket, code: int | None, reason: str | None = None) -> None:
    code, reason = sendable_close(code, reason)
    with contextlib.suppress(Exception):
        await ws.close(code=code, reason=clip_reason(reason))


async def close_upstream(upstream: UpstreamSocket, code: int | None, reason: str | None = None) -> None:
    code, reason = sendable_close(code, reason)
    try:
        await upstream.close(code=code, reason=clip_reason(reason))
    except Exception:
        logger.debug("upstream close failed", exc_info=True)


async def safe_send_client(ws: WebSocket, frame: str | bytes) -> bool:
    try:
        if isinstance(frame, bytes):
            await ws.send_bytes(frame)
        else:
            await ws.send_text(frame)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("client send failed", exc_info=True)
        return False
    return True


async def safe_send_upstream(upstream: UpstreamSocket, frame: str | bytes) -> bool:
    try:
        await upstream.send(frame)
    except Exception:
        logger.debug("upstream send failed", exc_info=True)
        return False
    return True


async def reject_connection(ws: Any, *, close_code: int, reason: str) -> None:
    # Accept first so the close frame (and its reason) reaches the browser.
    try:
        await ws.accept()
    except Exception:
        return
    with contextlib.suppress(Exception):
        await ws.close(code=close_code, reason=reason)


__all__ = [
    "clip_reason",
    "close_client",
    "close_upstream",
    "reject_connection",
    "safe_send_client",
    "safe_send_upstream",
    "sendable_close",
]
