"""Session relay: negotiate an upstream, then pipe frames both ways."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import orjson
from fastapi import WebSocket, WebSocketDisconnect
from websockets.exceptions import ConnectionClosedError

from live_proxy.state import SessionPhase, SessionState
from live_proxy.errors import UpstreamUnavailableError
from live_proxy.state.settings import UpstreamSettings
from live_proxy.upstream import Candidate, UpstreamSocket, EndpointResolver, MessageTranslator
from live_proxy.config.websocket import (
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_NO_UPSTREAM_REASON,
    WS_CLOSE_INTERNAL_ERROR_CODE,
    WS_CLOSE_TRY_AGAIN_LATER_CODE,
    WS_CLOSE_UPSTREAM_ERROR_REASON,
)

from .errors import close_client, close_upstream, sendable_close, safe_send_client, safe_send_upstream

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientClosed:
    code: int | None
    reason: str = ""


ClientEvent = str | bytes | ClientClosed


async def read_client(ws: WebSocket, inbox: asyncio.Queue[ClientEvent], state: SessionState) -> ClientClosed:
    """Queue client frames in arrival order until the client goes away.

    Runs from accept onwards, so frames sent while the upstream is still
    negotiating are kept and flushed, in order, once it opens.
    """
    while True:
        try:
            message = await ws.receive()
        except WebSocketDisconnect as exc:
            closed = ClientClosed(code=exc.code, reason=exc.reason or "")
            inbox.put_nowait(closed)
            return closed
        except RuntimeError:
            # Starlette refuses receive() once a disconnect was seen.
            closed = ClientClosed(code=None)
            inbox.put_nowait(closed)
            return closed

        if message["type"] == "websocket.disconnect":
            closed = ClientClosed(code=message.get("code"), reason=message.get("reason") or "")
            inbox.put_nowait(closed)
            return closed

        if state.touch is not None:
            state.touch()
        data = message.get("bytes")
        if data is not None:
            inbox.put_nowait(data)
            continue
        text = message.get("text")
        if text is not None:
            inbox.put_nowait(text)


def _client_frame(message: str | bytes, *, json_as_text: bool) -> str | bytes:
    # Gemini delivers JSON in binary frames; browsers would otherwise get a Blob.
    if json_as_text and isinstance(message, bytes) and message.lstrip()[:1] in {b"{", b"["}:
        try:
            orjson.loads(message)
        except orjson.JSONDecodeError:
            return message
        return message.decode("utf-8")
    return message


async def pump_client_to_upstream(
    inbox: asyncio.Queue[ClientEvent],
    upstream: UpstreamSocket,
    translator: MessageTranslator,
    state: SessionState,
) -> None:
    while True:
        event = await inbox.get()
        if isinstance(event, ClientClosed):
            code, reason = sendable_close(event.code, event.reason)
            logger.info("session=%s client closed code=%s", state.session_id, code)
            state.terminate(code, reason)
            await close_upstream(upstream, code, reason)
            return
        frame = translator.translate(event)
        if frame is not None:
            await safe_send_upstream(upstream, frame)


async def pump_upstream_to_client(
    upstream: UpstreamSocket,
    ws: WebSocket,
    state: SessionState,
    *,
    json_as_text: bool = False,
) -> None:
    abnormal = False
    try:
        async for message in upstream:
            if state.touch is not None:
                state.touch()
            await safe_send_client(ws, _client_frame(message, json_as_text=json_as_text))
    except ConnectionClosedError:
        logger.debug("session=%s upstream closed abnormally", state.session_id)
        abnormal = True

    code, reason = sendable_close(upstream.close_code, upstream.close_reason)
    if abnormal and upstream.close_code is None:
        # No close frame arrived, so there is no peer code to mirror.
        code, reason = WS_CLOSE_INTERNAL_ERROR_CODE, WS_CLOSE_UPSTREAM_ERROR_REASON
    logger.info("session=%s upstream closed code=%s", state.session_id, code)
    state.terminate(code, reason)
    await close_client(ws, code, reason)


async def _negotiate(
    resolver: EndpointResolver,
    state: SessionState,
    reader: asyncio.Task,
) -> tuple[Candidate, UpstreamSocket] | None:
    negotiation = asyncio.create_task(resolver.resolve(state))
    done, _ = await asyncio.wait({negotiation, reader}, return_when=asyncio.FIRST_COMPLETED)
    if negotiation in done:
        return negotiation.result()

    # Client left first: abort the attempt in flight and skip the rest.
    negotiation.cancel()
    await asyncio.wait({negotiation})
    if not negotiation.cancelled() and negotiation.exception() is None:
        _, upstream = negotiation.result()
        await close_upstream(upstream, WS_CLOSE_NORMAL_CODE, "client disconnected")
    return None


def _reader_close(reader: asyncio.Task) -> ClientClosed:
    if reader.done() and not reader.cancelled() and reader.exception() is None:
        return reader.result()
    return ClientClosed(code=None)


async def run_session(
    ws: WebSocket,
    state: SessionState,
    resolver: EndpointResolver,
    settings: UpstreamSettings,
) -> None:
    inbox: asyncio.Queue[ClientEvent] = asyncio.Queue()
    reader = asyncio.create_task(read_client(ws, inbox, state))
    tasks: list[asyncio.Task] = [reader]
    try:
        try:
            negotiated = await _negotiate(resolver, state, reader)
        except UpstreamUnavailableError as exc:
            logger.warning("session=%s %s", state.session_id, exc)
            state.terminate(WS_CLOSE_TRY_AGAIN_LATER_CODE, WS_CLOSE_NO_UPSTREAM_REASON)
            await close_client(ws, WS_CLOSE_TRY_AGAIN_LATER_CODE, WS_CLOSE_NO_UPSTREAM_REASON)
            return

        if negotiated is None:
            closed = _reader_close(reader)
            logger.info("session=%s client left during negotiation", state.session_id)
            state.terminate(*sendable_close(closed.code, closed.reason))
            return

        candidate, upstream = negotiated
        state.transition(SessionPhase.RELAYING)
        translator = MessageTranslator(
            model=state.model,
            bidi=candidate.bidi,
            language_code=settings.language_code,
            forward_malformed=settings.forward_malformed,
        )
        to_upstream = asyncio.create_task(pump_client_to_upstream(inbox, upstream, translator, state))
        to_client = asyncio.create_task(
            pump_upstream_to_client(upstream, ws, state, json_as_text=settings.json_as_text)
        )
        tasks += [to_upstream, to_client]

        done, _ = await asyncio.wait({to_upstream, to_client}, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            exc = task.exception()
            if exc is None:
                continue
            logger.error("session=%s relay failed", state.session_id, exc_info=exc)
            state.terminate(WS_CLOSE_INTERNAL_ERROR_CODE, "proxy error")
            await close_upstream(upstream, WS_CLOSE_INTERNAL_ERROR_CODE, "proxy error")
            await close_client(ws, WS_CLOSE_INTERNAL_ERROR_CODE, "proxy error")
            break
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


__all__ = [
    "ClientClosed",
    "pump_client_to_upstream",
    "pump_upstream_to_client",
    "read_client",
    "run_session",
]
