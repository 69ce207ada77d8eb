"""Upstream socket factory.

The resolver only ever sees `ConnectFn`; production wires in
`build_websocket_connector()` and tests inject a fake keyed by URL.
"""

from __future__ import annotations

from typing import Protocol
from collections.abc import Mapping, Callable, Awaitable, AsyncIterator

import websockets


class UpstreamSocket(Protocol):
    """The subset of `websockets.asyncio.client.ClientConnection` the relay uses."""

    @property
    def close_code(self) -> int | None: ...

    @property
    def close_reason(self) -> str | None: ...

    async def send(self, message: str | bytes) -> None: ...

    async def close(self, code: int = 1000, reason: str = "") -> None: ...

    def __aiter__(self) -> AsyncIterator[str | bytes]: ...


ConnectFn = Callable[[str, Mapping[str, str]], Awaitable[UpstreamSocket]]


def build_websocket_connector(*, open_timeout_s: float) -> ConnectFn:
    async def _connect(url: str, headers: Mapping[str, str]) -> UpstreamSocket:
        return await websockets.connect(
            url,
            additional_headers=list(headers.items()),
            open_timeout=open_timeout_s,
            # Audio turns can exceed the 1 MiB default.
            max_size=None,
        )

    return _connect


__all__ = ["ConnectFn", "UpstreamSocket", "build_websocket_connector"]
