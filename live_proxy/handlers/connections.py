"""WebSocket session admission control."""

from __future__ import annotations

import asyncio


class ConnectionManager:
    """Caps the number of live proxy sessions.

    Sessions share nothing else, so the cap is the only process-wide mutable state.
    """

    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._active: set[str] = set()

    @property
    def max_connections(self) -> int:
        return self._max

    async def admit(self, session_id: str) -> bool:
        async with self._lock:
            if len(self._active) >= self._max:
                return False
            self._active.add(session_id)
            return True

    async def release(self, session_id: str) -> None:
        async with self._lock:
            self._active.discard(session_id)

    def get_connection_count(self) -> int:
        return len(self._active)


__all__ = ["ConnectionManager"]
