"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from live_proxy.state.settings import AppSettings
    from live_proxy.upstream.connector import ConnectFn
    from live_proxy.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    connect_upstream: ConnectFn
    settings: AppSettings

    async def shutdown(self) -> None:
        count = self.connections.get_connection_count()
        if count:
            logger.info("runtime: shutting down with %s active sessions", count)


__all__ = ["RuntimeDeps"]
