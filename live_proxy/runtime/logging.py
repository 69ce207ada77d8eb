"""Logging initialization."""

from __future__ import annotations

import os
import logging

from live_proxy.config.logging import LOG_LEVEL, LOG_FORMAT, ENV_SHOW_WEBSOCKETS_LOGS


def configure_logging() -> None:
    # websockets logs every handshake failure; negotiation already reports those.
    if (os.getenv(ENV_SHOW_WEBSOCKETS_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        logging.getLogger("websockets").setLevel(logging.WARNING)
        logging.getLogger("websockets.client").setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
