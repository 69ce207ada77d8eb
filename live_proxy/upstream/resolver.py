"""Sequential upstream endpoint negotiation."""

from __future__ import annotations

import asyncio
import logging

from websockets.exceptions import WebSocketException

from live_proxy.config.secrets import CREDENTIAL_HEADER
from live_proxy.errors import UpstreamUnavailableError
from live_proxy.state import SessionPhase, SessionState
from live_proxy.state.settings import UpstreamSettings

from .connector import ConnectFn, UpstreamSocket
from .endpoints import Candidate, redact_url, build_candidates

logger = logging.getLogger(__name__)

_CONNECT_ERRORS = (OSError, asyncio.TimeoutError, WebSocketException)


class EndpointResolver:
    """Try each candidate once, in order, until one opens."""

    def __init__(self, connect: ConnectFn, settings: UpstreamSettings) -> None:
        self._connect = connect
        self._settings = settings

    def candidates_for(self, state: SessionState) -> list[Candidate]:
        url_key = state.credential if self._settings.key_in_url else None
        return build_candidates(self._settings.host, state.model, url_key=url_key)

    async def resolve(self, state: SessionState) -> tuple[Candidate, UpstreamSocket]:
        candidates = self.candidates_for(state)
        headers = {CREDENTIAL_HEADER: state.credential}
        state.transition(SessionPhase.NEGOTIATING)
        state.candidate_index = 0
        attempted: list[str] = []

        # One attempt in flight at a time; the next starts only after this one failed.
        while state.candidate_index < len(candidates):
            candidate = candidates[state.candidate_index]
            attempted.append(candidate.label)
            logger.info(
                "session=%s upstream: trying %s %s",
                state.session_id,
                candidate.label,
                redact_url(candidate.url),
            )
            try:
                socket = await self._connect(candidate.url, headers)
            except _CONNECT_ERRORS as exc:
                logger.warning(
                    "session=%s upstream: %s failed: %s",
                    state.session_id,
                    candidate.label,
                    type(exc).__name__,
                )
                state.candidate_index += 1
                continue

            state.candidate_label = candidate.label
            state.bidi = candidate.bidi
            logger.info("session=%s upstream: open via %s", state.session_id, candidate.label)
            return candidate, socket

        raise UpstreamUnavailableError(attempted=tuple(attempted))


__all__ = ["EndpointResolver"]
