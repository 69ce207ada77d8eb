"""Per-connection session state."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from collections.abc import Callable


class SessionPhase(enum.Enum):
    IDLE = "idle"
    NEGOTIATING = "negotiating"
    RELAYING = "relaying"
    TERMINATED = "terminated"


_ALLOWED_TRANSITIONS: dict[SessionPhase, frozenset[SessionPhase]] = {
    SessionPhase.IDLE: frozenset({SessionPhase.NEGOTIATING, SessionPhase.TERMINATED}),
    SessionPhase.NEGOTIATING: frozenset({SessionPhase.RELAYING, SessionPhase.TERMINATED}),
    SessionPhase.RELAYING: frozenset({SessionPhase.TERMINATED}),
    SessionPhase.TERMINATED: frozenset(),
}


@dataclass(slots=True)
class SessionState:
    """Mutable state for one client <-> upstream session.

    `candidate_index` is the negotiation cursor; only the endpoint resolver
    advances it. The credential is kept here so that it never needs to be
    formatted into a URL or a log line.
    """

    model: str
    credential: str = field(repr=False)
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    phase: SessionPhase = SessionPhase.IDLE
    candidate_index: int = 0
    candidate_label: str | None = None
    bidi: bool = False
    close_code: int | None = None
    close_reason: str = ""
    touch: Callable[[], None] | None = None

    def transition(self, phase: SessionPhase) -> None:
        if phase is self.phase:
            return
        if phase not in _ALLOWED_TRANSITIONS[self.phase]:
            raise RuntimeError(f"invalid session transition {self.phase.value} -> {phase.value}")
        self.phase = phase

    def terminate(self, code: int, reason: str = "") -> None:
        if self.phase is SessionPhase.TERMINATED:
            return
        self.close_code = code
        self.close_reason = reason
        self.transition(SessionPhase.TERMINATED)


__all__ = ["SessionPhase", "SessionState"]
