from .runtime import RuntimeDeps
from .settings import AppSettings
from .session import SessionPhase, SessionState

__all__ = ["AppSettings", "RuntimeDeps", "SessionPhase", "SessionState"]
