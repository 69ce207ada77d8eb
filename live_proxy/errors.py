"""Shared error types for the live proxy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpstreamUnavailableError(Exception):
    """Raised when every upstream candidate failed to open."""

    attempted: tuple[str, ...]

    def __str__(self) -> str:
        return f"no upstream available (tried: {', '.join(self.attempted) or 'none'})"


__all__ = ["UpstreamUnavailableError"]
