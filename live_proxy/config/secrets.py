"""Secrets and authentication configuration."""

from __future__ import annotations

ENV_GEMINI_API_KEY = "GEMINI_API_KEY"
ENV_GOOGLE_API_KEY = "GOOGLE_API_KEY"

# Query param and header a client may use to supply its own credential.
CLIENT_KEY_QUERY_PARAM = "key"
CREDENTIAL_HEADER = "x-goog-api-key"

__all__ = [
    "CLIENT_KEY_QUERY_PARAM",
    "CREDENTIAL_HEADER",
    "ENV_GEMINI_API_KEY",
    "ENV_GOOGLE_API_KEY",
]
