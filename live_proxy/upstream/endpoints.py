"""Candidate upstream endpoints for the Gemini Live API."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, urlencode, urlparse, parse_qsl, urlunparse

from live_proxy.config.upstream import (
    BIDI_PATH,
    FALLBACK_VERBS,
    MODEL_PATH_TEMPLATE,
    FALLBACK_API_VERSIONS,
    MODEL_RESOURCE_PREFIX,
)

_REDACTED = "***"


@dataclass(frozen=True, slots=True)
class Candidate:
    label: str
    url: str
    bidi: bool


def build_candidates(host: str, model: str, *, url_key: str | None = None) -> list[Candidate]:
    """Return the upstream endpoints in the order they must be tried.

    The bidirectional endpoint comes first; the per-model `connect`/`live`
    shapes follow for v1beta and then v1alpha. `url_key` is only set when the
    URL-key compatibility shim is enabled; the header always carries the key.
    """
    base = f"wss://{host.strip().rstrip('/')}"
    model_id = quote(model.strip().removeprefix(MODEL_RESOURCE_PREFIX), safe="-._")
    candidates = [Candidate(label="bidi", url=f"{base}{BIDI_PATH}", bidi=True)]
    for version in FALLBACK_API_VERSIONS:
        for verb in FALLBACK_VERBS:
            path = MODEL_PATH_TEMPLATE.format(version=version, model=model_id, verb=verb)
            candidates.append(Candidate(label=f"{version}:{verb}", url=f"{base}{path}", bidi=False))

    if url_key:
        candidates = [
            Candidate(label=c.label, url=_with_query(c.url, key=url_key), bidi=c.bidi) for c in candidates
        ]
    return candidates


def _with_query(url: str, **params: str) -> str:
    parsed = urlparse(url)
    query = dict(parse_qsl(parsed.query, keep_blank_values=True))
    query.update(params)
    return urlunparse(parsed._replace(query=urlencode(query)))


def redact_url(url: str) -> str:
    """Mask credential query params so a URL is safe to log."""
    parsed = urlparse(url)
    if not parsed.query:
        return url
    query = [
        (k, _REDACTED if k.lower() in {"key", "api_key", "access_token"} else v)
        for k, v in parse_qsl(parsed.query, keep_blank_values=True)
    ]
    return urlunparse(parsed._replace(query=urlencode(query, safe="*")))


__all__ = ["Candidate", "build_candidates", "redact_url"]
