"""Client control messages as a closed set of variants."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

# snake_case client keys -> camelCase keys of the BidiGenerateContent format.
KEY_RENAMES: dict[str, str] = {
    "client_content": "clientContent",
    "inline_data": "inlineData",
    "mime_type": "mimeType",
    "generation_config": "generationConfig",
    "response_modalities": "responseModalities",
    "response_mime_type": "responseMimeType",
    "language_code": "languageCode",
    "system_instruction": "systemInstruction",
    "realtime_input": "realtimeInput",
    "turn_complete": "turnComplete",
}

# Rejected by BidiGenerateContent inside clientContent parts.
DROPPED_KEYS: frozenset[str] = frozenset({"role"})

TYPE_SESSION_START = "session.start"
TYPE_AUDIO_APPEND = "input_audio_buffer.append"
TYPE_AUDIO_COMMIT = "input_audio_buffer.commit"
TYPE_RESPONSE_CREATE = "response.create"


def normalize_keys(value: Any) -> Any:
    """Recursively rename keys to camelCase and drop unsupported ones."""
    if isinstance(value, dict):
        return {
            KEY_RENAMES.get(k, k): normalize_keys(v) for k, v in value.items() if k not in DROPPED_KEYS
        }
    if isinstance(value, list):
        return [normalize_keys(v) for v in value]
    return value


@dataclass(frozen=True, slots=True)
class SessionStart:
    model: str | None
    system_instruction: str | None


@dataclass(frozen=True, slots=True)
class GenerationStart:
    source_type: str


@dataclass(frozen=True, slots=True)
class AudioAppend:
    data: str


@dataclass(frozen=True, slots=True)
class ClientContent:
    body: dict[str, Any]


@dataclass(frozen=True, slots=True)
class Passthrough:
    """A JSON object without `type`, already shaped for the upstream."""

    body: dict[str, Any]


@dataclass(frozen=True, slots=True)
class Unrecognized:
    raw: str
    reason: str


ClientMessage = SessionStart | GenerationStart | AudioAppend | ClientContent | Passthrough | Unrecognized


def _parse_session_start(msg: dict[str, Any]) -> SessionStart:
    model = msg.get("model")
    model = model.strip() if isinstance(model, str) and model.strip() else None
    config = msg.get("config")
    instruction = config.get("systemInstruction") if isinstance(config, dict) else None
    if not isinstance(instruction, str) or not instruction.strip():
        instruction = None
    return SessionStart(model=model, system_instruction=instruction)


def parse_client_message(raw: str) -> ClientMessage:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return Unrecognized(raw=raw, reason="invalid JSON")

    if not isinstance(msg, dict):
        return Unrecognized(raw=raw, reason="message must be a JSON object")

    msg_type = msg.get("type")
    if msg_type is not None and not isinstance(msg_type, str):
        return Unrecognized(raw=raw, reason="type must be a string")
    if msg_type == TYPE_SESSION_START:
        return _parse_session_start(msg)
    if msg_type in {TYPE_AUDIO_COMMIT, TYPE_RESPONSE_CREATE}:
        return GenerationStart(source_type=msg_type)
    if msg_type == TYPE_AUDIO_APPEND:
        audio = msg.get("audio")
        data = audio.get("data") if isinstance(audio, dict) else None
        if isinstance(data, str):
            return AudioAppend(data=data)

    # An append without audio.data may still carry clientContent.
    body = normalize_keys(msg)
    if "clientContent" in body:
        return ClientContent(body=body)
    if msg_type is None:
        return Passthrough(body=body)
    if msg_type == TYPE_AUDIO_APPEND:
        return Unrecognized(raw=raw, reason="append without audio.data")
    return Unrecognized(raw=raw, reason=f"unsupported type {msg_type!r}")


__all__ = [
    "AudioAppend",
    "ClientContent",
    "ClientMessage",
    "DROPPED_KEYS",
    "GenerationStart",
    "KEY_RENAMES",
    "Passthrough",
    "SessionStart",
    "Unrecognized",
    "normalize_keys",
    "parse_client_message",
]
