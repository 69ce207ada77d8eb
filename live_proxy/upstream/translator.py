"""Translate client control messages into the upstream's vocabulary."""

from __future__ import annotations

import logging
from typing import Any

import orjson

from live_proxy.config.upstream import (
    AUDIO_PCM_MIME_TYPE,
    MODEL_RESOURCE_PREFIX,
    RESPONSE_MODALITY_AUDIO,
    CLIENT_EVENT_GENERATION_START,
)

from .messages import (
    AudioAppend,
    Passthrough,
    SessionStart,
    Unrecognized,
    ClientContent,
    ClientMessage,
    GenerationStart,
    parse_client_message,
)

logger = logging.getLogger(__name__)


def model_resource(model: str) -> str:
    model = model.strip()
    return model if model.startswith(MODEL_RESOURCE_PREFIX) else f"{MODEL_RESOURCE_PREFIX}{model}"


def build_setup(model: str, *, language_code: str, system_instruction: str | None = None) -> dict[str, Any]:
    setup: dict[str, Any] = {
        "model": model_resource(model),
        "generationConfig": {
            "responseModalities": [RESPONSE_MODALITY_AUDIO],
            "responseMimeType": AUDIO_PCM_MIME_TYPE,
            "languageCode": language_code,
        },
    }
    if system_instruction:
        setup["systemInstruction"] = {"parts": [{"text": system_instruction}]}
    return {"setup": setup}


def build_audio_content(data: str) -> dict[str, Any]:
    return {"clientContent": {"parts": [{"inlineData": {"mimeType": AUDIO_PCM_MIME_TYPE, "data": data}}]}}


def _dumps(obj: dict[str, Any]) -> str:
    return orjson.dumps(obj).decode("utf-8")


class MessageTranslator:
    """Per-session translator.

    Returns the frame to send upstream, or None when the message is dropped.
    Sending is left to the relay so translation stays side-effect free.
    """

    def __init__(
        self,
        *,
        model: str,
        bidi: bool,
        language_code: str,
        forward_malformed: bool = False,
    ) -> None:
        self._model = model
        self._bidi = bidi
        self._language_code = language_code
        self._forward_malformed = forward_malformed

    @property
    def bidi(self) -> bool:
        return self._bidi

    def translate(self, message: str | bytes) -> str | bytes | None:
        if isinstance(message, bytes):
            return message
        if not self._bidi:
            return message
        return self.translate_message(parse_client_message(message))

    def translate_message(self, msg: ClientMessage) -> str | bytes | None:
        if isinstance(msg, SessionStart):
            return _dumps(
                build_setup(
                    msg.model or self._model,
                    language_code=self._language_code,
                    system_instruction=msg.system_instruction,
                )
            )
        if isinstance(msg, GenerationStart):
            return _dumps({"clientEvent": CLIENT_EVENT_GENERATION_START})
        if isinstance(msg, AudioAppend):
            return _dumps(build_audio_content(msg.data))
        if isinstance(msg, ClientContent):
            return _dumps(msg.body)
        if isinstance(msg, Passthrough):
            return _dumps(self._inject_setup_model(msg.body))
        if isinstance(msg, Unrecognized):
            if self._forward_malformed:
                logger.warning("forwarding unrecognized client message verbatim: %s", msg.reason)
                return msg.raw
            logger.warning("dropping unrecognized client message: %s", msg.reason)
            return None
        raise TypeError(f"unhandled client message {type(msg).__name__}")

    def _inject_setup_model(self, body: dict[str, Any]) -> dict[str, Any]:
        setup = body.get("setup")
        if isinstance(setup, dict) and not setup.get("model"):
            body = {**body, "setup": {**setup, "model": model_resource(self._model)}}
        return body


__all__ = ["MessageTranslator", "build_audio_content", "build_setup", "model_resource"]
