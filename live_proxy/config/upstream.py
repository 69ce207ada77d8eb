"""Upstream (Gemini Live) endpoint configuration and protocol constants."""

from __future__ import annotations

ENV_GEMINI_LIVE_MODEL = "GEMINI_LIVE_MODEL"
ENV_GEMINI_LIVE_HOST = "GEMINI_LIVE_HOST"
ENV_GEMINI_LIVE_LANGUAGE_CODE = "GEMINI_LIVE_LANGUAGE_CODE"
ENV_UPSTREAM_CONNECT_TIMEOUT_S = "UPSTREAM_CONNECT_TIMEOUT_S"
ENV_UPSTREAM_KEY_IN_URL = "UPSTREAM_KEY_IN_URL"
ENV_UPSTREAM_JSON_AS_TEXT = "UPSTREAM_JSON_AS_TEXT"
ENV_FORWARD_MALFORMED = "FORWARD_MALFORMED"

DEFAULT_GEMINI_LIVE_MODEL = "gemini-live-2.5-flash-native-audio"
DEFAULT_GEMINI_LIVE_HOST = "generativelanguage.googleapis.com"
DEFAULT_GEMINI_LIVE_LANGUAGE_CODE = "ka-GE"
DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S = 10.0
DEFAULT_UPSTREAM_KEY_IN_URL = False
DEFAULT_UPSTREAM_JSON_AS_TEXT = False
DEFAULT_FORWARD_MALFORMED = False

# Candidate URL templates, tried in this order.
BIDI_PATH = "/ws/google.ai.generativelanguage.v1beta.GenerativeService.BidiGenerateContent"
MODEL_PATH_TEMPLATE = "/{version}/models/{model}:{verb}"
FALLBACK_API_VERSIONS = ("v1beta", "v1alpha")
FALLBACK_VERBS = ("connect", "live")

MODEL_RESOURCE_PREFIX = "models/"

# PCM16 mono, 16 kHz in both directions.
AUDIO_SAMPLE_RATE_HZ = 16000
AUDIO_PCM_MIME_TYPE = f"audio/pcm;rate={AUDIO_SAMPLE_RATE_HZ}"
RESPONSE_MODALITY_AUDIO = "AUDIO"
CLIENT_EVENT_GENERATION_START = "GENERATION_START"

__all__ = [
    "ENV_GEMINI_LIVE_MODEL",
    "ENV_GEMINI_LIVE_HOST",
    "ENV_GEMINI_LIVE_LANGUAGE_CODE",
    "ENV_UPSTREAM_CONNECT_TIMEOUT_S",
    "ENV_UPSTREAM_KEY_IN_URL",
    "ENV_UPSTREAM_JSON_AS_TEXT",
    "ENV_FORWARD_MALFORMED",
    "DEFAULT_GEMINI_LIVE_MODEL",
    "DEFAULT_GEMINI_LIVE_HOST",
    "DEFAULT_GEMINI_LIVE_LANGUAGE_CODE",
    "DEFAULT_UPSTREAM_CONNECT_TIMEOUT_S",
    "DEFAULT_UPSTREAM_KEY_IN_URL",
    "DEFAULT_UPSTREAM_JSON_AS_TEXT",
    "DEFAULT_FORWARD_MALFORMED",
    "BIDI_PATH",
    "MODEL_PATH_TEMPLATE",
    "FALLBACK_API_VERSIONS",
    "FALLBACK_VERBS",
    "MODEL_RESOURCE_PREFIX",
    "AUDIO_SAMPLE_RATE_HZ",
    "AUDIO_PCM_MIME_TYPE",
    "RESPONSE_MODALITY_AUDIO",
    "CLIENT_EVENT_GENERATION_START",
]
