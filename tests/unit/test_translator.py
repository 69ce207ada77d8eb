from __future__ import annotations

import json

import pytest

from live_proxy.upstream.translator import MessageTranslator, model_resource


def _bidi(**kwargs) -> MessageTranslator:
    return MessageTranslator(model="default-model", bidi=True, language_code="ka-GE", **kwargs)


def _translate(translator: MessageTranslator, msg: object) -> dict:
    out = translator.translate(json.dumps(msg))
    assert isinstance(out, str)
    return json.loads(out)


def test_session_start_builds_setup_envelope() -> None:
    out = _translate(_bidi(), {"type": "session.start", "model": "X", "config": {"systemInstruction": "S"}})
    assert out == {
        "setup": {
            "model": "models/X",
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "responseMimeType": "audio/pcm;rate=16000",
                "languageCode": "ka-GE",
            },
            "systemInstruction": {"parts": [{"text": "S"}]},
        }
    }


def test_session_start_without_instruction_or_model_uses_session_model() -> None:
    out = _translate(_bidi(), {"type": "session.start", "config": {"systemInstruction": "  "}})
    assert out["setup"]["model"] == "models/default-model"
    assert "systemInstruction" not in out["setup"]


def test_model_resource_does_not_double_prefix() -> None:
    assert model_resource("models/gemini") == "models/gemini"
    assert model_resource("gemini") == "models/gemini"


@pytest.mark.parametrize("msg_type", ["input_audio_buffer.commit", "response.create"])
def test_commit_and_response_create_start_generation(msg_type: str) -> None:
    assert _translate(_bidi(), {"type": msg_type}) == {"clientEvent": "GENERATION_START"}


def test_audio_append_wraps_data_untouched() -> None:
    out = _translate(_bidi(), {"type": "input_audio_buffer.append", "audio": {"data": "BASE64"}})
    assert out == {"clientContent": {"parts": [{"inlineData": {"mimeType": "audio/pcm;rate=16000", "data": "BASE64"}}]}}


def test_client_content_snake_case_is_renamed_and_role_dropped() -> None:
    msg = {
        "client_content": {
            "turns": [{"role": "user", "parts": [{"inline_data": {"mime_type": "audio/pcm", "data": "AA=="}}]}],
            "turn_complete": True,
        }
    }
    out = _translate(_bidi(), msg)
    assert out == {
        "clientContent": {
            "turns": [{"parts": [{"inlineData": {"mimeType": "audio/pcm", "data": "AA=="}}]}],
            "turnComplete": True,
        }
    }


def test_normalized_client_content_keeps_key_set() -> None:
    msg = {"clientContent": {"parts": [{"inlineData": {"mimeType": "audio/pcm;rate=16000", "data": "x"}}]}}
    assert _translate(_bidi(), msg) == msg


def test_passthrough_setup_gets_model_injected() -> None:
    out = _translate(_bidi(), {"setup": {"generation_config": {"response_modalities": ["AUDIO"]}}})
    assert out == {"setup": {"generationConfig": {"responseModalities": ["AUDIO"]}, "model": "models/default-model"}}


def test_passthrough_setup_keeps_explicit_model() -> None:
    out = _translate(_bidi(), {"setup": {"model": "models/other"}})
    assert out == {"setup": {"model": "models/other"}}


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", json.dumps({"type": "mystery"})])
def test_unrecognized_messages_are_dropped(raw: str) -> None:
    assert _bidi().translate(raw) is None


def test_unrecognized_messages_forwarded_when_permissive() -> None:
    assert _bidi(forward_malformed=True).translate("not json") == "not json"


def test_binary_frames_pass_through_in_both_formats() -> None:
    frame = b"\x00\x01\xff\xfe"
    assert _bidi().translate(frame) is frame
    plain = MessageTranslator(model="m", bidi=False, language_code="ka-GE")
    assert plain.translate(frame) is frame


def test_plain_format_forwards_text_verbatim() -> None:
    plain = MessageTranslator(model="m", bidi=False, language_code="ka-GE")
    raw = json.dumps({"type": "session.start", "model": "X"})
    assert plain.translate(raw) == raw
    assert plain.translate("not json") == "not json"
