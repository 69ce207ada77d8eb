from __future__ import annotations

import pytest

from live_proxy.runtime.settings import load_settings


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "LIVE_PROXY_PORT",
        "GEMINI_LIVE_PROXY_PORT",
        "GEMINI_LIVE_MODEL",
        "UPSTREAM_KEY_IN_URL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.auth.api_key == ""
    assert settings.server.port == 3001
    assert settings.upstream.default_model == "gemini-live-2.5-flash-native-audio"
    assert settings.upstream.language_code == "ka-GE"
    assert settings.upstream.key_in_url is False


def test_load_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", " fallback ")
    monkeypatch.delenv("LIVE_PROXY_PORT", raising=False)
    monkeypatch.setenv("GEMINI_LIVE_PROXY_PORT", "4010")
    monkeypatch.setenv("GEMINI_LIVE_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("UPSTREAM_KEY_IN_URL", "yes")
    monkeypatch.setenv("MAX_CONCURRENT_CONNECTIONS", "0")

    settings = load_settings()

    assert settings.auth.api_key == "fallback"
    assert settings.server.port == 4010
    assert settings.upstream.default_model == "gemini-2.5-flash"
    assert settings.upstream.key_in_url is True
    assert settings.limits.max_concurrent_connections == 1
