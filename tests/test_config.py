"""Tests for settings helpers."""

import pytest

from thumbnail_editor.config import Settings


def test_provider_key_and_model_follow_selected_provider() -> None:
    gemini = Settings(gemini_api_key="g-key", openai_api_key="o-key")
    openai = Settings(
        image_provider="openai", gemini_api_key="g-key", openai_api_key="o-key"
    )

    assert gemini.provider_api_key() == "g-key"
    assert gemini.provider_model() == "gemini-2.5-flash-image"
    assert openai.provider_api_key() == "o-key"
    assert openai.provider_model() == "gpt-image-1"


def test_missing_key_raises() -> None:
    settings = Settings(gemini_api_key="")

    with pytest.raises(ValueError, match="GEMINI_API_KEY required"):
        settings.provider_api_key()


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("IMAGE_PROVIDER", "openai")
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    monkeypatch.setenv("SESSION_TTL_SECONDS", "60")

    settings = Settings()

    assert settings.image_provider == "openai"
    assert settings.provider_api_key() == "env-key"
    assert settings.session_ttl_seconds == 60
