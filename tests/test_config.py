"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from rewindpix.config import Settings


def test_defaults() -> None:
    settings = Settings(openai_api_key="key")

    assert settings.openai_image_model == "gpt-image-1"
    assert settings.openai_input_fidelity == "high"
    assert settings.log_level == "INFO"
    assert settings.session_ttl_seconds == 3600


@pytest.mark.parametrize(
    ("raw", "expected"), [("", None), ("LOW", "low"), (None, None)]
)
def test_input_fidelity_is_normalized(raw: str | None, expected: str | None) -> None:
    settings = Settings(openai_api_key="key", openai_input_fidelity=raw)

    assert settings.openai_input_fidelity == expected


def test_input_fidelity_rejects_unknown_level() -> None:
    with pytest.raises(ValidationError):
        Settings(openai_api_key="key", openai_input_fidelity="ultra")


def test_log_level_is_validated() -> None:
    assert Settings(openai_api_key="key", log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(openai_api_key="key", log_level="chatty")


def test_session_ttl_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(openai_api_key="key", session_ttl_seconds=0)


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")
    monkeypatch.setenv("OPENAI_IMAGE_MODEL", "gpt-image-1-mini")

    settings = Settings()

    assert settings.openai_api_key == "from-env"
    assert settings.openai_image_model == "gpt-image-1-mini"
