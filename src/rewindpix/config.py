"""Application configuration."""

import logging
import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_INPUT_FIDELITIES = {"high", "low"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_image_model: str = "gpt-image-1"
    openai_input_fidelity: str | None = "high"
    openai_image_size: str = "auto"
    session_ttl_seconds: int = 3600
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("openai_input_fidelity", mode="before")
    @classmethod
    def _check_input_fidelity(cls, value: object) -> object:
        """Treat a blank value as unset; only OpenAI's levels are allowed."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        normalized = str(value).strip().lower()
        if normalized not in _INPUT_FIDELITIES:
            allowed = ", ".join(sorted(_INPUT_FIDELITIES))
            raise ValueError(f"input fidelity must be one of: {allowed}")
        return normalized

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"unknown log level {value!r}")
        return normalized

    @field_validator("session_ttl_seconds")
    @classmethod
    def _check_ttl(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("session TTL must be positive")
        return value
