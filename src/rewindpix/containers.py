"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from rewindpix.adapters.openai_reunion_client import OpenAIReunionClient
from rewindpix.config import Settings
from rewindpix.services.capture import PhotoCapture
from rewindpix.services.controller import ReunionController
from rewindpix.services.encoding import PhotoEncoder
from rewindpix.services.reunion import ReunionService
from rewindpix.services.sessions import ReunionSessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    reunion_service: ReunionService
    session_store: ReunionSessionStore
    close_resources: Callable[[], Awaitable[None]]


def build_session_store(
    settings: Settings, reunion_service: ReunionService
) -> ReunionSessionStore:
    """Create a session store whose controllers share one reunion service."""
    capture = PhotoCapture()
    encoder = PhotoEncoder()

    def new_controller() -> ReunionController:
        return ReunionController(
            capture=capture,
            encoder=encoder,
            reunion_service=reunion_service,
            debug_errors=settings.environment == "local",
        )

    return ReunionSessionStore(
        factory=new_controller, ttl_seconds=settings.session_ttl_seconds
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    openai_client = OpenAIReunionClient.create(resolved_settings.openai_api_key)
    reunion_service = ReunionService(
        client=openai_client,
        model=resolved_settings.openai_image_model,
        input_fidelity=resolved_settings.openai_input_fidelity,
        size=resolved_settings.openai_image_size,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        reunion_service=reunion_service,
        session_store=build_session_store(resolved_settings, reunion_service),
        close_resources=close_resources,
    )
