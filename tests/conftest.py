"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from rewindpix.config import Settings
from rewindpix.containers import AppContainer, build_session_store
from rewindpix.domain.photos import Photo
from rewindpix.services.capture import PhotoCapture
from rewindpix.services.controller import ReunionController
from rewindpix.services.encoding import PhotoEncoder
from rewindpix.services.reunion import ReunionGenerationClient, ReunionService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"child-pixels"
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"adult-pixels"


@dataclass
class FakeUpload:
    """Uploaded file stand-in with an async read."""

    filename: str | None
    content_type: str | None
    content: bytes = PNG_BYTES
    fail_read: bool = False
    reads: int = 0
    gate: asyncio.Event | None = None

    async def read(self, size: int = -1) -> bytes:
        self.reads += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_read:
            raise OSError("disk went away")
        return self.content


@dataclass
class FakeReunionClient(ReunionGenerationClient):
    """Fake generation backend returning a fixed payload or raising."""

    result: str = "abc123=="
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)
    on_call: Callable[[], object] | None = None
    wait_for: asyncio.Event | None = None

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        child: Photo,
        adult: Photo,
        input_fidelity: str | None,
        size: str,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "child": child,
                "adult": adult,
                "input_fidelity": input_fidelity,
                "size": size,
            }
        )
        if self.on_call is not None:
            self.on_call()
        if self.wait_for is not None:
            await self.wait_for.wait()
        if self.error is not None:
            raise self.error
        return self.result


def child_upload() -> FakeUpload:
    return FakeUpload(filename="child.png", content_type="image/png")


def adult_upload() -> FakeUpload:
    return FakeUpload(
        filename="adult.jpg", content_type="image/jpeg", content=JPEG_BYTES
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", environment="test")


@pytest.fixture
def reunion_client() -> FakeReunionClient:
    return FakeReunionClient()


@pytest.fixture
def reunion_service(
    settings: Settings, reunion_client: FakeReunionClient
) -> ReunionService:
    return ReunionService(
        client=reunion_client,
        model=settings.openai_image_model,
        input_fidelity=settings.openai_input_fidelity,
        size=settings.openai_image_size,
    )


@pytest.fixture
def controller(reunion_service: ReunionService) -> ReunionController:
    return ReunionController(
        capture=PhotoCapture(),
        encoder=PhotoEncoder(),
        reunion_service=reunion_service,
    )


@pytest.fixture
def container(settings: Settings, reunion_service: ReunionService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        reunion_service=reunion_service,
        session_store=build_session_store(settings, reunion_service),
        close_resources=close_resources,
    )
