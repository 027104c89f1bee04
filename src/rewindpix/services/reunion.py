"""Reunion image generation service."""

from dataclasses import dataclass
from typing import Protocol

from rewindpix.domain.photos import Photo
from rewindpix.services.encoding import decode_base64

REUNION_PROMPT = (
    "The first image is a childhood photo of a person and the second image is a "
    "recent photo of the same person as an adult. Create one photorealistic "
    "photograph in which the adult warmly hugs their younger self. Preserve the "
    "faces, hair, and clothing from both photos, blend them into a single "
    "natural scene with consistent soft lighting, and keep the child at a "
    "believable size next to the adult."
)


class GenerationError(RuntimeError):
    """Raised when the generation service returns no usable image."""


class ReunionGenerationClient(Protocol):
    """Interface for a generative-image backend."""

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
        """Return the generated JPEG image as base64."""


@dataclass
class ReunionService:
    """Service that prompts the generation backend and checks its output."""

    client: ReunionGenerationClient
    model: str
    input_fidelity: str | None
    size: str = "auto"
    prompt: str = REUNION_PROMPT

    async def generate(self, child: Photo, adult: Photo) -> str:
        """Generate a reunion image from the child and adult photos."""
        result = await self.client.generate(
            model=self.model,
            prompt=self.prompt,
            child=child,
            adult=adult,
            input_fidelity=self.input_fidelity,
            size=self.size,
        )
        if not result:
            raise GenerationError("The service returned no image.")
        try:
            decode_base64(result)
        except ValueError as exc:
            raise GenerationError("The service returned malformed image data.") from exc
        return result
