"""OpenAI Images API client for reunion generation."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI, DefaultAsyncHttpxClient

from rewindpix.domain.photos import Photo
from rewindpix.services.encoding import decode_photo
from rewindpix.services.reunion import GenerationError, ReunionGenerationClient

_EXTENSIONS = {"image/png": "png", "image/jpeg": "jpg", "image/webp": "webp"}


@dataclass
class OpenAIReunionClient(ReunionGenerationClient):
    """Reunion client backed by the OpenAI image edit endpoint."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, http_client: httpx.AsyncClient | None = None
    ) -> "OpenAIReunionClient":
        """Create a client that sends exactly one request per generation."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                max_retries=0,
                http_client=http_client or DefaultAsyncHttpxClient(),
            )
        )

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
        """Send both photos as input images and return the JPEG as base64."""
        request_payload: dict[str, object] = {
            "model": model,
            "prompt": prompt,
            "image": [_as_upload("child", child), _as_upload("adult", adult)],
            "output_format": "jpeg",
            "size": size,
            "n": 1,
        }
        if input_fidelity:
            request_payload["input_fidelity"] = input_fidelity

        response = await self.client.images.edit(**request_payload)
        if not response.data or not response.data[0].b64_json:
            raise GenerationError("OpenAI returned an empty image response")
        return response.data[0].b64_json

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _as_upload(name: str, photo: Photo) -> tuple[str, bytes, str]:
    """Build the multipart file tuple the SDK expects."""
    extension = _EXTENSIONS.get(photo.mime_type, "png")
    return (
        f"{name}.{extension}",
        decode_photo(photo),
        photo.mime_type,
    )
