"""Encoding of raw photo files for transport."""

import base64
import binascii
from dataclasses import dataclass

from rewindpix.domain.photos import Photo
from rewindpix.services.capture import PhotoFile


class PhotoReadError(RuntimeError):
    """Raised when an uploaded photo cannot be read."""


@dataclass
class PhotoEncoder:
    """Turn raw files into base64 payloads."""

    async def encode(self, file: PhotoFile) -> Photo:
        """Read the whole file and return it base64-encoded."""
        try:
            content = await file.read()
        except Exception as exc:
            raise PhotoReadError(f"Could not read {file.filename!r}") from exc
        if not content:
            raise PhotoReadError(f"{file.filename!r} is empty")
        return encode_bytes(content, (file.content_type or "").lower())


def encode_bytes(content: bytes, mime_type: str) -> Photo:
    """Encode raw bytes into a Photo without a data-URL prefix."""
    return Photo(
        base64_data=base64.b64encode(content).decode("ascii"),
        mime_type=mime_type,
    )


def decode_photo(photo: Photo) -> bytes:
    """Return the original bytes of an encoded photo."""
    return decode_base64(photo.base64_data)


def decode_base64(data: str) -> bytes:
    """Strictly decode base64 text, raising ValueError on malformed input."""
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as exc:
        raise ValueError("Malformed base64 data") from exc
