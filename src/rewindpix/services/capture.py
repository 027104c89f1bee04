"""Validation of user-provided photo files."""

import logging
from dataclasses import dataclass
from typing import Protocol

from rewindpix.domain.photos import (
    ACCEPTED_MIME_TYPES,
    CapturedPhoto,
    PhotoPreview,
)

logger = logging.getLogger(__name__)

INVALID_PHOTO_MESSAGE = "Please select a valid image file."


class PhotoFile(Protocol):
    """A raw uploaded file, as handed over by the web layer."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes:
        """Return the file content."""


class InvalidPhotoTypeError(ValueError):
    """Raised when a file is not one of the accepted image types."""

    def __init__(self, content_type: str | None) -> None:
        super().__init__(INVALID_PHOTO_MESSAGE)
        self.content_type = content_type


@dataclass
class PhotoCapture:
    """Accept image files by declared media type."""

    accepted_types: frozenset[str] = ACCEPTED_MIME_TYPES

    def accept(self, file: PhotoFile) -> PhotoFile:
        """Return the file unchanged if its declared type is acceptable."""
        content_type = (file.content_type or "").lower()
        if not content_type.startswith("image/") or (
            content_type not in self.accepted_types
        ):
            logger.info(
                "Rejected upload with unsupported type",
                extra={"content_type": file.content_type, "file_name": file.filename},
            )
            raise InvalidPhotoTypeError(file.content_type)
        return file

    @staticmethod
    def preview(captured: CapturedPhoto) -> PhotoPreview:
        """Return the preview shown in a filled slot."""
        return PhotoPreview(
            file_name=captured.file_name, data_url=captured.photo.data_url
        )
