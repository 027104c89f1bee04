"""Domain models for uploaded photos."""

from dataclasses import dataclass
from enum import StrEnum

ACCEPTED_MIME_TYPES: frozenset[str] = frozenset(
    {"image/png", "image/jpeg", "image/webp"}
)


class PhotoSlot(StrEnum):
    """The two independent upload positions."""

    CHILD = "child"
    ADULT = "adult"


@dataclass(frozen=True)
class Photo:
    """An encoded photo ready for transport.

    ``base64_data`` never carries a data-URL prefix; ``mime_type`` is the
    declared type of the uploaded file.
    """

    base64_data: str
    mime_type: str

    @property
    def data_url(self) -> str:
        """Return the photo as a displayable data URL."""
        return f"data:{self.mime_type};base64,{self.base64_data}"


@dataclass(frozen=True)
class CapturedPhoto:
    """A filled photo slot."""

    slot: PhotoSlot
    file_name: str
    photo: Photo


@dataclass(frozen=True)
class PhotoPreview:
    """What an upload slot shows once a photo is captured."""

    file_name: str
    data_url: str
