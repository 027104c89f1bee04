"""Domain models for the reunion workflow stages."""

from dataclasses import dataclass

from rewindpix.domain.photos import CapturedPhoto

DOWNLOAD_FILENAME = "rewindpix_reunion.jpeg"
RESULT_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class Collecting:
    """Waiting for photos or for the user to start generation."""


@dataclass(frozen=True)
class Loading:
    """A generation request is in flight."""


@dataclass(frozen=True)
class Result:
    """A generated image is available as a data URL."""

    image: str


@dataclass(frozen=True)
class Error:
    """The last action failed with a user-facing message."""

    message: str


Stage = Collecting | Loading | Result | Error


@dataclass(frozen=True)
class ReunionSnapshot:
    """Read-only view of a controller's state."""

    child_photo: CapturedPhoto | None
    adult_photo: CapturedPhoto | None
    stage: Stage

    @property
    def stage_name(self) -> str:
        return type(self.stage).__name__.lower()

    @property
    def is_loading(self) -> bool:
        return isinstance(self.stage, Loading)

    @property
    def generated_image(self) -> str | None:
        return self.stage.image if isinstance(self.stage, Result) else None

    @property
    def error(self) -> str | None:
        return self.stage.message if isinstance(self.stage, Error) else None

    @property
    def can_generate(self) -> bool:
        return (
            self.child_photo is not None
            and self.adult_photo is not None
            and not self.is_loading
        )


@dataclass(frozen=True)
class DownloadableImage:
    """A generated image prepared for saving as a local file."""

    filename: str
    media_type: str
    content: bytes
