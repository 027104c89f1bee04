"""State machine driving the reunion workflow for one user."""

import logging
from dataclasses import dataclass, field

from rewindpix.domain.photos import CapturedPhoto, PhotoSlot
from rewindpix.domain.reunion import (
    DOWNLOAD_FILENAME,
    RESULT_MIME_TYPE,
    Collecting,
    DownloadableImage,
    Error,
    Loading,
    Result,
    ReunionSnapshot,
    Stage,
)
from rewindpix.services.capture import PhotoCapture, PhotoFile
from rewindpix.services.encoding import PhotoEncoder, PhotoReadError, decode_base64
from rewindpix.services.reunion import ReunionService

logger = logging.getLogger(__name__)

RESULT_DATA_URL_PREFIX = f"data:{RESULT_MIME_TYPE};base64,"


class ReunionStateError(RuntimeError):
    """Raised when an action is not allowed in the current stage."""


class GenerationUnavailableError(ReunionStateError):
    """Raised when generation is triggered while it is disabled."""


@dataclass
class ReunionController:
    """Tracks the photo slots and the current stage for one session.

    Photos live in two independent slots. The stage is a tagged variant, so a
    result and a pending request can never coexist. Every method runs on the
    event loop; ``generate`` is the only one that awaits the network.
    """

    capture: PhotoCapture
    encoder: PhotoEncoder
    reunion_service: ReunionService
    debug_errors: bool = False
    _slots: dict[PhotoSlot, CapturedPhoto] = field(default_factory=dict)
    _stage: Stage = field(default_factory=Collecting)
    _attempt: int = 0

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def can_generate(self) -> bool:
        return self.snapshot().can_generate

    def snapshot(self) -> ReunionSnapshot:
        """Return an immutable view of the current state."""
        return ReunionSnapshot(
            child_photo=self._slots.get(PhotoSlot.CHILD),
            adult_photo=self._slots.get(PhotoSlot.ADULT),
            stage=self._stage,
        )

    async def upload(self, slot: PhotoSlot, file: PhotoFile) -> ReunionSnapshot:
        """Capture and encode a photo into a slot.

        Invalid file types raise before anything changes. A read failure is
        reported through the stage and leaves the slot as it was. A read that
        finishes after a generation started or after start over is dropped.
        """
        if isinstance(self._stage, Loading | Result):
            raise ReunionStateError("Photos can't be changed right now.")
        accepted = self.capture.accept(file)
        attempt = self._attempt
        try:
            photo = await self.encoder.encode(accepted)
        except PhotoReadError:
            if self._superseded(attempt):
                logger.info(
                    "Discarding failed read of a superseded upload",
                    extra={"slot": slot.value},
                )
                return self.snapshot()
            logger.exception("Failed to read photo", extra={"slot": slot.value})
            self._stage = Error(f"Failed to read {slot.value} photo.")
            return self.snapshot()
        if self._superseded(attempt):
            logger.info(
                "Discarding upload finished after generate or start over",
                extra={"slot": slot.value},
            )
            return self.snapshot()
        self._slots[slot] = CapturedPhoto(
            slot=slot,
            file_name=accepted.filename or f"{slot.value}-photo",
            photo=photo,
        )
        self._stage = Collecting()
        return self.snapshot()

    async def generate(self) -> ReunionSnapshot:
        """Run one generation request to completion."""
        child = self._slots.get(PhotoSlot.CHILD)
        adult = self._slots.get(PhotoSlot.ADULT)
        if isinstance(self._stage, Loading):
            raise GenerationUnavailableError("A reunion is already being generated.")
        if child is None or adult is None:
            raise GenerationUnavailableError(
                "Please upload both photos before generating."
            )

        self._attempt += 1
        attempt = self._attempt
        self._stage = Loading()
        try:
            image = await self.reunion_service.generate(child.photo, adult.photo)
        except Exception as exc:
            logger.exception("Reunion generation failed", extra={"attempt": attempt})
            outcome: Stage = Error(self._format_generation_error(exc))
        else:
            outcome = Result(RESULT_DATA_URL_PREFIX + image)

        if attempt != self._attempt:
            logger.info(
                "Discarding generation finished after start over",
                extra={"attempt": attempt},
            )
            return self.snapshot()
        self._stage = outcome
        return self.snapshot()

    def start_over(self) -> ReunionSnapshot:
        """Drop both photos and any result or error."""
        self._slots.clear()
        self._stage = Collecting()
        self._attempt += 1
        return self.snapshot()

    def download(self) -> DownloadableImage:
        """Return the generated image as a file to save."""
        if not isinstance(self._stage, Result):
            raise ReunionStateError("There is no generated image to download.")
        encoded = self._stage.image.removeprefix(RESULT_DATA_URL_PREFIX)
        return DownloadableImage(
            filename=DOWNLOAD_FILENAME,
            media_type=RESULT_MIME_TYPE,
            content=decode_base64(encoded),
        )

    def _format_generation_error(self, exc: Exception) -> str:
        detail = str(exc).strip() or "An unknown error occurred."
        message = f"Failed to generate image: {detail}"
        if self.debug_errors:
            return f"{message} (debug: {type(exc).__name__})"
        return message

    def _superseded(self, attempt: int) -> bool:
        return attempt != self._attempt or isinstance(self._stage, Loading | Result)
