"""Pydantic response models for the reunion API."""

from pydantic import BaseModel

from rewindpix.domain.photos import CapturedPhoto, PhotoSlot
from rewindpix.domain.reunion import ReunionSnapshot
from rewindpix.services.capture import PhotoCapture


class PhotoSlotState(BaseModel):
    """A filled upload slot."""

    slot: PhotoSlot
    file_name: str
    mime_type: str
    base64_data: str
    preview: str

    @classmethod
    def from_captured(cls, captured: CapturedPhoto) -> "PhotoSlotState":
        preview = PhotoCapture.preview(captured)
        return cls(
            slot=captured.slot,
            file_name=preview.file_name,
            mime_type=captured.photo.mime_type,
            base64_data=captured.photo.base64_data,
            preview=preview.data_url,
        )


class ReunionState(BaseModel):
    """Current workflow state for the requesting session."""

    stage: str
    child_photo: PhotoSlotState | None = None
    adult_photo: PhotoSlotState | None = None
    generated_image: str | None = None
    is_loading: bool = False
    error: str | None = None
    can_generate: bool = False

    @classmethod
    def from_snapshot(cls, snapshot: ReunionSnapshot) -> "ReunionState":
        return cls(
            stage=snapshot.stage_name,
            child_photo=(
                PhotoSlotState.from_captured(snapshot.child_photo)
                if snapshot.child_photo
                else None
            ),
            adult_photo=(
                PhotoSlotState.from_captured(snapshot.adult_photo)
                if snapshot.adult_photo
                else None
            ),
            generated_image=snapshot.generated_image,
            is_loading=snapshot.is_loading,
            error=snapshot.error,
            can_generate=snapshot.can_generate,
        )
