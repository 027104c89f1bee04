"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import (
    Depends,
    FastAPI,
    File,
    HTTPException,
    Request,
    Response,
    UploadFile,
    status,
)

from rewindpix.api.models import ReunionState
from rewindpix.api.ui import router as ui_router
from rewindpix.app_logging import configure_logging
from rewindpix.containers import AppContainer
from rewindpix.domain.photos import PhotoSlot
from rewindpix.services.capture import InvalidPhotoTypeError
from rewindpix.services.controller import (
    GenerationUnavailableError,
    ReunionController,
    ReunionStateError,
)

SESSION_COOKIE = "rewindpix_session"


def get_controller(request: Request, response: Response) -> ReunionController:
    """Resolve the caller's controller and refresh the session cookie."""
    container: AppContainer = request.app.state.container
    current = request.cookies.get(SESSION_COOKIE)
    session_id, controller = container.session_store.get_or_create(current)
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        max_age=container.settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
    )
    return controller


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(title="RewindPix", lifespan=lifespan)
    app.state.container = container

    app.include_router(ui_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/reunion")
    async def reunion_state(
        controller: ReunionController = Depends(get_controller),
    ) -> ReunionState:
        """Return the session's current state."""
        return ReunionState.from_snapshot(controller.snapshot())

    @app.post("/api/reunion/photos/{slot}")
    async def upload_photo(
        slot: PhotoSlot,
        file: UploadFile = File(...),
        controller: ReunionController = Depends(get_controller),
    ) -> ReunionState:
        """Place an uploaded photo into the child or adult slot."""
        try:
            snapshot = await controller.upload(slot, file)
        except InvalidPhotoTypeError as exc:
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(exc)
            ) from exc
        except ReunionStateError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        return ReunionState.from_snapshot(snapshot)

    @app.post("/api/reunion/generate")
    async def generate_reunion(
        controller: ReunionController = Depends(get_controller),
    ) -> ReunionState:
        """Generate the reunion image and wait for the outcome."""
        try:
            snapshot = await controller.generate()
        except GenerationUnavailableError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        return ReunionState.from_snapshot(snapshot)

    @app.post("/api/reunion/reset")
    async def start_over(
        controller: ReunionController = Depends(get_controller),
    ) -> ReunionState:
        """Discard both photos and any result or error."""
        return ReunionState.from_snapshot(controller.start_over())

    @app.get("/api/reunion/download")
    async def download_reunion(
        controller: ReunionController = Depends(get_controller),
    ) -> Response:
        """Return the generated image as a file attachment."""
        try:
            image = controller.download()
        except ReunionStateError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return Response(
            content=image.content,
            media_type=image.media_type,
            headers={
                "Content-Disposition": f'attachment; filename="{image.filename}"'
            },
        )

    return app
