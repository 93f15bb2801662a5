"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, JSONResponse, Response

from thumbnail_editor.api.models import EditRequest, SessionStateView
from thumbnail_editor.api.ui import EDITOR_UI_HTML
from thumbnail_editor.app_logging import configure_logging
from thumbnail_editor.containers import AppContainer
from thumbnail_editor.domain.errors import EditFailed, EditorError, UnreadableFile
from thumbnail_editor.domain.files import FileHandle
from thumbnail_editor.services.session import EditorSession

SESSION_COOKIE = "editor_session"

logger = logging.getLogger(__name__)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Thumbnail Editor", lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def editor_ui() -> HTMLResponse:
        """Single-page editor UI."""
        return HTMLResponse(EDITOR_UI_HTML)

    @app.get("/api/session")
    async def get_session(request: Request) -> JSONResponse:
        """Return the caller's session state."""
        session_id, session = await _resolve_session(request)
        return _state_response(session_id, session)

    @app.post("/api/session/image")
    async def upload_image(
        request: Request, file: UploadFile = File(...)
    ) -> JSONResponse:
        """Replace history and transcript with a new base image."""
        state_container: AppContainer = request.app.state.container
        session_id, session = await _resolve_session(request)
        try:
            handle = await _store_upload(state_container, file)
            await session.upload_image(handle)
        except EditorError as exc:
            session.error = exc.message
            return _state_response(session_id, session, _error_status(exc))
        return _state_response(session_id, session)

    @app.post("/api/session/context")
    async def attach_context(
        request: Request, file: UploadFile = File(...)
    ) -> JSONResponse:
        """Attach a context image to the next edit."""
        state_container: AppContainer = request.app.state.container
        session_id, session = await _resolve_session(request)
        try:
            handle = await _store_upload(state_container, file)
            await session.attach_context(handle)
        except EditorError as exc:
            session.error = exc.message
            return _state_response(session_id, session, _error_status(exc))
        return _state_response(session_id, session)

    @app.delete("/api/session/context")
    async def discard_context(request: Request) -> JSONResponse:
        """Discard the pending context image."""
        session_id, session = await _resolve_session(request)
        await session.discard_context()
        return _state_response(session_id, session)

    @app.post("/api/session/edits")
    async def submit_edit(payload: EditRequest, request: Request) -> JSONResponse:
        """Apply a prompt to the active image version."""
        session_id, session = await _resolve_session(request)
        try:
            bot_entry = await session.submit(payload.prompt)
        except EditorError as exc:
            return _state_response(session_id, session, _error_status(exc))
        if bot_entry is None:
            return _state_response(session_id, session, status.HTTP_409_CONFLICT)
        logger.info("Edit applied", extra={"session_id": session_id})
        return _state_response(session_id, session)

    @app.post("/api/session/undo")
    async def undo(request: Request) -> JSONResponse:
        """Step back to the previous version."""
        session_id, session = await _resolve_session(request)
        session.undo()
        return _state_response(session_id, session)

    @app.post("/api/session/redo")
    async def redo(request: Request) -> JSONResponse:
        """Step forward to the next version."""
        session_id, session = await _resolve_session(request)
        session.redo()
        return _state_response(session_id, session)

    @app.get("/api/session/download")
    async def download(request: Request) -> Response:
        """Download the active image version."""
        _, session = await _resolve_session(request)
        image = session.current_image()
        if image is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        filename = f"thumbnail-{int(time.time() * 1000)}.{image.extension}"
        return Response(
            content=image.data,
            media_type=image.mime_type,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/previews/{ref}")
    async def preview(ref: str, request: Request) -> Response:
        """Serve a live context-image preview."""
        state_container: AppContainer = request.app.state.container
        handle = state_container.previews.get(ref)
        if handle is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        try:
            image = await state_container.file_store.read(handle)
        except UnreadableFile:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from None
        return Response(content=image.data, media_type=image.mime_type)

    return app


async def _resolve_session(request: Request) -> tuple[str, EditorSession]:
    """Look up the session named by the request cookie."""
    container: AppContainer = request.app.state.container
    return await container.session_registry.get_or_create(
        request.cookies.get(SESSION_COOKIE)
    )


def _state_response(
    session_id: str, session: EditorSession, status_code: int = status.HTTP_200_OK
) -> JSONResponse:
    view = SessionStateView.from_session(session)
    response = JSONResponse(view.model_dump(), status_code=status_code)
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _error_status(exc: EditorError) -> int:
    if isinstance(exc, EditFailed):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_400_BAD_REQUEST


async def _store_upload(container: AppContainer, file: UploadFile) -> FileHandle:
    """Persist an uploaded file so it can be read when consumed."""
    try:
        data = await file.read()
        return await container.file_store.save(
            filename=file.filename or "upload",
            mime_type=file.content_type or "",
            data=data,
        )
    except Exception as exc:
        logger.exception(
            "Failed to store upload", extra={"upload_filename": file.filename}
        )
        raise UnreadableFile(
            _format_upload_error(container, exc, "Failed to read the uploaded file.")
        ) from exc
    finally:
        await file.close()


def _format_upload_error(
    container: AppContainer, exc: Exception, fallback: str
) -> str:
    """Return a user-facing upload error message with local debug info."""
    if container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
