"""Pydantic views of editor session state."""

from typing import Literal

from pydantic import BaseModel

from thumbnail_editor.domain.chat import BotEntry, ChatEntry
from thumbnail_editor.domain.files import PendingContext
from thumbnail_editor.services.session import EditorSession


class EditRequest(BaseModel):
    """Edit submission payload."""

    prompt: str


class ChatEntryView(BaseModel):
    """Transcript entry as rendered by the browser."""

    id: str
    type: Literal["user", "bot"]
    prompt: str | None = None
    image_url: str | None = None
    mime_type: str | None = None
    context_image_url: str | None = None


class PendingContextView(BaseModel):
    """Context image waiting for the next submission."""

    filename: str
    preview_url: str
    mime_type: str


class SessionStateView(BaseModel):
    """Everything the editor page needs to render."""

    current_image: str | None
    mime_type: str | None
    version_index: int
    version_count: int
    can_undo: bool
    can_redo: bool
    can_edit: bool
    in_flight: bool
    error: str | None
    entries: list[ChatEntryView]
    pending_context: PendingContextView | None

    @classmethod
    def from_session(cls, session: EditorSession) -> "SessionStateView":
        """Build a view from a live session."""
        current = session.current_image()
        return cls(
            current_image=current.to_data_url() if current else None,
            mime_type=current.mime_type if current else None,
            version_index=session.history.cursor,
            version_count=len(session.history.versions),
            can_undo=session.history.can_undo(),
            can_redo=session.history.can_redo(),
            can_edit=current is not None and not session.busy,
            in_flight=session.in_flight,
            error=session.error,
            entries=[_entry_view(entry) for entry in session.log.entries],
            pending_context=_pending_view(session.pending_context),
        )


def preview_url(ref: str) -> str:
    return f"/previews/{ref}"


def _entry_view(entry: ChatEntry) -> ChatEntryView:
    if isinstance(entry, BotEntry):
        return ChatEntryView(
            id=entry.id,
            type="bot",
            image_url=entry.image_version.to_data_url(),
            mime_type=entry.image_version.mime_type,
        )
    return ChatEntryView(
        id=entry.id,
        type="user",
        prompt=entry.prompt,
        context_image_url=(
            preview_url(entry.context_image_ref) if entry.context_image_ref else None
        ),
    )


def _pending_view(context: PendingContext | None) -> PendingContextView | None:
    if context is None:
        return None
    return PendingContextView(
        filename=context.source_file.filename,
        preview_url=preview_url(context.preview_ref),
        mime_type=context.mime_type,
    )
