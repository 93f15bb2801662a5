"""Editor session tying history and transcript to image edits."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum

from thumbnail_editor.domain.chat import BotEntry, UserEntry
from thumbnail_editor.domain.errors import (
    EditorError,
    InvalidUpload,
    PreconditionViolation,
)
from thumbnail_editor.domain.files import FileHandle, PendingContext
from thumbnail_editor.domain.images import ImageVersion, is_image_mime_type
from thumbnail_editor.services.conversation import ConversationLog
from thumbnail_editor.services.editing import ImageEditService
from thumbnail_editor.services.files import FileStore
from thumbnail_editor.services.history import EditHistory
from thumbnail_editor.services.previews import PreviewRegistry

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    """Whether an edit round-trip is outstanding."""

    IDLE = "IDLE"
    BUSY = "BUSY"
    IN_FLIGHT = "IN_FLIGHT"


@dataclass
class EditorSession:
    """State machine for one user's editing session.

    Submissions append the user entry optimistically and roll it back when the
    edit fails. Only one submission may be in flight; others are ignored.
    Uploads and context attachments hold the session BUSY while they run, so
    no submission can interleave with them.
    """

    edit_service: ImageEditService
    file_store: FileStore
    previews: PreviewRegistry
    history: EditHistory = field(default_factory=EditHistory)
    log: ConversationLog = field(default_factory=ConversationLog)
    pending_context: PendingContext | None = None
    state: SubmissionState = SubmissionState.IDLE
    error: str | None = None

    @property
    def in_flight(self) -> bool:
        return self.state is SubmissionState.IN_FLIGHT

    @property
    def busy(self) -> bool:
        return self.state is not SubmissionState.IDLE

    def current_image(self) -> ImageVersion | None:
        """Return the active image version."""
        return self.history.current()

    async def upload_image(self, handle: FileHandle) -> ImageVersion:
        """Start over from a newly uploaded base image."""
        try:
            with self._surface_errors():
                self._ensure_idle()
                if not is_image_mime_type(handle.mime_type):
                    raise InvalidUpload("Please upload a valid image file.")
                with self._occupied():
                    image = await self.file_store.read(handle)
                    self.history.reset(image)
                    self.log.clear()
                    self.log.append_bot(BotEntry(image_version=image))
                    await self.discard_context()
                    self.error = None
        finally:
            await self.file_store.delete(handle)

        logger.info("Base image uploaded", extra={"mime_type": image.mime_type})
        return image

    async def attach_context(self, handle: FileHandle) -> PendingContext:
        """Attach a context image to the next submission, replacing any other."""
        try:
            with self._surface_errors():
                self._ensure_idle()
                if self.history.current() is None:
                    raise PreconditionViolation(
                        "Upload an image before attaching context."
                    )
                if not is_image_mime_type(handle.mime_type):
                    raise InvalidUpload("Please upload a valid image file for context.")
        except EditorError:
            await self.file_store.delete(handle)
            raise

        with self._occupied():
            await self.discard_context()
            self.pending_context = PendingContext(
                source_file=handle,
                preview_ref=self.previews.register(handle),
                mime_type=handle.mime_type,
            )
            self.error = None
        return self.pending_context

    async def discard_context(self) -> None:
        """Drop the pending context image and release its preview."""
        context = self.pending_context
        if context is None:
            return
        self.pending_context = None
        await self.previews.release(context.preview_ref)

    async def submit(self, prompt: str) -> BotEntry | None:
        """Run one edit round-trip.

        Returns the new bot entry, or None when the session is busy with another
        submission or an upload. Raises PreconditionViolation without side
        effects, and EditFailed after rolling back the optimistic user entry.
        """
        if self.busy:
            logger.info("Ignoring submission while the session is busy")
            return None
        base_image = self.history.current()
        with self._surface_errors():
            if base_image is None or not prompt.strip():
                raise PreconditionViolation(
                    "Cannot edit without a base image and a prompt."
                )

        context = self.pending_context
        self.pending_context = None
        self.state = SubmissionState.IN_FLIGHT
        self.error = None
        entry_id = self.log.append_user(
            UserEntry(
                prompt=prompt,
                context_image_ref=context.preview_ref if context else None,
            )
        )
        try:
            context_image = None
            if context is not None:
                context_image = await self.file_store.read(context.source_file)
            new_version = await self.edit_service.edit(
                base_image, prompt, context_image
            )
        except BaseException as exc:
            # Cancellation rolls back too.
            self.log.remove_by_id(entry_id)
            if isinstance(exc, EditorError):
                self.error = exc.message
            logger.info("Edit rolled back", extra={"entry_id": entry_id})
            raise
        finally:
            self.state = SubmissionState.IDLE
            if context is not None:
                await self.previews.release(context.preview_ref)

        self.history.commit_edit(new_version)
        bot_entry = BotEntry(image_version=new_version)
        self.log.append_bot(bot_entry)
        self.error = None
        logger.info(
            "Edit committed",
            extra={"entry_id": entry_id, "version": self.history.cursor},
        )
        return bot_entry

    def undo(self) -> None:
        """Step back one version; ignored while the session is busy."""
        if self.busy:
            return
        self.history.undo()
        self.error = None

    def redo(self) -> None:
        """Step forward one version; ignored while the session is busy."""
        if self.busy:
            return
        self.history.redo()
        self.error = None

    async def close(self) -> None:
        """Release resources held by the session."""
        await self.discard_context()

    def _ensure_idle(self) -> None:
        if self.busy:
            raise PreconditionViolation("An edit is already in progress.")

    @contextmanager
    def _occupied(self) -> Iterator[None]:
        self.state = SubmissionState.BUSY
        try:
            yield
        finally:
            self.state = SubmissionState.IDLE

    @contextmanager
    def _surface_errors(self) -> Iterator[None]:
        try:
            yield
        except EditorError as exc:
            self.error = exc.message
            raise
