"""Preview references for pending context images."""

import logging
from dataclasses import dataclass, field
from uuid import uuid4

from thumbnail_editor.domain.files import FileHandle
from thumbnail_editor.services.files import FileStore

logger = logging.getLogger(__name__)


@dataclass
class PreviewRegistry:
    """Issues refs for uploaded files that the browser can display.

    A ref stays valid until it is released; releasing deletes the backing file.
    """

    file_store: FileStore
    _handles: dict[str, FileHandle] = field(default_factory=dict)

    def register(self, handle: FileHandle) -> str:
        """Create a preview ref for a stored file."""
        ref = uuid4().hex
        self._handles[ref] = handle
        return ref

    def get(self, ref: str) -> FileHandle | None:
        """Return the file behind a live ref."""
        return self._handles.get(ref)

    async def release(self, ref: str) -> None:
        """Invalidate a ref and delete its file."""
        handle = self._handles.pop(ref, None)
        if handle is None:
            logger.warning("Preview already released", extra={"preview_ref": ref})
            return
        await self.file_store.delete(handle)

    def __len__(self) -> int:
        return len(self._handles)
