"""File-to-bytes conversion for uploaded images."""

from typing import Protocol

from thumbnail_editor.domain.files import FileHandle
from thumbnail_editor.domain.images import ImageVersion


class FileStore(Protocol):
    """Interface for keeping uploaded files until they are consumed."""

    async def save(self, filename: str, mime_type: str, data: bytes) -> FileHandle:
        """Store uploaded bytes and return a handle to them."""

    async def read(self, handle: FileHandle) -> ImageVersion:
        """Read a stored file, raising UnreadableFile on failure."""

    async def delete(self, handle: FileHandle) -> None:
        """Remove a stored file."""
