"""Local temporary-directory storage for uploads."""

import asyncio
import tempfile
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from thumbnail_editor.domain.errors import UnreadableFile
from thumbnail_editor.domain.files import FileHandle
from thumbnail_editor.domain.images import ImageVersion
from thumbnail_editor.services.files import FileStore


@dataclass
class TempDirFileStore(FileStore):
    """File store that keeps uploads under a directory on disk."""

    root: Path

    @classmethod
    def create(cls, upload_dir: str | None = None) -> "TempDirFileStore":
        """Create a store in the given directory or a fresh temp directory."""
        if upload_dir:
            root = Path(upload_dir)
            root.mkdir(parents=True, exist_ok=True)
        else:
            root = Path(tempfile.mkdtemp(prefix="thumbnail-editor-"))
        return cls(root=root)

    async def save(self, filename: str, mime_type: str, data: bytes) -> FileHandle:
        """Write upload bytes to a uniquely named file."""
        path = self.root / uuid4().hex
        await asyncio.to_thread(path.write_bytes, data)
        return FileHandle(path=path, filename=filename, mime_type=mime_type)

    async def read(self, handle: FileHandle) -> ImageVersion:
        """Read a stored file back as an image payload."""
        try:
            data = await asyncio.to_thread(handle.path.read_bytes)
        except OSError as exc:
            raise UnreadableFile("Failed to read the uploaded file.") from exc
        return ImageVersion(data=data, mime_type=handle.mime_type)

    async def delete(self, handle: FileHandle) -> None:
        """Delete a stored file if it still exists."""
        await asyncio.to_thread(handle.path.unlink, missing_ok=True)
