"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from uuid import uuid4

import pytest

from thumbnail_editor.config import Settings
from thumbnail_editor.containers import AppContainer
from thumbnail_editor.domain.errors import UnreadableFile
from thumbnail_editor.domain.files import FileHandle
from thumbnail_editor.domain.images import ImageVersion
from thumbnail_editor.services.editing import ImageEditClient, ImageEditService
from thumbnail_editor.services.files import FileStore
from thumbnail_editor.services.previews import PreviewRegistry
from thumbnail_editor.services.registry import EditorSessionRegistry
from thumbnail_editor.services.session import EditorSession

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"base-image"
EDITED_BYTES = b"\x89PNG\r\n\x1a\n" + b"edited-image"


@dataclass
class InMemoryFileStore(FileStore):
    """In-memory file store for tests."""

    files: dict[Path, bytes] = field(default_factory=dict)
    deleted: list[Path] = field(default_factory=list)

    async def save(self, filename: str, mime_type: str, data: bytes) -> FileHandle:
        path = Path("/memory") / uuid4().hex
        self.files[path] = data
        return FileHandle(path=path, filename=filename, mime_type=mime_type)

    async def read(self, handle: FileHandle) -> ImageVersion:
        if handle.path not in self.files:
            raise UnreadableFile("Failed to read the uploaded file.")
        return ImageVersion(data=self.files[handle.path], mime_type=handle.mime_type)

    async def delete(self, handle: FileHandle) -> None:
        self.files.pop(handle.path, None)
        self.deleted.append(handle.path)


@dataclass
class GatedFileStore(InMemoryFileStore):
    """File store whose reads and deletes can be held open by the test."""

    read_gate: asyncio.Event | None = None
    delete_gate: asyncio.Event | None = None
    entered: asyncio.Event | None = None

    async def read(self, handle: FileHandle) -> ImageVersion:
        await self._wait(self.read_gate)
        return await super().read(handle)

    async def delete(self, handle: FileHandle) -> None:
        await self._wait(self.delete_gate)
        await super().delete(handle)

    async def _wait(self, gate: asyncio.Event | None) -> None:
        if gate is None:
            return
        if self.entered is not None:
            self.entered.set()
        await gate.wait()


@dataclass
class CountingPreviewRegistry(PreviewRegistry):
    """Preview registry that records every release call."""

    released: list[str] = field(default_factory=list)

    async def release(self, ref: str) -> None:
        self.released.append(ref)
        await super().release(ref)


@dataclass
class FakeImageEditClient(ImageEditClient):
    """Fake edit client returning a fixed image and recording calls."""

    result: ImageVersion = field(
        default_factory=lambda: ImageVersion(data=EDITED_BYTES, mime_type="image/png")
    )
    calls: list[dict[str, object]] = field(default_factory=list)

    async def edit(
        self,
        *,
        model: str,
        base_image: ImageVersion,
        prompt: str,
        context_image: ImageVersion | None,
    ) -> ImageVersion:
        self.calls.append(
            {
                "model": model,
                "base_image": base_image,
                "prompt": prompt,
                "context_image": context_image,
            }
        )
        return self.result


@dataclass
class FailingImageEditClient(ImageEditClient):
    """Fake edit client that always errors."""

    message: str = "API response did not contain an image."
    calls: int = 0

    async def edit(
        self,
        *,
        model: str,
        base_image: ImageVersion,
        prompt: str,
        context_image: ImageVersion | None,
    ) -> ImageVersion:
        self.calls += 1
        raise RuntimeError(self.message)


@dataclass
class BlockingImageEditClient(FakeImageEditClient):
    """Fake edit client that waits until released by the test."""

    release: asyncio.Event | None = None
    started: asyncio.Event | None = None

    async def edit(
        self,
        *,
        model: str,
        base_image: ImageVersion,
        prompt: str,
        context_image: ImageVersion | None,
    ) -> ImageVersion:
        assert self.release is not None and self.started is not None
        self.started.set()
        await self.release.wait()
        return await super().edit(
            model=model,
            base_image=base_image,
            prompt=prompt,
            context_image=context_image,
        )


def store(file_store: FileStore, data: bytes, mime_type: str = "image/png") -> FileHandle:
    """Save bytes into a file store and return the handle."""
    return asyncio.run(file_store.save("upload.png", mime_type, data))


def build_session(
    client: ImageEditClient,
    file_store: InMemoryFileStore | None = None,
    previews: CountingPreviewRegistry | None = None,
) -> EditorSession:
    resolved_store = file_store if file_store is not None else InMemoryFileStore()
    if previews is None:
        previews = CountingPreviewRegistry(resolved_store)
    return EditorSession(
        edit_service=ImageEditService(client=client, model="gemini-2.5-flash-image"),
        file_store=resolved_store,
        previews=previews,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="gemini-key")


@pytest.fixture
def file_store() -> InMemoryFileStore:
    return InMemoryFileStore()


@pytest.fixture
def previews(file_store: InMemoryFileStore) -> CountingPreviewRegistry:
    return CountingPreviewRegistry(file_store)


@pytest.fixture
def edit_client() -> FakeImageEditClient:
    return FakeImageEditClient()


@pytest.fixture
def session(
    edit_client: FakeImageEditClient,
    file_store: InMemoryFileStore,
    previews: CountingPreviewRegistry,
) -> EditorSession:
    return build_session(edit_client, file_store, previews)


@pytest.fixture
def container(
    settings: Settings,
    edit_client: FakeImageEditClient,
    file_store: InMemoryFileStore,
    previews: CountingPreviewRegistry,
) -> AppContainer:
    edit_service = ImageEditService(client=edit_client, model=settings.gemini_model)

    def new_session() -> EditorSession:
        return EditorSession(
            edit_service=edit_service,
            file_store=file_store,
            previews=previews,
        )

    session_registry = EditorSessionRegistry(
        factory=new_session, ttl_seconds=settings.session_ttl_seconds
    )

    async def close_resources() -> None:
        await session_registry.close_all()

    return AppContainer(
        settings=settings,
        file_store=file_store,
        previews=previews,
        edit_service=edit_service,
        session_registry=session_registry,
        close_resources=close_resources,
    )
