"""Tests for the temp-directory file store."""

import asyncio
from pathlib import Path

import pytest

from thumbnail_editor.adapters.local_files import TempDirFileStore
from thumbnail_editor.domain.errors import UnreadableFile


def test_save_read_and_delete(tmp_path: Path) -> None:
    file_store = TempDirFileStore(root=tmp_path)

    handle = asyncio.run(file_store.save("logo.png", "image/png", b"png-bytes"))
    image = asyncio.run(file_store.read(handle))

    assert handle.path.parent == tmp_path
    assert handle.filename == "logo.png"
    assert image.data == b"png-bytes"
    assert image.mime_type == "image/png"

    asyncio.run(file_store.delete(handle))
    asyncio.run(file_store.delete(handle))
    assert not handle.path.exists()


def test_read_missing_file_raises_unreadable(tmp_path: Path) -> None:
    file_store = TempDirFileStore(root=tmp_path)
    handle = asyncio.run(file_store.save("logo.png", "image/png", b"png-bytes"))
    handle.path.unlink()

    with pytest.raises(UnreadableFile):
        asyncio.run(file_store.read(handle))


def test_create_uses_configured_directory(tmp_path: Path) -> None:
    upload_dir = tmp_path / "uploads"

    file_store = TempDirFileStore.create(str(upload_dir))

    assert file_store.root == upload_dir
    assert upload_dir.is_dir()


def test_create_defaults_to_temp_directory() -> None:
    file_store = TempDirFileStore.create()

    assert file_store.root.is_dir()
    file_store.root.rmdir()
