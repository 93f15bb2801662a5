"""Tests for the editor session registry."""

import asyncio

from thumbnail_editor.services.registry import EditorSessionRegistry
from thumbnail_editor.services.session import SubmissionState
from tests.conftest import (
    PNG_BYTES,
    CountingPreviewRegistry,
    FakeImageEditClient,
    InMemoryFileStore,
    build_session,
    store,
)


def _registry(ttl_seconds: int = 3600) -> tuple[EditorSessionRegistry, InMemoryFileStore]:
    file_store = InMemoryFileStore()
    previews = CountingPreviewRegistry(file_store)
    registry = EditorSessionRegistry(
        factory=lambda: build_session(FakeImageEditClient(), file_store, previews),
        ttl_seconds=ttl_seconds,
    )
    return registry, file_store


def test_get_or_create_reuses_known_sessions() -> None:
    registry, _ = _registry()

    session_id, session = asyncio.run(registry.get_or_create(None))
    same_id, same = asyncio.run(registry.get_or_create(session_id))

    assert same_id == session_id
    assert same is session
    assert len(registry) == 1


def test_unknown_session_id_gets_a_fresh_id() -> None:
    registry, _ = _registry()

    session_id, _ = asyncio.run(registry.get_or_create("forged-id"))

    assert session_id != "forged-id"


def test_expired_sessions_are_closed_and_dropped() -> None:
    registry, file_store = _registry(ttl_seconds=0)
    session_id, session = asyncio.run(registry.get_or_create(None))
    asyncio.run(session.upload_image(store(file_store, PNG_BYTES)))
    context = asyncio.run(session.attach_context(store(file_store, b"ctx")))

    new_id, new_session = asyncio.run(registry.get_or_create(session_id))

    assert new_id != session_id
    assert new_session is not session
    assert session.previews.released == [context.preview_ref]


def test_busy_sessions_are_not_evicted() -> None:
    registry, _ = _registry(ttl_seconds=0)
    session_id, session = asyncio.run(registry.get_or_create(None))
    session.state = SubmissionState.IN_FLIGHT

    asyncio.run(registry.evict_expired())

    assert len(registry) == 1
    session.state = SubmissionState.BUSY
    asyncio.run(registry.evict_expired())
    assert len(registry) == 1
    session.state = SubmissionState.IDLE
    asyncio.run(registry.evict_expired())
    assert len(registry) == 0


def test_close_all_releases_every_session() -> None:
    registry, file_store = _registry()
    _, session = asyncio.run(registry.get_or_create(None))
    asyncio.run(session.upload_image(store(file_store, PNG_BYTES)))
    context = asyncio.run(session.attach_context(store(file_store, b"ctx")))

    asyncio.run(registry.close_all())

    assert len(registry) == 0
    assert session.previews.released == [context.preview_ref]
