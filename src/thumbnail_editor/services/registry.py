"""In-memory registry of editor sessions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from thumbnail_editor.services.session import EditorSession

logger = logging.getLogger(__name__)


@dataclass
class _SessionSlot:
    session: EditorSession
    expires_at: datetime


@dataclass
class EditorSessionRegistry:
    """Keeps one editor session per browser, expiring idle ones."""

    factory: Callable[[], EditorSession]
    ttl_seconds: int
    _slots: dict[str, _SessionSlot] = field(default_factory=dict)

    async def get_or_create(
        self, session_id: str | None
    ) -> tuple[str, EditorSession]:
        """Return the session for an id, creating one for unknown ids."""
        await self.evict_expired()
        slot = self._slots.get(session_id) if session_id else None
        if slot is None:
            session_id = uuid4().hex
            session = self.factory()
            logger.info("Editor session created", extra={"session_id": session_id})
        else:
            session = slot.session
        self._slots[session_id] = _SessionSlot(
            session=session,
            expires_at=datetime.now(tz=UTC) + timedelta(seconds=self.ttl_seconds),
        )
        return session_id, session

    async def evict_expired(self) -> None:
        """Close and drop idle sessions that are not busy."""
        now = datetime.now(tz=UTC)
        expired = [
            session_id
            for session_id, slot in self._slots.items()
            if now >= slot.expires_at and not slot.session.busy
        ]
        for session_id in expired:
            slot = self._slots.pop(session_id)
            await slot.session.close()
            logger.info("Editor session expired", extra={"session_id": session_id})

    async def close_all(self) -> None:
        """Close every session."""
        slots = list(self._slots.values())
        self._slots.clear()
        for slot in slots:
            await slot.session.close()

    def __len__(self) -> int:
        return len(self._slots)
