"""Domain models for the conversation transcript."""

from dataclasses import dataclass, field
from uuid import uuid4

from thumbnail_editor.domain.images import ImageVersion


def _entry_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex}"


@dataclass(frozen=True)
class UserEntry:
    """Prompt submitted by the user, with an optional context preview."""

    prompt: str
    context_image_ref: str | None = None
    id: str = field(default_factory=lambda: _entry_id("user"))


@dataclass(frozen=True)
class BotEntry:
    """Image produced for the user."""

    image_version: ImageVersion
    id: str = field(default_factory=lambda: _entry_id("bot"))


ChatEntry = UserEntry | BotEntry
