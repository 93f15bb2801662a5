"""Chat transcript shown next to the image."""

from dataclasses import dataclass, field

from thumbnail_editor.domain.chat import BotEntry, ChatEntry, UserEntry


@dataclass
class ConversationLog:
    """Append-only transcript with compensating removal for rollbacks."""

    entries: list[ChatEntry] = field(default_factory=list)

    def append_user(self, entry: UserEntry) -> str:
        """Append a user entry and return its id."""
        self.entries.append(entry)
        return entry.id

    def append_bot(self, entry: BotEntry) -> None:
        """Append a bot entry."""
        self.entries.append(entry)

    def remove_by_id(self, entry_id: str) -> None:
        """Remove the entry with the given id, if present."""
        self.entries = [entry for entry in self.entries if entry.id != entry_id]

    def clear(self) -> None:
        self.entries = []
