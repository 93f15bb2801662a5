"""Linear edit history with undo and redo."""

from dataclasses import dataclass, field

from thumbnail_editor.domain.images import ImageVersion


@dataclass
class EditHistory:
    """Ordered image versions plus a cursor at the active one.

    A commit made after undoing discards every version past the cursor, so
    history stays a single line of edits.
    """

    versions: list[ImageVersion] = field(default_factory=list)
    cursor: int = 0

    def reset(self, initial: ImageVersion) -> None:
        """Replace history with a single version."""
        self.versions = [initial]
        self.cursor = 0

    def commit_edit(self, new_version: ImageVersion) -> None:
        """Append a version after the cursor, dropping any redo branch."""
        if not self.versions:
            raise ValueError("Cannot commit an edit to an empty history")
        self.versions = [*self.versions[: self.cursor + 1], new_version]
        self.cursor = len(self.versions) - 1

    def undo(self) -> None:
        """Move the cursor back one version if possible."""
        if self.can_undo():
            self.cursor -= 1

    def redo(self) -> None:
        """Move the cursor forward one version if possible."""
        if self.can_redo():
            self.cursor += 1

    def current(self) -> ImageVersion | None:
        """Return the active version, or None before the first upload."""
        if not self.versions:
            return None
        return self.versions[self.cursor]

    def can_undo(self) -> bool:
        return self.cursor > 0

    def can_redo(self) -> bool:
        return self.cursor < len(self.versions) - 1
