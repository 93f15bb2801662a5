"""Errors surfaced to the editor user."""


class EditorError(Exception):
    """Base class for errors that end the triggering action only."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidUpload(EditorError):
    """Selected file is not an image."""


class UnreadableFile(EditorError):
    """File could not be converted to bytes."""


class PreconditionViolation(EditorError):
    """Submission rejected before any side effect."""


class EditFailed(EditorError):
    """The image edit call did not yield an image."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
