"""Domain models for uploaded files."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileHandle:
    """Reference to an uploaded file kept on local disk."""

    path: Path
    filename: str
    mime_type: str


@dataclass(frozen=True)
class PendingContext:
    """Context image attached to the next submission."""

    source_file: FileHandle
    preview_ref: str
    mime_type: str
