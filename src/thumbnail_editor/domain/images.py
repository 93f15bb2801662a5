"""Domain models for image versions."""

import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageVersion:
    """One state of the edited image."""

    data: bytes
    mime_type: str

    def to_data_url(self) -> str:
        """Return the image as a base64 data URL."""
        encoded = base64.b64encode(self.data).decode("utf-8")
        return f"data:{self.mime_type};base64,{encoded}"

    @property
    def extension(self) -> str:
        """File extension derived from the MIME subtype."""
        _, _, subtype = self.mime_type.partition("/")
        return subtype or "png"


def is_image_mime_type(mime_type: str | None) -> bool:
    """Return true for image/* content types."""
    return bool(mime_type) and mime_type.startswith("image/")
