"""Image editing through a generative model."""

import logging
from dataclasses import dataclass
from typing import Protocol

from thumbnail_editor.domain.errors import EditFailed
from thumbnail_editor.domain.images import ImageVersion

logger = logging.getLogger(__name__)


class ImageEditClient(Protocol):
    """Interface for a remote image-edit model."""

    async def edit(
        self,
        *,
        model: str,
        base_image: ImageVersion,
        prompt: str,
        context_image: ImageVersion | None,
    ) -> ImageVersion:
        """Return exactly one edited image."""


@dataclass
class ImageEditService:
    """Service that calls the configured client and normalizes failures."""

    client: ImageEditClient
    model: str

    async def edit(
        self,
        base_image: ImageVersion,
        prompt: str,
        context_image: ImageVersion | None = None,
    ) -> ImageVersion:
        """Apply a prompt to the base image, raising EditFailed on any error."""
        try:
            return await self.client.edit(
                model=self.model,
                base_image=base_image,
                prompt=prompt,
                context_image=context_image,
            )
        except Exception as exc:
            logger.exception(
                "Image edit failed",
                extra={"model": self.model, "has_context": context_image is not None},
            )
            raise EditFailed(f"Failed to edit image: {exc}") from exc
