"""OpenAI Images API client for edits."""

import base64
from dataclasses import dataclass

from openai import AsyncOpenAI

from thumbnail_editor.domain.images import ImageVersion
from thumbnail_editor.services.editing import ImageEditClient


@dataclass
class OpenAIImageEditClient(ImageEditClient):
    """Image edit client backed by the OpenAI images.edit endpoint."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIImageEditClient":
        """Create an OpenAI image edit client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def edit(
        self,
        *,
        model: str,
        base_image: ImageVersion,
        prompt: str,
        context_image: ImageVersion | None,
    ) -> ImageVersion:
        """Call images.edit with the base image first and context second."""
        images = [_as_upload("base", base_image)]
        if context_image is not None:
            images.append(_as_upload("context", context_image))

        response = await self.client.images.edit(
            model=model,
            image=images,
            prompt=prompt,
            n=1,
        )
        if not response.data or not response.data[0].b64_json:
            raise RuntimeError("API response did not contain an image.")
        return ImageVersion(
            data=base64.b64decode(response.data[0].b64_json),
            mime_type="image/png",
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _as_upload(name: str, image: ImageVersion) -> tuple[str, bytes, str]:
    return (f"{name}.{image.extension}", image.data, image.mime_type)
