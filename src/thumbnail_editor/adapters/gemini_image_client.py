"""Gemini image model client for edits."""

from dataclasses import dataclass

from google import genai
from google.genai import types

from thumbnail_editor.domain.images import ImageVersion
from thumbnail_editor.services.editing import ImageEditClient


@dataclass
class GeminiImageEditClient(ImageEditClient):
    """Image edit client backed by the Gemini generate_content API."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiImageEditClient":
        """Create a Gemini image edit client."""
        return cls(client=genai.Client(api_key=api_key))

    async def edit(
        self,
        *,
        model: str,
        base_image: ImageVersion,
        prompt: str,
        context_image: ImageVersion | None,
    ) -> ImageVersion:
        """Send base image, optional context image and prompt as one turn."""
        parts = [
            types.Part.from_bytes(data=base_image.data, mime_type=base_image.mime_type)
        ]
        if context_image is not None:
            parts.append(
                types.Part.from_bytes(
                    data=context_image.data, mime_type=context_image.mime_type
                )
            )
        parts.append(types.Part.from_text(text=prompt))

        response = await self.client.aio.models.generate_content(
            model=model,
            contents=types.Content(role="user", parts=parts),
            config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )
        image = _first_inline_image(response)
        if image is None:
            raise RuntimeError("API response did not contain an image.")
        return image


def _first_inline_image(response: types.GenerateContentResponse) -> ImageVersion | None:
    if not response.candidates:
        return None
    content = response.candidates[0].content
    if content is None or not content.parts:
        return None
    for part in content.parts:
        inline = part.inline_data
        if inline is not None and inline.data:
            return ImageVersion(
                data=inline.data, mime_type=inline.mime_type or "image/png"
            )
    return None
