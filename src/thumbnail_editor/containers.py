"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from thumbnail_editor.adapters.gemini_image_client import GeminiImageEditClient
from thumbnail_editor.adapters.local_files import TempDirFileStore
from thumbnail_editor.adapters.openai_image_client import OpenAIImageEditClient
from thumbnail_editor.config import Settings
from thumbnail_editor.services.editing import ImageEditService
from thumbnail_editor.services.files import FileStore
from thumbnail_editor.services.previews import PreviewRegistry
from thumbnail_editor.services.registry import EditorSessionRegistry
from thumbnail_editor.services.session import EditorSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    file_store: FileStore
    previews: PreviewRegistry
    edit_service: ImageEditService
    session_registry: EditorSessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_key = resolved_settings.provider_api_key()
    if resolved_settings.image_provider == "gemini":
        edit_client = GeminiImageEditClient.create(api_key)
        openai_client = None
    else:
        openai_client = OpenAIImageEditClient.create(api_key)
        edit_client = openai_client
    edit_service = ImageEditService(
        client=edit_client,
        model=resolved_settings.provider_model(),
    )
    file_store = TempDirFileStore.create(resolved_settings.upload_dir)
    previews = PreviewRegistry(file_store)

    def new_session() -> EditorSession:
        return EditorSession(
            edit_service=edit_service,
            file_store=file_store,
            previews=previews,
        )

    session_registry = EditorSessionRegistry(
        factory=new_session,
        ttl_seconds=resolved_settings.session_ttl_seconds,
    )

    async def close_resources() -> None:
        await session_registry.close_all()
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        file_store=file_store,
        previews=previews,
        edit_service=edit_service,
        session_registry=session_registry,
        close_resources=close_resources,
    )
