"""ASGI entrypoint for the thumbnail editor."""

from thumbnail_editor.api.app import create_app
from thumbnail_editor.containers import build_container

app = create_app(build_container())
