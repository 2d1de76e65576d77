"""ASGI entrypoint for the tile match API.

Run with ``uvicorn tile_match.api.asgi:app``.
"""

from tile_match.api.app import create_app
from tile_match.config import Settings
from tile_match.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
