"""FastAPI service answering popular-media download checks."""

from .app import create_app

__all__ = ["create_app"]
