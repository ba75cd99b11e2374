"""Router exports for the media helper API."""
from . import catalog, health, media_check

__all__ = ["catalog", "health", "media_check"]
