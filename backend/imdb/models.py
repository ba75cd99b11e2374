"""
Media records produced by the IMDb scrapers.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MediaType(str, Enum):
    MOVIE = "movie"
    TV_SHOW = "tv"


@dataclass(slots=True)
class Media:
    """A single title extracted from an IMDb chart or search result page."""

    id: str
    title: str
    year: int
    rank: int
    rating: float
    media_type: MediaType
    url: str
