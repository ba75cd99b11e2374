"""Pydantic models exposed by the media helper API."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class MediaCheckRequest(BaseModel):
    """Webhook payload sent by autobrr when a release matches a filter.

    Only ``Title`` and ``Year`` drive the decision; the remaining fields are
    logged for diagnostics.
    """

    Title: str = Field(..., min_length=1)
    Year: int = Field(..., gt=0)
    Episode: str | None = None
    FilterName: str | None = None
    Indexer: str | None = None
    Resolution: str | None = None
    Season: str | None = None
    Source: str | None = None
    TorrentName: str | None = None
    Type: str | None = None


class HealthStatus(BaseModel):
    """Service health payload."""

    status: Literal["ok", "degraded"] = Field(default="ok")
    version: str = Field(default="0.1.0", description="Semantic version of the API service.")
    refresh_state: Literal["idle", "refreshing"] = Field(
        default="idle", description="Current state of the popular media refresh loop."
    )
    catalog_size: int | None = Field(
        default=0, description="Number of media currently in the catalog, null when unreadable."
    )


class MediaModel(BaseModel):
    """A catalog entry as exposed by the API."""

    id: str
    title: str
    year: int | None = None
    rank: int | None = None
    media_type: Literal["movie", "tv"]
    url: str
    rating: float
    metadata_updated_at: datetime


class CatalogListModel(BaseModel):
    """The current popular media catalog."""

    items: list[MediaModel] = Field(default_factory=list)
    total: int = Field(default=0)


class CatalogMetricsModel(BaseModel):
    """Aggregate statistics for the catalog."""

    total: int = Field(default=0)
    type_counts: dict[str, int] = Field(default_factory=dict)
    last_updated_at: datetime | None = Field(
        default=None, description="Timestamp of the most recent catalog replacement."
    )
