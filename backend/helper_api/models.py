"""Database models for the media helper."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime
from sqlmodel import Field, SQLModel


class MediaRecord(SQLModel, table=True):
    """A title currently listed on one of the IMDb popularity charts."""

    __tablename__ = "media"
    __table_args__ = (
        CheckConstraint("media_type IN ('movie', 'tv')", name="media_type_valid"),
    )

    id: str = Field(primary_key=True)
    title: str = Field(nullable=False)
    year: int | None = Field(default=None)
    rank: int | None = Field(default=None)
    media_type: str = Field(index=True, nullable=False)
    url: str = Field(nullable=False)
    rating: float = Field(nullable=False)
    metadata_updated_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
