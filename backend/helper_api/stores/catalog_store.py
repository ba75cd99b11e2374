"""Database-backed catalog of the currently popular media."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Sequence

from sqlalchemy import delete, func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from backend.imdb.models import Media, MediaType

from ..models import MediaRecord
from ..schemas import CatalogMetricsModel, MediaModel

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the catalog cannot be read from or written to storage."""


class SchemaError(StoreError):
    """Raised when the catalog schema cannot be created."""


@dataclass(slots=True)
class CatalogStore:
    """Full-replace writer and point-lookup reader over the ``media`` table."""

    engine: Engine

    def initialize(self) -> None:
        """Create the catalog table and its index when they do not exist yet."""

        try:
            SQLModel.metadata.create_all(self.engine, tables=[MediaRecord.__table__])
        except SQLAlchemyError as exc:
            raise SchemaError(f"could not initialize db: {exc}") from exc

    def replace_all(self, media_list: Iterable[Media]) -> int:
        """Atomically swap the catalog contents for ``media_list``.

        The delete and every insert share one transaction, so readers see either
        the previous catalog or the new one. Repeated identifiers keep their first
        occurrence. Returns the number of stored records.
        """

        updated_at = datetime.now(timezone.utc)
        records: dict[str, MediaRecord] = {}
        for media in media_list:
            if media.id in records:
                logger.debug("skipping duplicate media id=%s title=%r", media.id, media.title)
                continue
            records[media.id] = _to_record(media, updated_at)

        try:
            with Session(self.engine) as session:
                try:
                    session.exec(delete(MediaRecord))
                    session.add_all(records.values())
                    session.commit()
                except SQLAlchemyError:
                    session.rollback()
                    raise
        except SQLAlchemyError as exc:
            raise StoreError(f"could not replace media: {exc}") from exc
        return len(records)

    def exists(self, media_id: str) -> bool:
        """Return whether ``media_id`` is part of the current catalog."""

        try:
            with Session(self.engine) as session:
                return session.get(MediaRecord, media_id) is not None
        except SQLAlchemyError as exc:
            raise StoreError(f"could not check if media should be downloaded: {exc}") from exc

    def list(self, *, media_type: MediaType | None = None) -> list[MediaModel]:
        """Return the catalog ordered by media type and chart rank."""

        statement = select(MediaRecord)
        if media_type is not None:
            statement = statement.where(MediaRecord.media_type == media_type.value)
        statement = statement.order_by(MediaRecord.media_type, MediaRecord.rank, MediaRecord.id)
        try:
            with Session(self.engine) as session:
                records: Sequence[MediaRecord] = session.exec(statement).all()
                return [_to_model(record) for record in records]
        except SQLAlchemyError as exc:
            raise StoreError(f"could not list media: {exc}") from exc

    def count(self) -> int:
        try:
            with Session(self.engine) as session:
                return session.exec(select(func.count()).select_from(MediaRecord)).one()
        except SQLAlchemyError as exc:
            raise StoreError(f"could not count media: {exc}") from exc

    def metrics(self) -> CatalogMetricsModel:
        """Return aggregate statistics for the catalog."""

        try:
            with Session(self.engine) as session:
                type_rows = session.exec(
                    select(MediaRecord.media_type, func.count())
                    .group_by(MediaRecord.media_type)
                    .order_by(MediaRecord.media_type)
                ).all()
                last_updated = session.exec(
                    select(func.max(MediaRecord.metadata_updated_at))
                ).one()
        except SQLAlchemyError as exc:
            raise StoreError(f"could not compute catalog metrics: {exc}") from exc

        type_counts = {media_type: count for media_type, count in type_rows}
        return CatalogMetricsModel(
            total=sum(type_counts.values()),
            type_counts=type_counts,
            last_updated_at=last_updated,
        )


def _to_record(media: Media, updated_at: datetime) -> MediaRecord:
    return MediaRecord(
        id=media.id,
        title=media.title,
        year=media.year,
        rank=media.rank,
        media_type=media.media_type.value,
        url=media.url,
        rating=media.rating,
        metadata_updated_at=updated_at,
    )


def _to_model(record: MediaRecord) -> MediaModel:
    """Convert a catalog record into a response model."""

    return MediaModel(
        id=record.id,
        title=record.title,
        year=record.year,
        rank=record.rank,
        media_type=record.media_type,
        url=record.url,
        rating=record.rating,
        metadata_updated_at=record.metadata_updated_at,
    )
