"""Download decision for media announced by autobrr."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from backend.imdb.search import MediaNotFoundError, SearchError, TitleSearch

from ..stores.catalog_store import CatalogStore, StoreError

logger = logging.getLogger(__name__)


class DecisionOutcome(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    ERROR = "error"


_STATUS_CODES = {
    DecisionOutcome.ACCEPT: 200,
    DecisionOutcome.REJECT: 404,
    DecisionOutcome.ERROR: 500,
}


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of a media check and the message returned to the caller."""

    outcome: DecisionOutcome
    message: str
    media_id: str | None = None

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.outcome]

    @classmethod
    def accept(cls, media_id: str) -> "Decision":
        return cls(DecisionOutcome.ACCEPT, "media should be downloaded", media_id)

    @classmethod
    def reject(cls, message: str, media_id: str | None = None) -> "Decision":
        return cls(DecisionOutcome.REJECT, message, media_id)

    @classmethod
    def error(cls, message: str, media_id: str | None = None) -> "Decision":
        return cls(DecisionOutcome.ERROR, message, media_id)


class QueryService:
    """Resolve a title through IMDb search and check it against the catalog."""

    def __init__(self, search: TitleSearch, store: CatalogStore) -> None:
        self.search = search
        self.store = store

    def should_download(self, title: str, year: int) -> Decision:
        logger.info("searching for imdb id title=%r year=%d", title, year)
        try:
            media_id = self.search.resolve_id(title, year)
        except MediaNotFoundError as exc:
            logger.info("media not found title=%r year=%d reason=%s", title, year, exc)
            return Decision.reject("media not found")
        except SearchError as exc:
            logger.error("failed to search for media title=%r year=%d error=%s", title, year, exc)
            return Decision.error("failed to search for media")

        logger.info("found media id=%s", media_id)
        try:
            should_be_downloaded = self.store.exists(media_id)
        except StoreError as exc:
            logger.error("failed to check if media should be downloaded id=%s error=%s", media_id, exc)
            return Decision.error("failed to check if media should be downloaded", media_id)

        logger.info(
            "media download status retrieved id=%s shouldBeDownloaded=%s",
            media_id,
            should_be_downloaded,
        )
        if not should_be_downloaded:
            return Decision.reject("media should not be downloaded", media_id)
        return Decision.accept(media_id)
