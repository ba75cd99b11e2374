"""
IMDb advanced title search used to resolve free-text titles to identifiers.
"""
from __future__ import annotations

import logging
from urllib.parse import quote_plus

from .fetcher import FetchError, PageFetcher
from .parser import ParseError, parse_media

logger = logging.getLogger(__name__)

IMDB_SEARCH_URL = "https://www.imdb.com/search/title/?title={title}&release_date={year}-01-01,{year}-12-31"
FIRST_RESULT_SELECTOR = ".ipc-metadata-list .ipc-metadata-list-summary-item:first-child"


class SearchError(FetchError):
    """Raised when the search page itself could not be reached."""


class MediaNotFoundError(LookupError):
    """Raised when a search yields no usable result for the title and year."""


class TitleSearch:
    """Resolve a title and release year to an IMDb identifier via live search."""

    def __init__(self, fetcher: PageFetcher, *, search_url: str = IMDB_SEARCH_URL) -> None:
        self.fetcher = fetcher
        self.search_url = search_url

    def build_url(self, title: str, year: int) -> str:
        return self.search_url.format(title=quote_plus(title), year=year)

    def resolve_id(self, title: str, year: int) -> str:
        """Return the identifier of the first search result.

        Raises :class:`MediaNotFoundError` when the result page has no usable
        first item and :class:`SearchError` when the page cannot be fetched.
        """

        url = self.build_url(title, year)
        try:
            page = self.fetcher.fetch(url)
        except FetchError as exc:
            raise SearchError(f"could not search for imdb media: {exc}") from exc

        element = page.select_one(FIRST_RESULT_SELECTOR)
        if element is None:
            raise MediaNotFoundError(f"no search results for title={title!r} year={year}")

        try:
            media = parse_media(element, page, rank_required=False)
        except ParseError as exc:
            logger.error(
                "failed to parse media rawMedia=%r error=%s",
                element.get_text(" ", strip=True),
                exc,
            )
            raise MediaNotFoundError(f"unusable search result for title={title!r} year={year}") from exc

        if not media.id:
            raise MediaNotFoundError(f"search result without id for title={title!r} year={year}")
        return media.id
