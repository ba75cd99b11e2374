"""
Scraper for the IMDb "most popular" movie and TV charts.
"""
from __future__ import annotations

import logging

from .fetcher import PageFetcher
from .models import Media
from .parser import ParseError, parse_media

logger = logging.getLogger(__name__)

IMDB_POPULAR_MOVIES_URL = "https://www.imdb.com/chart/moviemeter/"
IMDB_POPULAR_TV_SHOWS_URL = "https://www.imdb.com/chart/tvmeter/"

LIST_SELECTOR = ".ipc-metadata-list"
ITEM_SELECTOR = ".cli-children"


class PopularMediaScraper:
    """Collect the ranked entries of both popularity charts."""

    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        chart_urls: tuple[str, ...] = (IMDB_POPULAR_MOVIES_URL, IMDB_POPULAR_TV_SHOWS_URL),
    ) -> None:
        self.fetcher = fetcher
        self.chart_urls = chart_urls

    def scrape_popular(self) -> list[Media]:
        """Return every parseable chart entry, movies first.

        Items that fail to parse are logged and skipped. A chart that cannot be
        fetched raises :class:`FetchError` and discards everything collected so far.
        """

        media_list: list[Media] = []
        for chart_url in self.chart_urls:
            media_list.extend(self._scrape_chart(chart_url))
        return media_list

    def _scrape_chart(self, chart_url: str) -> list[Media]:
        page = self.fetcher.fetch(chart_url)
        media_list: list[Media] = []
        for metadata_list in page.select(LIST_SELECTOR):
            for element in metadata_list.select(ITEM_SELECTOR):
                try:
                    media = parse_media(element, page, rank_required=True)
                except ParseError as exc:
                    logger.error(
                        "failed to parse media chart=%s rawMedia=%r error=%s",
                        chart_url,
                        element.get_text(" ", strip=True),
                        exc,
                    )
                    continue
                logger.debug("parsed media media=%s", media)
                media_list.append(media)
        logger.info("scraped chart chart=%s mediaCount=%d", chart_url, len(media_list))
        return media_list
