"""
IMDb scraping package for the media helper.

Bundles the HTML fetch capability, the chart/search record parser, the
popular-chart scraper and the title search used to resolve IMDb identifiers.
"""

from .fetcher import FetchError, HtmlPage, PageFetcher
from .models import Media, MediaType
from .parser import (
    InvalidYearError,
    MissingIDError,
    MissingRankError,
    MissingURLError,
    ParseError,
    first_number,
    parse_media,
)
from .scraper import IMDB_POPULAR_MOVIES_URL, IMDB_POPULAR_TV_SHOWS_URL, PopularMediaScraper
from .search import IMDB_SEARCH_URL, MediaNotFoundError, SearchError, TitleSearch

__all__ = [
    "FetchError",
    "HtmlPage",
    "PageFetcher",
    "Media",
    "MediaType",
    "ParseError",
    "MissingRankError",
    "MissingURLError",
    "MissingIDError",
    "InvalidYearError",
    "first_number",
    "parse_media",
    "PopularMediaScraper",
    "IMDB_POPULAR_MOVIES_URL",
    "IMDB_POPULAR_TV_SHOWS_URL",
    "TitleSearch",
    "IMDB_SEARCH_URL",
    "MediaNotFoundError",
    "SearchError",
]
