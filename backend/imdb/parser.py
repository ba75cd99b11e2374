"""
Parser turning IMDb chart and search list items into :class:`Media` records.

Both the popularity charts and the advanced title search render every title as a
list item sharing the same ``cli-*`` markup, so a single parser serves both. The
charts always carry a meter rank; search results usually do not, which is why
the rank is only mandatory when ``rank_required`` is set.
"""
from __future__ import annotations

import re

from bs4 import Tag

from .fetcher import HtmlPage
from .models import Media, MediaType

RANK_SELECTOR = ".cli-meter-title-header"
TITLE_SELECTOR = ".ipc-title"
YEAR_SELECTOR = ".cli-title-metadata .cli-title-metadata-item:first-child"
RATING_SELECTOR = ".cli-ratings-container .ipc-rating-star"
TYPE_SELECTOR = ".cli-title-type-data"

TV_SERIES_LABEL = "TV Series"
MISSING_VALUE = -1

_ID_PATTERN = re.compile(r"title/(tt\d+)")
_NUMBER_PATTERN = re.compile(r"\d+(\.\d+)?")


class ParseError(ValueError):
    """Raised when a list item lacks a field required to build a record."""


class MissingRankError(ParseError):
    """The meter rank is required but the item carries none."""


class MissingURLError(ParseError):
    """The title element has no link to the title page."""


class MissingIDError(ParseError):
    """The title link does not contain an IMDb identifier."""


class InvalidYearError(ParseError):
    """No release year could be read from the item metadata."""


def first_number(text: str) -> float | None:
    """Return the first ``integer[.fraction]`` token in ``text`` or ``None``."""

    match = _NUMBER_PATTERN.search(text)
    if match is None:
        return None
    return float(match.group(0))


def child_text(element: Tag, selector: str) -> str:
    """Concatenated, trimmed text of every node matching ``selector``."""

    return "".join(node.get_text() for node in element.select(selector)).strip()


def parse_media(element: Tag, page: HtmlPage, *, rank_required: bool) -> Media:
    """Build a :class:`Media` record from a single chart or search list item.

    Rank and rating degrade to ``-1`` when missing; the year, link and identifier
    are mandatory and raise a :class:`ParseError` subclass otherwise.
    """

    rank = first_number(child_text(element, RANK_SELECTOR))
    if rank is None and rank_required:
        raise MissingRankError("failed to parse rank: no meter position found")

    title_element = element.select_one(TITLE_SELECTOR)
    title = title_element.get_text().strip() if title_element is not None else ""

    link = title_element.select_one("a") if title_element is not None else None
    relative_url = link.get("href", "") if link is not None else ""
    if not relative_url:
        raise MissingURLError("could not fetch url from element")
    url = page.absolute_url(str(relative_url))

    id_match = _ID_PATTERN.search(url)
    if id_match is None:
        raise MissingIDError(f"could not fetch id from url: {url}")

    year = first_number(child_text(element, YEAR_SELECTOR))
    if year is None:
        raise InvalidYearError("failed to parse media year")

    rating = first_number(child_text(element, RATING_SELECTOR))

    media_type = MediaType.MOVIE
    if child_text(element, TYPE_SELECTOR) == TV_SERIES_LABEL:
        media_type = MediaType.TV_SHOW

    return Media(
        id=id_match.group(1),
        title=title,
        year=int(year),
        rank=int(rank) if rank is not None else MISSING_VALUE,
        rating=rating if rating is not None else float(MISSING_VALUE),
        media_type=media_type,
        url=url,
    )
