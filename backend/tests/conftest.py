"""Shared HTML builders and fetch helpers for the media helper test-suite."""
from __future__ import annotations

import sys
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.imdb.fetcher import PageFetcher  # noqa: E402

_UNSET = object()


def render_item(
    *,
    media_id: str | None = "tt0000001",
    title: str = "1. Example",
    year: str | None = "2024",
    rank: str | None = "1",
    rating: str | None = "7.5",
    type_label: str | None = None,
    href: object = _UNSET,
) -> str:
    """Render a single IMDb list item using the ``cli-*`` markup."""

    if href is _UNSET:
        href = f"/title/{media_id}/?ref_=chtmvm_t_1" if media_id else None

    parts = ['<li class="ipc-metadata-list-summary-item"><div class="cli-children">']
    if rank is not None:
        parts.append(f'<div class="cli-meter-title-header">{rank}</div>')
    if href is not None:
        parts.append(
            f'<div class="ipc-title"><a href="{href}"><h3 class="ipc-title__text">{title}</h3></a></div>'
        )
    else:
        parts.append(f'<div class="ipc-title"><h3 class="ipc-title__text">{title}</h3></div>')
    parts.append('<div class="cli-title-metadata">')
    if year is not None:
        parts.append(f'<span class="cli-title-metadata-item">{year}</span>')
    else:
        parts.append('<span class="cli-title-metadata-item">TV-MA</span>')
    parts.append('<span class="cli-title-metadata-item">2h 46m</span></div>')
    if type_label is not None:
        parts.append(f'<span class="cli-title-type-data">{type_label}</span>')
    if rating is not None:
        parts.append(
            f'<div class="cli-ratings-container"><span class="ipc-rating-star">{rating}</span></div>'
        )
    parts.append("</div></li>")
    return "".join(parts)


def render_page(*items: str) -> str:
    """Wrap rendered items into an IMDb-like list page."""

    body = "".join(items)
    return (
        "<html><head><title>IMDb</title></head><body>"
        f'<section><ul class="ipc-metadata-list">{body}</ul></section>'
        "</body></html>"
    )


RouteTable = dict[str, httpx.Response | Exception]


def make_fetcher(routes: RouteTable, requested: list[str] | None = None) -> PageFetcher:
    """Build a :class:`PageFetcher` answering from ``routes`` keyed by URL path."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requested is not None:
            requested.append(str(request.url))
        outcome = routes.get(request.url.path)
        if outcome is None:
            return httpx.Response(404, text="not found")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return PageFetcher(transport=httpx.MockTransport(handler))

