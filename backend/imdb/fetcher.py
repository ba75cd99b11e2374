"""
HTML page fetching for the IMDb scrapers.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0"
DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


class FetchError(RuntimeError):
    """Raised when a page cannot be retrieved from the source site."""


@dataclass(slots=True)
class HtmlPage:
    """A fetched document together with the URL it was served from."""

    url: str
    soup: BeautifulSoup

    def absolute_url(self, relative_url: str) -> str:
        return urljoin(self.url, relative_url)

    def select(self, selector: str) -> list[Tag]:
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Tag | None:
        return self.soup.select_one(selector)


class PageFetcher:
    """Fetch HTML pages over HTTP and parse them into selectable documents."""

    def __init__(
        self,
        *,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._headers = {**DEFAULT_HEADERS, "User-Agent": user_agent}
        self._transport = transport

    def fetch(self, url: str) -> HtmlPage:
        """Download ``url`` and return the parsed page."""

        logger.debug("visiting new website url=%s", url)
        try:
            with httpx.Client(
                timeout=self._timeout,
                headers=self._headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"{url} responded with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"failed to fetch {url}: {exc}") from exc

        return HtmlPage(url=str(response.url), soup=BeautifulSoup(response.text, "lxml"))
