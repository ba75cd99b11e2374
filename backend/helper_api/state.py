"""Shared state container for the media helper API."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from backend.imdb.fetcher import PageFetcher
from backend.imdb.scraper import PopularMediaScraper
from backend.imdb.search import TitleSearch

from .db import create_engine_from_settings
from .services.refresh import RefreshCycle
from .settings import HelperSettings
from .stores.catalog_store import CatalogStore


@dataclass(slots=True)
class AppState:
    """Wires the scrapers, the catalog store and the refresh loop together once."""

    settings: HelperSettings
    engine: Engine
    catalog_store: CatalogStore
    fetcher: PageFetcher
    scraper: PopularMediaScraper
    title_search: TitleSearch
    refresh_cycle: RefreshCycle

    def __init__(self, settings: HelperSettings) -> None:
        self.settings = settings
        self.engine = create_engine_from_settings(settings)
        self.catalog_store = CatalogStore(self.engine)
        self.catalog_store.initialize()
        self.fetcher = PageFetcher(timeout=settings.request_timeout, user_agent=settings.user_agent)
        self.scraper = PopularMediaScraper(self.fetcher)
        self.title_search = TitleSearch(self.fetcher)
        self.refresh_cycle = RefreshCycle(
            self.scraper,
            self.catalog_store,
            interval=settings.scrape_interval,
        )
