"""Tests for the refresh loop and the download decision service."""
from __future__ import annotations

import threading
from datetime import timedelta
from pathlib import Path

import pytest
from sqlmodel import create_engine

from backend.imdb.fetcher import FetchError
from backend.imdb.models import Media, MediaType
from backend.imdb.search import MediaNotFoundError, SearchError
from backend.helper_api.services import (
    Decision,
    DecisionOutcome,
    QueryService,
    RefreshCycle,
    RefreshState,
)
from backend.helper_api.stores.catalog_store import CatalogStore, StoreError


def _media(media_id: str, title: str, year: int, media_type: MediaType = MediaType.MOVIE) -> Media:
    return Media(
        id=media_id,
        title=title,
        year=year,
        rank=1,
        rating=7.0,
        media_type=media_type,
        url=f"https://www.imdb.com/title/{media_id}/",
    )


class StubScraper:
    """Scraper returning canned snapshots or raising a canned error."""

    def __init__(self, snapshots: list[list[Media]] | None = None, error: Exception | None = None) -> None:
        self.snapshots = snapshots or []
        self.error = error
        self.calls = 0

    def scrape_popular(self) -> list[Media]:
        self.calls += 1
        if self.error:
            raise self.error
        if not self.snapshots:
            return []
        return self.snapshots[min(self.calls, len(self.snapshots)) - 1]


class StubSearch:
    """Title search resolving from a fixed mapping."""

    def __init__(self, ids: dict[tuple[str, int], str] | None = None, error: Exception | None = None) -> None:
        self.ids = ids or {}
        self.error = error
        self.calls: list[tuple[str, int]] = []

    def resolve_id(self, title: str, year: int) -> str:
        self.calls.append((title, year))
        if self.error:
            raise self.error
        try:
            return self.ids[(title, year)]
        except KeyError:
            raise MediaNotFoundError(title) from None


class FailingStore:
    def exists(self, media_id: str) -> bool:
        raise StoreError("database is locked")


@pytest.fixture()
def store(tmp_path: Path) -> CatalogStore:
    engine = create_engine(
        f"sqlite:///{tmp_path / 'media.db'}", connect_args={"check_same_thread": False}
    )
    catalog_store = CatalogStore(engine)
    catalog_store.initialize()
    return catalog_store


def test_run_once_replaces_catalog_with_scraped_snapshot(store: CatalogStore) -> None:
    scraper = StubScraper([[_media("tt1", "A", 2020)], [_media("tt2", "B", 2019)]])
    cycle = RefreshCycle(scraper, store, interval=timedelta(hours=24))

    assert cycle.run_once() == 1
    assert store.exists("tt1")

    assert cycle.run_once() == 1
    assert not store.exists("tt1")
    assert store.exists("tt2")
    assert cycle.state is RefreshState.IDLE


def test_run_once_propagates_fetch_errors_and_keeps_catalog(store: CatalogStore) -> None:
    store.replace_all([_media("tt1", "A", 2020)])
    cycle = RefreshCycle(
        StubScraper(error=FetchError("imdb unreachable")), store, interval=timedelta(hours=1)
    )

    with pytest.raises(FetchError):
        cycle.run_once()

    assert store.exists("tt1")
    assert cycle.state is RefreshState.IDLE


def test_loop_refreshes_immediately_and_on_interval(store: CatalogStore) -> None:
    refreshed = threading.Event()

    class CountingScraper(StubScraper):
        def scrape_popular(self) -> list[Media]:
            snapshot = super().scrape_popular()
            if self.calls >= 2:
                refreshed.set()
            return snapshot

    scraper = CountingScraper([[_media("tt1", "A", 2020)]])
    cycle = RefreshCycle(scraper, store, interval=timedelta(milliseconds=20))

    cycle.start()
    try:
        assert refreshed.wait(timeout=5)
    finally:
        cycle.stop(timeout=5)

    assert scraper.calls >= 2
    assert store.exists("tt1")


def test_loop_hands_failures_to_failure_handler(store: CatalogStore) -> None:
    failures: list[BaseException] = []
    failed = threading.Event()

    def on_failure(exc: BaseException) -> None:
        failures.append(exc)
        failed.set()

    scraper = StubScraper(error=FetchError("imdb unreachable"))
    cycle = RefreshCycle(scraper, store, interval=timedelta(milliseconds=10), on_failure=on_failure)

    cycle.start()
    assert failed.wait(timeout=5)
    cycle.stop(timeout=5)

    assert len(failures) == 1
    assert isinstance(failures[0], FetchError)
    assert scraper.calls == 1


def test_stop_interrupts_the_interval_wait(store: CatalogStore) -> None:
    scraper = StubScraper([[_media("tt1", "A", 2020)]])
    cycle = RefreshCycle(scraper, store, interval=timedelta(hours=24))

    cycle.start()
    cycle.stop(timeout=5)

    assert scraper.calls == 1


def test_should_download_accepts_popular_media(store: CatalogStore) -> None:
    store.replace_all([_media("tt1", "A", 2020)])
    service = QueryService(StubSearch({("A", 2020): "tt1"}), store)

    decision = service.should_download("A", 2020)

    assert decision == Decision.accept("tt1")
    assert decision.status_code == 200
    assert decision.message == "media should be downloaded"


def test_should_download_rejects_unknown_media(store: CatalogStore) -> None:
    service = QueryService(StubSearch(), store)

    decision = service.should_download("C", 2020)

    assert decision.outcome is DecisionOutcome.REJECT
    assert decision.status_code == 404
    assert decision.message == "media not found"


def test_should_download_rejects_media_outside_catalog(store: CatalogStore) -> None:
    store.replace_all([_media("tt1", "A", 2020)])
    service = QueryService(StubSearch({("Z", 2021): "tt99"}), store)

    decision = service.should_download("Z", 2021)

    assert decision.outcome is DecisionOutcome.REJECT
    assert decision.message == "media should not be downloaded"
    assert decision.media_id == "tt99"


def test_should_download_reports_search_errors(store: CatalogStore) -> None:
    service = QueryService(StubSearch(error=SearchError("imdb down")), store)

    decision = service.should_download("A", 2020)

    assert decision.outcome is DecisionOutcome.ERROR
    assert decision.status_code == 500
    assert decision.message == "failed to search for media"


def test_should_download_reports_store_errors() -> None:
    service = QueryService(StubSearch({("A", 2020): "tt1"}), FailingStore())

    decision = service.should_download("A", 2020)

    assert decision.outcome is DecisionOutcome.ERROR
    assert decision.message == "failed to check if media should be downloaded"


def test_refresh_then_query_end_to_end(store: CatalogStore) -> None:
    scraper = StubScraper(
        [[_media("tt1", "A", 2020), _media("tt2", "B", 2019, MediaType.TV_SHOW)]]
    )
    RefreshCycle(scraper, store, interval=timedelta(hours=24)).run_once()
    search = StubSearch({("A", 2020): "tt1", ("B", 2019): "tt2"})
    service = QueryService(search, store)

    assert service.should_download("A", 2020).outcome is DecisionOutcome.ACCEPT
    assert service.should_download("B", 2019).outcome is DecisionOutcome.ACCEPT
    assert service.should_download("C", 2020) == Decision.reject("media not found")
