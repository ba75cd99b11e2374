"""Background loop keeping the popular media catalog up to date."""
from __future__ import annotations

import logging
import os
import threading
from datetime import timedelta
from enum import Enum
from typing import Callable

from backend.imdb.scraper import PopularMediaScraper

from ..stores.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class RefreshState(str, Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


def exit_process(exc: BaseException) -> None:
    """Terminate the process so an external supervisor can restart it."""

    logger.critical("exiting after failed popular media refresh: %s", exc)
    logging.shutdown()
    os._exit(1)


class RefreshCycle:
    """Scrape the popularity charts and replace the catalog on a fixed interval.

    The first refresh runs as soon as the loop starts. Any failure is handed to
    ``on_failure`` and stops the loop; the default handler exits the process.
    """

    def __init__(
        self,
        scraper: PopularMediaScraper,
        store: CatalogStore,
        *,
        interval: timedelta,
        on_failure: Callable[[BaseException], None] = exit_process,
    ) -> None:
        self.scraper = scraper
        self.store = store
        self.interval = interval
        self.on_failure = on_failure
        self._state = RefreshState.IDLE
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> RefreshState:
        return self._state

    def run_once(self) -> int:
        """Scrape both charts and swap the catalog. Returns the stored count."""

        with self._lock:
            self._state = RefreshState.REFRESHING
            try:
                logger.info("refreshing popular media by scraping from imdb and updating database")
                popular_media = self.scraper.scrape_popular()
                logger.info("scraped popular media mediaCount=%d", len(popular_media))
                logger.info("replacing media within database...")
                stored = self.store.replace_all(popular_media)
                logger.info("done with refreshing popular media storedCount=%d", stored)
                return stored
            finally:
                self._state = RefreshState.IDLE

    def start(self) -> None:
        """Launch the refresh loop on a daemon thread."""

        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="media-refresh", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 10.0) -> None:
        """Signal the loop to finish and wait for an in-flight refresh."""

        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _run(self) -> None:
        if not self._refresh_or_fail():
            return
        logger.info("starting media scrape loop interval=%s", self.interval)
        while not self._stop_event.wait(self.interval.total_seconds()):
            if not self._refresh_or_fail():
                return

    def _refresh_or_fail(self) -> bool:
        try:
            self.run_once()
        except Exception as exc:
            logger.error("failed to refresh popular media error=%s", exc, exc_info=True)
            self.on_failure(exc)
            return False
        return True
