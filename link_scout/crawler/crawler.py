# === FILE: link_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional, Protocol, Set, Tuple
from urllib.parse import urlsplit

from aiohttp import ClientSession

from link_scout.aggregator import ScrapingResult, build_result
from link_scout.classifier import LinkCategory, classify
from link_scout.config import ScraperConfig
from link_scout.crawler.fetcher import PageFetcher, create_session
from link_scout.crawler.link_extractor import extract_references
from link_scout.crawler.models import PageData, RawReference
from link_scout.errors import FetchError, SetupError
from link_scout.logger import LOGGER_NAME
from link_scout.progress import ProgressSink, notify
from link_scout.registry import LinkRegistry, VisitedSet
from link_scout.urls import canonicalize, is_internal

__all__ = ("Fetcher", "LinkCrawler")

_WorkItem = Tuple[str, int]


class Fetcher(Protocol):
    async def fetch(self, url: str) -> PageData: ...


class LinkCrawler:
    """Depth-bounded crawler that records every outbound reference.

    Pages are processed from a shared worklist by ``config.concurrency``
    workers. :class:`VisitedSet` admits each URL at most once, so cycles and
    links discovered from several parents are fetched a single time.
    """

    def __init__(
        self,
        config: ScraperConfig,
        fetcher: Optional[Fetcher] = None,
        progress: Optional[ProgressSink] = None,
    ) -> None:
        self.config = config
        seed = canonicalize(str(config.base_url), str(config.base_url))
        if seed is None:
            raise SetupError(f"invalid seed URL: {config.base_url}")
        self.seed = seed
        self.seed_host = urlsplit(seed).netloc
        self.visited = VisitedSet(config.max_pages)
        self.registry = LinkRegistry(self.seed_host)
        self.fetcher = fetcher
        self.progress = progress
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger(LOGGER_NAME)
        self._in_flight: Set[str] = set()

    async def __aenter__(self) -> LinkCrawler:
        if self.fetcher is None:
            self.session = create_session(self.config)
            self.fetcher = PageFetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> ScrapingResult:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with LinkCrawler(...)'")
        self.logger.info("Starting crawl: %s (max depth %d)", self.seed, self.config.max_depth)
        start = time.monotonic()
        queue: asyncio.Queue[_WorkItem] = asyncio.Queue()
        queue.put_nowait((self.seed, 0))
        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.config.concurrency)]
        try:
            await asyncio.wait_for(queue.join(), timeout=self.config.run_timeout)
        except asyncio.TimeoutError:
            self._abandon(queue)
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        result = build_result(self.registry, self.visited, self.seed, start)
        self.logger.info(
            "Finished: %d pages, %d links, %d errors in %s",
            result.statistics.pages_visited,
            result.total_links,
            result.statistics.errors_count,
            result.statistics.execution_time,
        )
        return result

    def _abandon(self, queue: asyncio.Queue[_WorkItem]) -> None:
        self.logger.warning("Run deadline of %ss exceeded, stopping traversal", self.config.run_timeout)
        for url in sorted(self._in_flight):
            self.registry.record_error(f"Error on {url}: abandoned at run deadline")
        self.registry.record_error(
            f"Run deadline of {self.config.run_timeout}s exceeded; "
            f"{queue.qsize()} queued URLs not fetched"
        )

    async def _worker(self, queue: asyncio.Queue[_WorkItem]) -> None:
        while True:
            url, depth = await queue.get()
            try:
                await self._visit(url, depth, queue)
            except Exception as exc:
                self.logger.exception("Unexpected failure while crawling %s", url)
                self.registry.record_error(f"Error on {url}: unexpected {type(exc).__name__}: {exc}")
            finally:
                queue.task_done()

    async def _visit(self, url: str, depth: int, queue: asyncio.Queue[_WorkItem]) -> None:
        if depth > self.config.max_depth:
            return
        if not self.visited.try_mark_visited(url, depth):
            return
        notify(self.progress, "page_started", depth, url)

        self._in_flight.add(url)
        try:
            page = await self.fetcher.fetch(url)  # type: ignore[union-attr]
            references = extract_references(page)
        except FetchError as exc:
            self.logger.warning("Error on %s: %s", url, exc.reason)
            self.registry.record_error(f"Error on {url}: {exc.reason}")
            return
        finally:
            self._in_flight.discard(url)

        candidates = self._register(url, references)
        self.logger.debug("%d references on %s, %d pages to follow", len(references), url, len(candidates))

        if depth < self.config.max_depth:
            for link in candidates:
                if link not in self.visited:
                    queue.put_nowait((link, depth + 1))

    def _register(self, base: str, references: List[RawReference]) -> List[str]:
        """Register every usable reference and return internal pages worth following."""
        candidates: List[str] = []
        followed: Set[str] = set()
        for ref in references:
            link = canonicalize(ref.href, base)
            if link is None:
                continue
            category, file_type = classify(link)
            self.registry.register_link(link, category, file_type)
            if (
                ref.kind.navigational
                and category is LinkCategory.PAGE
                and is_internal(link, self.seed_host)
                and link not in followed
            ):
                followed.add(link)
                candidates.append(link)
        return candidates
