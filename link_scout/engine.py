# File: link_scout/engine.py
"""link_scout.engine: entry points that run a crawl and produce a ScrapingResult."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from pydantic import ValidationError

from link_scout.aggregator import ScrapingResult
from link_scout.config import ScraperConfig
from link_scout.crawler.crawler import Fetcher, LinkCrawler
from link_scout.errors import SetupError
from link_scout.logger import logger
from link_scout.progress import ProgressSink, notify
from link_scout.report.json_report import prepare_output_dir, save_classified_results

__all__ = ["Engine", "run", "start_scan"]


async def start_scan(
    config: ScraperConfig,
    progress: Optional[ProgressSink] = None,
    fetcher: Optional[Fetcher] = None,
) -> ScrapingResult:
    """Crawl ``config.base_url`` and return the aggregated result.

    The output folder (when configured) is validated before the first fetch;
    a failure there raises SetupError. Saving the session afterwards is best
    effort: the result is returned even if writing it fails.
    """
    if config.output_dir is not None:
        prepare_output_dir(config.output_dir)

    async with LinkCrawler(config, fetcher=fetcher, progress=progress) as crawler:
        result = await crawler.crawl()

    for category, count in result.category_summary.items():
        notify(progress, "category_total", category, count)

    if config.output_dir is not None:
        try:
            session = save_classified_results(result, config.output_dir)
            logger.info("Results saved to: %s", session)
        except OSError as exc:
            logger.error("Error saving results: %s", exc)
    return result


async def run(
    seed_url: str,
    max_depth: int,
    progress: Optional[ProgressSink] = None,
    **settings: Any,
) -> ScrapingResult:
    """Crawl ``seed_url`` up to ``max_depth`` hops; extra ScraperConfig fields go in ``settings``."""
    try:
        config = ScraperConfig(base_url=seed_url, max_depth=max_depth, **settings)
    except ValidationError as exc:
        raise SetupError(f"invalid configuration: {exc}") from exc
    return await start_scan(config, progress)


class Engine:
    """Synchronous facade for scripts and tests."""

    def __init__(
        self,
        config: ScraperConfig,
        progress: Optional[ProgressSink] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self.config = config
        self.progress = progress
        self.fetcher = fetcher

    def start_scan(self) -> ScrapingResult:
        logger.info("Starting scan…")
        try:
            return asyncio.run(start_scan(self.config, self.progress, self.fetcher))
        except SetupError as exc:
            logger.error("Scan aborted: %s", exc)
            raise
