# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Dict, List, Tuple, Union

import pytest
from aiohttp import web

from link_scout.config import ScraperConfig
from link_scout.crawler.models import PageData
from link_scout.errors import FetchError, HTTPStatusError


class FakeFetcher:
    """
    In-memory fetcher: maps URL -> HTML string, status code or exception.
    Unknown URLs answer 404. Every requested URL is recorded in ``calls``.
    """

    def __init__(self, pages: Dict[str, Union[str, int, FetchError]]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> PageData:
        self.calls.append(url)
        entry = self.pages.get(url, 404)
        if isinstance(entry, FetchError):
            raise entry
        if isinstance(entry, int):
            raise HTTPStatusError(url, entry)
        return PageData(url=url, body=entry.encode("utf-8"), encoding="utf-8")


class RecordingProgress:
    def __init__(self) -> None:
        self.pages: List[Tuple[int, str]] = []
        self.totals: Dict[str, int] = {}

    def page_started(self, depth: int, url: str) -> None:
        self.pages.append((depth, url))

    def category_total(self, category, count: int) -> None:
        self.totals[category.value] = count


def anchors(*hrefs: str) -> str:
    return "<html><body>" + "".join(f'<a href="{h}">x</a>' for h in hrefs) + "</body></html>"


@pytest.fixture()
def make_config():
    """Factory for ScraperConfig with test-friendly defaults."""

    def _make(base_url: str = "https://ex.com/", **kwargs) -> ScraperConfig:
        kwargs.setdefault("max_depth", 1)
        kwargs.setdefault("timeout", 2.0)
        kwargs.setdefault("concurrency", 4)
        return ScraperConfig(base_url=base_url, **kwargs)

    return _make


@pytest.fixture()
def progress() -> RecordingProgress:
    return RecordingProgress()


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
