"""Progress observers for a crawl run.

The crawler reports to a sink but never depends on one: every call happens
outside the registry locks, goes through :func:`notify`, and a sink that
raises is logged without changing what gets fetched or recorded.
"""
from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from link_scout.classifier import LinkCategory
from link_scout.logger import LOGGER_NAME


@runtime_checkable
class ProgressSink(Protocol):
    def page_started(self, depth: int, url: str) -> None:
        """Called once per admitted fetch, just before the request."""

    def category_total(self, category: LinkCategory, count: int) -> None:
        """Called once per category after traversal finished."""


def notify(sink: ProgressSink | None, event: str, *args: object) -> None:
    """Deliver one event to ``sink``. A failing sink is logged and otherwise ignored."""
    if sink is None:
        return
    try:
        getattr(sink, event)(*args)
    except Exception:
        logging.getLogger(LOGGER_NAME).exception("Progress sink failed on %s%r", event, args)


class LoggingProgress:
    """Default sink: writes progress lines to the project logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def page_started(self, depth: int, url: str) -> None:
        self.logger.info("[Depth %d] Scraping: %s", depth, url)

    def category_total(self, category: LinkCategory, count: int) -> None:
        if count:
            self.logger.info("%s: %d", category.value, count)


__all__ = ["ProgressSink", "LoggingProgress", "notify"]
