# File: link_scout/aggregator.py
"""link_scout.aggregator: immutable crawl result and its builder."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple, TypedDict

from link_scout.classifier import LinkCategory
from link_scout.registry import ClassifiedLink, LinkRegistry, VisitedSet

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class StatisticsInfo(TypedDict):
    """Serialized form of :class:`ScrapingStats`."""

    pages_visited: int
    total_links: int
    internal_count: int
    external_count: int
    errors_count: int
    execution_time: str
    max_depth_reached: int


@dataclass(frozen=True, slots=True)
class ScrapingStats:
    """Run statistics."""

    pages_visited: int
    total_links: int
    internal_count: int
    external_count: int
    errors_count: int
    execution_seconds: float
    max_depth_reached: int

    @property
    def execution_time(self) -> str:
        return f"{self.execution_seconds:.3f}s"

    def to_dict(self) -> StatisticsInfo:
        return {
            "pages_visited": self.pages_visited,
            "total_links": self.total_links,
            "internal_count": self.internal_count,
            "external_count": self.external_count,
            "errors_count": self.errors_count,
            "execution_time": self.execution_time,
            "max_depth_reached": self.max_depth_reached,
        }


@dataclass(frozen=True, slots=True)
class ScrapingResult:
    """Everything one crawl produced, frozen after traversal."""

    base_url: str
    all_links: Tuple[str, ...]
    internal_links: Tuple[str, ...]
    external_links: Tuple[str, ...]
    classified_links: Mapping[LinkCategory, Tuple[ClassifiedLink, ...]]
    errors: Tuple[str, ...]
    statistics: ScrapingStats
    timestamp: str

    @property
    def total_links(self) -> int:
        return len(self.all_links)

    @property
    def category_summary(self) -> Dict[LinkCategory, int]:
        return {category: len(links) for category, links in self.classified_links.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping with the stable report field names."""
        return {
            "base_url": self.base_url,
            "total_links": self.total_links,
            "internal_links": list(self.internal_links),
            "external_links": list(self.external_links),
            "all_links": list(self.all_links),
            "classified_links": {
                category.value: [link.to_dict() for link in links]
                for category, links in self.classified_links.items()
            },
            "category_summary": {
                category.value: count for category, count in self.category_summary.items()
            },
            "errors": list(self.errors),
            "statistics": self.statistics.to_dict(),
            "timestamp": self.timestamp,
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def build_result(
    registry: LinkRegistry,
    visited: VisitedSet,
    seed: str,
    start_time: float,
    now: Optional[datetime] = None,
) -> ScrapingResult:
    """Snapshot ``registry``/``visited`` into a :class:`ScrapingResult`.

    ``start_time`` is a :func:`time.monotonic` reading taken when the run began.
    """
    snap = registry.snapshot()
    elapsed = time.monotonic() - start_time
    stats = ScrapingStats(
        pages_visited=len(visited),
        total_links=len(snap.links),
        internal_count=len(snap.internal),
        external_count=len(snap.external),
        errors_count=len(snap.errors),
        execution_seconds=elapsed,
        max_depth_reached=visited.max_depth_reached,
    )
    return ScrapingResult(
        base_url=seed,
        all_links=snap.links,
        internal_links=snap.internal,
        external_links=snap.external,
        classified_links=snap.classified,
        errors=snap.errors,
        statistics=stats,
        timestamp=(now or datetime.now()).strftime(TIMESTAMP_FORMAT),
    )


__all__ = ["ScrapingStats", "ScrapingResult", "StatisticsInfo", "build_result", "TIMESTAMP_FORMAT"]
