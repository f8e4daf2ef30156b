# File: link_scout/registry.py
"""link_scout.registry: shared, lock-protected crawl state.

:class:`VisitedSet` is the admission gate for fetches and :class:`LinkRegistry`
accumulates every distinct link together with its internal/external and
per-category views. Each structure guards all of its state with a single
:class:`threading.Lock`, so the views can never disagree with each other.
No lock is held while calling out of these classes.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from link_scout.classifier import LinkCategory
from link_scout.urls import is_internal

__all__: Sequence[str] = ("ClassifiedLink", "VisitedSet", "LinkRegistry", "RegistrySnapshot")


@dataclass(frozen=True, slots=True)
class ClassifiedLink:
    """A distinct link as first discovered."""

    url: str
    category: LinkCategory
    file_type: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "category": self.category.value, "file_type": self.file_type}


class VisitedSet:
    """URLs admitted for fetching during one run."""

    def __init__(self, max_pages: Optional[int] = None) -> None:
        self._lock = threading.Lock()
        self._urls: Set[str] = set()
        self._max_pages = max_pages
        self._max_depth = 0

    def try_mark_visited(self, url: str, depth: int = 0) -> bool:
        """Claim ``url``. Only the first caller gets ``True``.

        Once ``max_pages`` URLs have been claimed every further claim fails.
        """
        with self._lock:
            if url in self._urls:
                return False
            if self._max_pages is not None and len(self._urls) >= self._max_pages:
                return False
            self._urls.add(url)
            if depth > self._max_depth:
                self._max_depth = depth
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    @property
    def max_depth_reached(self) -> int:
        with self._lock:
            return self._max_depth


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    """Point-in-time copy of a :class:`LinkRegistry`."""

    links: Tuple[str, ...]
    internal: Tuple[str, ...]
    external: Tuple[str, ...]
    classified: Mapping[LinkCategory, Tuple[ClassifiedLink, ...]]
    errors: Tuple[str, ...]


class LinkRegistry:
    """Deduplicated, insertion-ordered store of discovered links and errors."""

    def __init__(self, seed_host: str) -> None:
        self.seed_host = seed_host
        self._lock = threading.Lock()
        self._known: Set[str] = set()
        self._links: List[str] = []
        self._internal: List[str] = []
        self._external: List[str] = []
        self._classified: Dict[LinkCategory, List[ClassifiedLink]] = {
            category: [] for category in LinkCategory
        }
        self._errors: List[str] = []

    def register_link(
        self,
        url: str,
        category: LinkCategory,
        file_type: str,
        seed_host: Optional[str] = None,
    ) -> bool:
        """Add ``url`` to all three views; ``False`` if it was already known."""
        internal = is_internal(url, seed_host or self.seed_host)
        link = ClassifiedLink(url=url, category=category, file_type=file_type)
        with self._lock:
            if url in self._known:
                return False
            self._known.add(url)
            self._links.append(url)
            self._classified[category].append(link)
            (self._internal if internal else self._external).append(url)
            return True

    def record_error(self, message: str) -> None:
        entry = f"[{datetime.now():%H:%M:%S}] {message}"
        with self._lock:
            self._errors.append(entry)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._known

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)

    def snapshot(self) -> RegistrySnapshot:
        with self._lock:
            return RegistrySnapshot(
                links=tuple(self._links),
                internal=tuple(self._internal),
                external=tuple(self._external),
                classified=MappingProxyType(
                    {c: tuple(items) for c, items in self._classified.items()}
                ),
                errors=tuple(self._errors),
            )
