# link_scout/crawler/models.py
"""
Data models for the LinkScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ElementKind(str, Enum):
    """Markup element a reference was taken from."""

    ANCHOR = "a"
    LINK = "link"
    STYLESHEET = "stylesheet"
    IMAGE = "img"
    SCRIPT = "script"
    MEDIA = "source"
    IFRAME = "iframe"

    @property
    def navigational(self) -> bool:
        """Only anchors and canonical/alternate links lead to further pages."""
        return self in (ElementKind.ANCHOR, ElementKind.LINK)


@dataclass(frozen=True, slots=True)
class RawReference:
    """An attribute value exactly as found in the markup."""

    href: str
    kind: ElementKind


@dataclass(slots=True)
class PageData:
    """Holds the requested URL and the decoded body of an HTML response."""

    url: str
    body: bytes
    status: int = 200
    content_type: str = "text/html"
    encoding: Optional[str] = None
