# link_scout/crawler/link_extractor.py
"""
Reference extraction for LinkScout: turns an HTML page into the raw
``(href, element kind)`` pairs that the traversal engine canonicalises.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from link_scout.crawler.models import ElementKind, PageData, RawReference
from link_scout.errors import ParseError

_NAVIGATIONAL_RELS = ("canonical", "alternate")


def parse_document(page: PageData) -> BeautifulSoup:
    """Build the document tree, honouring the response charset when known."""
    try:
        return BeautifulSoup(page.body, "html.parser", from_encoding=page.encoding)
    except Exception as exc:
        raise ParseError(page.url, f"error parsing HTML: {exc}") from exc


def _attr(tag: Tag, name: str) -> Optional[str]:
    value = tag.get(name)
    return value if isinstance(value, str) else None


def _rel(tag: Tag) -> List[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [r.lower() for r in rel]


def _iter_references(soup: BeautifulSoup) -> Iterator[RawReference]:
    for tag in soup.find_all("a", href=True):
        href = _attr(tag, "href")
        if href is not None:
            yield RawReference(href, ElementKind.ANCHOR)

    for tag in soup.find_all("link", href=True):
        rel = _rel(tag)
        href = _attr(tag, "href")
        if href is not None and any(r in rel for r in _NAVIGATIONAL_RELS):
            yield RawReference(href, ElementKind.LINK)

    for name, kind in (("img", ElementKind.IMAGE), ("script", ElementKind.SCRIPT)):
        for tag in soup.find_all(name, src=True):
            src = _attr(tag, "src")
            if src is not None:
                yield RawReference(src, kind)

    for tag in soup.find_all("link", href=True):
        href = _attr(tag, "href")
        if href is not None and "stylesheet" in _rel(tag):
            yield RawReference(href, ElementKind.STYLESHEET)

    for tag in soup.select("video source[src], audio source[src]"):
        src = _attr(tag, "src")
        if src is not None:
            yield RawReference(src, ElementKind.MEDIA)

    for tag in soup.find_all("iframe", src=True):
        src = _attr(tag, "src")
        if src is not None:
            yield RawReference(src, ElementKind.IFRAME)


def extract_references(page: PageData) -> List[RawReference]:
    """
    Return every reference found on ``page`` in a fixed order:
    anchors, canonical/alternate links, images, scripts, stylesheets,
    audio/video sources, iframes. Values are returned untouched.
    """
    return list(_iter_references(parse_document(page)))


__all__ = ["extract_references", "parse_document"]
