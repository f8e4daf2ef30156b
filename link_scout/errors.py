"""Exception hierarchy shared by the crawler, the engine and the CLI."""
from __future__ import annotations

from typing import Optional

__all__ = (
    "LinkScoutError",
    "SetupError",
    "FetchError",
    "HTTPStatusError",
    "ContentTypeError",
    "ContentEncodingError",
    "ParseError",
)


class LinkScoutError(Exception):
    """Base class for all LinkScout errors."""


class SetupError(LinkScoutError):
    """Fatal problem detected before traversal starts (bad seed, unusable output dir)."""


class FetchError(LinkScoutError):
    """A single page could not be fetched or parsed. Only that branch stops."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(reason)
        self.url = url
        self.reason = reason


class HTTPStatusError(FetchError):
    def __init__(self, url: str, status: int) -> None:
        super().__init__(url, f"HTTP status code: {status}")
        self.status = status


class ContentTypeError(FetchError):
    def __init__(self, url: str, content_type: Optional[str]) -> None:
        super().__init__(url, f"non-HTML content detected: {content_type or '<missing>'}")
        self.content_type = content_type


class ContentEncodingError(FetchError):
    def __init__(self, url: str, encoding: str, detail: str = "") -> None:
        reason = f"unsupported content encoding: {encoding}"
        if detail:
            reason = f"cannot decode {encoding} body: {detail}"
        super().__init__(url, reason)
        self.encoding = encoding


class ParseError(FetchError):
    """Body could not be turned into a document."""
