# link_scout/crawler/fetcher.py
"""
Fetcher module: issues one GET per page, decodes the body per its
Content-Encoding and makes sure the response is an HTML document.
"""
from __future__ import annotations

import asyncio
import zlib
from typing import Dict, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from link_scout.config import ScraperConfig
from link_scout.crawler.models import PageData
from link_scout.errors import ContentEncodingError, ContentTypeError, FetchError, HTTPStatusError

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


def build_headers(config: ScraperConfig) -> Dict[str, str]:
    """Browser-like request headers sent with every fetch."""
    return {
        "User-Agent": config.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": config.accept_language,
        "Accept-Encoding": "gzip, deflate",
        "Upgrade-Insecure-Requests": "1",
    }


def create_session(config: ScraperConfig) -> ClientSession:
    """Shared session for a run. Decompression is done by :func:`decode_body`."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers=build_headers(config),
        connector=TCPConnector(limit=config.concurrency, ssl=config.verify_ssl),
        auto_decompress=False,
        raise_for_status=False,
    )


def decode_body(url: str, raw: bytes, encoding: Optional[str]) -> bytes:
    """Undo ``Content-Encoding``. Supported: identity, gzip, deflate."""
    coding = (encoding or "identity").strip().lower()
    if coding in ("", "identity"):
        return raw
    try:
        if coding in ("gzip", "x-gzip"):
            return zlib.decompress(raw, 16 + zlib.MAX_WBITS)
        if coding == "deflate":
            try:
                return zlib.decompress(raw)
            except zlib.error:
                # some servers send raw deflate without the zlib wrapper
                return zlib.decompress(raw, -zlib.MAX_WBITS)
    except zlib.error as exc:
        raise ContentEncodingError(url, coding, str(exc)) from exc
    raise ContentEncodingError(url, coding)


def is_html(content_type: Optional[str]) -> bool:
    return bool(content_type) and any(t in content_type.lower() for t in HTML_CONTENT_TYPES)


class PageFetcher:
    """Fetches HTML pages through a shared :class:`aiohttp.ClientSession`."""

    def __init__(self, session: ClientSession, config: ScraperConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> PageData:
        """
        Fetch ``url`` and return its decoded body.

        Raises FetchError (or a subclass) on network failure, timeout,
        non-2xx status, unsupported encoding or non-HTML content.
        """
        try:
            async with self.session.get(url) as resp:
                status = resp.status
                if not 200 <= status < 300:
                    raise HTTPStatusError(url, status)
                content_type = resp.headers.get("Content-Type", "")
                if not is_html(content_type):
                    raise ContentTypeError(url, content_type)
                raw = await resp.read()
                body = decode_body(url, raw, resp.headers.get("Content-Encoding"))
                return PageData(
                    url=url,
                    body=body,
                    status=status,
                    content_type=content_type,
                    encoding=resp.charset,
                )
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timeout after {self.config.timeout}s") from exc
        except ClientError as exc:
            raise FetchError(url, f"error making request: {exc}") from exc
