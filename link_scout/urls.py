# File: link_scout/urls.py
"""link_scout.urls: URL canonicalisation and same-site membership checks.

Both helpers are pure functions: they hold no state and are safe to call from
any worker.
"""

from __future__ import annotations

from typing import FrozenSet, Optional, Sequence
from urllib.parse import parse_qsl, quote, urlencode, urljoin, urlsplit, urlunsplit

__all__: Sequence[str] = (
    "TRACKING_PARAMS",
    "IGNORED_SCHEMES",
    "canonicalize",
    "host_key",
    "is_internal",
)

#: query parameters that only carry campaign/click tracking data
TRACKING_PARAMS: FrozenSet[str] = frozenset(
    ("utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content", "fbclid", "gclid")
)

#: prefixes of references that can never be fetched as a page
IGNORED_SCHEMES: tuple[str, ...] = ("javascript:", "mailto:", "tel:", "ftp:", "file:", "data:")

# RFC 3986 "pchar" plus "/" and "%" so already-escaped paths are left alone
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"


def _remove_dot_segments(path: str) -> str:
    """RFC 3986 §5.2.4. ``urljoin`` skips this step for absolute references."""
    if "." not in path:
        return path
    output: list[str] = []
    for segment in path.split("/"):
        if segment == "..":
            if len(output) > 1:
                output.pop()
        elif segment != ".":
            output.append(segment)
    if path.rsplit("/", 1)[-1] in (".", ".."):
        output.append("")
    result = "/".join(output)
    if path.startswith("/") and not result.startswith("/"):
        result = "/" + result
    return result


def canonicalize(href: str, base: str) -> Optional[str]:
    """Resolve ``href`` against ``base`` and return its canonical absolute form.

    Returns ``None`` for references that must be discarded: empty strings,
    bare fragments, non-navigable schemes and anything that fails to parse.
    The fragment is dropped and tracking parameters are removed; remaining
    query parameters are re-encoded sorted by name.
    """
    href = href.strip()
    if not href or href.startswith("#") or href.lower().startswith(IGNORED_SCHEMES):
        return None

    try:
        urlsplit(base)
        urlsplit(href)
        parts = urlsplit(urljoin(base, href))
        parts.port  # raises ValueError for a malformed port
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None

    path = quote(_remove_dot_segments(parts.path), safe=_PATH_SAFE)
    params = [
        (name, value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
        if name not in TRACKING_PARAMS
    ]
    params.sort(key=lambda item: item[0])
    query = urlencode(params)

    return urlunsplit((parts.scheme, parts.netloc, path, query, ""))


def host_key(netloc: str) -> str:
    """Comparable host: no userinfo, lower-cased, leading ``www.`` removed."""
    host = netloc.rpartition("@")[2].lower()
    return host.removeprefix("www.")


def is_internal(url: str, seed_host: str) -> bool:
    """True when ``url`` lives on the seed's site or carries no host at all."""
    try:
        netloc = urlsplit(url).netloc
    except ValueError:
        return False
    if not netloc:
        return True
    return host_key(netloc) == host_key(seed_host)
