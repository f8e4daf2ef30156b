# === FILE: link_scout/classifier.py ===

"""Classification of discovered links by purpose.

The category is derived from the extension of the last path segment only, so
a given URL always lands in the same bucket.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple
from urllib.parse import urlsplit


class LinkCategory(str, Enum):
    """Buckets a link can fall into. Values are the report field names."""

    PAGE = "html_pages"
    DOCUMENT = "documents"
    IMAGE = "images"
    SCRIPT = "scripts"
    STYLESHEET = "stylesheets"
    MEDIA = "multimedia"
    ARCHIVE = "archives"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


_EXTENSIONS: Dict[LinkCategory, Tuple[str, ...]] = {
    LinkCategory.PAGE: ("html", "htm", "xhtml", "php", "asp", "aspx", "jsp", "do"),
    LinkCategory.DOCUMENT: (
        "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
        "odt", "ods", "odp", "txt", "rtf", "csv",
    ),
    LinkCategory.IMAGE: ("jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "ico", "tiff", "tif"),
    LinkCategory.SCRIPT: ("js", "mjs", "ts"),
    LinkCategory.STYLESHEET: ("css", "scss", "sass", "less"),
    LinkCategory.MEDIA: (
        "mp4", "avi", "mov", "wmv", "flv", "webm", "mp3", "wav", "ogg", "m4a", "flac",
    ),
    LinkCategory.ARCHIVE: ("zip", "rar", "7z", "tar", "gz", "bz2", "xz"),
}

EXTENSION_CATEGORIES: Dict[str, LinkCategory] = {
    ext: category for category, extensions in _EXTENSIONS.items() for ext in extensions
}

PAGE_FILE_TYPE = "html"


def classify(url: str) -> Tuple[LinkCategory, str]:
    """Return ``(category, file_type)`` for a canonical URL.

    Extensionless paths and directory-style paths are pages. Unknown
    extensions fall into :attr:`LinkCategory.OTHER` with the raw extension as
    file type.
    """
    try:
        path = urlsplit(url).path.lower()
    except ValueError:
        return LinkCategory.OTHER, "unknown"

    segment = path.rsplit("/", 1)[-1]
    if path.endswith("/") or "." not in segment:
        return LinkCategory.PAGE, PAGE_FILE_TYPE

    extension = segment.rsplit(".", 1)[1]
    category = EXTENSION_CATEGORIES.get(extension, LinkCategory.OTHER)
    return category, extension


__all__ = ["LinkCategory", "EXTENSION_CATEGORIES", "PAGE_FILE_TYPE", "classify"]
