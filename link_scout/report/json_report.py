# link_scout/report/json_report.py

"""
JSON output for LinkScout.

Either a single file (:func:`render_json`) or a per-run session directory
holding ``summary.json`` plus one file per non-empty category
(:func:`save_classified_results`).
"""
from __future__ import annotations

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlsplit

from link_scout.aggregator import ScrapingResult
from link_scout.errors import SetupError


def _dump(data: Any, path: Path, pretty: bool = True) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)


def prepare_output_dir(output_dir: Union[Path, str]) -> Path:
    """Create ``output_dir`` if needed and make sure it is writable.

    Raises SetupError so that an unusable location aborts the run before
    any page is fetched.
    """
    path = Path(output_dir).expanduser()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SetupError(f"failed to create output directory {path}: {exc}") from exc
    if not os.access(path, os.W_OK):
        raise SetupError(f"output directory is not writable: {path}")
    return path


def session_dir_name(result: ScrapingResult, moment: Optional[datetime] = None) -> str:
    """``<host with dots replaced>_<YYYYmmdd_HHMMSS>``."""
    domain = urlsplit(result.base_url).netloc.replace(".", "_").replace(":", "_")
    return f"{domain}_{(moment or datetime.now()):%Y%m%d_%H%M%S}"


def save_classified_results(
    result: ScrapingResult,
    output_dir: Union[Path, str],
    moment: Optional[datetime] = None,
) -> Path:
    """
    Write ``summary.json`` and ``<category>.json`` files into a new session folder.

    :param result: finished crawl result
    :param output_dir: root folder, created when missing
    :return: path of the session folder

    Example:
    ```python
    session = save_classified_results(result, "scraping_results")
    print(f"Results saved to: {session}")
    ```
    """
    session = Path(output_dir) / session_dir_name(result, moment)
    session.mkdir(parents=True, exist_ok=True)

    _dump(result.to_dict(), session / "summary.json")
    for category, links in result.classified_links.items():
        if links:
            _dump([link.to_dict() for link in links], session / f"{category.value}.json")

    return session


def render_json(result: ScrapingResult, output_path: Union[Path, str], pretty: bool = True) -> Path:
    """Save the whole result as one JSON document and return its path."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    _dump(result.to_dict(), output, pretty=pretty)
    return output


__all__ = ["prepare_output_dir", "save_classified_results", "session_dir_name", "render_json"]
