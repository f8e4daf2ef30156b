"""Plain-text run summary printed by the CLI."""
from __future__ import annotations

from typing import List

from link_scout.aggregator import ScrapingResult

_RULE = "=" * 50


def render_summary(result: ScrapingResult, samples: int = 3) -> str:
    """Detailed statistics block with up to ``samples`` example links per category."""
    stats = result.statistics
    lines: List[str] = [
        _RULE,
        "DETAILED STATISTICS",
        _RULE,
        f"Website: {result.base_url}",
        f"Execution Time: {stats.execution_time}",
        f"Pages Visited: {stats.pages_visited}",
        f"Total Links: {stats.total_links}",
        f"Internal Links: {stats.internal_count}",
        f"External Links: {stats.external_count}",
        f"Max Depth Reached: {stats.max_depth_reached}",
        f"Errors Encountered: {stats.errors_count}",
        "",
        "LINKS BY CATEGORY:",
    ]
    for category, count in result.category_summary.items():
        if count:
            lines.append(f"   {category.value}: {count}")

    lines += ["", "SAMPLE LINKS BY CATEGORY:"]
    for category, links in result.classified_links.items():
        if not links:
            continue
        lines.append(f"{category.value} ({len(links)} total):")
        for link in links[:samples]:
            lines.append(f"   - [{link.file_type}] {link.url}")
        if len(links) > samples:
            lines.append(f"   ... and {len(links) - samples} more")

    if result.errors:
        lines += ["", "ERRORS:"]
        lines += [f"   - {error}" for error in result.errors]

    lines.append(_RULE)
    return "\n".join(lines)


__all__ = ["render_summary"]
