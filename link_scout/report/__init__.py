# File: link_scout/report/__init__.py
"""link_scout.report: JSON, HTML and console renderings of a ScrapingResult."""

from __future__ import annotations

from link_scout.report.console import render_summary
from link_scout.report.html_report import render_html
from link_scout.report.json_report import prepare_output_dir, render_json, save_classified_results

__all__ = ["render_json", "render_html", "render_summary", "prepare_output_dir", "save_classified_results"]
