"""
LinkScout package initializer.
Defines package version and exposes the crawl entry points.
The CLI lives in :mod:`link_scout.cli` (console script ``link-scout``).
"""
__version__ = "0.1.0"

from link_scout.engine import Engine, run, start_scan

__all__ = ["__version__", "Engine", "run", "start_scan"]
