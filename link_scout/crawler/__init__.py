"""Fetching, extraction and traversal for LinkScout."""
from link_scout.crawler.crawler import LinkCrawler
from link_scout.crawler.fetcher import PageFetcher
from link_scout.crawler.link_extractor import extract_references
from link_scout.crawler.models import ElementKind, PageData, RawReference

__all__ = ["LinkCrawler", "PageFetcher", "extract_references", "ElementKind", "PageData", "RawReference"]
