# File: tests/test_registry.py
from concurrent.futures import ThreadPoolExecutor
from threading import Barrier

import pytest

from link_scout.classifier import LinkCategory, classify
from link_scout.registry import LinkRegistry, VisitedSet

WORKERS = 16


def test_register_link_populates_all_views():
    registry = LinkRegistry("ex.com")
    assert registry.register_link("https://ex.com/a", LinkCategory.PAGE, "html") is True
    assert registry.register_link("https://cdn.org/x.js", LinkCategory.SCRIPT, "js") is True
    assert registry.register_link("https://www.ex.com/logo.png", LinkCategory.IMAGE, "png") is True

    snap = registry.snapshot()
    assert snap.links == ("https://ex.com/a", "https://cdn.org/x.js", "https://www.ex.com/logo.png")
    assert snap.internal == ("https://ex.com/a", "https://www.ex.com/logo.png")
    assert snap.external == ("https://cdn.org/x.js",)
    assert [l.url for l in snap.classified[LinkCategory.SCRIPT]] == ["https://cdn.org/x.js"]
    assert snap.classified[LinkCategory.ARCHIVE] == ()
    assert set(snap.classified) == set(LinkCategory)


def test_register_link_ignores_repeats():
    registry = LinkRegistry("ex.com")
    assert registry.register_link("https://ex.com/a", LinkCategory.PAGE, "html")
    assert not registry.register_link("https://ex.com/a", LinkCategory.PAGE, "html")
    assert len(registry) == 1
    assert "https://ex.com/a" in registry


def test_register_link_uses_explicit_seed_host():
    registry = LinkRegistry("ex.com")
    registry.register_link("https://other.org/", LinkCategory.PAGE, "html", seed_host="other.org")
    assert registry.snapshot().internal == ("https://other.org/",)


def test_concurrent_registration_keeps_one_entry():
    registry = LinkRegistry("ex.com")
    urls = [f"https://ex.com/p{i % 25}" for i in range(500)]
    barrier = Barrier(WORKERS)

    def work(chunk):
        barrier.wait()
        return [registry.register_link(u, *classify(u)) for u in chunk]

    chunks = [urls[i::WORKERS] for i in range(WORKERS)]
    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        outcomes = [ok for part in pool.map(work, chunks) for ok in part]

    snap = registry.snapshot()
    assert sum(outcomes) == 25
    assert len(snap.links) == len(set(snap.links)) == 25
    assert len(snap.links) == len(snap.internal) + len(snap.external)
    assert len(snap.links) == sum(len(v) for v in snap.classified.values())


def test_try_mark_visited_admits_exactly_one():
    visited = VisitedSet()
    barrier = Barrier(WORKERS)

    def claim(_):
        barrier.wait()
        return visited.try_mark_visited("https://ex.com/shared", 1)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(claim, range(WORKERS)))

    assert results.count(True) == 1
    assert len(visited) == 1
    assert visited.max_depth_reached == 1


def test_visited_set_page_cap():
    visited = VisitedSet(max_pages=2)
    assert visited.try_mark_visited("a")
    assert visited.try_mark_visited("b", depth=3)
    assert not visited.try_mark_visited("c")
    assert "c" not in visited
    assert visited.max_depth_reached == 3


def test_record_error_is_timestamped_and_ordered():
    registry = LinkRegistry("ex.com")
    registry.record_error("first")
    registry.record_error("second")
    errors = registry.snapshot().errors
    assert len(errors) == 2
    assert errors[0].endswith("] first") and errors[1].endswith("] second")
    assert errors[0].startswith("[")


def test_snapshot_is_detached_from_later_writes():
    registry = LinkRegistry("ex.com")
    registry.register_link("https://ex.com/a", LinkCategory.PAGE, "html")
    snap = registry.snapshot()
    registry.register_link("https://ex.com/b", LinkCategory.PAGE, "html")
    assert snap.links == ("https://ex.com/a",)
    with pytest.raises(AttributeError):
        snap.links.append("x")  # type: ignore[attr-defined]
