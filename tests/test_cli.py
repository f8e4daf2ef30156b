# File: tests/test_cli.py
"""CLI tests (`link_scout.cli`) with click.testing.CliRunner.
Cover `scan`, `config`, `--version` and error handling.
"""
import inspect
import json
import time
from datetime import datetime

import pytest
from click.testing import CliRunner

import link_scout.cli as cli_module
from link_scout.aggregator import build_result
from link_scout.classifier import classify
from link_scout.cli import cli
from link_scout.errors import SetupError
from link_scout.registry import LinkRegistry, VisitedSet


@pytest.fixture()
def fake_result():
    registry = LinkRegistry("example.com")
    visited = VisitedSet()
    visited.try_mark_visited("https://example.com/")
    for url in ("https://example.com/a", "https://other.org/logo.png"):
        registry.register_link(url, *classify(url))
    return build_result(registry, visited, "https://example.com/", time.monotonic(), now=datetime(2024, 1, 1))


@pytest.fixture()
def calls(monkeypatch, fake_result):
    """Patch start_scan so no network is used; record the configs it receives."""
    seen = []

    async def fake_scan(cfg, progress=None):
        seen.append(cfg)
        return fake_result

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)
    return seen


def invoke(*args):
    return CliRunner().invoke(cli, ["--log-level", "ERROR", *args])


def test_cli_module_is_importable_for_patching():
    assert inspect.ismodule(cli_module)
    assert callable(cli_module.start_scan)


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "LinkScout" in result.output


def test_scan_prints_summary_and_uses_default_output(calls, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = invoke("scan", "https://example.com", "--depth", "2")
    assert result.exit_code == 0, result.output
    assert "DETAILED STATISTICS" in result.output
    assert "Total Links: 2" in result.output
    cfg = calls[0]
    assert cfg.max_depth == 2
    assert str(cfg.output_dir) == "scraping_results"


def test_scan_json_stdout(calls):
    result = invoke("scan", "https://example.com", "--json", "--no-save", "--pretty")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["base_url"] == "https://example.com/"
    assert data["external_links"] == ["https://other.org/logo.png"]
    assert data["category_summary"]["images"] == 1
    assert calls[0].output_dir is None


def test_scan_flags_reach_config(calls, tmp_path):
    out = tmp_path / "results"
    result = invoke(
        "scan", "https://example.com", "--output", str(out), "--concurrency", "3",
        "--timeout", "4", "--scan-timeout", "30", "--insecure",
    )
    assert result.exit_code == 0, result.output
    cfg = calls[0]
    assert cfg.output_dir == out
    assert cfg.concurrency == 3
    assert cfg.timeout == 4.0
    assert cfg.run_timeout == 30.0
    assert cfg.verify_ssl is False


def test_scan_html_file(calls, tmp_path):
    out = tmp_path / "report.html"
    result = invoke("scan", "https://example.com", "--no-save", "--html", str(out))
    assert result.exit_code == 0, result.output
    assert "https://other.org/logo.png" in out.read_text(encoding="utf-8")


def test_scan_with_config_file(calls, tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps({"base_url": "https://ignored.org", "max_depth": 5}), encoding="utf-8")
    result = invoke("--config", str(cfg_file), "scan", "https://example.com", "--no-save")
    assert result.exit_code == 0, result.output
    assert str(calls[0].base_url) == "https://example.com/"
    assert calls[0].max_depth == 5


def test_scan_invalid_url(calls):
    result = invoke("scan", "not-a-url", "--no-save")
    assert result.exit_code == 1
    assert "Configuration error" in result.output
    assert calls == []


def test_scan_setup_error(monkeypatch):
    async def broken(cfg, progress=None):
        raise SetupError("failed to create output directory /root/x")

    monkeypatch.setattr(cli_module, "start_scan", broken)
    result = invoke("scan", "https://example.com")
    assert result.exit_code == 1
    assert "Setup error" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "default.yaml"
    cfg_file.write_text("base_url: https://example.com\nmax_depth: 2\n", encoding="utf-8")
    result = invoke("--config", str(cfg_file), "config")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["base_url"] == "https://example.com/"
    assert data["max_depth"] == 2


def test_show_config_with_url(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = invoke("config", "https://example.com")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["concurrency"] == 8
