# === FILE: link_scout/config.py ===
"""
Loading and validation of the LinkScout crawler configuration.
Pydantic describes the schema and validates the data; the file itself can be
YAML or JSON and CLI flags are merged on top of it.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ScraperConfig(BaseModel):
    """Settings for a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Seed URL the traversal starts from.")
    max_depth: int = Field(1, ge=0, description="Maximum number of hops from the seed.")
    timeout: float = Field(15.0, gt=0, description="Per-request timeout (seconds).")
    run_timeout: Optional[float] = Field(None, gt=0, description="Deadline for the whole run (seconds).")
    concurrency: int = Field(8, ge=1, description="Simultaneous fetches / pooled connections.")
    max_pages: Optional[int] = Field(None, ge=1, description="Hard cap on fetched pages.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    accept_language: str = Field("en-US,en;q=0.9,fr;q=0.8", description="Accept-Language header.")
    verify_ssl: bool = Field(True, description="Verify TLS certificates.")
    output_dir: Optional[Path] = Field(None, description="Root folder for saved results.")
    sample_size: int = Field(3, ge=0, description="Sample links per category in the summary.")

    @field_validator("base_url", mode="before")
    def _strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path, None]) -> dict[str, Any]:
    """
    Return the raw mapping stored in a YAML/JSON config file.
    ``None`` falls back to ``configs/default.yaml`` when present, otherwise ``{}``.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return {}
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> ScraperConfig:
    """
    Read YAML or JSON, apply non-None ``overrides`` and return a validated ScraperConfig.
    Raises FileNotFoundError for a missing explicit file and pydantic's
    ValidationError when the merged data does not fit the schema.
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ScraperConfig(**data)


__all__ = ["ScraperConfig", "DEFAULT_USER_AGENT", "load_config", "read_config_file"]
