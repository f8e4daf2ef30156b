# === FILE: link_scout/logger.py ===
"""Logging setup for LinkScout.

Every module logs through the ``"LinkScout"`` logger. Records go to stderr,
so ``link-scout scan --json`` can pipe clean JSON from stdout, and optionally
to a size-rotated log file. The CLI calls :func:`init_logging` once its
options are parsed; library users can call :func:`configure` themselves or
leave the import-time defaults (INFO, stderr only).
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "LinkScout"

#: log files roll over at 5 MiB, three old files are kept
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

_Level = Union[int, str]


def _with_format(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _detach_handlers(lg: logging.Logger) -> None:
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()


def configure(
    *,
    level: _Level = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set level and handlers of the LinkScout logger and return it.

    ``log_file`` adds a rotating file handler next to the stderr one.
    With ``replace_handlers=False`` the new handlers are added to the
    existing ones instead of replacing them.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        _detach_handlers(lg)

    lg.addHandler(_with_format(logging.StreamHandler(sys.stderr), log_format))
    if log_file is not None:
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_LOG_BACKUPS,
            encoding="utf-8",
        )
        lg.addHandler(_with_format(file_handler, log_format))

    lg.propagate = False
    return lg


def init_logging(
    level: _Level = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Positional-argument shortcut for :func:`configure` that always replaces handlers."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "DEFAULT_FORMAT", "LOGGER_NAME"]
