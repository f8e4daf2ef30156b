# File: tests/test_logger.py
import logging

from link_scout.logger import LOGGER_NAME, configure, init_logging


def test_configure_with_file_rotates_and_replaces(tmp_path):
    log_file = tmp_path / "scan.log"
    lg = configure(level="DEBUG", log_file=log_file, log_format="%(levelname)s %(message)s")
    try:
        assert lg is logging.getLogger(LOGGER_NAME)
        assert len(lg.handlers) == 2
        assert lg.propagate is False
        lg.debug("hello %s", "file")
        for handler in lg.handlers:
            handler.flush()
        assert "DEBUG hello file" in log_file.read_text(encoding="utf-8")

        configure(level="INFO", replace_handlers=False)
        assert len(lg.handlers) == 3
    finally:
        init_logging()
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1
