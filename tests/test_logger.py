# File: tests/test_logger.py
import logging
import sys

from js_scout.logger import init_logging


def test_console_handler_writes_to_stderr():
    lg = init_logging(level="DEBUG")
    assert lg.name == "JsScout"
    assert lg.level == logging.DEBUG
    assert lg.propagate is False
    assert [type(h) for h in lg.handlers] == [logging.StreamHandler]
    assert lg.handlers[0].stream is sys.stderr


def test_reinit_replaces_handlers_and_adds_log_file(tmp_path):
    log_file = tmp_path / "scout.log"
    init_logging()
    lg = init_logging(level="INFO", log_file=log_file)
    assert len(lg.handlers) == 2

    lg.info("crawl started")
    for handler in lg.handlers:
        handler.flush()
    assert "crawl started" in log_file.read_text(encoding="utf-8")

    for handler in lg.handlers:
        handler.close()
    init_logging()
