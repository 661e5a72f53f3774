from __future__ import annotations

import logging

from pythonjsonlogger import jsonlogger

from fs_browser.logging_config import configure_logging


def test_configure_logging_plain():
    configure_logging(force_format="plain")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert type(root.handlers[0].formatter) is logging.Formatter


def test_configure_logging_json_from_env(monkeypatch):
    monkeypatch.setenv("FS_BROWSER_LOG_FORMAT", "json")
    monkeypatch.setenv("FS_BROWSER_LOG_LEVEL", "debug")

    configure_logging()

    root = logging.getLogger()
    assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
    assert root.level == logging.DEBUG
    # request logging from the dev server stays quiet even in debug
    assert logging.getLogger("werkzeug").level == logging.WARNING


def test_configure_logging_unknown_level_falls_back_to_info():
    configure_logging(level="chatty", force_format="plain")

    assert logging.getLogger().level == logging.INFO
