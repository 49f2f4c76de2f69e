from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from widget_grid import logging_utils


@pytest.fixture
def restore_package_logger():
    logger = logging.getLogger(logging_utils.LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


def test_rotating_handler_respects_retention(tmp_path):
    handler = logging_utils.build_rotating_file_handler(tmp_path / "logs", "deck.log", retention=3, max_bytes=1024)
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.backupCount == 2
        assert handler.maxBytes == 1024
        assert (tmp_path / "logs").is_dir()
    finally:
        handler.close()


def test_resolve_logs_dir_prefers_env_override(tmp_path, monkeypatch):
    target = tmp_path / "custom-logs"
    monkeypatch.setenv(logging_utils.LOG_DIR_ENV_VAR, str(target))

    assert logging_utils.resolve_logs_dir(tmp_path) == target
    assert target.is_dir()


def test_resolve_logs_dir_falls_back_to_xdg_state(tmp_path, monkeypatch):
    monkeypatch.delenv(logging_utils.LOG_DIR_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))

    resolved = logging_utils.resolve_logs_dir(tmp_path)

    assert resolved == tmp_path / "state" / "WidgetDeck" / "logs" / "WidgetDeck"


def test_resolve_log_level():
    assert logging_utils.resolve_log_level(True) == logging.DEBUG
    assert logging_utils.resolve_log_level(False) == logging.INFO


def test_configure_logging_attaches_single_file_handler(tmp_path, restore_package_logger):
    first = logging_utils.configure_logging(debug=True, log_dir=tmp_path)
    second = logging_utils.configure_logging(debug=True, log_dir=tmp_path)

    assert first is second is restore_package_logger
    file_handlers = [h for h in first.handlers if getattr(h, "_widget_deck_handler", False)]
    assert len(file_handlers) == 1
    assert first.level == logging.DEBUG

    logging.getLogger(f"{logging_utils.LOGGER_NAME}.store").info("saved %d widgets", 8)
    file_handlers[0].flush()
    assert "saved 8 widgets" in (tmp_path / logging_utils.LOG_FILENAME).read_text(encoding="utf-8")
