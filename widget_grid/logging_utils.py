from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "WidgetDeck"
LOG_TAG = "WidgetDeck"
LOG_FILENAME = "widget_deck.log"
LOG_DIR_ENV_VAR = "WIDGET_DECK_LOG_DIR"


def resolve_logs_dir(base_path: Path, log_dir_name: str = "WidgetDeck") -> Path:
    """
    Resolve the directory to store dashboard logs.

    Strategy:
    - Use WIDGET_DECK_LOG_DIR as-is if set.
    - Fall back to XDG state/cache locations, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    ``base_path`` is only used to anchor a relative env override.
    """
    targets = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        override = Path(env_override).expanduser()
        if not override.is_absolute():
            override = base_path.resolve() / override
        targets.append(override)

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    for base in (state_home / "WidgetDeck" / "logs", cache_home / "WidgetDeck" / "logs", Path.cwd() / "logs"):
        targets.append(base / log_dir_name)

    for target in targets:
        try:
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def configure_logging(
    *,
    debug: bool = False,
    log_dir: Optional[Path] = None,
    retention: int = 5,
) -> logging.Logger:
    """Attach the rotating file handler to the package logger once."""

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(debug))
    if log_dir is not None and not any(getattr(handler, "_widget_deck_handler", False) for handler in logger.handlers):
        formatter = logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(message)s", "%H:%M:%S")
        handler = build_rotating_file_handler(log_dir, LOG_FILENAME, retention=retention, formatter=formatter)
        handler._widget_deck_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.propagate = False
    return logger
