"""Key/value string settings used to persist the widget blob."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from widget_grid.logging_utils import LOGGER_NAME

STATE_FILENAME = "widget_state.json"
DEFAULT_STATE_KEY = "widgets.state"

_LOGGER = logging.getLogger(f"{LOGGER_NAME}.settings")


class SettingsBackend(Protocol):
    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> bool:
        ...


class MemorySettings:
    """Dict-backed settings for tests and embedding."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def write(self, key: str, value: str) -> bool:
        self.values[key] = value
        self.writes += 1
        return True


class JsonFileSettings:
    """JSON object of string values on disk, rewritten atomically on each write."""

    def __init__(self, path: Path, logger: Optional[logging.Logger] = None) -> None:
        self._path = Path(path)
        self._logger = logger or _LOGGER

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            self._logger.debug("Failed to read settings %s: %s", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            return {}
        return raw

    def read(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str) -> bool:
        payload = self._load()
        payload[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
            tmp_path.replace(self._path)
            return True
        except OSError as exc:
            self._logger.warning("Failed to write settings %s: %s", self._path, exc)
            return False


class QtSettings:
    """Adapter over ``QSettings`` for hosts that already run a Qt application."""

    def __init__(self, organization: str = "WidgetDeck", application: str = "WidgetDeck", settings: Any = None) -> None:
        if settings is None:
            from PyQt6.QtCore import QSettings

            settings = QSettings(organization, application)
        self._settings = settings

    def read(self, key: str) -> Optional[str]:
        value = self._settings.value(key, None)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str) -> bool:
        self._settings.setValue(key, value)
        self._settings.sync()
        return True


def resolve_state_path(root: Path) -> Path:
    return Path(root) / STATE_FILENAME
