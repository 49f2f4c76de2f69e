"""Engine preferences for the widget dashboard."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from widget_store.settings_backend import DEFAULT_STATE_KEY

PREFERENCES_FILE = "deck_settings.json"
DEBUG_ENV_VAR = "WIDGET_DECK_DEBUG"


def _env_flag(name: str) -> bool:
    value = os.getenv(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _coerce_int(raw: Any, fallback: int, *, minimum: int, maximum: int) -> int:
    if isinstance(raw, bool):
        return fallback
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = fallback
    return max(minimum, min(value, maximum))


def _coerce_float(raw: Any, fallback: float, *, minimum: float, maximum: float) -> float:
    if isinstance(raw, bool):
        return fallback
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = fallback
    if value != value:
        value = fallback
    return max(minimum, min(value, maximum))


@dataclass
class DeckPreferences:
    """Simple JSON-backed preferences store."""

    root: Path
    max_rows_per_page: int = 3
    swipe_threshold_ratio: float = 0.18
    rebalance_safety_limit: int = 1000
    log_retention: int = 5
    debug_logging: bool = False
    state_key: str = DEFAULT_STATE_KEY

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        self._path = self.root / PREFERENCES_FILE
        self._load()
        if _env_flag(DEBUG_ENV_VAR):
            self.debug_logging = True

    @property
    def path(self) -> Path:
        return self._path

    # Persistence ---------------------------------------------------------

    def _load(self) -> None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict):
            return
        self.max_rows_per_page = _coerce_int(data.get("max_rows_per_page"), 3, minimum=1, maximum=12)
        self.swipe_threshold_ratio = _coerce_float(data.get("swipe_threshold_ratio"), 0.18, minimum=0.01, maximum=0.9)
        self.rebalance_safety_limit = _coerce_int(data.get("rebalance_safety_limit"), 1000, minimum=1, maximum=100000)
        self.log_retention = _coerce_int(data.get("log_retention"), 5, minimum=1, maximum=20)
        self.debug_logging = bool(data.get("debug_logging", False))
        key = data.get("state_key")
        self.state_key = key.strip() if isinstance(key, str) and key.strip() else DEFAULT_STATE_KEY

    def save(self) -> None:
        payload: Dict[str, Any] = {
            "max_rows_per_page": int(self.max_rows_per_page),
            "swipe_threshold_ratio": float(self.swipe_threshold_ratio),
            "rebalance_safety_limit": int(self.rebalance_safety_limit),
            "log_retention": int(self.log_retention),
            "debug_logging": bool(self.debug_logging),
            "state_key": str(self.state_key or DEFAULT_STATE_KEY),
        }
        self.root.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
