from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from widget_controller.controller.session import DashboardSession, FeedbackFn
from widget_grid.logging_utils import configure_logging, resolve_logs_dir
from widget_store.preferences import DeckPreferences
from widget_store.settings_backend import JsonFileSettings, SettingsBackend, resolve_state_path
from widget_store.widget_store import WidgetStateStore

STATE_PATH_ENV_VAR = "WIDGET_DECK_STATE_PATH"


@dataclass
class AppContext:
    root: Path
    state_path: Optional[Path]
    preferences: DeckPreferences
    backend: SettingsBackend
    store: WidgetStateStore
    session: DashboardSession
    logger: logging.Logger


def build_app_context(
    *,
    root: Path,
    backend: Optional[SettingsBackend] = None,
    feedback: Optional[FeedbackFn] = None,
    log_dir: Optional[Path] = None,
) -> AppContext:
    root = Path(root)
    preferences = DeckPreferences(root)
    if log_dir is None:
        log_dir = resolve_logs_dir(root)
    logger = configure_logging(
        debug=preferences.debug_logging,
        log_dir=log_dir,
        retention=preferences.log_retention,
    )

    state_path: Optional[Path] = None
    if backend is None:
        state_raw = os.environ.get(STATE_PATH_ENV_VAR) or resolve_state_path(root)
        state_path = Path(state_raw)
        backend = JsonFileSettings(state_path, logger=logger.getChild("settings"))

    store = WidgetStateStore(backend, key=preferences.state_key, logger=logger.getChild("store"))
    session = DashboardSession(
        store,
        max_rows=preferences.max_rows_per_page,
        safety_limit=preferences.rebalance_safety_limit,
        swipe_threshold_ratio=preferences.swipe_threshold_ratio,
        feedback=feedback,
        logger=logger.getChild("session"),
    )
    return AppContext(
        root=root,
        state_path=state_path,
        preferences=preferences,
        backend=backend,
        store=store,
        session=session,
        logger=logger,
    )
