"""Owner of the ordered widget collection and its persisted blob."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from widget_grid.logging_utils import LOGGER_NAME
from widget_grid.models import WidgetState, copy_widgets, default_widgets, normalize_widget
from widget_store.settings_backend import DEFAULT_STATE_KEY, SettingsBackend
from widget_store.widget_codec import decode_widgets, encode_widgets

ChangeListener = Callable[[List[WidgetState]], None]

_LOGGER = logging.getLogger(f"{LOGGER_NAME}.store")


def merge_with_defaults(existing: List[WidgetState]) -> List[WidgetState]:
    """Drop repeated kinds (first wins), then append a default for every missing kind."""

    present = set()
    merged: List[WidgetState] = []
    for widget in existing:
        if widget.kind in present:
            _LOGGER.debug("Dropping duplicate %s widget %s", widget.kind.value, widget.id)
            continue
        present.add(widget.kind)
        merged.append(widget)
    for widget in default_widgets():
        if widget.kind not in present:
            merged.append(widget)
    return merged


class WidgetStateStore:
    """Loads, migrates and saves the dashboard's widgets under one settings key.

    The store keeps the in-memory list authoritative: a failed write is
    logged and the next save retries with the full list.
    """

    def __init__(
        self,
        backend: SettingsBackend,
        *,
        key: str = DEFAULT_STATE_KEY,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._backend = backend
        self._key = key
        self._logger = logger or _LOGGER
        self._widgets: List[WidgetState] = []
        self._listeners: List[ChangeListener] = []

    @property
    def widgets(self) -> List[WidgetState]:
        return self._widgets

    def load(self) -> List[WidgetState]:
        raw = self._backend.read(self._key)
        decoded = decode_widgets(raw, logger=self._logger)
        if decoded is None:
            widgets = default_widgets()
            self._logger.debug("No usable widget state; starting from %d defaults", len(widgets))
        else:
            widgets = merge_with_defaults(decoded)
            if not widgets:
                widgets = default_widgets()
            elif len(widgets) != len(decoded):
                self._logger.info("Merged saved widget state with defaults: %d saved, %d kept", len(decoded), len(widgets))
        for widget in widgets:
            normalize_widget(widget)
        self._widgets = widgets
        self.save()
        return self._widgets

    def save(self, widgets: Optional[List[WidgetState]] = None) -> bool:
        if widgets is not None:
            self._widgets = widgets
        written = self._backend.write(self._key, encode_widgets(self._widgets))
        if not written:
            self._logger.warning("Widget state not persisted; keeping %d widget(s) in memory", len(self._widgets))
        self._notify()
        return written

    def replace(self, widgets: List[WidgetState]) -> bool:
        return self.save(list(widgets))

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(copy_widgets(self._widgets))
            except Exception:
                self._logger.exception("Widget change listener %r failed", listener)
