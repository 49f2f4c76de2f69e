from __future__ import annotations

import logging
from typing import Callable, List, Optional

from widget_grid.logging_utils import LOGGER_NAME
from widget_grid.models import WidgetState, find_index

_LOGGER = logging.getLogger(f"{LOGGER_NAME}.drag")


def _noop() -> None:
    return None


class DragReorderController:
    """Same-page drag reordering over the store's widget list.

    ``widgets_fn`` returns the live list, which is mutated in place.
    ``on_reorder`` fires after each position change, ``on_commit`` after a drop.
    """

    def __init__(
        self,
        *,
        widgets_fn: Callable[[], List[WidgetState]],
        on_reorder: Optional[Callable[[], None]] = None,
        on_commit: Optional[Callable[[], None]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._widgets = widgets_fn
        self._on_reorder = on_reorder or _noop
        self._on_commit = on_commit or _noop
        self._logger = logger or _LOGGER
        self.dragging_id: Optional[str] = None

    @property
    def is_dragging(self) -> bool:
        return self.dragging_id is not None

    def drag_start(self, widget_id: str) -> bool:
        if find_index(self._widgets(), widget_id) < 0:
            return False
        self.dragging_id = widget_id
        return True

    def drag_over(self, target_id: str) -> bool:
        """Move the dragged widget to the target's slot; False when nothing moved."""

        from_id = self.dragging_id
        if from_id is None or from_id == target_id:
            return False
        widgets = self._widgets()
        from_index = find_index(widgets, from_id)
        to_index = find_index(widgets, target_id)
        if from_index < 0 or to_index < 0:
            return False
        if widgets[from_index].page != widgets[to_index].page:
            # Cross-page reordering is not supported.
            return False
        item = widgets.pop(from_index)
        widgets.insert(to_index, item)
        self._logger.debug("Reordered %s from index %d to %d", from_id, from_index, to_index)
        self._on_reorder()
        return True

    def drop(self) -> None:
        self.dragging_id = None
        self._on_commit()

    def drag_end(self) -> None:
        self.drop()

    def cancel(self) -> None:
        self.dragging_id = None
