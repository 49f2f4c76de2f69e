"""Event-driven owner of the dashboard: edit mode, add flow, per-card actions and paging."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from widget_controller.controller.drag_reorder import DragReorderController
from widget_controller.controller.pagination import PaginationController, page_count
from widget_grid.grid_packer import Placement, pack_widgets, used_rows
from widget_grid.logging_utils import LOGGER_NAME
from widget_grid.models import (
    LOCKED_KINDS,
    WidgetKind,
    WidgetSize,
    WidgetState,
    find_index,
    is_size_allowed,
    normalize_widget,
    page_widgets,
    visible_widgets,
)
from widget_grid.rebalancer import MAX_ROWS_PER_PAGE, SAFETY_LIMIT, RebalanceResult, rebalance
from widget_store.widget_store import WidgetStateStore

FeedbackFn = Callable[[str], None]
EditingListener = Callable[[bool, bool], None]

FEEDBACK_LIGHT = "light"
FEEDBACK_MEDIUM = "medium"

_LOGGER = logging.getLogger(f"{LOGGER_NAME}.session")


@dataclass(frozen=True)
class PageLayout:
    page: int
    placements: Tuple[Placement, ...]
    used_rows: int

    @property
    def is_empty(self) -> bool:
        return not self.placements


class DashboardSession:
    """Single owner of widget mutations, driven one event at a time."""

    def __init__(
        self,
        store: WidgetStateStore,
        *,
        max_rows: int = MAX_ROWS_PER_PAGE,
        safety_limit: int = SAFETY_LIMIT,
        swipe_threshold_ratio: float = 0.18,
        feedback: Optional[FeedbackFn] = None,
        on_editing_changed: Optional[EditingListener] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._max_rows = max_rows
        self._safety_limit = safety_limit
        self._feedback = feedback
        self._on_editing_changed = on_editing_changed
        self._logger = logger or _LOGGER
        self.is_editing = False
        self.add_sheet_open = False
        self.add_target_page = 0
        self.pagination = PaginationController(threshold_ratio=swipe_threshold_ratio)
        self.drag = DragReorderController(
            widgets_fn=lambda: self._store.widgets,
            on_reorder=self._persist,
            on_commit=self.commit,
            logger=self._logger,
        )

    # State -----------------------------------------------------------------

    @property
    def widgets(self) -> List[WidgetState]:
        return self._store.widgets

    @property
    def current_page(self) -> int:
        return self.pagination.current_page

    def page_count(self) -> int:
        return page_count(self._store.widgets, self.is_editing)

    def hidden_widgets(self) -> List[WidgetState]:
        return [widget for widget in self._store.widgets if widget.is_hidden]

    def start(self) -> None:
        """Load persisted widgets, settle the pages and clamp the active page."""

        self._store.load()
        self.commit()

    def layout(self) -> List[PageLayout]:
        pages: List[PageLayout] = []
        for page in range(self.page_count()):
            placements = tuple(pack_widgets(page_widgets(self._store.widgets, page)))
            pages.append(PageLayout(page=page, placements=placements, used_rows=used_rows(placements)))
        return pages

    # Edit mode -------------------------------------------------------------

    def set_editing(self, editing: bool) -> None:
        previous = self.is_editing
        self.is_editing = bool(editing)
        if not self.is_editing:
            self.drag.cancel()
            self.add_sheet_open = False
        self.pagination.clamp(self.page_count())
        if previous != self.is_editing and self._on_editing_changed is not None:
            try:
                self._on_editing_changed(previous, self.is_editing)
            except Exception:
                self._logger.exception("Editing change listener failed")

    def long_press(self) -> None:
        if self.is_editing:
            return
        self.set_editing(True)
        self._cue(FEEDBACK_LIGHT)

    # Add flow --------------------------------------------------------------

    def request_add(self) -> bool:
        if not self.is_editing:
            return False
        self.add_target_page = self.pagination.current_page
        self.add_sheet_open = True
        return True

    def empty_state_add(self) -> bool:
        if visible_widgets(self._store.widgets):
            return False
        if not self.is_editing:
            self.set_editing(True)
        self.add_target_page = 0
        self.add_sheet_open = True
        return True

    def dismiss_add_sheet(self) -> None:
        self.add_sheet_open = False

    def add_widget(self, kind: WidgetKind, preferred_page: Optional[int] = None) -> bool:
        widgets = self._store.widgets
        index = next((i for i, widget in enumerate(widgets) if widget.kind is kind), -1)
        if index < 0:
            return False
        target = self.add_target_page if preferred_page is None else preferred_page
        widget = widgets[index]
        widget.is_hidden = False
        widget.page = max(0, int(target))
        normalize_widget(widget)
        self._cue(FEEDBACK_LIGHT)
        self.commit()
        return True

    # Card actions ----------------------------------------------------------

    def set_size(self, widget_id: str, size: WidgetSize) -> bool:
        """Resize a widget; returns False when the request was rejected or the id is unknown."""

        widgets = self._store.widgets
        index = find_index(widgets, widget_id)
        if index < 0:
            return False
        widget = widgets[index]
        if widget.kind in LOCKED_KINDS:
            widget.size = WidgetSize.SMALL
            self._cue(FEEDBACK_LIGHT)
            self.commit()
            return size is WidgetSize.SMALL
        if not is_size_allowed(widget.kind, size):
            self._logger.debug("Rejected size %s for %s", size.value, widget.kind.value)
            self._cue(FEEDBACK_LIGHT)
            return False
        widget.size = size
        self._cue(FEEDBACK_LIGHT)
        self.commit()
        return True

    def hide(self, widget_id: str) -> bool:
        widgets = self._store.widgets
        index = find_index(widgets, widget_id)
        if index < 0:
            return False
        widgets[index].is_hidden = True
        if self.drag.dragging_id == widget_id:
            self.drag.cancel()
        self._cue(FEEDBACK_LIGHT)
        self.commit()
        return True

    # Drag ------------------------------------------------------------------

    def drag_start(self, widget_id: str) -> bool:
        if not self.is_editing:
            return False
        started = self.drag.drag_start(widget_id)
        if started:
            self._cue(FEEDBACK_LIGHT)
        return started

    def drag_over(self, target_id: str) -> bool:
        return self.drag.drag_over(target_id)

    def drop(self) -> None:
        if self.drag.is_dragging:
            self._cue(FEEDBACK_MEDIUM)
        self.drag.drop()

    # Lifecycle / paging ----------------------------------------------------

    def focus_lost(self) -> None:
        self.drag.cancel()

    def focus_gained(self) -> None:
        self.drag.cancel()

    def swipe(self, predicted_translation: float, page_height: float) -> int:
        return self.pagination.navigate(predicted_translation, page_height, self.page_count())

    def commit(self) -> RebalanceResult:
        """Rebalance pages, persist, and keep the active page in range."""

        result = rebalance(
            self._store.widgets,
            max_rows=self._max_rows,
            safety_limit=self._safety_limit,
            logger=self._logger,
        )
        self._persist()
        self.pagination.clamp(self.page_count())
        return result

    # Internals -------------------------------------------------------------

    def _persist(self) -> None:
        self._store.save()

    def _cue(self, style: str) -> None:
        if self._feedback is None:
            return
        try:
            self._feedback(style)
        except Exception:
            self._logger.exception("Feedback cue %s failed", style)
