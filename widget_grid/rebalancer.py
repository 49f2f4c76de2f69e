"""Row-budget enforcement across dashboard pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from widget_grid.grid_packer import pack_widgets, used_rows
from widget_grid.logging_utils import LOGGER_NAME
from widget_grid.models import WidgetState

MAX_ROWS_PER_PAGE = 3
SAFETY_LIMIT = 1000

_LOGGER = logging.getLogger(f"{LOGGER_NAME}.rebalancer")


@dataclass
class RebalanceResult:
    passes: int = 0
    moves: List[Tuple[str, int, int]] = field(default_factory=list)
    exhausted: bool = False

    @property
    def moved(self) -> bool:
        return bool(self.moves)


def page_row_usage(widgets: List[WidgetState]) -> Dict[int, int]:
    """Rows each visible page needs in its current stored order."""

    grouped: Dict[int, List[WidgetState]] = {}
    for widget in widgets:
        if widget.is_hidden:
            continue
        grouped.setdefault(widget.page, []).append(widget)
    return {page: used_rows(pack_widgets(items)) for page, items in sorted(grouped.items())}


def rebalance(
    widgets: List[WidgetState],
    *,
    max_rows: int = MAX_ROWS_PER_PAGE,
    safety_limit: int = SAFETY_LIMIT,
    logger: Optional[logging.Logger] = None,
) -> RebalanceResult:
    """Push the tail widget of every overflowing page onto the next page until all fit.

    Mutates ``page`` on the given widgets in place; list order is untouched.
    Each pass moves at most one widget per page, so the loop settles well
    before ``safety_limit`` for any real collection.
    """

    log = logger or _LOGGER
    _clamp_negative_pages(widgets)
    budget = max(1, int(max_rows))
    result = RebalanceResult()
    while result.passes < safety_limit:
        result.passes += 1
        visible = [widget for widget in widgets if not widget.is_hidden]
        if not visible:
            break
        last_page = max(0, max(widget.page for widget in visible))
        moved_any = False
        for page in range(last_page + 1):
            items = [widget for widget in visible if widget.page == page]
            if not items:
                continue
            rows = used_rows(pack_widgets(items))
            if rows <= budget:
                continue
            tail = items[-1]
            tail.page = page + 1
            result.moves.append((tail.id, page, page + 1))
            moved_any = True
            log.debug("Page %d needs %d rows (budget %d); moved %s to page %d", page, rows, budget, tail.id, page + 1)
        if not moved_any:
            break
    else:
        result.exhausted = True
        log.warning("Rebalance stopped after %d passes without settling; keeping current pages", safety_limit)

    return result


def _clamp_negative_pages(widgets: List[WidgetState]) -> None:
    for widget in widgets:
        if widget.page < 0:
            widget.page = 0
