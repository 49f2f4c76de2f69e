"""Two-column grid placement for one dashboard page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from widget_grid.models import WidgetState

GRID_COLUMNS = 2


@dataclass(frozen=True)
class Placement:
    row: int
    col: int
    span_x: int
    span_y: int
    widget_id: Optional[str] = None

    @property
    def bottom(self) -> int:
        return self.row + self.span_y

    def cells(self) -> List[Tuple[int, int]]:
        return [(self.row + dy, self.col + dx) for dy in range(self.span_y) for dx in range(self.span_x)]


def clamp_span(value: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 1
    return max(1, min(GRID_COLUMNS, number))


class _Occupancy:
    """Exactly two columns wide, rows added on demand."""

    def __init__(self) -> None:
        self._rows: List[List[bool]] = []

    def _ensure_rows(self, row: int) -> None:
        while len(self._rows) <= row:
            self._rows.append([False] * GRID_COLUMNS)

    def can_place(self, row: int, col: int, span_x: int, span_y: int) -> bool:
        if col < 0 or col + span_x > GRID_COLUMNS:
            return False
        self._ensure_rows(row + span_y - 1)
        for dy in range(span_y):
            for dx in range(span_x):
                if self._rows[row + dy][col + dx]:
                    return False
        return True

    def mark(self, row: int, col: int, span_x: int, span_y: int) -> None:
        self._ensure_rows(row + span_y - 1)
        for dy in range(span_y):
            for dx in range(span_x):
                self._rows[row + dy][col + dx] = True


def pack(spans: Iterable[Tuple[int, int]], ids: Optional[Sequence[Optional[str]]] = None) -> List[Placement]:
    """Greedy top-to-bottom, left-to-right fill in input order.

    ``spans`` yields ``(span_x, span_y)`` pairs. Full-width items only ever
    start in column 0; single-column items try column 0 before column 1 on
    each row. Accepted placements are never revisited.
    """

    occupancy = _Occupancy()
    placements: List[Placement] = []
    for index, (raw_x, raw_y) in enumerate(spans):
        span_x = clamp_span(raw_x)
        span_y = clamp_span(raw_y)
        widget_id = ids[index] if ids is not None and index < len(ids) else None
        row = 0
        while True:
            if span_x == GRID_COLUMNS:
                candidates: Tuple[int, ...] = (0,)
            else:
                candidates = tuple(range(GRID_COLUMNS))
            column = next((col for col in candidates if occupancy.can_place(row, col, span_x, span_y)), None)
            if column is not None:
                occupancy.mark(row, column, span_x, span_y)
                placements.append(Placement(row, column, span_x, span_y, widget_id))
                break
            row += 1
    return placements


def pack_widgets(widgets: Sequence[WidgetState]) -> List[Placement]:
    """Pack widgets in their stored order, tagging placements with widget ids."""

    return pack([widget.span for widget in widgets], [widget.id for widget in widgets])


def used_rows(placements: Iterable[Placement]) -> int:
    return max((placement.bottom for placement in placements), default=0)
