"""Widget kinds, sizes and the persisted widget record (pure, no I/O)."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple


class WidgetSize(str, Enum):
    SMALL = "small"
    WIDE = "wide"
    TALL = "tall"
    LARGE = "large"

    @property
    def span_x(self) -> int:
        return _SIZE_SPANS[self][0]

    @property
    def span_y(self) -> int:
        return _SIZE_SPANS[self][1]

    @property
    def is_tall(self) -> bool:
        return self.span_y == 2


class WidgetKind(str, Enum):
    GUIDES = "guides"
    STATS = "stats"
    UPDATES = "updates"
    RECENT = "recent"
    SOURCE_APPS = "sourceApps"
    PORTAL_VERSION = "portalVersion"
    DEVICE_STATS = "deviceStats"
    TIME = "time"

    def description_text(self, size: WidgetSize) -> str:
        short_text, tall_text = _KIND_DESCRIPTIONS[self]
        return tall_text if size.is_tall else short_text


_SIZE_SPANS: Dict[WidgetSize, Tuple[int, int]] = {
    WidgetSize.SMALL: (1, 1),
    WidgetSize.WIDE: (2, 1),
    WidgetSize.TALL: (1, 2),
    WidgetSize.LARGE: (2, 2),
}


def _placeholder(name: str) -> Tuple[str, str]:
    return f"{name} widget placeholder.", f"{name} widget placeholder (tall)."


_KIND_DESCRIPTIONS: Dict[WidgetKind, Tuple[str, str]] = {
    WidgetKind.GUIDES: ("Tap for informational guides.", "Tap for guides, tips, and helpful explanations."),
    WidgetKind.STATS: _placeholder("Stats"),
    WidgetKind.UPDATES: _placeholder("Updates"),
    WidgetKind.RECENT: _placeholder("Recent"),
    WidgetKind.SOURCE_APPS: _placeholder("Source Apps"),
    WidgetKind.PORTAL_VERSION: _placeholder("Portal Version"),
    WidgetKind.DEVICE_STATS: _placeholder("Device Stats"),
    WidgetKind.TIME: _placeholder("Time"),
}

# Every variant needs a table entry; a new kind or size without one fails on import.
_missing_kinds = set(WidgetKind) - set(_KIND_DESCRIPTIONS)
_missing_sizes = set(WidgetSize) - set(_SIZE_SPANS)
if _missing_kinds or _missing_sizes:
    raise RuntimeError(f"Incomplete widget tables: kinds={sorted(_missing_kinds)} sizes={sorted(_missing_sizes)}")

LOCKED_KINDS: FrozenSet[WidgetKind] = frozenset({WidgetKind.STATS, WidgetKind.TIME, WidgetKind.DEVICE_STATS})


@dataclass
class WidgetState:
    """One widget instance as stored and reordered by the dashboard."""

    kind: WidgetKind
    title: str
    size: WidgetSize
    is_hidden: bool = False
    page: int = 0
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def span(self) -> Tuple[int, int]:
        return self.size.span_x, self.size.span_y

    @property
    def description(self) -> str:
        return self.kind.description_text(self.size)


def is_size_allowed(kind: WidgetKind, size: WidgetSize) -> bool:
    """Return True when ``size`` is a legal user choice for ``kind``."""

    if kind in LOCKED_KINDS:
        return size is WidgetSize.SMALL
    if kind is WidgetKind.PORTAL_VERSION and size is WidgetSize.LARGE:
        return False
    if kind is WidgetKind.GUIDES and size is WidgetSize.SMALL:
        return False
    return True


def allowed_sizes(kind: WidgetKind) -> List[WidgetSize]:
    return [size for size in WidgetSize if is_size_allowed(kind, size)]


def constrained_size(kind: WidgetKind, size: WidgetSize) -> WidgetSize:
    """Snap an illegal size to the nearest legal one for ``kind``."""

    if kind in LOCKED_KINDS:
        return WidgetSize.SMALL
    if kind is WidgetKind.PORTAL_VERSION and size is WidgetSize.LARGE:
        return WidgetSize.WIDE
    if kind is WidgetKind.GUIDES and size is WidgetSize.SMALL:
        return WidgetSize.WIDE
    return size


def normalize_widget(widget: WidgetState) -> WidgetState:
    """Apply size constraints and clamp the page to >= 0, in place."""

    widget.size = constrained_size(widget.kind, widget.size)
    if widget.page < 0:
        widget.page = 0
    return widget


_DEFAULT_LAYOUT: Tuple[Tuple[WidgetKind, str, WidgetSize, int], ...] = (
    (WidgetKind.GUIDES, "Guides", WidgetSize.WIDE, 0),
    (WidgetKind.STATS, "Stats", WidgetSize.SMALL, 0),
    (WidgetKind.UPDATES, "Updates", WidgetSize.SMALL, 0),
    (WidgetKind.RECENT, "Recent", WidgetSize.SMALL, 0),
    (WidgetKind.SOURCE_APPS, "Source Apps", WidgetSize.SMALL, 0),
    (WidgetKind.PORTAL_VERSION, "Portal Version", WidgetSize.SMALL, 1),
    (WidgetKind.DEVICE_STATS, "Device", WidgetSize.SMALL, 1),
    (WidgetKind.TIME, "Time", WidgetSize.SMALL, 1),
)


def default_widgets() -> List[WidgetState]:
    """Build the first-run widget set; every call mints fresh ids."""

    return [WidgetState(kind=kind, title=title, size=size, page=page) for kind, title, size, page in _DEFAULT_LAYOUT]


def visible_widgets(widgets: List[WidgetState]) -> List[WidgetState]:
    return [widget for widget in widgets if not widget.is_hidden]


def page_widgets(widgets: List[WidgetState], page: int) -> List[WidgetState]:
    return [widget for widget in widgets if not widget.is_hidden and widget.page == page]


def max_used_page(widgets: List[WidgetState]) -> int:
    pages = [widget.page for widget in widgets if not widget.is_hidden]
    return max(0, max(pages)) if pages else 0


def find_index(widgets: List[WidgetState], widget_id: str) -> int:
    """Return the list index of ``widget_id`` or -1 when absent."""

    for index, widget in enumerate(widgets):
        if widget.id == widget_id:
            return index
    return -1


def copy_widgets(widgets: List[WidgetState]) -> List[WidgetState]:
    return [replace(widget) for widget in widgets]
