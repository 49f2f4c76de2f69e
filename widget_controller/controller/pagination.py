from __future__ import annotations

from typing import Iterable

from widget_grid.models import WidgetState

SWIPE_THRESHOLD_RATIO = 0.18


def page_count(widgets: Iterable[WidgetState], is_editing: bool) -> int:
    """Pages to render; editing adds a trailing blank page for new widgets."""

    pages = [widget.page for widget in widgets if not widget.is_hidden]
    if not pages:
        return 1
    used = max(0, max(pages)) + 1
    return used + 1 if is_editing else used


def clamp_page(current_page: int, count: int) -> int:
    return max(0, min(int(current_page), max(1, int(count)) - 1))


class PaginationController:
    """Tracks the active page and turns swipe predictions into page changes."""

    def __init__(self, *, threshold_ratio: float = SWIPE_THRESHOLD_RATIO, current_page: int = 0) -> None:
        self.threshold_ratio = max(0.0, float(threshold_ratio))
        self.current_page = max(0, int(current_page))

    def clamp(self, count: int) -> int:
        self.current_page = clamp_page(self.current_page, count)
        return self.current_page

    def navigate(self, predicted_translation: float, page_height: float, count: int) -> int:
        """Apply a swipe whose predicted end displacement is ``predicted_translation``.

        Negative displacement (content dragged up) advances a page, positive
        goes back; anything inside the threshold leaves the page unchanged.
        """

        threshold = max(1.0, float(page_height)) * self.threshold_ratio
        if predicted_translation < -threshold:
            self.current_page += 1
        elif predicted_translation > threshold:
            self.current_page -= 1
        return self.clamp(count)

    def go_to(self, page: int, count: int) -> int:
        self.current_page = int(page)
        return self.clamp(count)
