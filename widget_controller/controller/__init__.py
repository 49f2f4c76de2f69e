from .app_context import AppContext, build_app_context
from .drag_reorder import DragReorderController
from .pagination import PaginationController, clamp_page, page_count
from .session import DashboardSession, PageLayout

__all__ = [
    "AppContext",
    "build_app_context",
    "DragReorderController",
    "PaginationController",
    "clamp_page",
    "page_count",
    "DashboardSession",
    "PageLayout",
]
