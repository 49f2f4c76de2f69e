from .grid_metrics import Frame, GridMetrics
from .grid_packer import Placement, pack, pack_widgets, used_rows
from .models import (
    LOCKED_KINDS,
    WidgetKind,
    WidgetSize,
    WidgetState,
    default_widgets,
    is_size_allowed,
    normalize_widget,
)
from .rebalancer import MAX_ROWS_PER_PAGE, RebalanceResult, rebalance

__all__ = [
    "Frame",
    "GridMetrics",
    "Placement",
    "pack",
    "pack_widgets",
    "used_rows",
    "LOCKED_KINDS",
    "WidgetKind",
    "WidgetSize",
    "WidgetState",
    "default_widgets",
    "is_size_allowed",
    "normalize_widget",
    "MAX_ROWS_PER_PAGE",
    "RebalanceResult",
    "rebalance",
]
