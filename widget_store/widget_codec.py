"""JSON encoding for widget records, including the legacy ``isBig`` schema."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence

from widget_grid.logging_utils import LOGGER_NAME
from widget_grid.models import WidgetKind, WidgetSize, WidgetState

DEFAULT_TITLE = "Widget"

_LOGGER = logging.getLogger(f"{LOGGER_NAME}.codec")


def _coerce_id(raw: Any) -> str:
    if isinstance(raw, str) and raw.strip():
        return raw
    return str(uuid.uuid4())


def _coerce_kind(raw: Any) -> WidgetKind:
    try:
        return WidgetKind(raw)
    except (TypeError, ValueError):
        return WidgetKind.GUIDES


def _coerce_size(raw: Any, is_big: Any) -> WidgetSize:
    try:
        return WidgetSize(raw)
    except (TypeError, ValueError):
        pass
    return WidgetSize.LARGE if is_big is True else WidgetSize.SMALL


def _coerce_page(raw: Any) -> int:
    # bool is an int subclass; a stray true/false is not a page number.
    if isinstance(raw, bool) or not isinstance(raw, int):
        return 0
    return raw


def decode_record(data: Mapping[str, Any]) -> WidgetState:
    """Build a widget from one persisted record; each field falls back on its own."""

    title = data.get("title")
    is_hidden = data.get("isHidden")
    return WidgetState(
        id=_coerce_id(data.get("id")),
        kind=_coerce_kind(data.get("kind")),
        title=title if isinstance(title, str) else DEFAULT_TITLE,
        size=_coerce_size(data.get("size"), data.get("isBig")),
        is_hidden=is_hidden if isinstance(is_hidden, bool) else False,
        page=_coerce_page(data.get("page")),
    )


def encode_record(widget: WidgetState) -> Dict[str, Any]:
    return {
        "id": widget.id,
        "kind": widget.kind.value,
        "title": widget.title,
        "size": widget.size.value,
        "isHidden": bool(widget.is_hidden),
        "page": int(widget.page),
    }


def decode_widgets(raw: Optional[str], *, logger: Optional[logging.Logger] = None) -> Optional[List[WidgetState]]:
    """Decode a persisted blob, or return None when the blob as a whole is unusable."""

    log = logger or _LOGGER
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        log.warning("Discarding unreadable widget state: %s", exc)
        return None
    if not isinstance(data, list):
        log.warning("Discarding widget state: expected a list, got %s", type(data).__name__)
        return None
    widgets: List[WidgetState] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, Mapping):
            log.debug("Skipping widget record %d: not an object", index)
            continue
        widgets.append(decode_record(entry))
    return widgets


def encode_widgets(widgets: Sequence[WidgetState]) -> str:
    return json.dumps([encode_record(widget) for widget in widgets], separators=(",", ":"))
