from __future__ import annotations

import json
import logging

from widget_grid.models import LOCKED_KINDS, WidgetKind, WidgetSize
from widget_store.settings_backend import DEFAULT_STATE_KEY, MemorySettings
from widget_store.widget_store import WidgetStateStore, merge_with_defaults
from widget_store.widget_codec import decode_widgets


def _record(kind: str, size: str = "small", page: int = 0, hidden: bool = False, **extra):
    payload = {"id": f"id-{kind}", "kind": kind, "title": kind.title(), "size": size, "isHidden": hidden, "page": page}
    payload.update(extra)
    return payload


def _saved(backend: MemorySettings):
    return json.loads(backend.values[DEFAULT_STATE_KEY])


class FailingSettings(MemorySettings):
    def write(self, key: str, value: str) -> bool:
        return False


def test_first_load_persists_defaults():
    backend = MemorySettings()
    store = WidgetStateStore(backend)

    widgets = store.load()

    assert [w.kind.value for w in widgets] == [
        "guides",
        "stats",
        "updates",
        "recent",
        "sourceApps",
        "portalVersion",
        "deviceStats",
        "time",
    ]
    assert [entry["id"] for entry in _saved(backend)] == [w.id for w in widgets]


def test_reload_keeps_ids_and_order():
    backend = MemorySettings()
    first = WidgetStateStore(backend).load()
    first_ids = [w.id for w in first]

    second = WidgetStateStore(backend).load()

    assert [w.id for w in second] == first_ids


def test_missing_default_kind_is_appended_visible():
    saved = [_record(kind) for kind in ("stats", "updates", "recent", "sourceApps", "portalVersion", "deviceStats", "time")]
    saved.insert(0, _record("guides", size="wide", hidden=True))
    saved = [entry for entry in saved if entry["kind"] != "time"]
    backend = MemorySettings({DEFAULT_STATE_KEY: json.dumps(saved)})

    widgets = WidgetStateStore(backend).load()

    assert len(widgets) == 8
    time_widget = widgets[-1]
    assert time_widget.kind is WidgetKind.TIME
    assert time_widget.is_hidden is False
    assert time_widget.page == 1
    assert widgets[0].is_hidden is True


def test_empty_saved_list_yields_full_default_set():
    backend = MemorySettings({DEFAULT_STATE_KEY: "[]"})

    widgets = WidgetStateStore(backend).load()

    assert len(widgets) == 8
    assert {w.kind for w in widgets} == set(WidgetKind)


def test_corrupt_blob_falls_back_to_defaults():
    backend = MemorySettings({DEFAULT_STATE_KEY: "{oops"})

    widgets = WidgetStateStore(backend).load()

    assert len(widgets) == 8
    assert decode_widgets(backend.values[DEFAULT_STATE_KEY]) == widgets


def test_load_reapplies_constraints_and_page_floor():
    saved = [
        _record("guides", size="small"),
        _record("stats", size="large"),
        _record("time", size="tall"),
        _record("deviceStats", size="wide"),
        _record("portalVersion", size="large", page=-3),
    ]
    backend = MemorySettings({DEFAULT_STATE_KEY: json.dumps(saved)})

    widgets = WidgetStateStore(backend).load()
    by_kind = {w.kind: w for w in widgets}

    assert by_kind[WidgetKind.GUIDES].size is WidgetSize.WIDE
    assert by_kind[WidgetKind.PORTAL_VERSION].size is WidgetSize.WIDE
    assert by_kind[WidgetKind.PORTAL_VERSION].page == 0
    for kind in LOCKED_KINDS:
        assert by_kind[kind].size is WidgetSize.SMALL
    assert _saved(backend)[1]["size"] == "small"


def test_legacy_records_migrate_on_load():
    saved = [{"id": "old-1", "kind": "recent", "title": "Recent", "isBig": True}]
    backend = MemorySettings({DEFAULT_STATE_KEY: json.dumps(saved)})

    widgets = WidgetStateStore(backend).load()

    assert widgets[0].size is WidgetSize.LARGE
    assert "isBig" not in _saved(backend)[0]
    assert _saved(backend)[0]["size"] == "large"


def test_duplicate_kinds_keep_first():
    merged = merge_with_defaults(decode_widgets(json.dumps([_record("recent", page=0), _record("recent", page=2)])) or [])

    recents = [w for w in merged if w.kind is WidgetKind.RECENT]
    assert len(recents) == 1
    assert recents[0].page == 0
    assert len(merged) == 8


def test_subscribers_receive_snapshots_and_can_unsubscribe():
    store = WidgetStateStore(MemorySettings())
    seen = []
    unsubscribe = store.subscribe(lambda widgets: seen.append(len(widgets)))

    store.load()
    store.widgets[0].is_hidden = True
    store.save()
    unsubscribe()
    store.save()
    unsubscribe()

    assert seen == [8, 8]


def test_failing_listener_does_not_block_others(caplog):
    caplog.set_level(logging.ERROR)
    store = WidgetStateStore(MemorySettings(), logger=logging.getLogger("test-store-listeners"))
    calls = []

    def _boom(_widgets):
        raise RuntimeError("render failed")

    store.subscribe(_boom)
    store.subscribe(lambda widgets: calls.append(widgets))
    store.load()

    assert len(calls) == 1
    assert any("listener" in record.getMessage() for record in caplog.records)


def test_listener_snapshot_is_detached():
    store = WidgetStateStore(MemorySettings())
    snapshots = []
    store.subscribe(snapshots.append)
    store.load()

    snapshots[0][0].title = "Changed"

    assert store.widgets[0].title == "Guides"


def test_failed_write_keeps_memory_state():
    store = WidgetStateStore(FailingSettings())

    widgets = store.load()
    widgets[1].page = 3

    assert store.save() is False
    assert store.widgets[1].page == 3


def test_replace_swaps_list_and_persists():
    backend = MemorySettings()
    store = WidgetStateStore(backend)
    widgets = store.load()

    store.replace(list(reversed(widgets)))

    assert [entry["kind"] for entry in _saved(backend)][0] == "time"
