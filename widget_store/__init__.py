from .preferences import DeckPreferences
from .settings_backend import DEFAULT_STATE_KEY, JsonFileSettings, MemorySettings, QtSettings, SettingsBackend
from .widget_codec import decode_record, decode_widgets, encode_record, encode_widgets
from .widget_store import WidgetStateStore, merge_with_defaults

__all__ = [
    "DeckPreferences",
    "DEFAULT_STATE_KEY",
    "JsonFileSettings",
    "MemorySettings",
    "QtSettings",
    "SettingsBackend",
    "decode_record",
    "decode_widgets",
    "encode_record",
    "encode_widgets",
    "WidgetStateStore",
    "merge_with_defaults",
]
