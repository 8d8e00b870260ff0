"""Settings for the JSON reader."""

from json_reader.core.config.settings import ReaderSettings, load_settings

__all__ = [
    "ReaderSettings",
    "load_settings",
]
