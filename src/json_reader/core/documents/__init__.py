"""JSON document loading with an mtime-validated cache."""

from json_reader.core.documents.loader import DocumentCache, resolve_path

__all__ = [
    "DocumentCache",
    "resolve_path",
]
