"""Document sources: text files, a single JSON document, JSON lines."""

from .base import DataSource, RawDocument
from .registry import list_sources, make_source, register_source, unregister_source

__all__ = [
    "DataSource",
    "RawDocument",
    "list_sources",
    "make_source",
    "register_source",
    "unregister_source",
]
