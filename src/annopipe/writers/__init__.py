"""Terminal consumers: console printer, JSONL and Parquet files."""

from .base import DocumentWriter
from .registry import list_writers, make_writer, register_writer

__all__ = ["DocumentWriter", "list_writers", "make_writer", "register_writer"]
