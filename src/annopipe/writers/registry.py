"""Writer registry.

Writers are stateful (open files, buffered rows), so the registry maps a kind
to a factory and every pipeline run gets fresh writer instances.

Add new writers without changing pipeline code with register_writer().
"""

from __future__ import annotations
from typing import IO, Callable, Dict, List, Optional

from ..config.schema import OutputSpec
from ..errors import ConfigurationError
from .base import DocumentWriter
from .console import ConsoleWriter
from .jsonl import JSONLWriter
from .parquet import ParquetWriter

WriterFactory = Callable[[OutputSpec], DocumentWriter]

def _require_path(spec: OutputSpec) -> str:
    if not spec.path:
        raise ConfigurationError(f"{spec.kind} output requires 'path'")
    return spec.path

_WRITERS: Dict[str, WriterFactory] = {
    "console": lambda spec: ConsoleWriter(spec.annotation_kinds),
    "jsonl": lambda spec: JSONLWriter(
        _require_path(spec), spec.annotation_kinds,
        include_text=bool(spec.options.get("include_text", True)),
    ),
    "parquet": lambda spec: ParquetWriter(
        _require_path(spec), spec.annotation_kinds,
        include_covered_text=bool(spec.options.get("include_covered_text", True)),
    ),
}

def register_writer(kind: str, factory: WriterFactory) -> None:
    """Register a new writer dynamically."""
    if kind in _WRITERS:
        raise ValueError(f"Writer '{kind}' already registered")
    _WRITERS[kind] = factory

def list_writers() -> List[str]:
    """List all registered writers."""
    return list(_WRITERS.keys())

def make_writer(spec: OutputSpec, *, stream: Optional[IO[str]] = None) -> DocumentWriter:
    """Create a writer for `spec`; `stream` redirects console output."""
    if spec.kind not in _WRITERS:
        raise ConfigurationError(
            f"Unknown writer: {spec.kind}. "
            f"Available: {list(_WRITERS)}. "
            f"Register with register_writer()"
        )
    if spec.kind == "console" and stream is not None:
        return ConsoleWriter(spec.annotation_kinds, stream=stream)
    return _WRITERS[spec.kind](spec)
