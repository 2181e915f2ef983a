"""Source registry.

A source is picked by the `kind` key of the `source` config section:

    source:
      kind: text_files
      dataset: "examples/texts/*"

Built-in kinds are text_files, json_document and local_jsonl. Plug in your
own with register_source(); built-in kinds cannot be shadowed.
"""

from __future__ import annotations
from typing import Callable, Dict

from ..config.schema import SourceSpec
from ..errors import ConfigurationError
from .base import DataSource
from .json_document import JSONDocumentSource
from .local_jsonl import LocalJSONLSource
from .text_files import TextFileSource

SourceFactory = Callable[[SourceSpec], DataSource]

_BUILTIN: Dict[str, SourceFactory] = {
    "text_files": TextFileSource,
    "json_document": JSONDocumentSource,
    "local_jsonl": LocalJSONLSource,
}

_PLUGINS: Dict[str, SourceFactory] = {}

def register_source(kind: str, factory: SourceFactory) -> None:
    """Make `kind` available to pipeline configs; `factory(spec)` builds the source."""
    if kind in _BUILTIN:
        raise ValueError(f"Source kind '{kind}' is built in; pick another name")
    _PLUGINS[kind] = factory

def unregister_source(kind: str) -> None:
    _PLUGINS.pop(kind, None)

def list_sources() -> Dict[str, str]:
    """Map every known kind to 'static' (built in) or 'dynamic' (registered)."""
    out = dict.fromkeys(_BUILTIN, "static")
    out.update(dict.fromkeys(_PLUGINS, "dynamic"))
    return out

def make_source(spec: SourceSpec) -> DataSource:
    factory = _BUILTIN.get(spec.kind) or _PLUGINS.get(spec.kind)
    if factory is None:
        raise ConfigurationError(
            f"Unknown source kind: {spec.kind}. Available: {sorted(list_sources())}"
        )
    return factory(spec)
