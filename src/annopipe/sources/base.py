"""Document source interface.

A source turns some external input (files, a JSON object) into Documents.
All sources expose a `documents()` generator; the end of the generator is the
normal end of the document sequence. Sources are not guaranteed to be
restartable: re-reading means constructing the source again.

Input validation that does not depend on a specific document (a malformed
single-document payload, a bad language tag) happens in the constructor, so it
surfaces as a ConfigurationError before any stage runs.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union
import glob
import os
from pathlib import Path

from ..config.schema import SourceSpec
from ..pipeline.context import Document

@dataclass
class RawDocument:
    raw_id: str
    text: str
    language: str
    source: str
    source_file: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_document(self) -> Document:
        return Document.create(
            self.text, self.language, source=self.source, source_file=self.source_file,
        )

class DataSource:
    """Base interface for all sources."""
    name: str
    spec: SourceSpec

    def metadata(self) -> Dict[str, Any]:
        return {}

    def stream(self) -> Iterable[RawDocument]:
        raise NotImplementedError

    def documents(self) -> Iterator[Document]:
        for raw in self.stream():
            yield raw.to_document()


def _has_magic(pattern: str) -> bool:
    return any(c in pattern for c in "*?[")

def resolve_files(dataset: Union[str, List[str], None], suffix: str = "") -> List[str]:
    """Resolve a dataset specification to a list of file paths.

    Supports:
    - Single file path (string)
    - List of paths/patterns
    - Directory path (every file below it, recursively)
    - Glob pattern, `**` matches across directories
    """
    if dataset is None:
        return []
    if isinstance(dataset, (list, tuple)):
        files: List[str] = []
        for item in dataset:
            files.extend(resolve_files(item, suffix))
        return files

    dataset = str(dataset)
    if _has_magic(dataset):
        matched = glob.glob(dataset, recursive=True)
        return sorted(f for f in matched if os.path.isfile(f) and f.endswith(suffix))

    path = Path(dataset)
    if path.is_dir():
        return sorted(str(f) for f in path.rglob("*") if f.is_file() and str(f).endswith(suffix))
    if path.is_file():
        return [str(path)]
    # missing path: nothing to read
    return []
