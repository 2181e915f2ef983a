"""Output writers (terminal consumers).

A writer receives each fully annotated Document after the last stage and
writes out the annotations of the kinds it was asked for. Writing is a pure
side effect: nothing flows back into the pipeline. A requested kind that no
stage produced simply contributes nothing for that document.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Tuple

from ..pipeline.context import Annotation, Document

class DocumentWriter(ABC):
    name: str = "writer"

    def __init__(self, annotation_kinds: Iterable[str] = ()):
        self.annotation_kinds: Tuple[str, ...] = tuple(annotation_kinds)
        self.written_docs = 0
        self.written_annotations = 0

    def selected(self, doc: Document) -> List[Annotation]:
        """Requested annotations in document order; all of them when no kinds were requested."""
        if not self.annotation_kinds:
            return list(doc.annotations)
        wanted = set(self.annotation_kinds)
        return [a for a in doc.annotations if a.kind in wanted]

    def write(self, doc: Document) -> None:
        anns = self.selected(doc)
        self._write(doc, anns)
        self.written_docs += 1
        self.written_annotations += len(anns)

    @abstractmethod
    def _write(self, doc: Document, annotations: List[Annotation]) -> None:
        raise NotImplementedError

    def close(self) -> Optional[str]:
        """Flush and release; returns the output path for file writers."""
        return None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, tuple) and value and all(isinstance(v, float) for v in value):
        return "[" + ", ".join(f"{v:.4f}" for v in value) + "]"
    if isinstance(value, tuple):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)
