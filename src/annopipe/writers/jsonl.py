from __future__ import annotations
import os, json
from typing import IO, Iterable, List, Optional
from .base import DocumentWriter
from ..pipeline.context import Annotation, Document

class JSONLWriter(DocumentWriter):
    name = "jsonl"

    def __init__(self, path: str, annotation_kinds: Iterable[str] = (), include_text: bool = True):
        super().__init__(annotation_kinds)
        self.path = path
        self.include_text = include_text
        self._f: Optional[IO[str]] = None
        self._closed = False

    def _open(self) -> IO[str]:
        if self._f is None:
            parent = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(parent, exist_ok=True)
            self._f = open(self.path, "w", encoding="utf-8")
        return self._f

    def _write(self, doc: Document, annotations: List[Annotation]) -> None:
        record = {
            "doc_id": doc.id_hex,
            "source": doc.source,
            "source_file": doc.source_file,
            "language": doc.language,
            "annotations": [
                {
                    "kind": a.kind,
                    "begin": a.begin,
                    "end": a.end,
                    "text": doc.covered_text(a),
                    "value": list(a.value) if isinstance(a.value, tuple) else a.value,
                    "producer": a.producer,
                }
                for a in annotations
            ],
        }
        if self.include_text:
            record["text"] = doc.text
        self._open().write(json.dumps(record, ensure_ascii=False) + "\n")

    def close(self) -> Optional[str]:
        if self._closed:
            return self.path
        # an empty run still leaves an (empty) output file behind
        self._open().close()
        self._f = None
        self._closed = True
        return self.path
