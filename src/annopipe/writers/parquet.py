"""Parquet annotation writer.

One row per requested annotation. Vector payloads (topic distributions) go to
the `weights` list column so they stay numeric; every other payload is
rendered into the `value` string column.

Rows are buffered and written once on close(), zstd-compressed.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import os

import pyarrow as pa
import pyarrow.parquet as pq

from ..pipeline.context import Annotation, Document
from .base import DocumentWriter, format_value

def annotations_schema() -> pa.Schema:
    return pa.schema([
        ("doc_id", pa.binary(32)),
        ("source", pa.string()),
        ("source_file", pa.string()),
        ("language", pa.string()),
        ("kind", pa.string()),
        ("begin", pa.int64()),
        ("end", pa.int64()),
        ("covered_text", pa.string()),
        ("value", pa.string()),
        ("weights", pa.list_(pa.float64())),
        ("producer", pa.string()),
    ], metadata={"schema_version": "annotations_v1"})

def _is_vector(value: Any) -> bool:
    return isinstance(value, tuple) and bool(value) and all(isinstance(v, float) for v in value)

class ParquetWriter(DocumentWriter):
    name = "parquet"

    def __init__(self, path: str, annotation_kinds: Iterable[str] = (), include_covered_text: bool = True):
        super().__init__(annotation_kinds)
        self.path = path
        self.include_covered_text = include_covered_text
        self._rows: List[Dict[str, Any]] = []
        self._closed = False

    def _write(self, doc: Document, annotations: List[Annotation]) -> None:
        for a in annotations:
            vector = _is_vector(a.value)
            self._rows.append({
                "doc_id": doc.doc_id,
                "source": doc.source,
                "source_file": doc.source_file,
                "language": doc.language,
                "kind": a.kind,
                "begin": a.begin,
                "end": a.end,
                "covered_text": doc.covered_text(a) if self.include_covered_text else None,
                "value": None if vector else format_value(a.value),
                "weights": list(a.value) if vector else None,
                "producer": a.producer,
            })

    def close(self) -> Optional[str]:
        if self._closed:
            return self.path
        parent = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(parent, exist_ok=True)
        table = pa.Table.from_pylist(self._rows, schema=annotations_schema())
        pq.write_table(table, self.path, compression="zstd")
        self._rows.clear()
        self._closed = True
        return self.path
