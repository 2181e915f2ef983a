"""Console writer.

One tab-separated line per requested annotation:

    <doc label>  <kind>  <begin>-<end>  <covered text>  <value>

Document-wide annotations (topic distributions) omit the covered text, which
would be the whole document.
"""

from __future__ import annotations
from typing import IO, Iterable, List, Optional
import sys

from ..pipeline.context import Annotation, Document
from .base import DocumentWriter, format_value

class ConsoleWriter(DocumentWriter):
    name = "console"

    def __init__(self, annotation_kinds: Iterable[str] = (), stream: Optional[IO[str]] = None):
        super().__init__(annotation_kinds)
        self._stream = stream

    @property
    def stream(self) -> IO[str]:
        # resolved late so pytest's capsys and redirected stdout are honored
        return self._stream if self._stream is not None else sys.stdout

    def _write(self, doc: Document, annotations: List[Annotation]) -> None:
        whole = (0, len(doc.text))
        for a in annotations:
            covered = "" if (a.begin, a.end) == whole else doc.covered_text(a)
            covered = " ".join(covered.split())
            print(
                f"{doc.label}\t{a.kind}\t{a.begin}-{a.end}\t{covered}\t{format_value(a.value)}",
                file=self.stream,
            )

    def close(self) -> Optional[str]:
        self.stream.flush()
        return None
