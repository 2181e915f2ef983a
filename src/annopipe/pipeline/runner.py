"""Pipeline runner.

Drives documents through a fixed, ordered list of stages:
- strictly sequential: one document is drained through every stage before the
  next document is read from the source
- fail-fast: the first stage failure aborts the remaining stages for that
  document and surfaces as StageExecutionError
- no reordering, no skipping, no retries

The runner also guards the append-only contract: a stage that drops or
reorders earlier annotations, or changes the text or language, is treated as a
failed stage.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Sequence
import logging
import time

from ..errors import ConfigurationError, StageExecutionError
from ..pipeline.context import Document

log = logging.getLogger("annopipe.runner")

class PipelineRunner:
    def __init__(self, stages: Sequence, *, check_dependencies: bool = True):
        self.stages: List = list(stages)
        if check_dependencies:
            self._check_stage_order()

    def _check_stage_order(self) -> None:
        owners: Dict[str, str] = {}
        for idx, st in enumerate(self.stages):
            name = getattr(st, "name", type(st).__name__)
            for kind in getattr(st, "requires", ()):
                if kind not in owners:
                    raise ConfigurationError(
                        f"stage #{idx} ({name}) requires '{kind}' annotations "
                        f"but no earlier stage produces them"
                    )
            for kind in getattr(st, "produces", ()):
                if kind in owners:
                    raise ConfigurationError(
                        f"stage #{idx} ({name}) produces '{kind}', already owned by stage {owners[kind]}"
                    )
                owners[kind] = name

    @property
    def stage_names(self) -> List[str]:
        return [getattr(st, "name", type(st).__name__) for st in self.stages]

    def run_one(self, document: Document) -> Document:
        doc = document
        for idx, st in enumerate(self.stages):
            name = getattr(st, "name", type(st).__name__)
            t0 = time.perf_counter()
            try:
                out = st.apply(doc)
            except Exception as e:
                raise StageExecutionError(
                    f"{type(e).__name__}: {e}",
                    stage_index=idx, stage_name=name, doc_id=doc.id_hex, document=doc,
                ) from e
            problem = _contract_violation(doc, out)
            if problem:
                raise StageExecutionError(
                    problem, stage_index=idx, stage_name=name, doc_id=doc.id_hex, document=doc,
                )
            log.debug(
                f"stage={name} doc={doc.id_hex[:12]} "
                f"added={len(out.annotations) - len(doc.annotations)} "
                f"elapsed_ms={(time.perf_counter() - t0) * 1000:.1f}"
            )
            doc = out
        return doc

    def run_all(self, source) -> Iterator[Document]:
        """Lazily annotate every document yielded by `source`.

        `source` is either a DataSource (its `documents()` is iterated) or any
        iterable of Documents. Restarting means calling this again, which
        only works if the source itself can be re-read.
        """
        docs: Iterable[Document] = source.documents() if hasattr(source, "documents") else source
        for doc in docs:
            yield self.run_one(doc)

    def close(self) -> None:
        for st in self.stages:
            close = getattr(st, "close", None)
            if close is not None:
                close()


def _contract_violation(before: Document, after) -> str:
    if not isinstance(after, Document):
        return f"stage returned {type(after).__name__} instead of a Document"
    if after.text != before.text or after.language != before.language:
        return "stage changed document text or language"
    n = len(before.annotations)
    if len(after.annotations) < n or after.annotations[:n] != before.annotations:
        return "stage removed or reordered existing annotations"
    return ""
