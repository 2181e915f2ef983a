"""Exception hierarchy.

- ConfigurationError: bad/missing resource, option or language tag; raised
  while a pipeline is being built, before any document is processed.
- StageExecutionError: a stage failed on a specific document. Raised by the
  runner, it aborts the remaining stages for that document.
- StageError and subclasses: raised by stages themselves; the runner wraps
  them in StageExecutionError.

End of a document source is not an error: sources are plain generators.
"""

from __future__ import annotations
from typing import Any, Optional


class PipelineError(Exception):
    pass


class ConfigurationError(PipelineError):
    pass


class StageError(PipelineError):
    pass


class UnsupportedLanguageError(StageError):
    pass


class MalformedInputError(StageError):
    pass


class StageExecutionError(PipelineError):
    """A stage failed while processing a document.

    `document` is the partially annotated document as it was handed to the
    failing stage, so annotations of stages 0..stage_index-1 are visible.
    """

    def __init__(
        self,
        message: str,
        *,
        stage_index: int,
        stage_name: str,
        doc_id: Optional[str] = None,
        document: Any = None,
    ):
        super().__init__(message)
        self.stage_index = stage_index
        self.stage_name = stage_name
        self.doc_id = doc_id
        self.document = document

    def __str__(self) -> str:
        base = super().__str__()
        return f"stage #{self.stage_index} ({self.stage_name}) failed on doc {self.doc_id}: {base}"
