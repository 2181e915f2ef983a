"""Document model and the sequential stage runner."""

from .context import Annotation, Document
from .runner import PipelineRunner

__all__ = ["Annotation", "Document", "PipelineRunner"]
