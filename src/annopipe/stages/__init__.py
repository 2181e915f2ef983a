"""Annotator stages.

Built-in stages: segmenter, stopword_remover, ner, parser, topic_inferencer.
Use `annopipe.stages.registry.make_stages` to build them from StageSpecs or
`register_stage` to plug in your own.
"""

from .base import Stage

__all__ = ["Stage"]
