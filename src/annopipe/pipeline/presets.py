"""Ready-made pipeline configurations.

- lda_inference_config: segmenter -> stop-word marking -> topic inference
- np_ne_config: segmenter -> named entities -> POS tags and noun phrases

Both read `examples/texts/*` in English unless told otherwise.
"""

from __future__ import annotations
from typing import Optional, Sequence
import sys

from ..config.schema import OutputSpec, PipelineConfig, RunSpec, SourceSpec, StageSpec
from ..pipeline.context import (
    NAMED_ENTITY, NOUN_PHRASE, TOPIC_ASSIGNMENT, TOPIC_DISTRIBUTION, normalize_language,
)

DEFAULT_SOURCE = "examples/texts/*"
DEFAULT_LANGUAGE = "en"
DEFAULT_MODEL_LOCATION = "target/model.joblib"


def source_spec_from_argument(arg: Optional[str], language: str = DEFAULT_LANGUAGE) -> SourceSpec:
    """Map the optional SOURCE command-line argument to a SourceSpec.

    `-` reads one JSON document from stdin, an argument starting with `{` is
    an inline JSON document, anything else is a path or glob of text files.
    """
    language = normalize_language(language)
    if arg is None:
        return SourceSpec(kind="text_files", dataset=DEFAULT_SOURCE, language=language)
    if arg == "-":
        return SourceSpec(kind="json_document", name="stdin", payload=sys.stdin.read(), language=language)
    if arg.lstrip().startswith("{"):
        return SourceSpec(kind="json_document", payload=arg, language=language)
    return SourceSpec(kind="text_files", dataset=arg, language=language)


def lda_inference_config(
    source: Optional[SourceSpec] = None,
    *,
    model_location: str = DEFAULT_MODEL_LOCATION,
    stopword_location: Optional[str] = None,
    language: str = DEFAULT_LANGUAGE,
    outputs: Optional[Sequence[OutputSpec]] = None,
    run: Optional[RunSpec] = None,
) -> PipelineConfig:
    stop_opts = {"model_location": stopword_location} if stopword_location else {}
    return PipelineConfig(
        source=source or source_spec_from_argument(None, language),
        stages=(
            StageSpec("segmenter"),
            StageSpec("stopword_remover", stop_opts),
            StageSpec("topic_inferencer", {"model_location": model_location}),
        ),
        outputs=tuple(outputs) if outputs is not None else (
            OutputSpec("console", (TOPIC_DISTRIBUTION, TOPIC_ASSIGNMENT)),
        ),
        run=run or RunSpec(),
    )


def np_ne_config(
    source: Optional[SourceSpec] = None,
    *,
    language: str = DEFAULT_LANGUAGE,
    outputs: Optional[Sequence[OutputSpec]] = None,
    run: Optional[RunSpec] = None,
) -> PipelineConfig:
    return PipelineConfig(
        source=source or source_spec_from_argument(None, language),
        stages=(
            StageSpec("segmenter"),
            StageSpec("ner"),
            StageSpec("parser"),
        ),
        outputs=tuple(outputs) if outputs is not None else (
            OutputSpec("console", (NAMED_ENTITY, NOUN_PHRASE)),
        ),
        run=run or RunSpec(),
    )
