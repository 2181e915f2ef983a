"""Named-entity recognition with nltk's `ne_chunk`.

Each recognized entity becomes a `named_entity` annotation spanning its tokens,
with the entity type (PERSON, GPE, ORGANIZATION, ...) as value; with the
`binary` option every entity is labelled NE.

Needs the nltk tagger and chunker data packages; their absence is reported at
construction.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import nltk

from ..pipeline.context import NAMED_ENTITY, SENTENCE, TOKEN, Annotation, Document
from .base import Stage
from .tagging import probe, span_of, subtree_spans, tagged_sentences

class NamedEntityRecognizer(Stage):
    name = "ner"
    layer = "enrichment"
    requires = (SENTENCE, TOKEN)
    produces = (NAMED_ENTITY,)

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        super().__init__(options)
        self.binary = bool(self._option("binary", False, types=(bool,)))
        self.languages = self._languages(["en"])
        probe(self.name, lambda: nltk.ne_chunk(nltk.pos_tag(["Probe"]), binary=self.binary))

    def apply(self, doc: Document) -> Document:
        self._check_language(doc, self.languages)
        self._check_requires(doc)
        anns: List[Annotation] = []
        for _sent, toks, tagged in tagged_sentences(doc):
            tree = nltk.ne_chunk(tagged, binary=self.binary)
            spans = [(label,) + span_of(toks, first, last) for label, first, last in subtree_spans(tree)]
            for label, begin, end in merge_adjacent(doc.text, spans):
                anns.append(Annotation(NAMED_ENTITY, begin, end, label, self.name))
        return doc.with_annotations(anns)


def merge_adjacent(text: str, spans: Sequence[Tuple[str, int, int]]) -> List[Tuple[str, int, int]]:
    """Join neighbouring entity spans with the same label.

    The maxent chunker often splits a multi-word name into one chunk per
    word, e.g. (PERSON Barack) (PERSON Obama); spans separated only by
    whitespace are one entity.
    """
    merged: List[Tuple[str, int, int]] = []
    for label, begin, end in spans:
        if merged:
            prev_label, prev_begin, prev_end = merged[-1]
            if prev_label == label and prev_end <= begin and not text[prev_end:begin].strip():
                merged[-1] = (label, prev_begin, end)
                continue
        merged.append((label, begin, end))
    return merged
