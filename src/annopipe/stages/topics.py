"""Topic inference stage.

Infers the topic proportions of each document under a previously estimated
LDA model (see `annopipe lda-estimate`). The stage adds two document-wide
annotations:
- `topic_distribution`: tuple of per-topic weights, one entry per topic
- `topic_assignment`: indices of the strongest topics, descending by weight,
  at most `max_topic_assignments`, each with weight >= `min_topic_prob`

Only content tokens feed the model: tokens not marked as stop words, with at
least one alphanumeric character and at least `min_token_length` characters.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Optional
import os

from ..errors import ConfigurationError
from ..pipeline.context import (
    STOPWORD, TOKEN, TOPIC_ASSIGNMENT, TOPIC_DISTRIBUTION, Annotation, Document,
)
from ..topics.model import TopicModel
from .base import Stage


def content_tokens(doc: Document, *, min_token_length: int = 1, lowercase: bool = True) -> List[str]:
    stop_spans = {(a.begin, a.end) for a in doc.select(STOPWORD)}
    out = []
    for tok in doc.select(TOKEN):
        if (tok.begin, tok.end) in stop_spans:
            continue
        word = doc.covered_text(tok)
        if len(word) < min_token_length or not any(c.isalnum() for c in word):
            continue
        out.append(word.lower() if lowercase else word)
    return out


class TopicInferencer(Stage):
    name = "topic_inferencer"
    layer = "enrichment"
    requires = (TOKEN,)
    produces = (TOPIC_DISTRIBUTION, TOPIC_ASSIGNMENT)

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        super().__init__(options)
        location = self._option("model_location", types=(str, os.PathLike))
        if not location:
            raise ConfigurationError("topic_inferencer: option 'model_location' is required")
        self.min_token_length = int(self._option("min_token_length", 3, types=(int,)))
        self.lowercase = bool(self._option("lowercase", True, types=(bool,)))
        self.max_topic_assignments = int(self._option("max_topic_assignments", 3, types=(int,)))
        self.min_topic_prob = float(self._option("min_topic_prob", 0.2, types=(int, float)))
        if self.min_token_length < 1 or self.max_topic_assignments < 0:
            raise ConfigurationError(
                "topic_inferencer: min_token_length must be >= 1 and max_topic_assignments >= 0"
            )
        self.model = TopicModel.load(str(location))

    @property
    def n_topics(self) -> int:
        return self.model.n_topics

    def apply(self, doc: Document) -> Document:
        self._check_requires(doc)
        tokens = content_tokens(doc, min_token_length=self.min_token_length, lowercase=self.lowercase)
        weights = self.model.infer(tokens)
        ranked = sorted(range(len(weights)), key=lambda i: (-weights[i], i))
        assigned = tuple(i for i in ranked if weights[i] >= self.min_topic_prob)[: self.max_topic_assignments]
        end = len(doc.text)
        return doc.with_annotations([
            Annotation(TOPIC_DISTRIBUTION, 0, end, tuple(float(w) for w in weights), self.name),
            Annotation(TOPIC_ASSIGNMENT, 0, end, assigned, self.name),
        ])
