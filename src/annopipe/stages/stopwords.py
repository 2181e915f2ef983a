"""Stop-word marking stage.

The stop-word list is a UTF-8 text file, one word per line; blank lines and
lines starting with `#` are ignored. Without a `model_location` option the
bundled English list is used.

Tokens are never removed: each stop word gets a `stopword` annotation over
the token span, and consumers (e.g. the topic inferencer) skip tokens covered
by one.
"""

from __future__ import annotations
from importlib import resources
from typing import Any, FrozenSet, Mapping, Optional
import logging
import os

from ..errors import ConfigurationError
from ..pipeline.context import STOPWORD, TOKEN, Annotation, Document
from .base import Stage

log = logging.getLogger("annopipe.stages.stopwords")

DEFAULT_STOPWORDS = "stopwords_en.txt"


def default_stopword_location() -> str:
    return str(resources.files("annopipe.stages").joinpath("resources", DEFAULT_STOPWORDS))


def load_stopwords(path: str, *, case_sensitive: bool = False) -> FrozenSet[str]:
    if not os.path.isfile(path):
        raise ConfigurationError(f"stop-word list not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            words = {
                line.strip() for line in f
                if line.strip() and not line.lstrip().startswith("#")
            }
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read stop-word list {path}: {e}") from e
    if not words:
        raise ConfigurationError(f"stop-word list is empty: {path}")
    if not case_sensitive:
        words = {w.lower() for w in words}
    return frozenset(words)


class StopWordRemover(Stage):
    name = "stopword_remover"
    layer = "filtering"
    requires = (TOKEN,)
    produces = (STOPWORD,)

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        super().__init__(options)
        self.case_sensitive = bool(self._option("case_sensitive", False, types=(bool,)))
        self.model_location = self._option("model_location", None, types=(str, os.PathLike)) \
            or default_stopword_location()
        self.stopwords = load_stopwords(str(self.model_location), case_sensitive=self.case_sensitive)
        log.debug(f"Loaded {len(self.stopwords)} stop words from {self.model_location}")

    def is_stopword(self, word: str) -> bool:
        return (word if self.case_sensitive else word.lower()) in self.stopwords

    def apply(self, doc: Document) -> Document:
        self._check_requires(doc)
        marks = [
            Annotation(STOPWORD, tok.begin, tok.end, doc.covered_text(tok), self.name)
            for tok in doc.select(TOKEN)
            if self.is_stopword(doc.covered_text(tok))
        ]
        return doc.with_annotations(marks)
