"""Sentence and token segmentation using nltk.

Sentences come from an untrained PunktSentenceTokenizer and tokens from one of
nltk's span-aware word tokenizers, so the stage needs no downloaded model
data. Token offsets are character offsets into the document text.
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional

from nltk.tokenize import TreebankWordTokenizer, WhitespaceTokenizer, WordPunctTokenizer
from nltk.tokenize.punkt import PunktSentenceTokenizer

from ..errors import ConfigurationError
from ..pipeline.context import SENTENCE, TOKEN, Annotation, Document, normalize_language
from .base import Stage

_WORD_TOKENIZERS = {
    "wordpunct": WordPunctTokenizer,
    "whitespace": WhitespaceTokenizer,
    "treebank": TreebankWordTokenizer,
}

class Segmenter(Stage):
    name = "segmenter"
    layer = "segmentation"
    produces = (SENTENCE, TOKEN)

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        super().__init__(options)
        kind = self._option("word_tokenizer", "wordpunct", types=(str,))
        if kind not in _WORD_TOKENIZERS:
            raise ConfigurationError(
                f"segmenter: unknown word_tokenizer {kind!r}; available: {sorted(_WORD_TOKENIZERS)}"
            )
        lang = self._option("language")
        self.language = normalize_language(lang) if lang is not None else None
        self.sentence_tokenizer = PunktSentenceTokenizer()
        self.word_tokenizer = _WORD_TOKENIZERS[kind]()

    def apply(self, doc: Document) -> Document:
        if self.language is not None:
            self._check_language(doc, frozenset([self.language]))
        anns: List[Annotation] = []
        for s_begin, s_end in self.sentence_tokenizer.span_tokenize(doc.text):
            if s_end <= s_begin:
                continue
            anns.append(Annotation(SENTENCE, s_begin, s_end, None, self.name))
            sent = doc.text[s_begin:s_end]
            for t_begin, t_end in self.word_tokenizer.span_tokenize(sent):
                anns.append(Annotation(
                    TOKEN, s_begin + t_begin, s_begin + t_end,
                    sent[t_begin:t_end], self.name,
                ))
        return doc.with_annotations(anns)


def sentence_tokens(doc: Document) -> Dict[Annotation, List[Annotation]]:
    """Group token annotations by the sentence that covers them."""
    out: Dict[Annotation, List[Annotation]] = {}
    for sent in doc.select(SENTENCE):
        out[sent] = list(doc.covered(sent, TOKEN))
    return out
