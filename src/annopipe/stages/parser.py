"""Shallow constituency parsing with nltk's RegexpParser.

For every sentence the stage emits:
- one `pos` annotation per token (Penn Treebank tag as value)
- one `noun_phrase` annotation per NP constituent
- one `parse_tree` annotation with the bracketed tree as value

The chunk grammar can be replaced with the `grammar` option; any constituent
labelled NP counts as a noun phrase.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Optional

import nltk
from nltk.chunk import RegexpParser

from ..errors import ConfigurationError
from ..pipeline.context import NOUN_PHRASE, PARSE_TREE, POS, SENTENCE, TOKEN, Annotation, Document
from .base import Stage
from .tagging import flat_tree, probe, span_of, subtree_spans, tagged_sentences

DEFAULT_GRAMMAR = r"""
NP: {<DT|PRP\$|CD>?<JJ.*|VBN|VBG>*<NN.*>+}
    {<PRP>}
PP: {<IN><NP>}
"""

class Parser(Stage):
    name = "parser"
    layer = "enrichment"
    requires = (SENTENCE, TOKEN)
    produces = (POS, NOUN_PHRASE, PARSE_TREE)

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        super().__init__(options)
        grammar = self._option("grammar", DEFAULT_GRAMMAR, types=(str,))
        try:
            self.chunker = RegexpParser(grammar)
        except ValueError as e:
            raise ConfigurationError(f"parser: invalid grammar: {e}") from e
        self.languages = self._languages(["en"])
        probe(self.name, lambda: nltk.pos_tag(["Probe"]))

    def apply(self, doc: Document) -> Document:
        self._check_language(doc, self.languages)
        self._check_requires(doc)
        anns: List[Annotation] = []
        for sent, toks, tagged in tagged_sentences(doc):
            for tok, (_word, tag) in zip(toks, tagged):
                anns.append(Annotation(POS, tok.begin, tok.end, tag, self.name))
            tree = self.chunker.parse(tagged)
            for label, first, last in subtree_spans(tree):
                if label == "NP":
                    begin, end = span_of(toks, first, last)
                    anns.append(Annotation(NOUN_PHRASE, begin, end, label, self.name))
            anns.append(Annotation(PARSE_TREE, sent.begin, sent.end, flat_tree(tree), self.name))
        return doc.with_annotations(anns)
