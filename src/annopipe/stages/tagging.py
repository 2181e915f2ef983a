"""Shared nltk part-of-speech helpers for the ner and parser stages.

nltk loads its tagger and chunker models lazily from downloaded data
packages and raises LookupError when they are missing. `probe` runs a tiny
input through a callable at stage construction so missing data becomes a
ConfigurationError up front instead of a failure on the first document.
"""

from __future__ import annotations
from typing import Callable, Iterator, List, Sequence, Tuple

import nltk
from nltk.tree import Tree

from ..errors import ConfigurationError
from ..pipeline.context import Annotation, Document
from .segmenter import sentence_tokens


def probe(stage_name: str, fn: Callable[[], object]) -> None:
    try:
        fn()
    except LookupError as e:
        raise ConfigurationError(
            f"{stage_name}: required nltk data is not installed "
            f"(see https://www.nltk.org/data.html): {e}"
        ) from e


def tagged_sentences(doc: Document) -> Iterator[Tuple[Annotation, List[Annotation], List[Tuple[str, str]]]]:
    """Yield (sentence, tokens, [(word, tag), ...]) for every non-empty sentence."""
    for sent, toks in sentence_tokens(doc).items():
        if not toks:
            continue
        words = [doc.covered_text(t) for t in toks]
        yield sent, toks, nltk.pos_tag(words)


def subtree_spans(tree: Tree) -> Iterator[Tuple[str, int, int]]:
    """Yield (label, first_leaf, last_leaf) for every subtree below the root.

    Leaf indices count the (word, tag) leaves left to right, so they line up
    with the token list the tree was built from.
    """
    def walk(node: Tree, start: int) -> Iterator[Tuple[str, int, int]]:
        pos = start
        for child in node:
            if isinstance(child, Tree):
                n = len(child.leaves())
                yield child.label(), pos, pos + n - 1
                yield from walk(child, pos)
                pos += n
            else:
                pos += 1
    yield from walk(tree, 0)


def flat_tree(tree: Tree) -> str:
    return " ".join(str(tree).split())


def span_of(tokens: Sequence[Annotation], first: int, last: int) -> Tuple[int, int]:
    return tokens[first].begin, tokens[last].end
