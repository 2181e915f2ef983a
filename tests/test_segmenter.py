from __future__ import annotations

import pytest

from annopipe.errors import ConfigurationError, StageError
from annopipe.pipeline.context import SENTENCE, TOKEN, Document
from annopipe.stages.segmenter import Segmenter, sentence_tokens

TEXT = ('The quick brown fox jumped over the lazy dog.  '
        'This is only a test.')


def test_segmenter():
    doc = Segmenter().apply(Document.create(TEXT, 'en'))
    sentences = doc.select(SENTENCE)
    assert [(s.begin, s.end) for s in sentences] == [(0, 45), (47, 67)]

    by_sentence = sentence_tokens(doc)
    first = by_sentence[sentences[0]]
    assert [t.value for t in first] == \
        ['The', 'quick', 'brown', 'fox', 'jumped', 'over', 'the', 'lazy', 'dog', '.']
    assert [t.begin for t in first] == [0, 4, 10, 16, 20, 27, 32, 36, 41, 44]
    assert all(doc.covered_text(t) == t.value for t in doc.select(TOKEN))
    assert [t.value for t in by_sentence[sentences[1]]] == ['This', 'is', 'only', 'a', 'test', '.']


def test_segmenter_whitespace_tokens():
    doc = Segmenter({'word_tokenizer': 'whitespace'}).apply(Document.create(TEXT, 'en'))
    assert [t.value for t in doc.select(TOKEN)][-3:] == ['only', 'a', 'test.']


def test_segmenter_sentences_come_before_their_tokens():
    doc = Segmenter().apply(Document.create(TEXT, 'en'))
    kinds = [a.kind for a in doc.annotations]
    assert kinds[0] == SENTENCE
    assert kinds.index(SENTENCE, 1) == 11


def test_segmenter_empty_text():
    doc = Document.create('', 'en')
    assert Segmenter().apply(doc) is doc


def test_segmenter_unknown_tokenizer():
    with pytest.raises(ConfigurationError):
        Segmenter({'word_tokenizer': 'nope'})


def test_segmenter_language_restriction():
    seg = Segmenter({'language': 'en'})
    seg.apply(Document.create('Hello.', 'en-GB'))
    with pytest.raises(StageError):
        seg.apply(Document.create('Hallo.', 'de'))
