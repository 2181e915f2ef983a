from __future__ import annotations
import dataclasses

import pytest

from annopipe.errors import ConfigurationError
from annopipe.pipeline.context import Annotation, Document, normalize_language


def test_create_assigns_stable_id():
    a = Document.create('The cat sat.', 'en')
    b = Document.create('The cat sat.', 'en')
    c = Document.create('The cat sat.', 'en', source_file='x.txt')
    assert a.doc_id == b.doc_id
    assert a.doc_id != c.doc_id
    assert len(a.doc_id) == 32
    assert a.annotations == ()


@pytest.mark.parametrize('tag,expected', [
    ('en', 'en'),
    ('EN', 'en'),
    ('en-US', 'en-US'),
    ('deu', 'deu'),
    (' fr ', 'fr'),
])
def test_normalize_language(tag, expected):
    assert normalize_language(tag) == expected


@pytest.mark.parametrize('tag', ['', 'e', 'english', 'en_US', None, 42, 'en-x'])
def test_normalize_language_rejects(tag):
    with pytest.raises(ConfigurationError):
        normalize_language(tag)


def test_create_rejects_bad_input():
    with pytest.raises(ConfigurationError):
        Document.create('text', 'not a tag')
    with pytest.raises(ConfigurationError):
        Document.create(b'bytes', 'en')


def test_with_annotations_appends_only():
    doc = Document.create('The cat sat.', 'en')
    first = Annotation('token', 0, 3, 'The')
    d1 = doc.with_annotations([first])
    d2 = d1.with_annotations([Annotation('token', 4, 7, 'cat')])
    assert doc.annotations == ()
    assert d1.annotations == (first,)
    assert d2.annotations[0] == first
    assert [d2.covered_text(a) for a in d2.select('token')] == ['The', 'cat']
    assert d2.kinds() == frozenset(['token'])


def test_with_annotations_empty_returns_same_document():
    doc = Document.create('The cat sat.', 'en')
    assert doc.with_annotations([]) is doc


def test_with_annotations_checks_offsets():
    doc = Document.create('abc', 'en')
    with pytest.raises(ValueError):
        doc.with_annotations([Annotation('token', 2, 10)])
    with pytest.raises(TypeError):
        doc.with_annotations([('token', 0, 1)])


def test_document_is_immutable():
    doc = Document.create('abc', 'en')
    with pytest.raises(dataclasses.FrozenInstanceError):
        doc.text = 'changed'


def test_covered():
    doc = Document.create('Hi there. Bye.', 'en').with_annotations([
        Annotation('sentence', 0, 9),
        Annotation('token', 0, 2), Annotation('token', 3, 8), Annotation('token', 8, 9),
        Annotation('sentence', 10, 14),
        Annotation('token', 10, 13), Annotation('token', 13, 14),
    ])
    first, second = doc.select('sentence')
    assert [doc.covered_text(t) for t in doc.covered(first, 'token')] == ['Hi', 'there', '.']
    assert [doc.covered_text(t) for t in doc.covered(second, 'token')] == ['Bye', '.']


def test_label():
    doc = Document.create('abc', 'en', source='demo')
    assert doc.label == 'demo:' + doc.id_hex[:12]
    assert Document.create('abc', 'en', source_file='a.txt').label == 'a.txt'
