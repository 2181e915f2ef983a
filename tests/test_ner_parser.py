'''Named entities and noun phrases.

These stages need nltk's tagger and chunker data packages; the tests are
skipped when they are not installed.
'''
from __future__ import annotations

import pytest

from annopipe.errors import ConfigurationError, StageExecutionError, UnsupportedLanguageError
from annopipe.pipeline.context import NAMED_ENTITY, NOUN_PHRASE, PARSE_TREE, POS, TOKEN, Document
from annopipe.pipeline.runner import PipelineRunner
from annopipe.stages.ner import NamedEntityRecognizer, merge_adjacent
from annopipe.stages.parser import Parser
from annopipe.stages.segmenter import Segmenter
from annopipe.stages.tagging import subtree_spans

from conftest import nltk_stage

TEXT = 'Barack Obama visited Berlin.'


@pytest.fixture
def runner():
    return PipelineRunner([
        Segmenter(),
        nltk_stage(NamedEntityRecognizer),
        nltk_stage(Parser),
    ])


def test_barack_obama_visited_berlin(runner):
    doc = runner.run_one(Document.create(TEXT, 'en'))
    entities = [doc.covered_text(a) for a in doc.select(NAMED_ENTITY)]
    assert 'Barack Obama' in entities
    assert 'Berlin' in entities
    phrases = [doc.covered_text(a) for a in doc.select(NOUN_PHRASE)]
    assert 'Barack Obama' in phrases
    assert 'Berlin' in phrases
    assert len(doc.select(POS)) == len(doc.select(TOKEN))
    assert doc.select(PARSE_TREE)[0].value.startswith('(S ')


def test_binary_entities():
    stage = nltk_stage(NamedEntityRecognizer, {'binary': True})
    doc = PipelineRunner([Segmenter(), stage]).run_one(Document.create(TEXT, 'en'))
    assert doc.select(NAMED_ENTITY)
    assert set(a.value for a in doc.select(NAMED_ENTITY)) == set(['NE'])


def test_unsupported_language(runner):
    with pytest.raises(StageExecutionError) as excinfo:
        runner.run_one(Document.create('Barack Obama besuchte Berlin.', 'de'))
    assert excinfo.value.stage_name == 'ner'
    assert isinstance(excinfo.value.__cause__, UnsupportedLanguageError)
    # segmentation finished before the failure
    assert excinfo.value.document.select(TOKEN)


def test_bad_grammar():
    with pytest.raises(ConfigurationError):
        Parser({'grammar': 'NP: {<DT'})


def test_ner_requires_segmentation():
    with pytest.raises(ConfigurationError):
        PipelineRunner([nltk_stage(NamedEntityRecognizer)])


def test_subtree_spans_count_leaves():
    from nltk.tree import Tree
    tree = Tree('S', [('The', 'DT'),
                      Tree('NP', [('big', 'JJ'), ('dog', 'NN')]),
                      ('ran', 'VBD'),
                      Tree('PP', [('to', 'IN'), Tree('NP', [('Rome', 'NNP')])])])
    assert list(subtree_spans(tree)) == [('NP', 1, 2), ('PP', 4, 5), ('NP', 5, 5)]


def _fake_pos_tag(words):
    return [(w, 'NNP' if w[:1].isupper() else ('.' if w == '.' else 'VBD')) for w in words]


def _fake_ne_chunk(labels):
    from nltk.tree import Tree

    def ne_chunk(tagged, binary=False):
        children = []
        for word, tag in tagged:
            if word in labels:
                children.append(Tree('NE' if binary else labels[word], [(word, tag)]))
            else:
                children.append((word, tag))
        return Tree('S', children)
    return ne_chunk


def test_split_name_chunks_are_joined(monkeypatch):
    import nltk
    monkeypatch.setattr(nltk, 'pos_tag', _fake_pos_tag)
    monkeypatch.setattr(nltk, 'ne_chunk', _fake_ne_chunk(
        {'Barack': 'PERSON', 'Obama': 'PERSON', 'Berlin': 'GPE'}))
    runner = PipelineRunner([Segmenter(), NamedEntityRecognizer()])
    doc = runner.run_one(Document.create(TEXT, 'en'))
    entities = [(doc.covered_text(a), a.value) for a in doc.select(NAMED_ENTITY)]
    assert entities == [('Barack Obama', 'PERSON'), ('Berlin', 'GPE')]


def test_merge_adjacent():
    text = 'Barack Obama and Angela Merkel met in Berlin Mitte.'
    spans = [('PERSON', 0, 6), ('PERSON', 7, 12),
             ('PERSON', 17, 23), ('PERSON', 24, 30),
             ('GPE', 38, 44), ('LOCATION', 45, 50)]
    assert merge_adjacent(text, spans) == [
        ('PERSON', 0, 12), ('PERSON', 17, 30), ('GPE', 38, 44), ('LOCATION', 45, 50)]
    assert merge_adjacent(text, []) == []
