'''py.test fixtures for annopipe.'''
from __future__ import annotations
import logging

import pytest

from annopipe.errors import ConfigurationError
from annopipe.pipeline.context import Annotation, Document
from annopipe.topics.model import TopicModel

TRAINING_CORPUS = [
    ["cat", "sat", "mat", "kitten", "cat", "yarn", "purr"],
    ["cat", "kitten", "mouse", "hunt", "night", "cat"],
    ["stock", "market", "shares", "bank", "rates", "investors"],
    ["bank", "rates", "bond", "yields", "market", "stock"],
    ["berlin", "speech", "crowd", "obama", "germany"],
    ["speech", "crowd", "president", "berlin", "visit"],
]


@pytest.fixture
def text_dir(tmp_path):
    d = tmp_path / 'texts'
    d.mkdir()
    (d / 'a.txt').write_text('The cat sat on the mat. The kitten played.', encoding='utf-8')
    (d / 'b.txt').write_text('Stock markets rose. Investors bought shares.', encoding='utf-8')
    (d / 'notes.md').write_text('Not a text file.', encoding='utf-8')
    return d


@pytest.fixture(scope='session')
def topic_model_path(tmp_path_factory):
    path = str(tmp_path_factory.mktemp('model') / 'model.joblib')
    TopicModel.estimate(TRAINING_CORPUS, 3, max_iter=20, random_state=0).save(path)
    return path


def make_doc(text='The cat sat.', language='en'):
    return Document.create(text, language)


class RecordingStage(object):
    '''Stage stand-in that appends one annotation and records every call.'''

    def __init__(self, name, produces=None, requires=(), fail=False):
        self.name = name
        self.produces = (produces or name,)
        self.requires = tuple(requires)
        self.fail = fail
        self.calls = []
        self.closed = False

    def apply(self, doc):
        self.calls.append(doc)
        if self.fail:
            raise RuntimeError('boom in %s' % self.name)
        return doc.with_annotations(
            [Annotation(self.produces[0], 0, len(doc.text), len(doc.annotations), self.name)])

    def close(self):
        self.closed = True


def nltk_stage(factory, *args, **kwargs):
    '''Build a stage that needs downloaded nltk data, or skip the test.'''
    try:
        return factory(*args, **kwargs)
    except ConfigurationError as exc:
        pytest.skip('nltk data not available: %s' % exc)


@pytest.fixture(autouse=True)
def _drop_log_handlers():
    '''Remove handlers installed by setup_logging so they never outlive a test's captured streams.'''
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, '_annopipe_handler', False):
            root.removeHandler(handler)
            handler.close()
