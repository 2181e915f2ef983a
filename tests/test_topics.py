from __future__ import annotations

import joblib
import numpy as np
import pytest

from annopipe.errors import ConfigurationError
from annopipe.pipeline.context import TOPIC_ASSIGNMENT, TOPIC_DISTRIBUTION, Document
from annopipe.pipeline.runner import PipelineRunner
from annopipe.stages.segmenter import Segmenter
from annopipe.stages.stopwords import StopWordRemover
from annopipe.stages.topics import TopicInferencer, content_tokens
from annopipe.topics.model import MODEL_FORMAT, TopicModel

from conftest import TRAINING_CORPUS


def _pipeline(model_path, **options):
    options['model_location'] = model_path
    return PipelineRunner([Segmenter(), StopWordRemover(), TopicInferencer(options)])


def test_the_cat_sat(topic_model_path):
    runner = _pipeline(topic_model_path)
    doc = runner.run_one(Document.create('The cat sat.', 'en'))
    dists = doc.select(TOPIC_DISTRIBUTION)
    assert len(dists) == 1
    n_topics = runner.stages[-1].n_topics
    assert n_topics == 3
    assert len(dists[0].value) == n_topics
    assert sum(dists[0].value) == pytest.approx(1.0)
    assert (dists[0].begin, dists[0].end) == (0, len(doc.text))


def test_assignment_is_ranked(topic_model_path):
    runner = _pipeline(topic_model_path, min_topic_prob=0.0, max_topic_assignments=2)
    doc = runner.run_one(Document.create('The cat and the kitten chased a mouse at night.', 'en'))
    weights = doc.select(TOPIC_DISTRIBUTION)[0].value
    assigned = doc.select(TOPIC_ASSIGNMENT)[0].value
    assert len(assigned) == 2
    assert weights[assigned[0]] >= weights[assigned[1]]
    assert weights[assigned[0]] == max(weights)


def test_document_without_known_words(topic_model_path):
    runner = _pipeline(topic_model_path)
    doc = runner.run_one(Document.create('Zzz qqq.', 'en'))
    assert sum(doc.select(TOPIC_DISTRIBUTION)[0].value) == pytest.approx(1.0)


def test_inference_is_deterministic(topic_model_path):
    runner = _pipeline(topic_model_path)
    doc = Document.create('Stock markets and bank rates.', 'en')
    assert runner.run_one(doc).annotations == runner.run_one(doc).annotations


def test_content_tokens_skip_stopwords_and_punctuation():
    runner = PipelineRunner([Segmenter(), StopWordRemover()])
    doc = runner.run_one(Document.create('The Cat sat on a mat, ok?', 'en'))
    assert content_tokens(doc) == ['cat', 'sat', 'mat', 'ok']
    assert content_tokens(doc, min_token_length=3) == ['cat', 'sat', 'mat']
    assert content_tokens(doc, lowercase=False)[0] == 'Cat'


def test_model_round_trip(topic_model_path, tmp_path):
    model = TopicModel.load(topic_model_path)
    assert model.n_topics == 3
    assert model.vocabulary_size == len(set(w for doc in TRAINING_CORPUS for w in doc))
    dist = model.infer(['cat', 'kitten'])
    assert isinstance(dist, np.ndarray)
    assert dist.shape == (3,)
    assert len(model.top_words(0, 4)) == 4
    copy = str(tmp_path / 'sub' / 'copy.joblib')
    model.save(copy)
    np.testing.assert_allclose(TopicModel.load(copy).infer(['cat']), model.infer(['cat']))


def test_estimate_rejects_empty_corpus():
    with pytest.raises(ConfigurationError):
        TopicModel.estimate([[], []], 2)
    with pytest.raises(ConfigurationError):
        TopicModel.estimate(TRAINING_CORPUS, 0)


def test_missing_model_is_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        TopicInferencer({'model_location': str(tmp_path / 'missing.joblib')})


def test_model_location_is_required():
    with pytest.raises(ConfigurationError):
        TopicInferencer({})


def test_foreign_file_is_configuration_error(tmp_path):
    path = str(tmp_path / 'other.joblib')
    joblib.dump({'format': 'something-else'}, path)
    with pytest.raises(ConfigurationError):
        TopicModel.load(path)
    garbage = tmp_path / 'garbage.joblib'
    garbage.write_bytes(b'not a pickle at all')
    with pytest.raises(ConfigurationError):
        TopicModel.load(str(garbage))


def test_model_format_tag(topic_model_path):
    assert joblib.load(topic_model_path)['format'] == MODEL_FORMAT


@pytest.mark.parametrize('option', ['max_topic_assignments', 'min_token_length', 'min_topic_prob'])
def test_numeric_options_reject_booleans(topic_model_path, option):
    with pytest.raises(ConfigurationError):
        TopicInferencer({'model_location': topic_model_path, option: True})
