"""LDA topic model persisted as a single joblib file.

The model pairs a scikit-learn CountVectorizer (vocabulary) with a fitted
LatentDirichletAllocation. Documents are handed over as lists of tokens that
are already segmented and filtered, so the vectorizer only splits on
whitespace and never lower-cases or strips anything itself.

File format: a dict with keys `format`, `vectorizer`, `lda`.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence
import logging
import os
import pickle

import joblib
import numpy as np

from ..errors import ConfigurationError

log = logging.getLogger("annopipe.topics")

MODEL_FORMAT = "annopipe-lda-v1"

def _sklearn():
    try:
        from sklearn.decomposition import LatentDirichletAllocation
        from sklearn.feature_extraction.text import CountVectorizer
    except ImportError:
        raise ImportError(
            "scikit-learn is required for topic modelling. Install with: pip install scikit-learn"
        )
    return CountVectorizer, LatentDirichletAllocation


def _join(tokens: Sequence[str]) -> str:
    return " ".join(t for t in tokens if t and not t.isspace())


class TopicModel:
    def __init__(self, vectorizer: Any, lda: Any):
        self.vectorizer = vectorizer
        self.lda = lda

    @property
    def n_topics(self) -> int:
        return int(self.lda.n_components)

    @property
    def vocabulary_size(self) -> int:
        return len(self.vectorizer.vocabulary_)

    @classmethod
    def estimate(
        cls,
        token_lists: Sequence[Sequence[str]],
        n_topics: int,
        *,
        max_iter: int = 100,
        random_state: Optional[int] = 0,
        doc_topic_prior: Optional[float] = None,
        topic_word_prior: Optional[float] = None,
    ) -> "TopicModel":
        """Fit a model on pre-tokenized documents."""
        if n_topics < 1:
            raise ConfigurationError(f"n_topics must be >= 1, got {n_topics}")
        texts = [_join(toks) for toks in token_lists]
        if not any(texts):
            raise ConfigurationError("cannot estimate a topic model: corpus has no usable tokens")
        CountVectorizer, LatentDirichletAllocation = _sklearn()
        vectorizer = CountVectorizer(token_pattern=r"\S+", lowercase=False)
        counts = vectorizer.fit_transform(texts)
        lda = LatentDirichletAllocation(
            n_components=n_topics,
            max_iter=max_iter,
            learning_method="batch",
            random_state=random_state,
            doc_topic_prior=doc_topic_prior,
            topic_word_prior=topic_word_prior,
        )
        lda.fit(counts)
        log.info(f"Estimated LDA model: topics={n_topics} "
                 f"vocabulary={len(vectorizer.vocabulary_)} documents={len(texts)}")
        return cls(vectorizer, lda)

    def infer(self, tokens: Sequence[str]) -> np.ndarray:
        """Topic proportions of one document; sums to 1."""
        counts = self.vectorizer.transform([_join(tokens)])
        dist = self.lda.transform(counts)[0]
        total = float(dist.sum())
        if total > 0:
            dist = dist / total
        return np.asarray(dist, dtype=np.float64)

    def top_words(self, topic: int, n: int = 10) -> List[str]:
        vocab = self.vectorizer.get_feature_names_out()
        weights = self.lda.components_[topic]
        return [str(vocab[i]) for i in np.argsort(weights)[::-1][:n]]

    def save(self, path: str) -> str:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        payload: Dict[str, Any] = {"format": MODEL_FORMAT, "vectorizer": self.vectorizer, "lda": self.lda}
        joblib.dump(payload, path)
        return path

    @classmethod
    def load(cls, path: str) -> "TopicModel":
        if not path or not os.path.isfile(path):
            raise ConfigurationError(f"topic model file not found: {path}")
        try:
            payload = joblib.load(path)
        except (OSError, EOFError, ValueError, KeyError, IndexError,
                pickle.UnpicklingError, AttributeError, ImportError) as e:
            raise ConfigurationError(f"cannot read topic model {path}: {e}") from e
        if not isinstance(payload, dict) or payload.get("format") != MODEL_FORMAT:
            raise ConfigurationError(f"{path} is not an {MODEL_FORMAT} topic model file")
        try:
            model = cls(payload["vectorizer"], payload["lda"])
            empty = model.n_topics < 1 or model.vocabulary_size < 1
        except (KeyError, AttributeError) as e:
            raise ConfigurationError(f"malformed topic model {path}: {e}") from e
        if empty:
            raise ConfigurationError(f"topic model {path} has no topics or no vocabulary")
        return model
