"""Topic model estimation.

Builds the model file the topic inferencer loads. Training documents go
through the same front half of the inference pipeline (segmenter, stop-word
marking) and the same content-token filter, so the vocabulary matches what
inference will see.
"""

from __future__ import annotations
from typing import List, Optional
import logging

from tqdm import tqdm

from ..config.schema import SourceSpec, StageSpec
from ..sources.registry import make_source
from ..stages.topics import content_tokens
from ..topics.model import TopicModel
from .build import make_runner

log = logging.getLogger("annopipe.estimate")


def estimate_topic_model(
    source_spec: SourceSpec,
    model_out: str,
    *,
    n_topics: int = 10,
    max_iter: int = 100,
    random_state: Optional[int] = 0,
    stopword_location: Optional[str] = None,
    min_token_length: int = 3,
    top_n: int = 10,
    show_progress: bool = False,
) -> TopicModel:
    source = make_source(source_spec)
    stop_opts = {"model_location": stopword_location} if stopword_location else {}
    runner = make_runner([StageSpec("segmenter"), StageSpec("stopword_remover", stop_opts)])

    corpus: List[List[str]] = []
    try:
        for doc in tqdm(runner.run_all(source), desc="estimate", unit="doc", disable=not show_progress):
            corpus.append(content_tokens(doc, min_token_length=min_token_length))
    finally:
        runner.close()
    log.info(f"Collected {sum(map(len, corpus))} content tokens from {len(corpus)} documents")

    model = TopicModel.estimate(corpus, n_topics, max_iter=max_iter, random_state=random_state)
    model.save(model_out)
    log.info(f"Saved topic model to {model_out}")
    for t in range(model.n_topics):
        log.info(f"topic {t}: {' '.join(model.top_words(t, top_n))}")
    return model
