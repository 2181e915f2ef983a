"""Stage registry.

Stages are configured by name in the pipeline config:

    stages:
      - name: segmenter
      - name: topic_inferencer
        options: {model_location: target/model.joblib}

Adding a new stage:
1) implement a Stage subclass taking an options mapping
2) register it here (static) OR call register_stage() at runtime (dynamic)
3) reference it by name in the pipeline config

Stages backed by heavy libraries are imported lazily, so a pipeline that does
not use them never imports nltk or scikit-learn.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..config.schema import StageSpec
from ..errors import ConfigurationError
from .base import Stage

StageFactory = Callable[[Optional[Mapping[str, Any]]], Stage]

def _make_segmenter(options):
    from .segmenter import Segmenter
    return Segmenter(options)

def _make_stopword_remover(options):
    from .stopwords import StopWordRemover
    return StopWordRemover(options)

def _make_ner(options):
    from .ner import NamedEntityRecognizer
    return NamedEntityRecognizer(options)

def _make_parser(options):
    from .parser import Parser
    return Parser(options)

def _make_topic_inferencer(options):
    from .topics import TopicInferencer
    return TopicInferencer(options)

# Static registry (built-in stages)
_STATIC_REGISTRY: Dict[str, StageFactory] = {
    "segmenter": _make_segmenter,
    "stopword_remover": _make_stopword_remover,
    "ner": _make_ner,
    "parser": _make_parser,
    "topic_inferencer": _make_topic_inferencer,
}

# Dynamic registry (plugins/extensions)
_DYNAMIC_REGISTRY: Dict[str, StageFactory] = {}

def register_stage(name: str, factory: StageFactory) -> None:
    """Register a new stage type dynamically.

    Example:
        from annopipe.stages.registry import register_stage

        register_stage("lemmatizer", lambda options: Lemmatizer(options))
    """
    if name in _STATIC_REGISTRY:
        raise ValueError(f"Stage '{name}' is already registered statically. Use a different name.")
    _DYNAMIC_REGISTRY[name] = factory

def unregister_stage(name: str) -> None:
    """Unregister a dynamically registered stage."""
    _DYNAMIC_REGISTRY.pop(name, None)

def list_stages() -> Dict[str, str]:
    """List all registered stages (static + dynamic)."""
    out = {name: "static" for name in _STATIC_REGISTRY}
    out.update({name: "dynamic" for name in _DYNAMIC_REGISTRY})
    return out

def make_stage(spec: StageSpec) -> Stage:
    factory = _STATIC_REGISTRY.get(spec.name) or _DYNAMIC_REGISTRY.get(spec.name)
    if factory is None:
        available = sorted(_STATIC_REGISTRY) + sorted(_DYNAMIC_REGISTRY)
        raise ConfigurationError(f"Unknown stage: {spec.name}. Available: {available}")
    return factory(spec.options)

def make_stages(specs: Iterable[StageSpec]) -> List[Stage]:
    """Construct every stage up front so configuration errors surface before any document flows."""
    stages: List[Stage] = []
    try:
        for spec in specs:
            stages.append(make_stage(spec))
    except BaseException:
        for st in stages:
            st.close()
        raise
    return stages
