"""Topic modelling backed by scikit-learn LDA."""

from .model import MODEL_FORMAT, TopicModel

__all__ = ["MODEL_FORMAT", "TopicModel"]
