"""Vocabulary Store: tokenizer word index and Label Table."""

from intent_classifier.vocabulary.store import Vocabulary, load_vocabulary

__all__ = [
    "Vocabulary",
    "load_vocabulary",
]
