"""
Text preprocessing for the intent model.

- normalizer.py: lower-casing and whole-word misspelling correction
- encoder.py: tokenization, OOV substitution, fixed-length padding
"""

from intent_classifier.preprocessing.encoder import SequenceEncoder
from intent_classifier.preprocessing.normalizer import DEFAULT_CORRECTIONS, TextNormalizer

__all__ = [
    "DEFAULT_CORRECTIONS",
    "TextNormalizer",
    "SequenceEncoder",
]
