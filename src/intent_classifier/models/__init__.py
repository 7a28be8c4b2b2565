"""
Pydantic data models for the Intent Classifier.

Includes:
- Enums (PipelineState, PredictionStatus, EngineBackend)
- Per-request results (Prediction, PredictionOutcome)
- Side-table shapes (TokenizerResource, LabelEncoderResource)
"""

from intent_classifier.models.enums import EngineBackend, PipelineState, PredictionStatus
from intent_classifier.models.prediction_models import (
    NOT_READY_MESSAGE,
    Prediction,
    PredictionOutcome,
)
from intent_classifier.models.resource_models import LabelEncoderResource, TokenizerResource

__all__ = [
    # Enums
    "EngineBackend",
    "PipelineState",
    "PredictionStatus",
    # Results
    "NOT_READY_MESSAGE",
    "Prediction",
    "PredictionOutcome",
    # Side-tables
    "TokenizerResource",
    "LabelEncoderResource",
]
