"""
Intent prediction pipeline.

- decision.py: argmax label selection over the Label Table
- intent_pipeline.py: lifecycle state machine and predict() orchestration
"""

from intent_classifier.pipeline.decision import decide
from intent_classifier.pipeline.intent_pipeline import IntentPipeline, default_engine_factory

__all__ = [
    "IntentPipeline",
    "decide",
    "default_engine_factory",
]
