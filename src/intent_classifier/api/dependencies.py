"""
FastAPI dependency injection for the Intent Classifier.

The pipeline is a process-wide singleton: it owns the loaded engine pool
and vocabulary, which are expensive to load and safe to share.
"""

from functools import lru_cache

from intent_classifier.config import Settings, settings
from intent_classifier.pipeline.intent_pipeline import IntentPipeline


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_pipeline() -> IntentPipeline:
    """
    Get the singleton pipeline.

    Created Uninitialized; the application startup hook (or POST /reload)
    loads it.

    Returns:
        IntentPipeline instance
    """
    return IntentPipeline(get_settings())
