"""
Enumerations for the intent classifier data models.
"""

from enum import Enum


class PipelineState(str, Enum):
    """
    Lifecycle of an IntentPipeline.

    UNINITIALIZED -> LOADING -> READY | FAILED.
    FAILED is terminal until the caller triggers initialize() again.
    """

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class PredictionStatus(str, Enum):
    """Outcome of a single predict() call."""

    SUCCESS = "success"
    UNAVAILABLE = "unavailable"  # pipeline not Ready
    FAILED = "failed"  # engine invocation failed for this request


class EngineBackend(str, Enum):
    """Supported inference runtimes."""

    TFLITE = "tflite"
    ONNX = "onnx"
