"""Engine construction by backend name."""

from pathlib import Path
from typing import Optional

from intent_classifier.engine.base_engine import BaseInferenceEngine
from intent_classifier.engine.onnx_engine import OnnxEngine
from intent_classifier.engine.tflite_engine import TFLiteEngine
from intent_classifier.exceptions import EngineBackendUnavailableError
from intent_classifier.models.enums import EngineBackend


ENGINE_CLASSES: dict[EngineBackend, type[BaseInferenceEngine]] = {
    EngineBackend.TFLITE: TFLiteEngine,
    EngineBackend.ONNX: OnnxEngine,
}


def create_engine(
    backend: str | EngineBackend,
    model_path: str | Path,
    num_threads: Optional[int] = None,
) -> BaseInferenceEngine:
    """
    Create an (unloaded) engine for the given backend.

    Raises:
        EngineBackendUnavailableError: Unknown backend name
    """
    try:
        backend = EngineBackend(backend)
    except ValueError as e:
        raise EngineBackendUnavailableError(
            f"Unknown inference backend: {backend}",
            details={"supported": [b.value for b in EngineBackend]},
        ) from e

    return ENGINE_CLASSES[backend](model_path, num_threads=num_threads)
