"""
ONNX Runtime engine, for deployments that export the classifier to ONNX.
"""

from pathlib import Path
from typing import Any, Optional

import numpy as np

from intent_classifier.engine.base_engine import BaseInferenceEngine
from intent_classifier.exceptions import EngineBackendUnavailableError


def _static_dim(shape: list[Any]) -> Optional[int]:
    """Last dimension if it is a concrete int ("batch"/None/str means dynamic)."""
    if not shape:
        return None
    last = shape[-1]
    return last if isinstance(last, int) else None


class OnnxEngine(BaseInferenceEngine):
    """Single onnxruntime InferenceSession on the CPU execution provider."""

    backend_name = "onnx"

    def __init__(self, model_path: str | Path, num_threads: Optional[int] = None):
        super().__init__(model_path, num_threads)
        self._session: Any = None
        self._input_name: Optional[str] = None
        self._output_name: Optional[str] = None

    def _load(self, path: Path) -> None:
        try:
            import onnxruntime as ort
        except ImportError as e:
            raise EngineBackendUnavailableError(
                "onnxruntime is not installed (pip install 'intent-classifier[onnx]')",
                details={"backend": self.backend_name},
            ) from e

        options = ort.SessionOptions()
        if self.num_threads:
            options.intra_op_num_threads = self.num_threads

        session = ort.InferenceSession(
            str(path),
            sess_options=options,
            providers=["CPUExecutionProvider"],
        )

        model_input = session.get_inputs()[0]
        model_output = session.get_outputs()[0]
        self._input_name = model_input.name
        self._output_name = model_output.name
        self._input_size = _static_dim(model_input.shape)
        self._output_size = _static_dim(model_output.shape)
        self._session = session

    def _invoke(self, batch: np.ndarray) -> np.ndarray:
        return self._session.run([self._output_name], {self._input_name: batch})[0]

    def _release(self) -> None:
        self._session = None
