"""
LiteRT (TensorFlow Lite) engine for the bundled .tflite classifier.

Uses the ai-edge-litert interpreter, the maintained successor of
tflite_runtime with the same Interpreter API.
"""

from pathlib import Path
from typing import Any, Optional

import numpy as np

from intent_classifier.engine.base_engine import BaseInferenceEngine
from intent_classifier.exceptions import EngineBackendUnavailableError


class TFLiteEngine(BaseInferenceEngine):
    """
    Single LiteRT interpreter over a .tflite artifact.

    Model contract: one input tensor [1, maxLen] and one output tensor
    [1, num_labels]. The input is cast to the dtype the model declares
    (float32 for the bundled classifier).
    """

    backend_name = "tflite"

    def __init__(self, model_path: str | Path, num_threads: Optional[int] = None):
        super().__init__(model_path, num_threads)
        self._interpreter: Any = None
        self._input_details: dict[str, Any] = {}
        self._output_details: dict[str, Any] = {}

    def _load(self, path: Path) -> None:
        try:
            from ai_edge_litert.interpreter import Interpreter
        except ImportError as e:
            raise EngineBackendUnavailableError(
                "LiteRT runtime is not installed (pip install 'intent-classifier[tflite]')",
                details={"backend": self.backend_name},
            ) from e

        interpreter = Interpreter(model_path=str(path), num_threads=self.num_threads)
        interpreter.allocate_tensors()

        self._input_details = interpreter.get_input_details()[0]
        self._output_details = interpreter.get_output_details()[0]
        self._input_size = int(self._input_details["shape"][-1])
        self._output_size = int(self._output_details["shape"][-1])
        self._interpreter = interpreter

    def _invoke(self, batch: np.ndarray) -> np.ndarray:
        self._interpreter.set_tensor(
            self._input_details["index"],
            batch.astype(self._input_details["dtype"], copy=False),
        )
        self._interpreter.invoke()
        return self._interpreter.get_tensor(self._output_details["index"])

    def _release(self) -> None:
        self._interpreter = None
