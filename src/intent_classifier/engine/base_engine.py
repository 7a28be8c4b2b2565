"""
Abstract base for inference engines.

An engine wraps one loaded model artifact and exposes a single capability:
given a float vector of length ``maxLen``, return a float vector with one
score per label. Concrete runtimes (LiteRT, ONNX Runtime) only implement
loading and the raw tensor call; shape handling and error mapping live
here so every backend behaves the same towards the pipeline.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import structlog

from intent_classifier.exceptions import (
    ConfigurationError,
    EngineInvocationError,
    EngineNotInitializedError,
    ModelLoadError,
    ResourceNotFoundError,
)


logger = structlog.get_logger(__name__)


class BaseInferenceEngine(ABC):
    """
    Base class for a single model instance.

    Not safe for concurrent use: one in-flight run() per instance. Use
    EnginePool to serve concurrent callers.

    Lifecycle:
        engine = TFLiteEngine("model.tflite")
        engine.load()
        scores = engine.run(sequence)
        engine.close()

    or, with guaranteed release:
        with TFLiteEngine("model.tflite") as engine:
            scores = engine.run(sequence)
    """

    backend_name: str = "base"

    def __init__(self, model_path: str | Path, num_threads: Optional[int] = None):
        """
        Args:
            model_path: Path to the packaged model artifact
            num_threads: Runtime thread count (None = runtime default)
        """
        self.model_path = Path(model_path)
        self.num_threads = num_threads
        self._loaded = False
        self._input_size: Optional[int] = None
        self._output_size: Optional[int] = None

    @abstractmethod
    def _load(self, path: Path) -> None:
        """
        Load the artifact with the backend runtime.

        Implementations should set ``_input_size`` / ``_output_size`` when
        the artifact declares static tensor shapes.
        """
        pass

    @abstractmethod
    def _invoke(self, batch: np.ndarray) -> np.ndarray:
        """
        Run the model on a float32 batch of shape [1, maxLen].

        Returns the raw output tensor (any shape holding one score per label).
        """
        pass

    def _release(self) -> None:
        """Drop runtime handles. Default implementation does nothing."""
        pass

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def input_size(self) -> Optional[int]:
        """Declared input sequence length, or None if dynamic/unknown."""
        return self._input_size

    @property
    def output_size(self) -> Optional[int]:
        """Declared number of output scores, or None if dynamic/unknown."""
        return self._output_size

    def load(self) -> None:
        """
        Load the model artifact. No-op if already loaded.

        Raises:
            ResourceNotFoundError: Artifact file missing
            EngineBackendUnavailableError: Runtime library not installed
            ModelLoadError: Runtime rejected the artifact
        """
        if self._loaded:
            return

        if not self.model_path.is_file():
            raise ResourceNotFoundError(
                f"Model artifact not found: {self.model_path}",
                path=str(self.model_path),
            )

        try:
            self._load(self.model_path)
        except ConfigurationError:
            raise
        except Exception as e:
            raise ModelLoadError(
                f"Failed to load model artifact: {e}",
                details={
                    "path": str(self.model_path),
                    "backend": self.backend_name,
                    "error_type": type(e).__name__,
                },
            ) from e

        self._loaded = True
        logger.info(
            "Inference engine loaded",
            backend=self.backend_name,
            model_path=str(self.model_path),
            input_size=self._input_size,
            output_size=self._output_size,
        )

    def run(self, sequence: Sequence[float]) -> np.ndarray:
        """
        Score one encoded sequence.

        Args:
            sequence: Fixed-length token id sequence

        Returns:
            1-D float32 array, one score per label

        Raises:
            EngineNotInitializedError: Called before load() or after close()
            EngineInvocationError: The runtime call failed
        """
        if not self._loaded:
            raise EngineNotInitializedError(
                "Inference engine is not initialized",
                details={"backend": self.backend_name},
            )

        batch = np.asarray(sequence, dtype=np.float32).reshape(1, -1)
        if self._input_size is not None and batch.shape[1] != self._input_size:
            raise EngineInvocationError(
                f"Input length {batch.shape[1]} does not match model input size {self._input_size}",
                details={"expected": self._input_size, "got": batch.shape[1]},
            )

        try:
            output = self._invoke(batch)
        except EngineInvocationError:
            raise
        except Exception as e:
            raise EngineInvocationError(
                f"Model invocation failed: {e}",
                details={"backend": self.backend_name, "error_type": type(e).__name__},
            ) from e

        return np.asarray(output, dtype=np.float32).reshape(-1)

    def close(self) -> None:
        """Release runtime resources. Safe to call more than once."""
        if not self._loaded:
            return
        self._release()
        self._loaded = False
        logger.debug("Inference engine closed", backend=self.backend_name)

    def __enter__(self) -> "BaseInferenceEngine":
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"model_path={self.model_path}, "
            f"loaded={self._loaded})"
        )
