"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
No real model runtime is needed: engines are replaced by StubEngine, which
returns a fixed score vector and records every call.
"""

from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np
import pytest

from intent_classifier.config import Settings
from intent_classifier.engine.base_engine import BaseInferenceEngine
from intent_classifier.models.enums import PipelineState
from intent_classifier.pipeline.intent_pipeline import IntentPipeline


_FROM_SCORES = object()


class StubEngine(BaseInferenceEngine):
    """Engine that returns canned scores instead of running a model.

    Args:
        scores: Score vector returned by every call
        input_size: Declared input length (None = dynamic)
        output_size: Declared output length (default: len(scores), None = dynamic)
        error: Exception raised by every call instead of returning scores
    """

    backend_name = "stub"

    def __init__(
        self,
        model_path: str | Path,
        num_threads: Optional[int] = None,
        scores: Sequence[float] = (0.9, 0.05, 0.05),
        input_size: Optional[int] = 50,
        output_size: Any = _FROM_SCORES,
        error: Optional[Exception] = None,
    ):
        super().__init__(model_path, num_threads)
        self.scores = list(scores)
        self.declared_input_size = input_size
        self.declared_output_size = len(self.scores) if output_size is _FROM_SCORES else output_size
        self.error = error
        self.calls: list[np.ndarray] = []
        self.released = False

    def _load(self, path: Path) -> None:
        self._input_size = self.declared_input_size
        self._output_size = self.declared_output_size

    def _invoke(self, batch: np.ndarray) -> np.ndarray:
        self.calls.append(batch.copy())
        if self.error is not None:
            raise self.error
        return np.array([self.scores], dtype=np.float32)

    def _release(self) -> None:
        self.released = True


class StubEngineFactory:
    """Pipeline engine factory that builds StubEngines and keeps them for inspection."""

    def __init__(self, **engine_kwargs: Any):
        self.engine_kwargs = engine_kwargs
        self.engines: list[StubEngine] = []

    def __call__(self, settings: Settings) -> StubEngine:
        engine = StubEngine(
            settings.MODEL_PATH,
            num_threads=settings.ENGINE_NUM_THREADS,
            **self.engine_kwargs,
        )
        self.engines.append(engine)
        return engine


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def model_artifact(tmp_path: Path) -> Path:
    """Placeholder model file; StubEngine never reads its contents."""
    path = tmp_path / "intent_classifier.tflite"
    path.write_bytes(b"stub model")
    return path


@pytest.fixture
def test_settings(fixtures_dir: Path, model_artifact: Path) -> Settings:
    """Test settings pointing at the fixture side-tables.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.ENGINE_POOL_SIZE = 2
    """
    return Settings(
        # === Application ===
        APP_NAME="Intent Classifier (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        # === Bundled Resources ===
        MODEL_PATH=str(model_artifact),
        TOKENIZER_PATH=str(fixtures_dir / "tokenizer.json"),
        LABEL_ENCODER_PATH=str(fixtures_dir / "label_encoder.json"),
        # === Inference Engine ===
        ENGINE_BACKEND="tflite",
        ENGINE_POOL_SIZE=1,
        # === Service ===
        INITIALIZE_ON_STARTUP=False,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def stub_engine_cls() -> type[StubEngine]:
    """The StubEngine class, for tests that drive an engine directly."""
    return StubEngine


@pytest.fixture
def stub_engine_factory() -> type[StubEngineFactory]:
    """Build a recording engine factory: ``stub_engine_factory(scores=(...))``."""
    return StubEngineFactory


@pytest.fixture
def stub_factory() -> StubEngineFactory:
    """Default stub factory (scores favour the first label)."""
    return StubEngineFactory()


@pytest.fixture
def ready_pipeline(test_settings: Settings, stub_factory: StubEngineFactory):
    """Initialized pipeline backed by ``stub_factory``."""
    pipeline = IntentPipeline(test_settings, engine_factory=stub_factory)
    assert pipeline.initialize() == PipelineState.READY
    yield pipeline
    pipeline.close()
