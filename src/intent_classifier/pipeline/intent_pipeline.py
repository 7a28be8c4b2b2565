"""
Intent prediction pipeline.

raw text -> TextNormalizer -> SequenceEncoder -> EnginePool -> decide()
         -> PredictionOutcome

Owns the process-wide resources (engine pool, vocabulary) and the
Uninitialized -> Loading -> Ready | Failed state machine. Callers only see
initialize(), predict() and close().
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from intent_classifier.config import Settings
from intent_classifier.engine.base_engine import BaseInferenceEngine
from intent_classifier.engine.factory import create_engine
from intent_classifier.engine.pool import EnginePool
from intent_classifier.exceptions import (
    ConfigurationError,
    EngineInvocationError,
    IntentClassifierError,
    LabelTableMismatchError,
)
from intent_classifier.models.enums import PipelineState, PredictionStatus
from intent_classifier.models.prediction_models import PredictionOutcome
from intent_classifier.monitoring.metrics import (
    inference_latency_seconds,
    oov_tokens_total,
    pipeline_initializations_total,
    pipeline_ready,
    predicted_labels_total,
    predictions_total,
    truncated_inputs_total,
)
from intent_classifier.pipeline.decision import decide
from intent_classifier.preprocessing.encoder import SequenceEncoder
from intent_classifier.preprocessing.normalizer import TextNormalizer
from intent_classifier.vocabulary.store import Vocabulary, load_vocabulary


logger = structlog.get_logger(__name__)

EngineFactory = Callable[[Settings], BaseInferenceEngine]


def default_engine_factory(settings: Settings) -> BaseInferenceEngine:
    """Engine for the configured backend and model artifact."""
    return create_engine(
        settings.ENGINE_BACKEND,
        settings.MODEL_PATH,
        num_threads=settings.ENGINE_NUM_THREADS,
    )


@dataclass(frozen=True)
class _Resources:
    """Everything a request needs, swapped atomically on (re)initialization."""

    vocabulary: Vocabulary
    encoder: SequenceEncoder
    pool: EnginePool


class IntentPipeline:
    """
    Text -> intent label pipeline.

    Initialization is a single blocking step. Prediction is synchronous and
    never blocks on initialization: while the pipeline is not Ready,
    predict() answers "unavailable" immediately without touching the
    engine.

    Usage:
        with IntentPipeline(settings) as pipeline:   # initialize() + close()
            outcome = pipeline.predict("schedule a meating tommorow")
            if outcome.is_success:
                print(outcome.prediction.label, outcome.prediction.confidence)
    """

    def __init__(
        self,
        settings: Settings,
        engine_factory: Optional[EngineFactory] = None,
        normalizer: Optional[TextNormalizer] = None,
    ):
        """
        Args:
            settings: Resource paths, backend and preprocessing constants
            engine_factory: Builds one unloaded engine (default: by ENGINE_BACKEND)
            normalizer: Text normalizer (default: built-in correction table)
        """
        self.settings = settings
        self._engine_factory = engine_factory or default_engine_factory
        self.normalizer = normalizer or TextNormalizer()

        self._state = PipelineState.UNINITIALIZED
        self._resources: Optional[_Resources] = None
        self._last_error: Optional[IntentClassifierError] = None
        self._init_lock = threading.Lock()

    # === State ===

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == PipelineState.READY

    @property
    def last_error(self) -> Optional[IntentClassifierError]:
        """The configuration error that moved the pipeline to Failed."""
        return self._last_error

    @property
    def vocabulary(self) -> Optional[Vocabulary]:
        resources = self._resources
        return resources.vocabulary if resources else None

    @property
    def backend_name(self) -> Optional[str]:
        resources = self._resources
        return resources.pool.backend_name if resources else None

    @property
    def status_message(self) -> str:
        if self._state == PipelineState.READY:
            return "Model and resources loaded successfully"
        if self._state == PipelineState.FAILED:
            reason = self._last_error.message if self._last_error else "unknown error"
            return f"Error initializing model: {reason}"
        if self._state == PipelineState.LOADING:
            return "Initializing model..."
        return "Model not initialized"

    def _set_state(self, state: PipelineState) -> None:
        self._state = state
        pipeline_ready.set(1 if state == PipelineState.READY else 0)

    # === Lifecycle ===

    def initialize(self) -> PipelineState:
        """
        Load the engine pool and both side-tables.

        Safe to call from any state; a previous engine pool is released
        first. Errors are captured in ``last_error`` and leave the pipeline
        Failed; they are not raised.

        Returns:
            READY or FAILED
        """
        with self._init_lock:
            self._release()
            self._last_error = None
            self._set_state(PipelineState.LOADING)
            logger.info(
                "Initializing pipeline",
                backend=self.settings.ENGINE_BACKEND,
                model_path=self.settings.MODEL_PATH,
                pool_size=self.settings.ENGINE_POOL_SIZE,
            )

            try:
                resources = self._load_resources()
            except ConfigurationError as e:
                error = e
            except Exception as e:
                logger.exception("Unexpected error while loading resources")
                error = ConfigurationError(
                    f"Unexpected error while loading resources: {e}",
                    details={"error_type": type(e).__name__},
                )
            else:
                error = None

            if error is not None:
                self._last_error = error
                self._set_state(PipelineState.FAILED)
                pipeline_initializations_total.labels(outcome="failed").inc()
                logger.error(
                    "Pipeline initialization failed",
                    error_type=type(error).__name__,
                    error=error.message,
                    details=error.details,
                )
                return self._state

            self._resources = resources
            self._set_state(PipelineState.READY)
            pipeline_initializations_total.labels(outcome="ready").inc()
            logger.info(
                "Pipeline ready",
                backend=resources.pool.backend_name,
                vocabulary_size=resources.vocabulary.vocabulary_size,
                num_labels=resources.vocabulary.num_labels,
            )
            return self._state

    def _load_resources(self) -> _Resources:
        settings = self.settings
        pool = EnginePool(
            lambda: self._engine_factory(settings),
            size=settings.ENGINE_POOL_SIZE,
        )
        pool.load()

        try:
            vocabulary = load_vocabulary(settings.TOKENIZER_PATH, settings.LABEL_ENCODER_PATH)

            output_size = pool.output_size
            if output_size is not None and output_size != vocabulary.num_labels:
                raise LabelTableMismatchError(
                    f"Model outputs {output_size} scores but the Label Table has "
                    f"{vocabulary.num_labels} labels",
                    num_scores=output_size,
                    num_labels=vocabulary.num_labels,
                )

            input_size = pool.input_size
            if input_size is not None and input_size != settings.MAX_SEQUENCE_LENGTH:
                raise ConfigurationError(
                    f"Model expects sequences of length {input_size}, "
                    f"MAX_SEQUENCE_LENGTH is {settings.MAX_SEQUENCE_LENGTH}",
                    details={
                        "model_input_size": input_size,
                        "max_sequence_length": settings.MAX_SEQUENCE_LENGTH,
                    },
                )
        except Exception:
            pool.close()
            raise

        encoder = SequenceEncoder(
            vocabulary.word_index,
            max_len=settings.MAX_SEQUENCE_LENGTH,
            oov_id=settings.OOV_TOKEN_ID,
            pad_id=settings.PAD_TOKEN_ID,
        )
        return _Resources(vocabulary=vocabulary, encoder=encoder, pool=pool)

    def close(self) -> None:
        """Release the engine pool and return to Uninitialized."""
        with self._init_lock:
            self._release()
            self._last_error = None
            self._set_state(PipelineState.UNINITIALIZED)
        logger.info("Pipeline closed")

    def _release(self) -> None:
        resources, self._resources = self._resources, None
        if resources is not None:
            resources.pool.close()

    def _fail(self, resources: _Resources, error: ConfigurationError) -> None:
        """Move to Failed after a configuration error found while serving."""
        with self._init_lock:
            if self._resources is not resources:
                return  # already re-initialized or closed
            self._last_error = error
            self._set_state(PipelineState.FAILED)
            self._release()

    def __enter__(self) -> "IntentPipeline":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # === Prediction ===

    def predict(self, text: str) -> PredictionOutcome:
        """
        Predict the intent of one piece of text.

        Any string is accepted, including empty (rejecting blank input is
        the caller's job).

        Returns:
            PredictionOutcome with status SUCCESS, UNAVAILABLE or FAILED
        """
        resources = self._resources
        if self._state != PipelineState.READY or resources is None:
            predictions_total.labels(status=PredictionStatus.UNAVAILABLE.value).inc()
            logger.debug("Prediction rejected, pipeline not ready", state=self._state.value)
            return PredictionOutcome.unavailable()

        normalized = self.normalizer.normalize(text)
        tokens = resources.encoder.tokenize(normalized)
        sequence = resources.encoder.pad(tokens)

        oov_count = tokens.count(resources.encoder.oov_id)
        if oov_count:
            oov_tokens_total.inc(oov_count)
        if len(tokens) > resources.encoder.max_len:
            truncated_inputs_total.inc()

        backend = resources.pool.backend_name or "unknown"
        start_time = time.perf_counter()
        try:
            scores = resources.pool.run(sequence)
        except ConfigurationError as e:
            # Pool closed underneath us by a concurrent re-initialization
            predictions_total.labels(status=PredictionStatus.UNAVAILABLE.value).inc()
            logger.warning("Engine unavailable during prediction", error=e.message)
            return PredictionOutcome.unavailable()
        except EngineInvocationError as e:
            inference_latency_seconds.labels(backend=backend, success="false").observe(
                time.perf_counter() - start_time
            )
            predictions_total.labels(status=PredictionStatus.FAILED.value).inc()
            logger.error(
                "Model invocation failed",
                error=e.message,
                details=e.details,
                text_length=len(text),
            )
            return PredictionOutcome.failed(e.message)

        inference_latency_seconds.labels(backend=backend, success="true").observe(
            time.perf_counter() - start_time
        )

        try:
            prediction = decide(scores, resources.vocabulary.labels)
        except LabelTableMismatchError as e:
            logger.error(
                "Label Table mismatch, pipeline disabled",
                num_scores=e.num_scores,
                num_labels=e.num_labels,
            )
            self._fail(resources, e)
            predictions_total.labels(status=PredictionStatus.UNAVAILABLE.value).inc()
            return PredictionOutcome.unavailable(f"Error initializing model: {e.message}")

        predictions_total.labels(status=PredictionStatus.SUCCESS.value).inc()
        predicted_labels_total.labels(label=prediction.label).inc()
        logger.info(
            "Intent predicted",
            label=prediction.label,
            confidence=round(prediction.confidence, 4),
            word_count=len(tokens),
            oov_count=oov_count,
        )
        return PredictionOutcome.success(prediction)
