"""
HTTP routes for intent prediction and pipeline lifecycle.

Prediction and reload are plain ``def`` endpoints: the pipeline is
synchronous, so FastAPI runs them in its threadpool and the engine pool
serializes access to each model instance.
"""

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from intent_classifier.api.dependencies import get_pipeline, get_settings
from intent_classifier.api.models import (
    HealthResponse,
    LabelsResponse,
    PredictRequest,
    PredictResponse,
    VersionResponse,
)
from intent_classifier.config import Settings
from intent_classifier.exceptions import PipelineUnavailableError
from intent_classifier.models.enums import PredictionStatus
from intent_classifier.pipeline.intent_pipeline import IntentPipeline

logger = structlog.get_logger(__name__)

router = APIRouter()


def _unavailable(pipeline: IntentPipeline, message: str) -> PipelineUnavailableError:
    last_error = pipeline.last_error
    return PipelineUnavailableError(
        message,
        state=pipeline.state.value,
        last_error=last_error.message if last_error else None,
    )


def _health(pipeline: IntentPipeline, settings: Settings) -> JSONResponse:
    response = HealthResponse(
        status=pipeline.state,
        ready=pipeline.is_ready,
        message=pipeline.status_message,
        version=settings.APP_VERSION,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if pipeline.is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )


@router.post(
    "/predict",
    response_model=PredictResponse,
    summary="Predict the intent of a sentence",
    responses={
        200: {"description": "Intent predicted"},
        400: {"description": "Blank or invalid input"},
        502: {"description": "Model invocation failed for this request"},
        503: {"description": "Pipeline not ready"},
    },
)
def predict_intent(
    request: PredictRequest,
    pipeline: IntentPipeline = Depends(get_pipeline),
):
    """
    Normalize, encode and classify one sentence.

    Args:
        request: PredictRequest with non-blank text
        pipeline: Pipeline singleton (injected)
    """
    outcome = pipeline.predict(request.text)

    if outcome.status == PredictionStatus.UNAVAILABLE:
        raise _unavailable(pipeline, outcome.message)

    body = PredictResponse.from_outcome(outcome)
    if outcome.status == PredictionStatus.FAILED:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=body.model_dump(mode="json"),
        )
    return body


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Pipeline health check",
    responses={
        200: {"description": "Pipeline ready"},
        503: {"description": "Pipeline uninitialized, loading or failed"},
    },
)
async def health_check(
    pipeline: IntentPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
):
    """Report the pipeline state without touching the engine."""
    return _health(pipeline, settings)


@router.post(
    "/reload",
    response_model=HealthResponse,
    summary="Re-initialize the pipeline",
    description="Reloads the model artifact and side-tables. This is the only "
    "way out of the failed state.",
    responses={
        200: {"description": "Pipeline ready"},
        503: {"description": "Initialization failed"},
    },
)
def reload_pipeline(
    pipeline: IntentPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
):
    logger.info("Pipeline reload requested", state=pipeline.state.value)
    pipeline.initialize()
    return _health(pipeline, settings)


@router.get(
    "/labels",
    response_model=LabelsResponse,
    summary="Label Table in model output order",
    responses={503: {"description": "Pipeline not ready"}},
)
async def get_labels(
    pipeline: IntentPipeline = Depends(get_pipeline),
) -> LabelsResponse:
    vocabulary = pipeline.vocabulary
    if not pipeline.is_ready or vocabulary is None:
        raise _unavailable(pipeline, pipeline.status_message)
    return LabelsResponse(labels=list(vocabulary.labels), count=vocabulary.num_labels)


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Get pipeline version information",
)
async def get_version(
    pipeline: IntentPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
) -> VersionResponse:
    vocabulary = pipeline.vocabulary
    return VersionResponse(
        app_version=settings.APP_VERSION,
        backend=settings.ENGINE_BACKEND,
        model_path=settings.MODEL_PATH,
        max_sequence_length=settings.MAX_SEQUENCE_LENGTH,
        oov_token_id=settings.OOV_TOKEN_ID,
        num_labels=vocabulary.num_labels if vocabulary else None,
        vocabulary_size=vocabulary.vocabulary_size if vocabulary else None,
    )
