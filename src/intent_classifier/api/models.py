"""
API-specific request and response models for FastAPI endpoints.

These wrap the core PredictionOutcome / PipelineState with HTTP-facing
fields.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from intent_classifier.models.enums import PipelineState, PredictionStatus
from intent_classifier.models.prediction_models import PredictionOutcome


EMPTY_INPUT_MESSAGE = "Please enter a sentence"


class PredictRequest(BaseModel):
    """Request for intent prediction."""

    text: str = Field(
        description="Free-text user input",
        max_length=10000,
        examples=["schedule a meating tommorow"],
    )

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(EMPTY_INPUT_MESSAGE)
        return value


class PredictResponse(BaseModel):
    """Response for the predict endpoint."""

    status: PredictionStatus = Field(
        description="Prediction outcome",
        examples=["success", "unavailable", "failed"],
    )
    label: Optional[str] = Field(
        default=None,
        description="Predicted intent (present only if status=success)",
    )
    confidence: Optional[float] = Field(
        default=None,
        description="Raw model score of the predicted intent",
    )
    message: str = Field(
        description="Human-readable status line",
        examples=["Predicted Intent: create_event (Confidence: 0.900)"],
    )

    @classmethod
    def from_outcome(cls, outcome: PredictionOutcome) -> "PredictResponse":
        prediction = outcome.prediction
        return cls(
            status=outcome.status,
            label=prediction.label if prediction else None,
            confidence=prediction.confidence if prediction else None,
            message=outcome.message,
        )


class HealthResponse(BaseModel):
    """Response for health check and reload endpoints."""

    status: PipelineState = Field(
        description="Pipeline state",
        examples=["ready", "failed"],
    )
    ready: bool = Field(description="True when predictions are being served")
    message: str = Field(
        description="Human-readable pipeline status",
        examples=["Model and resources loaded successfully"],
    )
    version: str = Field(description="Service version", examples=["0.1.0"])
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Check timestamp (UTC)",
    )


class LabelsResponse(BaseModel):
    """Response for the label table endpoint."""

    labels: list[str] = Field(description="Label Table in model output order")
    count: int = Field(ge=0)


class VersionResponse(BaseModel):
    """Response for version info endpoint."""

    app_version: str
    backend: str = Field(description="Configured inference backend", examples=["tflite"])
    model_path: str
    max_sequence_length: int
    oov_token_id: int
    num_labels: Optional[int] = Field(
        default=None, description="Label count (None until the pipeline is ready)"
    )
    vocabulary_size: Optional[int] = Field(
        default=None, description="Word index size (None until the pipeline is ready)"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error code",
        examples=["pipeline_unavailable", "prediction_failed", "invalid_request"],
    )
    message: str = Field(description="Human-readable error message")
    details: Optional[dict] = Field(default=None)
    timestamp: datetime = Field(default_factory=datetime.utcnow)
