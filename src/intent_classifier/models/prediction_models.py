"""
Per-request result models.

Both are created fresh for every predict() call; nothing is cached or
persisted.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from intent_classifier.models.enums import PredictionStatus


NOT_READY_MESSAGE = "Model not loaded. Please check status."


class Prediction(BaseModel):
    """Selected label and the raw model score at its output position."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Label from the Label Table")
    confidence: float = Field(
        ...,
        description="Raw score of the selected position (not renormalized)",
    )


class PredictionOutcome(BaseModel):
    """
    Result of IntentPipeline.predict().

    Exactly one of three shapes:
    - SUCCESS: prediction is set
    - UNAVAILABLE: pipeline not Ready, engine was not invoked
    - FAILED: engine invocation failed for this request only
    """

    model_config = ConfigDict(frozen=True)

    status: PredictionStatus
    prediction: Optional[Prediction] = None
    message: str = Field(..., description="Human-readable status line")

    @classmethod
    def success(cls, prediction: Prediction) -> "PredictionOutcome":
        return cls(
            status=PredictionStatus.SUCCESS,
            prediction=prediction,
            message=(
                f"Predicted Intent: {prediction.label} "
                f"(Confidence: {prediction.confidence:.3f})"
            ),
        )

    @classmethod
    def unavailable(cls, message: str = NOT_READY_MESSAGE) -> "PredictionOutcome":
        return cls(status=PredictionStatus.UNAVAILABLE, message=message)

    @classmethod
    def failed(cls, reason: str) -> "PredictionOutcome":
        return cls(status=PredictionStatus.FAILED, message=f"Error predicting: {reason}")

    @property
    def is_success(self) -> bool:
        return self.status == PredictionStatus.SUCCESS
