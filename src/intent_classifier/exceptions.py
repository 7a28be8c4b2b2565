"""
Exceptions for the intent classification pipeline.

Two failure families, which propagate differently:

- ConfigurationError: a bundled resource or the model artifact is missing,
  malformed, or inconsistent with the Label Table. Fatal to the pipeline
  instance; every later prediction reports "unavailable" until the caller
  re-initializes.
- EngineInvocationError: a single model call failed. Local to that request;
  the pipeline stays Ready.
"""

from typing import Any


class IntentClassifierError(Exception):
    """
    Base exception for all intent classifier errors.

    Carries a structured ``details`` dict for logging and error responses.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# === Configuration errors (fatal, raised at initialization) ===

class ConfigurationError(IntentClassifierError):
    """
    Base class for errors that make the pipeline unusable.

    Never retried automatically.
    """
    pass


class ResourceNotFoundError(ConfigurationError):
    """Raised when the model artifact or a side-table file does not exist."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message, {"path": path} if path else None)
        self.path = path


class ResourceFormatError(ConfigurationError):
    """
    Raised when a side-table cannot be parsed or has the wrong shape.

    Examples:
    - Invalid JSON
    - Top level is not an object
    - Missing "word_index" / "classes" key
    - Non-integer token ids, empty label list
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        errors: list[str] | None = None,
    ):
        details: dict[str, Any] = {}
        if path:
            details["path"] = path
        if errors:
            details["errors"] = errors[:20]  # Limit to first 20
        super().__init__(message, details)
        self.path = path


class EngineBackendUnavailableError(ConfigurationError):
    """
    Raised when the configured inference backend cannot be used.

    Either the backend name is unknown or its runtime library
    (ai-edge-litert, onnxruntime) is not installed.
    """
    pass


class ModelLoadError(ConfigurationError):
    """Raised when the artifact exists but the runtime refuses to load it."""
    pass


class EngineNotInitializedError(ConfigurationError):
    """Raised when an engine is invoked before load() or after close()."""
    pass


class LabelTableMismatchError(ConfigurationError):
    """
    Raised when the engine output size differs from the Label Table length.

    Never resolved by truncating either side.
    """

    def __init__(self, message: str, num_scores: int, num_labels: int):
        super().__init__(message, {"num_scores": num_scores, "num_labels": num_labels})
        self.num_scores = num_scores
        self.num_labels = num_labels


# === Per-request errors ===

class EngineInvocationError(IntentClassifierError):
    """
    Raised when a model call fails (resource exhaustion, internal fault,
    unexpected tensor shape).

    Transient: reported as a failed prediction for that request only.
    """
    pass


class PipelineUnavailableError(IntentClassifierError):
    """Raised by the HTTP layer when the pipeline is not Ready."""

    def __init__(self, message: str, state: str, last_error: str | None = None):
        details: dict[str, Any] = {"state": state}
        if last_error:
            details["last_error"] = last_error
        super().__init__(message, details)
        self.state = state
