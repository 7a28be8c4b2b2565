"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to HTTP status codes.
"""

from datetime import datetime
from typing import Any

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from intent_classifier.exceptions import (
    ConfigurationError,
    EngineInvocationError,
    PipelineUnavailableError,
)

logger = structlog.get_logger(__name__)


def _error_body(error: str, message: str, details: Any = None) -> dict[str, Any]:
    return {
        "error": error,
        "message": message,
        "details": details,
        "timestamp": datetime.utcnow().isoformat(),
    }


async def pipeline_unavailable_handler(
    request: Request, exc: PipelineUnavailableError
) -> JSONResponse:
    """
    Pipeline not Ready (uninitialized, loading or failed).

    Maps to 503 Service Unavailable.
    """
    logger.warning("Pipeline unavailable", state=exc.state)

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body("pipeline_unavailable", exc.message, exc.details),
    )


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """
    Missing or inconsistent model resources.

    Maps to 503 Service Unavailable.
    """
    logger.error(
        "Configuration error",
        error_type=type(exc).__name__,
        details=exc.details,
    )

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body("configuration_error", exc.message, exc.details),
    )


async def engine_invocation_error_handler(
    request: Request, exc: EngineInvocationError
) -> JSONResponse:
    """
    Model call failed for this request only.

    Maps to 502 Bad Gateway.
    """
    logger.error("Engine invocation error", error=exc.message)

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=_error_body("prediction_failed", f"Error predicting: {exc.message}"),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Malformed request body (missing field, blank text).

    Maps to 400 Bad Request. The first error message becomes the top-level
    message so "Please enter a sentence" reaches the user unchanged.
    """
    errors = [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning("Invalid request format", errors=errors)

    message = "Request validation failed"
    if errors:
        message = errors[0]["msg"].removeprefix("Value error, ")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("invalid_request", message, {"errors": errors}),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Anything unexpected.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    PipelineUnavailableError: pipeline_unavailable_handler,
    ConfigurationError: configuration_error_handler,
    EngineInvocationError: engine_invocation_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
