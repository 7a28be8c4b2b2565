"""
FastAPI routes and supporting pieces.

- routes.py: POST /predict, GET /health, POST /reload, GET /labels, GET /version
- dependencies.py: Settings and pipeline singletons
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request id tracing
"""

from intent_classifier.api import dependencies, error_handlers, models
from intent_classifier.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
