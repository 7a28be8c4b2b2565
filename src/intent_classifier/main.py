"""
FastAPI application entry point for the Intent Classifier.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from intent_classifier.api.dependencies import get_pipeline
from intent_classifier.api.error_handlers import EXCEPTION_HANDLERS
from intent_classifier.api.middleware import RequestTracingMiddleware
from intent_classifier.api.routes import router
from intent_classifier.config import settings
from intent_classifier.logging_config import configure_logging

# Configure structured logging before anything logs
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Predicts user intent from free text with an on-device text classifier",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (first, so request_id is in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["intent"])


@app.on_event("startup")
async def startup():
    """Load the model and side-tables once, before serving."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        backend=settings.ENGINE_BACKEND,
        model_path=settings.MODEL_PATH,
    )

    if settings.INITIALIZE_ON_STARTUP:
        pipeline = get_pipeline()
        state = pipeline.initialize()
        logger.info("Application startup complete", pipeline_state=state.value)
    else:
        logger.info("Pipeline initialization deferred until POST /reload")


@app.on_event("shutdown")
async def shutdown():
    """Release the engine pool."""
    logger.info("Application shutdown")
    get_pipeline().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "predict": "/predict",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "intent_classifier.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
