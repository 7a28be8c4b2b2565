"""
Configuration settings for the Intent Classifier.

All settings are loaded from environment variables with sensible defaults.
Use a .env file for local development.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Intent Classifier"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches logs to JSON

    # === Bundled Resources ===
    MODEL_PATH: str = "ml/intent_classifier.tflite"
    TOKENIZER_PATH: str = "ml/tokenizer.json"  # {"word_index": {...}}
    LABEL_ENCODER_PATH: str = "ml/label_encoder.json"  # {"classes": [...]}

    # === Inference Engine ===
    ENGINE_BACKEND: Literal["tflite", "onnx"] = "tflite"
    ENGINE_NUM_THREADS: Optional[int] = Field(default=None, ge=1)
    ENGINE_POOL_SIZE: int = Field(default=1, ge=1)  # 1 = single instance, serialized

    # === Preprocessing ===
    # Must match the values the model was trained with
    MAX_SEQUENCE_LENGTH: int = Field(default=50, ge=1)
    OOV_TOKEN_ID: int = 1
    PAD_TOKEN_ID: int = 0

    # === Service ===
    INITIALIZE_ON_STARTUP: bool = True
    CORS_ORIGINS: list[str] = ["*"]

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
