"""
Unit tests for Settings.
"""

import pytest
from pydantic import ValidationError

from intent_classifier.config import Settings


def test_defaults(monkeypatch):
    for key in ("MODEL_PATH", "ENGINE_BACKEND", "MAX_SEQUENCE_LENGTH", "ENGINE_POOL_SIZE"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings(_env_file=None)

    assert settings.MODEL_PATH == "ml/intent_classifier.tflite"
    assert settings.TOKENIZER_PATH == "ml/tokenizer.json"
    assert settings.LABEL_ENCODER_PATH == "ml/label_encoder.json"
    assert settings.ENGINE_BACKEND == "tflite"
    assert settings.ENGINE_POOL_SIZE == 1
    assert settings.MAX_SEQUENCE_LENGTH == 50
    assert settings.OOV_TOKEN_ID == 1
    assert settings.PAD_TOKEN_ID == 0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ENGINE_BACKEND", "onnx")
    monkeypatch.setenv("MODEL_PATH", "/opt/models/intent.onnx")
    monkeypatch.setenv("ENGINE_POOL_SIZE", "4")

    settings = Settings(_env_file=None)

    assert settings.ENGINE_BACKEND == "onnx"
    assert settings.MODEL_PATH == "/opt/models/intent.onnx"
    assert settings.ENGINE_POOL_SIZE == 4


def test_env_names_are_case_insensitive(monkeypatch):
    monkeypatch.setenv("max_sequence_length", "64")
    assert Settings(_env_file=None).MAX_SEQUENCE_LENGTH == 64


def test_unknown_backend_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ENGINE_BACKEND="coreml")


@pytest.mark.parametrize(
    "field,value",
    [("ENGINE_POOL_SIZE", 0), ("MAX_SEQUENCE_LENGTH", 0), ("ENGINE_NUM_THREADS", 0)],
)
def test_lower_bounds(field, value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})
