"""
Inference engine abstraction and runtime backends.

Components:
- BaseInferenceEngine: Abstract single-instance engine (load/run/close)
- TFLiteEngine: LiteRT interpreter over the bundled .tflite artifact
- OnnxEngine: onnxruntime session over an .onnx export
- EnginePool: Exclusive leasing of one or more loaded instances
- create_engine: Backend-name factory
"""

from intent_classifier.engine.base_engine import BaseInferenceEngine
from intent_classifier.engine.factory import create_engine
from intent_classifier.engine.onnx_engine import OnnxEngine
from intent_classifier.engine.pool import EnginePool
from intent_classifier.engine.tflite_engine import TFLiteEngine

__all__ = [
    "BaseInferenceEngine",
    "TFLiteEngine",
    "OnnxEngine",
    "EnginePool",
    "create_engine",
]
