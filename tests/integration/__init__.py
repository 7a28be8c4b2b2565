"""
Integration tests for the Intent Classifier.

- HTTP API through FastAPI TestClient with a stub engine
- End-to-end prediction on a real ONNX model (skipped without onnx/onnxruntime)
"""
