"""
Intent Classifier.

Predicts a user "intent" label from free text with a frozen, pre-trained
text-classification model:

- Text normalization (lower-casing, misspelling correction)
- Tokenization against the training vocabulary with an OOV sentinel
- Fixed-length padding / truncation
- Single synchronous model invocation
- Argmax label decoding with confidence

Architecture: FastAPI surface + pooled LiteRT/ONNX inference engine
"""

__version__ = "0.1.0"
