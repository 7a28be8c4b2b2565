"""
Unit tests for the Intent Classifier.

Test individual components in isolation:
- Text normalizer and sequence encoder
- Vocabulary Store loading and validation
- Decision layer
- Engines and the engine pool (stub runtime)
- Pipeline state machine
- API models and dependencies
"""
