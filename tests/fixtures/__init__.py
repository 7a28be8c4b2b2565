"""
Test fixtures for the Intent Classifier.

Contains sample side-tables shaped like the bundled model resources:
- tokenizer.json: word_index export (ids 1..17, "<OOV>" holds id 1)
- label_encoder.json: three-label Label Table (create/cancel/query event)
"""
