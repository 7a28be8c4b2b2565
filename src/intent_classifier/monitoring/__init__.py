"""Monitoring and metrics instrumentation for the Intent Classifier.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from intent_classifier.monitoring.metrics import (
    inference_latency_seconds,
    oov_tokens_total,
    pipeline_initializations_total,
    pipeline_ready,
    predicted_labels_total,
    predictions_total,
    truncated_inputs_total,
)

__all__ = [
    "predictions_total",
    "predicted_labels_total",
    "inference_latency_seconds",
    "oov_tokens_total",
    "truncated_inputs_total",
    "pipeline_initializations_total",
    "pipeline_ready",
]
