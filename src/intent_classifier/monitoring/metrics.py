"""Custom Prometheus metrics for the Intent Classifier.

Exposed at /metrics when PROMETHEUS_ENABLED. Useful alerts:
- pipeline_ready == 0 (every prediction is answered "unavailable")
- rate of predictions_total{status="failed"} (engine faults)
- oov_tokens_total growing faster than predictions (vocabulary drift)
"""

from prometheus_client import Counter, Gauge, Histogram

# === Prediction Metrics ===

predictions_total = Counter(
    "predictions_total",
    "Total predict() calls by outcome",
    ["status"],
)
"""
Labels:
- status: success, unavailable (pipeline not ready), failed (engine error)
"""

predicted_labels_total = Counter(
    "predicted_labels_total",
    "Successful predictions by selected label",
    ["label"],
)

inference_latency_seconds = Histogram(
    "inference_latency_seconds",
    "Single model invocation latency in seconds",
    ["backend", "success"],
    buckets=[0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0],
)
"""
Buckets sized for a tiny on-device classifier (sub-millisecond to 1s).
Includes time spent waiting for a free engine in the pool.
"""

# === Preprocessing Metrics ===

oov_tokens_total = Counter(
    "oov_tokens_total",
    "Words replaced by the out-of-vocabulary token id",
)

truncated_inputs_total = Counter(
    "truncated_inputs_total",
    "Inputs with more words than the model sequence length",
)

# === Lifecycle Metrics ===

pipeline_initializations_total = Counter(
    "pipeline_initializations_total",
    "Pipeline initialization attempts by outcome",
    ["outcome"],
)
"""
Labels:
- outcome: ready, failed
"""

pipeline_ready = Gauge(
    "pipeline_ready",
    "1 when the pipeline is Ready to serve predictions, else 0",
)
