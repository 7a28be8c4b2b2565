"""
Decision Layer: score vector + Label Table -> (label, confidence).
"""

from typing import Sequence

import numpy as np

from intent_classifier.exceptions import LabelTableMismatchError
from intent_classifier.models.prediction_models import Prediction


def decide(scores: Sequence[float] | np.ndarray, labels: Sequence[str]) -> Prediction:
    """
    Select the highest-scoring label.

    Ties go to the lowest index. The confidence is the raw score at that
    index; no softmax or renormalization is applied.

    Args:
        scores: One score per output position
        labels: Label Table, position i <-> scores[i]

    Returns:
        Prediction(label, confidence)

    Raises:
        LabelTableMismatchError: len(scores) != len(labels)

    Examples:
        >>> decide([0.1, 0.7, 0.2], ["create_event", "set_alarm", "greeting"])
        Prediction(label='set_alarm', confidence=0.7)
    """
    values = np.asarray(scores, dtype=np.float64).reshape(-1)

    if values.size != len(labels) or values.size == 0:
        raise LabelTableMismatchError(
            f"Model produced {values.size} scores but the Label Table has {len(labels)} labels",
            num_scores=int(values.size),
            num_labels=len(labels),
        )

    best = int(np.argmax(values))
    return Prediction(label=labels[best], confidence=float(values[best]))
