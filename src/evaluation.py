"""
Model evaluation.

Scores forest votes against the congestion label observed in a set of
attendance records.
"""

import logging
from typing import Sequence
import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix

from src.random_forest import RandomForest
from src.records import AttendanceRecord

logger = logging.getLogger(__name__)


def evaluate_forest(
    forest: RandomForest,
    records: Sequence[AttendanceRecord]
) -> dict:
    """
    Evaluate forest performance on labeled records.

    Each record is voted on with its full feature values (including
    attendance counts) and compared with its observed label,
    attended_count above the forest's congestion threshold, the same
    rule the forest's leaves apply to mean attendance.

    Args:
        forest: Trained forest
        records: Labeled records to score

    Returns:
        Dictionary with evaluation metrics

    Raises:
        ValueError: If records is empty
    """
    if not records:
        raise ValueError("Cannot evaluate on an empty record set")

    threshold = forest.congestion_threshold
    y_true = np.array([record.attended_count > threshold for record in records], dtype=bool)
    y_pred = np.array([forest.vote(record) for record in records], dtype=bool)

    accuracy = accuracy_score(y_true, y_pred)
    matrix = confusion_matrix(y_true, y_pred, labels=[False, True])

    metrics = {
        "accuracy": float(accuracy),
        "confusion_matrix": matrix,
        "n_samples": len(records),
        "positive_rate": float(y_true.mean()),
        "predicted_positive_rate": float(y_pred.mean())
    }

    logger.info("Forest Evaluation Results:")
    logger.info(f"  Samples: {metrics['n_samples']}")
    logger.info(f"  Accuracy: {metrics['accuracy']:.3f}")
    logger.info(f"  Observed congestion rate: {metrics['positive_rate']:.1%}")
    logger.info(f"  Predicted congestion rate: {metrics['predicted_positive_rate']:.1%}")
    logger.info(f"  Confusion matrix [[TN, FP], [FN, TP]]: {matrix.tolist()}")

    return metrics
