import math
from typing import Optional, Sequence

import numpy as np

from .items import DataItem


def _confusion_counts(predictions: Sequence[int], test_items: Sequence[DataItem]):
    y_true = np.array([it.category for it in test_items], dtype=int)
    y_pred = np.asarray(predictions, dtype=int)
    tp = int(np.sum((y_pred == 1) & (y_true == 1)))
    fp = int(np.sum((y_pred == 1) & (y_true == 0)))
    fn = int(np.sum((y_pred == 0) & (y_true == 1)))
    tn = int(np.sum((y_pred == 0) & (y_true == 0)))
    return tp, fp, fn, tn


def compute_f1_score(predictions: Sequence[int], test_items: Sequence[DataItem]) -> float:
    """
    Binary F1 of predictions against the categories of test_items.

    Zero denominators are not guarded: no positive predictions gives a NaN
    precision and the F1 is NaN. Search code treats NaN as never better.
    """
    if len(predictions) != len(test_items):
        raise ValueError(f"Length mismatch: {len(predictions)} predictions for {len(test_items)} items")
    tp, fp, fn, _ = _confusion_counts(predictions, test_items)
    with np.errstate(divide="ignore", invalid="ignore"):
        tp = np.float64(tp)
        precision = tp / (tp + fp)
        recall = tp / (tp + fn)
        f1 = 2 * precision * recall / (precision + recall)
    return float(f1)


def score_predictor(test_items: Sequence[DataItem], predictor) -> float:
    answers = predictor.predict_many(test_items)
    return compute_f1_score(answers, test_items)


def is_improvement(candidate: Optional[float], best: float) -> bool:
    """Strictly-greater comparison in which an absent or NaN score always loses."""
    if candidate is None or math.isnan(candidate):
        return False
    return candidate > best
