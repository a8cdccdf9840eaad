import math

import pytest

from knn_search.items import DataItem
from knn_search.predictor import Predictor
from knn_search.registry import BASE, EUCLID, UNIFORM
from knn_search.scoring import _confusion_counts, compute_f1_score, is_improvement, score_predictor


def _labelled(categories):
    return [DataItem((float(i), 0.0), c) for i, c in enumerate(categories)]


class TestComputeF1Score:
    """Binary F1 with NaN on zero denominators."""

    def test_reference_example(self):
        # TP=2, FP=1, FN=0 -> precision 2/3, recall 1
        assert compute_f1_score([1, 1, 0, 1], _labelled([1, 0, 0, 1])) == pytest.approx(0.8)

    def test_perfect_predictions(self):
        assert compute_f1_score([0, 1, 1, 0], _labelled([0, 1, 1, 0])) == pytest.approx(1.0)

    def test_no_positive_predictions_is_nan(self):
        assert math.isnan(compute_f1_score([0, 0, 0], _labelled([1, 0, 1])))
        assert math.isnan(compute_f1_score([0, 0], _labelled([0, 0])))

    def test_all_wrong_is_nan(self):
        # precision 0 and recall 0 leave 0/0 in the harmonic mean
        assert math.isnan(compute_f1_score([1, 0], _labelled([0, 1])))

    def test_recall_only_half(self):
        # TP=1, FN=1, FP=0 -> precision 1, recall 0.5
        assert compute_f1_score([1, 0, 0], _labelled([1, 1, 0])) == pytest.approx(2 / 3)

    def test_empty_input_is_nan(self):
        assert math.isnan(compute_f1_score([], []))

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="Length mismatch"):
            compute_f1_score([1, 0], _labelled([1]))


class TestScorePredictor:
    def test_scores_predictor_on_test_items(self, four_points):
        predictor = Predictor(four_points, EUCLID, UNIFORM, 2, BASE)
        test = [DataItem((0.1, 0.1), 0), DataItem((9.9, 10.1), 1), DataItem((10.2, 9.9), 1)]
        assert score_predictor(test, predictor) == pytest.approx(1.0)


class TestIsImprovement:
    """Absent and NaN scores always lose; equal scores do not replace."""

    def test_strictly_greater_wins(self):
        assert is_improvement(0.7, 0.5)

    def test_equal_score_loses(self):
        assert not is_improvement(0.5, 0.5)

    def test_lower_score_loses(self):
        assert not is_improvement(0.2, 0.5)

    def test_nan_loses(self):
        assert not is_improvement(float("nan"), 0.0)
        assert not is_improvement(float("nan"), -1.0)

    def test_absent_loses(self):
        assert not is_improvement(None, 0.0)


class TestConfusionCounts:
    def test_hand_tally(self):
        # pairs (pred, true): tp x2, fp x1, fn x2, tn x1
        preds = [1, 1, 1, 0, 0, 0]
        assert _confusion_counts(preds, _labelled([1, 1, 0, 1, 1, 0])) == (2, 1, 2, 1)
