"""Unit tests for forest evaluation."""

import pytest

from src.decision_tree import DecisionTree, LeafNode
from src.evaluation import evaluate_forest
from src.random_forest import RandomForest


class TestEvaluateForest:
    """Test metrics against observed congestion."""

    def test_metrics_for_constant_forest(self, make_records):
        """An always-congested forest is right on half of a balanced set."""
        forest = RandomForest(trees=[DecisionTree(root=LeafNode(prediction=True))])
        records = make_records([30, 5, 25, 0])

        metrics = evaluate_forest(forest, records)

        assert metrics["accuracy"] == pytest.approx(0.5)
        assert metrics["n_samples"] == 4
        assert metrics["positive_rate"] == pytest.approx(0.5)
        assert metrics["predicted_positive_rate"] == pytest.approx(1.0)
        assert metrics["confusion_matrix"].tolist() == [[0, 2], [0, 2]]

    def test_untrained_forest_predicts_no_congestion(self, make_records):
        """An empty forest votes False for every record."""
        metrics = evaluate_forest(RandomForest(), make_records([21, 20, 1]))

        assert metrics["accuracy"] == pytest.approx(2 / 3)
        assert metrics["confusion_matrix"].tolist() == [[2, 0], [1, 0]]

    def test_trained_forest_scores_in_range(self, large_records):
        """Accuracy of a trained forest is a valid proportion."""
        forest = RandomForest(random_state=3)
        forest.train(large_records, 9)

        metrics = evaluate_forest(forest, large_records)

        assert 0.0 <= metrics["accuracy"] <= 1.0
        assert metrics["confusion_matrix"].sum() == len(large_records)

    def test_label_uses_forest_threshold(self, make_records):
        """Observed congestion follows the threshold the forest was built with."""
        forest = RandomForest(
            congestion_threshold=5,
            trees=[DecisionTree(root=LeafNode(prediction=True))]
        )
        records = make_records([6, 10, 15, 3])

        metrics = evaluate_forest(forest, records)

        assert metrics["positive_rate"] == pytest.approx(0.75)
        assert metrics["accuracy"] == pytest.approx(0.75)
        assert metrics["confusion_matrix"].tolist() == [[0, 1], [0, 3]]

    def test_empty_records_rejected(self):
        """Evaluation needs at least one record."""
        with pytest.raises(ValueError):
            evaluate_forest(RandomForest(), [])
