"""
Randomized decision tree.

Recursively partitions attendance records on a randomly drawn feature
and threshold, ending in leaves that predict congestion from the mean
attended count.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from src.config import Config
from src.records import FEATURES, AttendanceRecord, Feature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeafNode:
    """Terminal node holding the congestion prediction."""

    prediction: bool


@dataclass(frozen=True)
class SplitNode:
    """Internal node: records with feature <= threshold go left, the rest right."""

    feature: Feature
    threshold: int
    left: "Node"
    right: "Node"


Node = Union[LeafNode, SplitNode]


def leaf_prediction(
    records: Sequence[AttendanceRecord],
    congestion_threshold: int = Config.CONGESTION_MEAN_THRESHOLD
) -> bool:
    """
    Predict congestion for a set of records.

    Uses the integer (floor) mean of attended_count. An empty set has
    nothing to infer from and predicts False.
    """
    if not records:
        return False

    total = sum(record.attended_count for record in records)
    mean = total // len(records)
    return mean > congestion_threshold


def split_records(
    records: Sequence[AttendanceRecord],
    feature: Feature,
    threshold: int
) -> Tuple[List[AttendanceRecord], List[AttendanceRecord]]:
    """Stable partition into (value <= threshold, value > threshold)."""
    left, right = [], []
    for record in records:
        if feature.value_of(record) <= threshold:
            left.append(record)
        else:
            right.append(record)
    return left, right


class DecisionTree:
    """
    Binary tree of uniformly random feature/threshold splits.

    The split choice is deliberately not optimized: each internal node
    draws one of the four features and an integer threshold from
    threshold_range with equal probability. The same threshold range is
    used for every feature, including the count features.

    A tree is built once by train() and is read-only afterwards.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        min_samples_split: int = Config.MIN_SAMPLES_TO_SPLIT,
        max_depth: int = Config.MAX_DEPTH,
        threshold_range: Tuple[int, int] = Config.THRESHOLD_RANGE,
        congestion_threshold: int = Config.CONGESTION_MEAN_THRESHOLD,
        root: Optional[Node] = None
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.min_samples_split = min_samples_split
        self.max_depth = max_depth
        self.threshold_range = threshold_range
        self.congestion_threshold = congestion_threshold
        self.root = root if root is not None else LeafNode(prediction=False)

    def train(self, records: Sequence[AttendanceRecord]) -> None:
        """Build the tree from records, starting at depth 0."""
        self.root = self.build_node(records, 0)
        logger.debug(
            f"Trained tree on {len(records)} records: "
            f"{self.node_count()} nodes, depth {self.depth()}"
        )

    def build_node(self, records: Sequence[AttendanceRecord], depth: int) -> Node:
        """
        Build the subtree for records at the given depth.

        Args:
            records: Records reaching this node
            depth: Distance from the root (root is 0)

        Returns:
            A LeafNode when fewer than min_samples_split records remain or
            depth exceeds max_depth, otherwise a SplitNode
        """
        if len(records) < self.min_samples_split or depth > self.max_depth:
            return LeafNode(prediction=leaf_prediction(records, self.congestion_threshold))

        feature, threshold = self.select_split()
        left_records, right_records = split_records(records, feature, threshold)

        return SplitNode(
            feature=feature,
            threshold=threshold,
            left=self.build_node(left_records, depth + 1),
            right=self.build_node(right_records, depth + 1)
        )

    def select_split(self) -> Tuple[Feature, int]:
        """Draw a feature and an inclusive threshold independently and uniformly."""
        feature = FEATURES[int(self.rng.integers(len(FEATURES)))]
        low, high = self.threshold_range
        threshold = int(self.rng.integers(low, high, endpoint=True))
        return feature, threshold

    def predict(self, record: AttendanceRecord) -> bool:
        """Descend from the root using the split rule and return the leaf label."""
        node = self.root
        while isinstance(node, SplitNode):
            if node.feature.value_of(record) <= node.threshold:
                node = node.left
            else:
                node = node.right
        return node.prediction

    def depth(self) -> int:
        """Number of edges on the longest root-to-leaf path."""
        deepest = 0
        stack = [(self.root, 0)]
        while stack:
            node, level = stack.pop()
            if isinstance(node, SplitNode):
                stack.append((node.left, level + 1))
                stack.append((node.right, level + 1))
            else:
                deepest = max(deepest, level)
        return deepest

    def node_count(self) -> int:
        """Total number of split and leaf nodes in the tree."""
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += 1
            if isinstance(node, SplitNode):
                stack.extend((node.left, node.right))
        return count
