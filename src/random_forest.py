"""
Random forest of randomized decision trees.

Trains trees concurrently on bagged samples and predicts congestion by
majority vote.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from src.config import Config
from src.decision_tree import DecisionTree
from src.records import AttendanceRecord
from src.sampling import bagging_sample

logger = logging.getLogger(__name__)


class RandomForest:
    """
    Ensemble of DecisionTree instances.

    The forest is either untrained (no trees, every prediction is False)
    or trained. Each call to train() replaces the whole tree collection.
    Tree order depends on which worker finishes first and carries no
    meaning.
    """

    def __init__(
        self,
        random_state: Optional[int] = None,
        max_workers: Optional[int] = None,
        sample_fraction: float = Config.SAMPLE_FRACTION,
        min_samples_split: int = Config.MIN_SAMPLES_TO_SPLIT,
        max_depth: int = Config.MAX_DEPTH,
        threshold_range: Tuple[int, int] = Config.THRESHOLD_RANGE,
        congestion_threshold: int = Config.CONGESTION_MEAN_THRESHOLD,
        trees: Optional[Iterable[DecisionTree]] = None
    ):
        if random_state is not None and random_state < 0:
            raise ValueError(f"random_state must be >= 0, got {random_state}")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self.random_state = random_state
        self.max_workers = max_workers
        self.sample_fraction = sample_fraction
        self.min_samples_split = min_samples_split
        self.max_depth = max_depth
        self.threshold_range = threshold_range
        self.congestion_threshold = congestion_threshold

        self._lock = threading.Lock()
        self._trees: Tuple[DecisionTree, ...] = tuple(trees) if trees is not None else ()

    @property
    def trees(self) -> Tuple[DecisionTree, ...]:
        with self._lock:
            return self._trees

    @property
    def is_trained(self) -> bool:
        return len(self.trees) > 0

    def __len__(self) -> int:
        return len(self.trees)

    def train(self, records: Sequence[AttendanceRecord], tree_count: int) -> None:
        """
        Train tree_count trees in parallel and install them as the forest.

        Blocks until every worker has finished. Each worker draws its own
        bagging sample with its own random generator, so a fixed
        random_state reproduces the same set of trees regardless of
        thread scheduling. Finished trees are collected by the calling
        thread only.

        If any worker fails, the remaining work is cancelled, the error
        is re-raised and the previous trees are kept.

        Args:
            records: Training records, shared read-only by all workers
            tree_count: Number of trees to grow (0 leaves the forest empty)

        Raises:
            ValueError: If tree_count is negative
        """
        if tree_count < 0:
            raise ValueError(f"tree_count must be >= 0, got {tree_count}")

        shared_records = tuple(records)
        seeds = np.random.SeedSequence(self.random_state).spawn(tree_count)

        logger.info(
            f"Training random forest: {tree_count} trees on {len(shared_records)} records"
        )

        trees: List[DecisionTree] = []
        if tree_count > 0:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [
                    executor.submit(self._train_tree, shared_records, seed)
                    for seed in seeds
                ]
                try:
                    for future in as_completed(futures):
                        trees.append(future.result())
                except Exception:
                    for future in futures:
                        future.cancel()
                    logger.error("Tree training failed, keeping the previous forest")
                    raise

        with self._lock:
            self._trees = tuple(trees)

        logger.info(f"Random forest trained with {len(trees)} trees")

    def _train_tree(
        self,
        records: Sequence[AttendanceRecord],
        seed: np.random.SeedSequence
    ) -> DecisionTree:
        """Worker task: sample, build and train one tree."""
        rng = np.random.default_rng(seed)
        sample = bagging_sample(records, rng, self.sample_fraction)

        tree = DecisionTree(
            rng=rng,
            min_samples_split=self.min_samples_split,
            max_depth=self.max_depth,
            threshold_range=self.threshold_range,
            congestion_threshold=self.congestion_threshold
        )
        tree.train(sample)
        return tree

    def vote(self, record: AttendanceRecord) -> bool:
        """
        Majority vote of all trees on one record.

        True only when strictly more than half of the trees (integer
        division) predict congestion, so a tie is False. An empty forest
        returns False.
        """
        trees = self.trees
        if not trees:
            return False

        votes = sum(1 for tree in trees if tree.predict(record))
        return votes > len(trees) // 2

    def predict(self, facility_name: str, month: int, day: int) -> bool:
        """
        Predict whether a facility will be congested on a month/day.

        Attendance counts are unknown at query time and stay at 0. The
        facility name is carried on the query record but no tree splits
        on it.
        """
        if not self.is_trained:
            return False

        query = AttendanceRecord(month=month, day=day, facility_name=facility_name)
        return self.vote(query)
