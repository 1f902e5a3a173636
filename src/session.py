"""
Prediction session.

Owns the loaded records and the trained forest so the menu and tests
pass explicit state around instead of relying on module globals.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple, Union

from src.config import Config
from src.data_loading import load_attendance_records, unique_facility_names
from src.evaluation import evaluate_forest
from src.random_forest import RandomForest
from src.records import AttendanceRecord

logger = logging.getLogger(__name__)


class PredictionSession:
    """Records plus the forest trained on them."""

    def __init__(
        self,
        random_state: Optional[int] = None,
        max_workers: Optional[int] = None,
        forest: Optional[RandomForest] = None
    ):
        self.records: Tuple[AttendanceRecord, ...] = ()
        self.forest = forest if forest is not None else RandomForest(
            random_state=random_state,
            max_workers=max_workers
        )

    @property
    def has_records(self) -> bool:
        return len(self.records) > 0

    @property
    def is_trained(self) -> bool:
        return self.forest.is_trained

    def load_records(self, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Load records from a CSV file once.

        Returns:
            True if records were loaded, False if they were already loaded
        """
        if self.has_records:
            logger.info("Records have already been processed, skipping load")
            return False

        path = path or Config.ATTENDANCE_DATA_FILE
        start = time.perf_counter()
        self.records = load_attendance_records(path)
        elapsed = time.perf_counter() - start

        logger.info(f"Processed {len(self.records)} records in {elapsed:.3f}s")
        return True

    def train(self, tree_count: int) -> float:
        """
        Train the forest on the loaded records.

        Returns:
            Training time in seconds

        Raises:
            RuntimeError: If no records have been loaded
        """
        if not self.has_records:
            raise RuntimeError("No records loaded. Process the records before training.")

        start = time.perf_counter()
        self.forest.train(self.records, tree_count)
        elapsed = time.perf_counter() - start

        logger.info(f"Forest trained with {tree_count} trees in {elapsed:.3f}s")
        return elapsed

    def facility_names(self) -> List[str]:
        return unique_facility_names(self.records)

    def predict(self, facility_name: str, month: int, day: int) -> bool:
        return self.forest.predict(facility_name, month, day)

    def evaluate(self) -> dict:
        """In-sample evaluation of the forest on the loaded records."""
        if not self.is_trained:
            raise RuntimeError("The forest has not been trained yet.")
        return evaluate_forest(self.forest, self.records)
