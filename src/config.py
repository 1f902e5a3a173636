"""
Configuration management for the congestion predictor.

Holds the fixed tree-induction constants and loads runtime settings
from environment variables.
"""

import os
from dotenv import load_dotenv
from typing import Optional, Tuple

# Load environment variables from .env file
load_dotenv()


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


class Config:
    """Configuration class for the congestion predictor."""

    # Input data
    ATTENDANCE_DATA_FILE: str = os.getenv("ATTENDANCE_DATA_FILE", "attendance_filtered.csv")

    # Training runtime (optional, raw strings until validated)
    FOREST_RANDOM_STATE_RAW: Optional[str] = _optional_env("FOREST_RANDOM_STATE")
    FOREST_MAX_WORKERS_RAW: Optional[str] = _optional_env("FOREST_MAX_WORKERS")

    # Tree induction (fixed, not read from the environment)
    MIN_SAMPLES_TO_SPLIT: int = 10  # Fewer records than this produce a leaf
    MAX_DEPTH: int = 5  # Nodes deeper than this produce a leaf
    SAMPLE_FRACTION: float = 0.8  # Share of records each tree is trained on
    THRESHOLD_RANGE: Tuple[int, int] = (1, 12)  # Inclusive, applies to every feature
    CONGESTION_MEAN_THRESHOLD: int = 20  # Mean attended count above this is congestion

    @classmethod
    def random_state(cls) -> Optional[int]:
        """Seed for the forest, or None to draw fresh entropy."""
        if cls.FOREST_RANDOM_STATE_RAW is None:
            return None
        return int(cls.FOREST_RANDOM_STATE_RAW)

    @classmethod
    def max_workers(cls) -> Optional[int]:
        """Thread pool size, or None for the executor default."""
        if cls.FOREST_MAX_WORKERS_RAW is None:
            return None
        return int(cls.FOREST_MAX_WORKERS_RAW)

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all configuration values are usable.

        Raises:
            ValueError: If any setting is malformed.
        """
        invalid = []

        if not cls.ATTENDANCE_DATA_FILE:
            invalid.append("ATTENDANCE_DATA_FILE (empty)")

        if cls.FOREST_RANDOM_STATE_RAW is not None:
            try:
                if int(cls.FOREST_RANDOM_STATE_RAW) < 0:
                    invalid.append("FOREST_RANDOM_STATE (must be >= 0)")
            except ValueError:
                invalid.append("FOREST_RANDOM_STATE (not an integer)")

        if cls.FOREST_MAX_WORKERS_RAW is not None:
            try:
                if int(cls.FOREST_MAX_WORKERS_RAW) < 1:
                    invalid.append("FOREST_MAX_WORKERS (must be >= 1)")
            except ValueError:
                invalid.append("FOREST_MAX_WORKERS (not an integer)")

        if not 0.0 <= cls.SAMPLE_FRACTION <= 1.0:
            invalid.append("SAMPLE_FRACTION (must be within [0, 1])")

        low, high = cls.THRESHOLD_RANGE
        if low > high:
            invalid.append("THRESHOLD_RANGE (low bound above high bound)")

        if invalid:
            raise ValueError(
                f"Invalid configuration: {', '.join(invalid)}. "
                f"Please fix these values in your environment or .env file."
            )


# Validate configuration on import
Config.validate()
