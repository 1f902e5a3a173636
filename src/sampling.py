"""
Bagging sampler.

Draws the randomized training subset each tree is fit on.
"""

import logging
from typing import List, Sequence

import numpy as np

from src.config import Config
from src.records import AttendanceRecord

logger = logging.getLogger(__name__)


def bagging_sample(
    records: Sequence[AttendanceRecord],
    rng: np.random.Generator,
    fraction: float = Config.SAMPLE_FRACTION
) -> List[AttendanceRecord]:
    """
    Shuffle the records and keep the leading fraction of them.

    The shuffle permutes a private index array, so the caller's sequence
    is never reordered. This keeps concurrent samplers over the same
    shared records free of data races.

    Args:
        records: Full training records (not modified)
        rng: Random generator owned by the calling task
        fraction: Share of records to keep, in [0, 1]

    Returns:
        New list of floor(fraction * len(records)) records in shuffled order

    Raises:
        ValueError: If fraction is outside [0, 1]
    """
    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"fraction must be within [0, 1], got {fraction}")

    sample_size = int(len(records) * fraction)
    order = rng.permutation(len(records))[:sample_size]

    logger.debug(f"Bagging sample: {sample_size} of {len(records)} records")
    return [records[i] for i in order]
