"""Shared pytest fixtures: puts the project root on the import path and builds record sets."""

import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.records import AttendanceRecord  # noqa: E402


@pytest.fixture
def make_records():
    """Factory for records with the given attended counts and varied other fields."""

    def _make(attended_counts, facility_name="Hospital Central"):
        return [
            AttendanceRecord(
                month=(i % 12) + 1,
                day=(i % 31) + 1,
                facility_name=facility_name,
                attended_count=count,
                total_visits=count + (i % 7)
            )
            for i, count in enumerate(attended_counts)
        ]

    return _make


@pytest.fixture
def congestion_records(make_records):
    """20 records: 15 with attended_count=30 and 5 with attended_count=5."""
    return make_records([30] * 15 + [5] * 5)


@pytest.fixture
def large_records():
    """1000 random records across three facilities."""
    rng = np.random.default_rng(2024)
    facilities = ["Posta Norte", "Centro de Salud Sur", "Hospital Regional"]
    return tuple(
        AttendanceRecord(
            month=int(rng.integers(1, 13)),
            day=int(rng.integers(1, 32)),
            facility_name=facilities[i % len(facilities)],
            attended_count=int(rng.integers(0, 60)),
            total_visits=int(rng.integers(0, 120))
        )
        for i in range(1000)
    )
