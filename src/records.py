"""
Attendance record data model.

One immutable labeled observation per facility/day, plus the set of
numeric features a decision tree may split on.
"""

from dataclasses import dataclass
from enum import Enum


class Feature(str, Enum):
    """Record attributes usable as split features."""

    MONTH = "month"
    DAY = "day"
    ATTENDED_COUNT = "attended_count"
    TOTAL_VISITS = "total_visits"

    def value_of(self, record: "AttendanceRecord") -> int:
        """Read this feature's value from a record."""
        return getattr(record, self.value)


# Candidate split features, in a fixed order so seeded draws are reproducible
FEATURES = (
    Feature.MONTH,
    Feature.DAY,
    Feature.ATTENDED_COUNT,
    Feature.TOTAL_VISITS,
)


@dataclass(frozen=True)
class AttendanceRecord:
    """
    Attendance observed at one facility on one month/day.

    facility_name is carried for display and queries only; it is never
    used as a split feature. Counts default to 0 for query records,
    where they are unknown.
    """

    month: int
    day: int
    facility_name: str
    attended_count: int = 0
    total_visits: int = 0
