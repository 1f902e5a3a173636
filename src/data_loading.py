"""
Data loading for facility attendance records.

Reads the attendance CSV, skips malformed rows and converts the rest
into immutable AttendanceRecord values.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union
import pandas as pd

from src.records import AttendanceRecord

logger = logging.getLogger(__name__)


# CSV columns by position: month, day, facility name, attended count, total visits
RECORD_COLUMNS = ["month", "day", "facility_name", "attended_count", "total_visits"]
NUMERIC_COLUMNS = ["month", "day", "attended_count", "total_visits"]

# Whole-field integers, as accepted by a strict integer parse
INTEGER_PATTERN = r"[+-]?\d+"

# Inclusive valid ranges (None = unbounded)
VALID_RANGES = {
    "month": (1, 12),
    "day": (1, 31),
    "attended_count": (0, None),
    "total_visits": (0, None),
}


def read_attendance_csv(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read the raw attendance CSV into a string DataFrame.

    The first row is a header and is not used for column names; columns
    are taken by position.

    Args:
        path: Path to the CSV file

    Returns:
        DataFrame with RECORD_COLUMNS as string columns

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file has fewer than 5 columns
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Attendance file not found: {path}")

    def skip_bad_line(fields: List[str]) -> None:
        logger.warning(f"Skipping malformed row in {path}: {fields}")
        return None

    raw_df = pd.read_csv(
        path,
        header=0,
        dtype=str,
        keep_default_na=False,
        engine="python",
        on_bad_lines=skip_bad_line
    )

    if raw_df.shape[1] < len(RECORD_COLUMNS):
        raise ValueError(
            f"Attendance file {path} has {raw_df.shape[1]} columns, "
            f"expected at least {len(RECORD_COLUMNS)}"
        )

    df = raw_df.iloc[:, :len(RECORD_COLUMNS)].copy()
    df.columns = RECORD_COLUMNS

    logger.info(f"Read {len(df)} rows from {path}")
    return df


def clean_attendance_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Convert numeric columns and drop malformed rows.

    A row is dropped if any numeric field is missing or not a plain
    integer (optional sign and digits only, so "1.0" and "1e1" are rejected),
    if the facility name is blank, or if a value falls outside
    VALID_RANGES. Each dropped row is logged and skipped.

    Args:
        df: String DataFrame from read_attendance_csv

    Returns:
        DataFrame with integer numeric columns and only valid rows
    """
    df = df.copy()
    df["facility_name"] = df["facility_name"].astype(str).str.strip()

    valid = df["facility_name"] != ""
    for col in NUMERIC_COLUMNS:
        stripped = df[col].fillna("").astype(str).str.strip()
        is_integer = stripped.str.fullmatch(INTEGER_PATTERN).fillna(False).astype(bool)
        converted = pd.to_numeric(stripped.where(is_integer), errors="coerce")

        low, high = VALID_RANGES[col]
        in_range = pd.Series(True, index=df.index)
        if low is not None:
            in_range &= converted >= low
        if high is not None:
            in_range &= converted <= high

        valid &= is_integer & in_range
        df[col] = converted

    for index, row in df[~valid].iterrows():
        logger.warning(f"Skipping invalid data row {index + 1}: {row.to_dict()}")

    cleaned = df[valid].copy()
    for col in NUMERIC_COLUMNS:
        cleaned[col] = cleaned[col].astype(int)

    logger.info(f"Kept {len(cleaned)} valid rows, skipped {int((~valid).sum())}")
    return cleaned


def frame_to_records(df: pd.DataFrame) -> Tuple[AttendanceRecord, ...]:
    """Convert a cleaned DataFrame into an immutable tuple of records."""
    return tuple(
        AttendanceRecord(
            month=int(row.month),
            day=int(row.day),
            facility_name=str(row.facility_name),
            attended_count=int(row.attended_count),
            total_visits=int(row.total_visits)
        )
        for row in df.itertuples(index=False)
    )


def load_attendance_records(path: Union[str, Path]) -> Tuple[AttendanceRecord, ...]:
    """
    Load attendance records from a CSV file.

    Args:
        path: Path to the CSV file

    Returns:
        Tuple of valid AttendanceRecord values in file order
    """
    df = read_attendance_csv(path)
    df = clean_attendance_frame(df)
    records = frame_to_records(df)

    logger.info(f"Loaded {len(records)} attendance records")
    return records


def unique_facility_names(records: Iterable[AttendanceRecord]) -> List[str]:
    """Distinct facility names in order of first appearance."""
    return list(dict.fromkeys(record.facility_name for record in records))
