"""Parsing helpers for filter parameters passed in query strings."""

from datetime import datetime
from typing import Optional, Tuple

from shiftsync.shared.exceptions import InvalidDataError


def parse_id_param(value: Optional[str], label: str) -> Optional[int]:
    """
    Parse an optional numeric id filter.

    Raises:
        InvalidDataError: If the value is present but not an integer
    """
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise InvalidDataError(f"Invalid {label} ID")


def _parse_datetime(value: str) -> datetime:
    # fromisoformat does not accept the trailing Z browsers send
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_date_range(
    start: Optional[str], end: Optional[str]
) -> Optional[Tuple[datetime, datetime]]:
    """
    Parse a startDate / endDate filter pair.

    Returns None unless both bounds are given.

    Raises:
        InvalidDataError: If either bound is not an ISO 8601 date or datetime
    """
    if not start or not end:
        return None
    try:
        return _parse_datetime(start), _parse_datetime(end)
    except ValueError:
        raise InvalidDataError("Invalid date format")
