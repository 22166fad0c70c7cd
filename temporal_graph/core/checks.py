"""
Temporal Graph Input Checks

Malformed input is a programmer error, not an outcome. These guards run
before any state is read or written and raise immediately.
"""

from datetime import date, datetime
from typing import Any


def require(value: Any, name: str) -> Any:
    """Raise TypeError if a required argument is missing."""
    if value is None:
        raise TypeError(f"{name} may not be None")
    return value


def as_day(value: Any, name: str = "Date") -> date:
    """Validate a timestamp argument and normalize it to a calendar day.

    datetimes are truncated to their date so they compare with plain dates.
    """
    require(value, name)
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise TypeError(f"{name} must be a date, got {type(value).__name__}")
    return value


def as_distance(value: Any, name: str = "Distance") -> int:
    """Validate a hop bound. Range is checked by the caller (it is an outcome)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value
