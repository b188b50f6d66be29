# Project: weather-history
# Owner: GreenUnicorn
"""
validation.py — Input checks for the coordinate and date-range form.

Every function here is pure: the dashboard calls them on each rerun to
enable/disable the fetch button and to decide which field hints to show.
"""

import math
import re
from datetime import date


LATITUDE_BOUNDS = (-90.0, 90.0)
LONGITUDE_BOUNDS = (-180.0, 180.0)

# ERA5 coverage in the Open-Meteo archive starts here
MIN_DATE = date(1940, 1, 1)
MAX_RANGE_DAYS = 366

_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_coordinate(text: str | None) -> float | None:
    """Parse coordinate text into a finite float.

    Args:
        text: Raw field contents, e.g. '40.7128' or ' -74 '.

    Returns:
        The parsed value, or None if the text is empty, not plain decimal
        or exponent notation, or overflows to infinity.
    """
    if text is None:
        return None
    text = text.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def _in_bounds(text: str | None, bounds: tuple[float, float]) -> bool:
    value = parse_coordinate(text)
    if value is None:
        return False
    low, high = bounds
    return low <= value <= high


def validate_latitude(text: str | None) -> bool:
    """True iff text parses to a finite number in [-90, 90]."""
    return _in_bounds(text, LATITUDE_BOUNDS)


def validate_longitude(text: str | None) -> bool:
    """True iff text parses to a finite number in [-180, 180]."""
    return _in_bounds(text, LONGITUDE_BOUNDS)


def validate_date_range(start: date | None, end: date | None) -> bool:
    """Check a (start, end) selection from the date picker.

    Args:
        start: First day, or None while the user has not picked one.
        end: Last day, or None while the user has picked only the start.

    Returns:
        True iff both are present, end >= start, and the span is at most
        MAX_RANGE_DAYS days.
    """
    if start is None or end is None:
        return False
    span = (end - start).days
    return 0 <= span <= MAX_RANGE_DAYS


def can_submit(
    latitude: str | None,
    longitude: str | None,
    start: date | None,
    end: date | None,
) -> bool:
    """Return True when the form holds a complete, valid request."""
    if not latitude or not latitude.strip():
        return False
    if not longitude or not longitude.strip():
        return False
    return (
        validate_latitude(latitude)
        and validate_longitude(longitude)
        and validate_date_range(start, end)
    )


def is_selectable_date(day: date, today: date | None = None) -> bool:
    """True if *day* lies inside the archive window [MIN_DATE, today]."""
    if today is None:
        today = date.today()
    return MIN_DATE <= day <= today


def _accept_edit(text: str, bounds: tuple[float, float]) -> bool:
    # "" and "-" are intermediate states on the way to e.g. "-74"
    if text == "" or text == "-":
        return True
    return _in_bounds(text, bounds)


def accept_latitude_edit(text: str) -> bool:
    """Decide whether an in-progress latitude edit should be kept.

    Accepts empty text, a bare minus sign, or anything that parses to a
    value inside [-90, 90]. Everything else is rejected so the field keeps
    its previous contents.
    """
    return _accept_edit(text, LATITUDE_BOUNDS)


def accept_longitude_edit(text: str) -> bool:
    """Longitude counterpart of accept_latitude_edit, bounded to [-180, 180]."""
    return _accept_edit(text, LONGITUDE_BOUNDS)
