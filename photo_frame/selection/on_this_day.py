# photo_frame/selection/on_this_day.py
from __future__ import annotations

"""
"On this day" matching: photos taken near today's month/day in an earlier year.
"""

from datetime import date, datetime
from typing import Iterable, List

from ..constants import DAYS_IN_YEAR, ON_THIS_DAY_REFERENCE_YEAR
from ..core_types import PhotoRecord
from .buckets import align_tz


def _as_date(value: datetime | date) -> date:
    return value.date() if isinstance(value, datetime) else value


def day_of_year_distance(a: date, b: date) -> int:
    """
    Month/day distance in days, ignoring the year.
    Wraps at the Dec/Jan boundary: min(direct, 365 - direct).
    """
    ref_a = date(ON_THIS_DAY_REFERENCE_YEAR, a.month, a.day)
    ref_b = date(ON_THIS_DAY_REFERENCE_YEAR, b.month, b.day)
    direct = abs((ref_a - ref_b).days)
    return min(direct, DAYS_IN_YEAR - direct)


def is_on_this_day(taken: datetime | date, today: datetime | date, window_days: int) -> bool:
    """
    True when `taken` falls within the window around today's month/day in another year.
    Mixed naive/aware datetimes are aligned through UTC before dates are compared.
    """
    if isinstance(taken, datetime) and isinstance(today, datetime):
        taken = align_tz(taken, today)
        if taken.tzinfo is not None and today.tzinfo is not None:
            taken = taken.astimezone(today.tzinfo)
    taken_d = _as_date(taken)
    today_d = _as_date(today)
    if taken_d.year == today_d.year:
        return False
    return day_of_year_distance(taken_d, today_d) <= window_days


def find_on_this_day(
    photos: Iterable[PhotoRecord], today: datetime | date, window_days: int
) -> List[PhotoRecord]:
    """Photos with a timestamp that match today's month/day from a previous year."""
    return [
        p
        for p in photos
        if p.capture_timestamp is not None
        and is_on_this_day(p.capture_timestamp, today, window_days)
    ]


__all__ = ["day_of_year_distance", "is_on_this_day", "find_on_this_day"]
