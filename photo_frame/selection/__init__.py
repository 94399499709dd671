# photo_frame/selection/__init__.py
"""
Photo selection: age-weighted picks, on-this-day picks, and history.
"""

from .buckets import choose_bucket, partition_by_age, photo_age_days, validate_buckets
from .history import HistoryStatus, NavigationHistory, NavigationStatus, RecentHistory
from .on_this_day import day_of_year_distance, find_on_this_day, is_on_this_day
from .picker import PhotoPicker

__all__ = [
    "PhotoPicker",
    "RecentHistory",
    "NavigationHistory",
    "HistoryStatus",
    "NavigationStatus",
    "validate_buckets",
    "photo_age_days",
    "partition_by_age",
    "choose_bucket",
    "day_of_year_distance",
    "is_on_this_day",
    "find_on_this_day",
]
