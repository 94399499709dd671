"""
Shared fixtures for photo_frame tests.
"""

import random
from datetime import datetime, timedelta

import pytest

from photo_frame.core_types import PhotoRecord


NOW = datetime(2026, 6, 10, 12, 0, 0)


class FixedRoll:
    """random.Random stand-in whose random() always returns the same value."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def never_anniversary():
    """Anniversary roll that always declines the on-this-day path."""
    return FixedRoll(0.99)


@pytest.fixture
def always_anniversary():
    """Anniversary roll that always takes the on-this-day path."""
    return FixedRoll(0.0)


@pytest.fixture
def make_photo():
    """Factory: make_photo("a", days_old=10) -> PhotoRecord taken 10 days before NOW."""

    def _make(url, days_old=None, taken=None, width=800, height=600):
        if taken is None and days_old is not None:
            taken = NOW - timedelta(days=days_old)
        return PhotoRecord(url=url, width=width, height=height, capture_timestamp=taken)

    return _make
