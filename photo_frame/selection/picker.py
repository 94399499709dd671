# photo_frame/selection/picker.py
from __future__ import annotations

"""
Weighted random photo selection with anti-repetition and navigation history.

PhotoPicker owns all mutable selection state. Every public method takes the
same lock, so one picker can be shared by threads serving the display.

pick(catalog):
  1. On-this-day: with probability 0.5, pick uniformly among photos from this
     month/day (within the window) in an earlier year that were not shown
     recently.
  2. Otherwise partition the catalog into age buckets, minus recent history.
  3. If nothing is left, clear recent history and partition once more.
  4. Weighted draw over non-empty buckets, uniform draw inside the bucket.
  5. Record in recent and navigation history.
"""

import dataclasses
import random
import threading
from datetime import datetime
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from ..constants import (
    HISTORY_SIZE,
    NAVIGATION_HISTORY_FACTOR,
    ON_THIS_DAY_ENABLED,
    ON_THIS_DAY_PROBABILITY,
    ON_THIS_DAY_WINDOW_DAYS,
)
from ..core_types import PhotoRecord, TimeBucket
from ..errors import ConfigError
from .buckets import choose_bucket, partition_by_age, validate_buckets
from .history import HistoryStatus, NavigationHistory, NavigationStatus, RecentHistory
from .on_this_day import find_on_this_day

if TYPE_CHECKING:
    from ..config import FrameConfig

Clock = Callable[[], datetime]


class PhotoPicker:
    """Stateful selection engine. See module docstring for the pick order."""

    def __init__(
        self,
        buckets: Sequence[TimeBucket],
        history_size: int = HISTORY_SIZE,
        *,
        on_this_day_enabled: bool = ON_THIS_DAY_ENABLED,
        on_this_day_window_days: int = ON_THIS_DAY_WINDOW_DAYS,
        rng: Optional[random.Random] = None,
        anniversary_rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        problems = validate_buckets(buckets)
        if problems:
            raise ConfigError(problems)
        self.buckets: List[TimeBucket] = list(buckets)
        self.on_this_day_enabled = bool(on_this_day_enabled)
        self.on_this_day_window_days = int(on_this_day_window_days)

        self._rng = rng or random.Random()
        self._anniversary_rng = anniversary_rng or random.Random()
        self._clock: Clock = clock or datetime.now
        self._lock = threading.RLock()

        self._recent = RecentHistory(history_size)
        self._navigation = NavigationHistory(history_size * NAVIGATION_HISTORY_FACTOR)

    @classmethod
    def from_config(
        cls,
        config: "FrameConfig",
        *,
        rng: Optional[random.Random] = None,
        anniversary_rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> "PhotoPicker":
        return cls(
            config.time_buckets,
            config.history_size,
            on_this_day_enabled=config.on_this_day_enabled,
            on_this_day_window_days=config.on_this_day_window_days,
            rng=rng,
            anniversary_rng=anniversary_rng,
            clock=clock,
        )

    # Selection

    def pick(self, catalog: Optional[Sequence[PhotoRecord]]) -> Optional[PhotoRecord]:
        """Pick the next photo to show, or None for an empty catalog."""
        if catalog is None:
            return None
        catalog = list(catalog)
        if not catalog:
            return None
        with self._lock:
            now = self._clock()

            if self.on_this_day_enabled:
                chosen = self._pick_on_this_day(catalog, now)
                if chosen is not None:
                    self._record(chosen)
                    return chosen

            for _attempt in range(2):
                pools = [
                    [p for p in pool if p.url not in self._recent]
                    for pool in partition_by_age(catalog, self.buckets, now)
                ]
                if any(pools):
                    break
                # Every photo was shown recently: start over.
                self._recent.clear()
            else:
                raise RuntimeError("no candidates after clearing history")

            idx = choose_bucket(pools, self.buckets, self._rng.random)
            chosen = self._rng.choice(pools[idx])
            self._record(chosen)
            return chosen

    def _pick_on_this_day(
        self, catalog: Sequence[PhotoRecord], now: datetime
    ) -> Optional[PhotoRecord]:
        candidates = [
            p
            for p in find_on_this_day(catalog, now, self.on_this_day_window_days)
            if p.url not in self._recent
        ]
        if not candidates:
            return None
        if self._anniversary_rng.random() >= ON_THIS_DAY_PROBABILITY:
            return None
        return dataclasses.replace(self._rng.choice(candidates), on_this_day=True)

    def _record(self, photo: PhotoRecord) -> None:
        self._recent.push(photo.url)
        self._navigation.append(photo)

    # Navigation

    def previous(self) -> Optional[PhotoRecord]:
        with self._lock:
            return self._navigation.previous()

    def next(self) -> Optional[PhotoRecord]:
        with self._lock:
            return self._navigation.next()

    def current(self) -> Optional[PhotoRecord]:
        with self._lock:
            return self._navigation.current()

    def navigation_status(self) -> NavigationStatus:
        with self._lock:
            return self._navigation.status()

    def history_status(self) -> HistoryStatus:
        with self._lock:
            return self._recent.status()

    # Lifecycle

    def clear_history(self) -> None:
        with self._lock:
            self._recent.clear()

    def clear_navigation(self) -> None:
        with self._lock:
            self._navigation.clear()

    def reset(self) -> None:
        """Forget everything, as if freshly constructed."""
        with self._lock:
            self._recent.clear()
            self._navigation.clear()


__all__ = ["PhotoPicker"]
