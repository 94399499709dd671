# photo_frame/selection/buckets.py
from __future__ import annotations

"""
Age buckets for weighted selection.

Exports:
- validate_buckets(buckets) -> list of problems (empty when valid)
- photo_age_days(photo, now) -> float | None
- partition_by_age(photos, buckets, now) -> list[list[PhotoRecord]]
- choose_bucket(pools, buckets, roll_fn) -> int

Notes:
- A photo lands in the first bucket whose max_age_days it satisfies.
- Photos without a timestamp, or older than every bounded bucket, land in the
  last bucket.
- Empty pools drop out of the draw; the rest keep their configured weights.
"""

from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Sequence

from ..constants import BUCKET_WEIGHT_TOTAL, SECONDS_PER_DAY
from ..core_types import PhotoRecord, TimeBucket


def validate_buckets(buckets: Sequence[TimeBucket]) -> List[str]:
    """Return human-readable problems with a bucket list; [] when valid."""
    problems: List[str] = []
    if not buckets:
        return ["at least one time bucket is required"]

    total = 0
    prev_age = 0.0
    for i, bucket in enumerate(buckets):
        if bucket.weight < 0:
            problems.append(f"bucket {i} has negative weight {bucket.weight}")
        total += bucket.weight
        if bucket.max_age_days <= 0:
            problems.append(f"bucket {i} max age must be positive")
        elif i > 0 and bucket.max_age_days <= prev_age:
            problems.append(
                f"bucket {i} max age {bucket.label()} is not above {prev_age:g}"
            )
        prev_age = bucket.max_age_days
    if total != BUCKET_WEIGHT_TOTAL:
        problems.append(
            f"bucket weights sum to {total}, expected {BUCKET_WEIGHT_TOTAL}"
        )
    if not buckets[-1].unbounded:
        problems.append("the last bucket must be unbounded (inf)")
    return problems


def align_tz(when: datetime, now: datetime) -> datetime:
    """Give naive timestamps the clock's zone (UTC if the clock is aware)."""
    if when.tzinfo is None and now.tzinfo is not None:
        return when.replace(tzinfo=timezone.utc)
    if when.tzinfo is not None and now.tzinfo is None:
        return when.astimezone(timezone.utc).replace(tzinfo=None)
    return when


def photo_age_days(photo: PhotoRecord, now: datetime) -> Optional[float]:
    """Age in fractional days, or None when the photo has no timestamp."""
    if photo.capture_timestamp is None:
        return None
    taken = align_tz(photo.capture_timestamp, now)
    return (now - taken).total_seconds() / SECONDS_PER_DAY


def partition_by_age(
    photos: Iterable[PhotoRecord], buckets: Sequence[TimeBucket], now: datetime
) -> List[List[PhotoRecord]]:
    """Split photos into one pool per bucket, preserving catalog order."""
    pools: List[List[PhotoRecord]] = [[] for _ in buckets]
    last = len(buckets) - 1
    for photo in photos:
        age = photo_age_days(photo, now)
        if age is None:
            pools[last].append(photo)
            continue
        for i, bucket in enumerate(buckets):
            if age <= bucket.max_age_days:
                pools[i].append(photo)
                break
        else:
            pools[last].append(photo)
    return pools


def choose_bucket(
    pools: Sequence[Sequence[PhotoRecord]],
    buckets: Sequence[TimeBucket],
    roll_fn: Callable[[], float],
) -> int:
    """
    Weighted draw over the non-empty pools.

    roll_fn returns a uniform float in [0, 1). Surviving buckets keep their
    configured weights, so the mass of empty buckets is absorbed in proportion.
    If every surviving bucket has weight 0 the draw is uniform over them.
    """
    active = [i for i, pool in enumerate(pools) if pool]
    if not active:
        raise ValueError("no bucket has candidates")

    active_weight = sum(buckets[i].weight for i in active)
    if active_weight <= 0:
        return active[min(int(roll_fn() * len(active)), len(active) - 1)]

    roll = roll_fn() * active_weight
    cumulative = 0
    for i in active:
        cumulative += buckets[i].weight
        if roll < cumulative:
            return i
    # Float edge: fall back to the last bucket that carries weight.
    return [i for i in active if buckets[i].weight > 0][-1]


__all__ = [
    "validate_buckets",
    "align_tz",
    "photo_age_days",
    "partition_by_age",
    "choose_bucket",
]
