# photo_frame/selection/history.py
from __future__ import annotations

"""
Bounded histories owned by the picker.

RecentHistory      : FIFO of photo identifiers for anti-repetition.
NavigationHistory  : list of shown photos plus a cursor, with truncate-forward
                     append and oldest-first eviction.

Neither class locks; PhotoPicker serialises access.
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Optional

from ..core_types import PhotoRecord


@dataclass(frozen=True)
class HistoryStatus:
    size: int
    max_size: int

    def as_dict(self) -> Dict[str, Any]:
        return {"size": self.size, "max_size": self.max_size}


@dataclass(frozen=True)
class NavigationStatus:
    can_go_previous: bool
    can_go_next: bool
    index: int
    total: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "can_go_previous": self.can_go_previous,
            "can_go_next": self.can_go_next,
            "index": self.index,
            "total": self.total,
        }


class RecentHistory:
    """Bounded FIFO set of recently picked photo identifiers."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self.capacity = int(capacity)
        self._order: Deque[str] = deque()

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, url: object) -> bool:
        return url in self._order

    def push(self, url: str) -> None:
        self._order.append(url)
        while len(self._order) > self.capacity:
            self._order.popleft()

    def clear(self) -> None:
        self._order.clear()

    def snapshot(self) -> List[str]:
        return list(self._order)

    def status(self) -> HistoryStatus:
        return HistoryStatus(size=len(self._order), max_size=self.capacity)


class NavigationHistory:
    """
    Previously shown photos with a cursor.

    index is -1 when empty, otherwise 0 <= index < total.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("navigation capacity must be at least 1")
        self.capacity = int(capacity)
        self._entries: List[PhotoRecord] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    def append(self, photo: PhotoRecord) -> None:
        """Drop everything ahead of the cursor, append, move to the tail."""
        if self._index < len(self._entries) - 1:
            del self._entries[self._index + 1 :]
        self._entries.append(photo)
        self._index = len(self._entries) - 1
        if len(self._entries) > self.capacity:
            del self._entries[0]
            self._index -= 1

    def previous(self) -> Optional[PhotoRecord]:
        if self._index <= 0:
            return None
        self._index -= 1
        return self._entries[self._index]

    def next(self) -> Optional[PhotoRecord]:
        if self._index >= len(self._entries) - 1:
            return None
        self._index += 1
        return self._entries[self._index]

    def current(self) -> Optional[PhotoRecord]:
        if 0 <= self._index < len(self._entries):
            return self._entries[self._index]
        return None

    def can_go_previous(self) -> bool:
        return self._index > 0

    def can_go_next(self) -> bool:
        return self._index < len(self._entries) - 1

    def clear(self) -> None:
        self._entries.clear()
        self._index = -1

    def status(self) -> NavigationStatus:
        return NavigationStatus(
            can_go_previous=self.can_go_previous(),
            can_go_next=self.can_go_next(),
            index=self._index,
            total=len(self._entries),
        )


__all__ = ["HistoryStatus", "NavigationStatus", "RecentHistory", "NavigationHistory"]
