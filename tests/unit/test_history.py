"""
Tests for recent and navigation histories.
"""

import pytest

from photo_frame.core_types import PhotoRecord
from photo_frame.selection.history import NavigationHistory, RecentHistory


def _photo(url):
    return PhotoRecord(url=url, width=10, height=10)


class TestRecentHistory:
    """Tests for RecentHistory."""

    def test_fifo_eviction(self):
        h = RecentHistory(2)
        for url in ("a", "b", "c"):
            h.push(url)
        assert h.snapshot() == ["b", "c"]
        assert "a" not in h
        assert "c" in h

    def test_status(self):
        h = RecentHistory(3)
        h.push("a")
        assert h.status().as_dict() == {"size": 1, "max_size": 3}

    def test_clear(self):
        h = RecentHistory(3)
        h.push("a")
        h.clear()
        assert len(h) == 0

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            RecentHistory(0)


class TestNavigationHistory:
    """Tests for NavigationHistory."""

    def test_empty(self):
        nav = NavigationHistory(4)
        assert nav.previous() is None
        assert nav.next() is None
        assert nav.current() is None
        assert nav.status().as_dict() == {
            "can_go_previous": False,
            "can_go_next": False,
            "index": -1,
            "total": 0,
        }

    def test_previous_then_next_round_trip(self):
        nav = NavigationHistory(4)
        for url in ("a", "b", "c"):
            nav.append(_photo(url))
        assert nav.previous().url == "b"
        assert nav.next().url == "c"
        assert nav.next() is None
        assert nav.current().url == "c"

    def test_previous_stops_at_start(self):
        nav = NavigationHistory(4)
        nav.append(_photo("a"))
        nav.append(_photo("b"))
        assert nav.previous().url == "a"
        assert nav.previous() is None
        assert nav.index == 0

    def test_truncate_forward(self):
        """Appending after stepping back drops the entries ahead of the cursor."""
        nav = NavigationHistory(10)
        for url in ("a", "b", "c", "d"):
            nav.append(_photo(url))
        nav.previous()
        nav.previous()
        nav.append(_photo("x"))
        status = nav.status()
        assert status.total == 3
        assert status.can_go_next is False
        assert nav.current().url == "x"
        assert nav.previous().url == "b"
        assert nav.previous().url == "a"
        assert nav.next().url == "b"
        assert nav.next().url == "x"
        assert nav.next() is None

    def test_eviction_keeps_cursor_valid(self):
        nav = NavigationHistory(3)
        for url in ("a", "b", "c", "d"):
            nav.append(_photo(url))
        assert len(nav) == 3
        assert nav.index == 2
        assert nav.current().url == "d"
        assert nav.previous().url == "c"
        assert nav.previous().url == "b"
        assert nav.previous() is None

    def test_clear(self):
        nav = NavigationHistory(3)
        nav.append(_photo("a"))
        nav.clear()
        assert nav.index == -1
        assert nav.current() is None
