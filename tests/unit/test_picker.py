"""
Tests for PhotoPicker: weighted selection, anti-repetition, on-this-day and navigation.
"""

import math
import random
import threading
from datetime import datetime

import pytest

from photo_frame.config import FrameConfig
from photo_frame.core_types import PhotoRecord, TimeBucket
from photo_frame.errors import ConfigError
from photo_frame.selection import PhotoPicker

DEFAULT_BUCKETS = [TimeBucket(90, 80), TimeBucket(math.inf, 20)]


@pytest.fixture
def picker_factory(clock, never_anniversary):
    def _make(buckets=DEFAULT_BUCKETS, history_size=5, seed=42, **kwargs):
        kwargs.setdefault("anniversary_rng", never_anniversary)
        return PhotoPicker(
            buckets,
            history_size,
            rng=random.Random(seed),
            clock=clock,
            **kwargs,
        )

    return _make


class TestPick:
    """Basic pick() behaviour."""

    def test_empty_catalog(self, picker_factory):
        picker = picker_factory()
        assert picker.pick([]) is None
        assert picker.pick(None) is None
        assert picker.navigation_status().total == 0

    def test_single_photo_always_returned(self, picker_factory, make_photo):
        picker = picker_factory(history_size=3)
        only = make_photo("only", days_old=5)
        for _ in range(10):
            assert picker.pick([only]) == only

    def test_two_photo_scenario(self, picker_factory, make_photo):
        """history_size=1: the second pick is forced to the other photo."""
        picker = picker_factory(history_size=1)
        catalog = [make_photo("A"), make_photo("B")]
        first = picker.pick(catalog)
        second = picker.pick(catalog)
        third = picker.pick(catalog)
        assert {first.url, second.url} == {"A", "B"}
        assert third is not None
        assert third.url in {"A", "B"}

    def test_no_repeats_within_history(self, picker_factory, make_photo):
        picker = picker_factory(history_size=5)
        catalog = [make_photo(f"p{i}", days_old=i * 20) for i in range(10)]
        shown = []
        for _ in range(60):
            photo = picker.pick(catalog)
            assert photo.url not in shown[-5:]
            shown.append(photo.url)

    def test_history_exhaustion_resets(self, picker_factory, make_photo):
        picker = picker_factory(history_size=3)
        catalog = [make_photo(u, days_old=10) for u in ("a", "b", "c")]
        urls = {picker.pick(catalog).url for _ in range(3)}
        assert urls == {"a", "b", "c"}
        assert picker.history_status().size == 3

        fourth = picker.pick(catalog)
        assert fourth is not None
        assert picker.history_status().size == 1

    def test_empty_bucket_drops_out(self, picker_factory, make_photo):
        """Nothing is younger than 30 days, so the old bucket takes every draw."""
        buckets = [TimeBucket(30, 50), TimeBucket(math.inf, 50)]
        picker = picker_factory(buckets=buckets, history_size=1)
        old = make_photo("old", days_old=400)
        for _ in range(200):
            assert picker.pick([old]) == old

    def test_weights_shape_the_draw(self, picker_factory, make_photo):
        buckets = [TimeBucket(30, 80), TimeBucket(math.inf, 20)]
        picker = picker_factory(buckets=buckets, history_size=1, seed=7)
        recent = [make_photo(f"r{i}", days_old=5) for i in range(50)]
        old = [make_photo(f"o{i}", days_old=500) for i in range(50)]
        catalog = recent + old
        trials = 2000
        hits = sum(picker.pick(catalog).url.startswith("r") for _ in range(trials))
        assert abs(hits / trials - 0.8) < 0.05

    def test_seeded_pickers_agree(self, picker_factory, make_photo):
        catalog = [make_photo(f"p{i}", days_old=i * 30) for i in range(12)]
        a = picker_factory(seed=99)
        b = picker_factory(seed=99)
        assert [a.pick(catalog).url for _ in range(20)] == [
            b.pick(catalog).url for _ in range(20)
        ]

    def test_accepts_any_iterable(self, picker_factory, make_photo):
        picker = picker_factory()
        photo = picker.pick(make_photo(u) for u in ("a", "b"))
        assert photo.url in {"a", "b"}


class TestOnThisDay:
    """On-this-day picks."""

    def _catalog(self, make_photo):
        anniversary = make_photo("anniversary", taken=datetime(2024, 6, 8, 10, 0))
        others = [make_photo(f"p{i}", days_old=200 + i) for i in range(5)]
        return anniversary, [anniversary] + others

    def test_anniversary_pick_is_tagged(self, picker_factory, make_photo, always_anniversary):
        picker = picker_factory(anniversary_rng=always_anniversary)
        anniversary, catalog = self._catalog(make_photo)
        photo = picker.pick(catalog)
        assert photo.url == anniversary.url
        assert photo.on_this_day is True
        assert anniversary.on_this_day is False
        assert picker.navigation_status().total == 1
        assert picker.history_status().size == 1

    def test_shown_anniversary_falls_back_to_weighted(
        self, picker_factory, make_photo, always_anniversary
    ):
        picker = picker_factory(anniversary_rng=always_anniversary)
        _, catalog = self._catalog(make_photo)
        picker.pick(catalog)
        calls_before = always_anniversary.calls
        second = picker.pick(catalog)
        assert second.url != "anniversary"
        assert second.on_this_day is False
        # No candidates left, so the coin is not even flipped.
        assert always_anniversary.calls == calls_before

    def test_coin_flip_declines(self, picker_factory, make_photo, never_anniversary):
        picker = picker_factory(anniversary_rng=never_anniversary)
        _, catalog = self._catalog(make_photo)
        for _ in range(10):
            assert picker.pick(catalog).on_this_day is False
        assert never_anniversary.calls > 0

    def test_disabled(self, picker_factory, make_photo, always_anniversary):
        picker = picker_factory(anniversary_rng=always_anniversary, on_this_day_enabled=False)
        _, catalog = self._catalog(make_photo)
        for _ in range(6):
            assert picker.pick(catalog).on_this_day is False
        assert always_anniversary.calls == 0

    def test_current_year_excluded(self, picker_factory, make_photo, always_anniversary):
        picker = picker_factory(anniversary_rng=always_anniversary)
        this_year = make_photo("this-year", taken=datetime(2026, 6, 8))
        photo = picker.pick([this_year])
        assert photo.url == "this-year"
        assert photo.on_this_day is False


class TestNavigation:
    """previous()/next() over picked photos."""

    def test_navigation_does_not_touch_history(self, picker_factory, make_photo):
        picker = picker_factory(history_size=5)
        catalog = [make_photo(f"p{i}") for i in range(8)]
        picked = [picker.pick(catalog) for _ in range(3)]
        before = picker.history_status()

        assert picker.previous() == picked[1]
        assert picker.previous() == picked[0]
        assert picker.previous() is None
        assert picker.next() == picked[1]
        assert picker.history_status() == before

    def test_pick_after_going_back_truncates_forward(self, picker_factory, make_photo):
        picker = picker_factory(history_size=5)
        catalog = [make_photo(f"p{i}") for i in range(8)]
        picked = [picker.pick(catalog) for _ in range(3)]
        picker.previous()
        picker.previous()
        new = picker.pick(catalog)
        status = picker.navigation_status()
        assert status.total == 2
        assert status.can_go_next is False
        assert picker.current() == new
        assert picker.previous() == picked[0]

    def test_navigation_capacity_is_twice_history(self, picker_factory, make_photo):
        picker = picker_factory(history_size=2)
        catalog = [make_photo(f"p{i}") for i in range(6)]
        for _ in range(7):
            picker.pick(catalog)
        assert picker.navigation_status().total == 4

    def test_reset(self, picker_factory, make_photo):
        picker = picker_factory()
        picker.pick([make_photo("a")])
        picker.reset()
        assert picker.history_status().size == 0
        assert picker.navigation_status().index == -1
        assert picker.current() is None


class TestConstruction:
    """Bucket validation and config wiring."""

    def test_invalid_buckets_rejected(self):
        with pytest.raises(ConfigError):
            PhotoPicker([TimeBucket(30, 50), TimeBucket(365, 50)])

    def test_from_config(self, clock):
        cfg = FrameConfig(history_size=4, on_this_day_window_days=1)
        picker = PhotoPicker.from_config(cfg, clock=clock)
        assert picker.history_status().max_size == 4
        assert picker.on_this_day_window_days == 1
        assert picker.buckets == cfg.time_buckets


class TestThreadSafety:
    """Concurrent picks keep the histories consistent."""

    def test_concurrent_picks(self, picker_factory, make_photo):
        picker = picker_factory(history_size=20)
        catalog = [make_photo(f"p{i}", days_old=i) for i in range(100)]
        errors = []

        def worker():
            try:
                for _ in range(50):
                    assert picker.pick(catalog) is not None
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert picker.history_status().size == 20
        assert picker.navigation_status().total == 40
