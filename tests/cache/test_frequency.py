"""Tests for AccessFrequencyTracker."""

from tiercache.cache.frequency import AccessFrequencyTracker


class TestAccessFrequencyTracker:

    def test_first_increment_returns_one(self) -> None:
        tracker = AccessFrequencyTracker()
        assert tracker.increment("a") == 1

    def test_increment_is_monotonic(self) -> None:
        tracker = AccessFrequencyTracker()
        counts = [tracker.increment("a") for _ in range(5)]
        assert counts == [1, 2, 3, 4, 5]

    def test_keys_are_independent(self) -> None:
        tracker = AccessFrequencyTracker()
        tracker.increment("a")
        tracker.increment("a")
        assert tracker.increment("b") == 1
        assert tracker.count("a") == 2

    def test_reset_removes_counter(self) -> None:
        tracker = AccessFrequencyTracker()
        tracker.increment("a")
        tracker.increment("a")
        tracker.reset("a")
        assert tracker.count("a") == 0
        assert len(tracker) == 0
        assert tracker.increment("a") == 1

    def test_reset_unknown_key_is_noop(self) -> None:
        tracker = AccessFrequencyTracker()
        tracker.reset("never-seen")
        assert len(tracker) == 0

    def test_count_unseen_is_zero(self) -> None:
        assert AccessFrequencyTracker().count("x") == 0
