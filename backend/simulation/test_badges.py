"""Tests for badge progress and one-time unlocks."""

from core.models import BadgeKind
from simulation.badges import BadgeTracker


def _unlocked_kinds(tracker: BadgeTracker, calls: int, power_w: int, device_count: int) -> list[list[BadgeKind]]:
    return [[b.kind for b in tracker.record_evaluation(power_w, device_count)] for _ in range(calls)]


def test_power_saver_unlocks_once_on_fifth_efficient_evaluation() -> None:
    tracker = BadgeTracker()

    results = _unlocked_kinds(tracker, 7, power_w=40, device_count=0)

    assert results == [[], [], [], [], [BadgeKind.POWER_SAVER], [], []]
    assert tracker.progress[BadgeKind.POWER_SAVER].count == 7
    assert tracker.progress[BadgeKind.POWER_SAVER].unlocked


def test_green_master_counts_the_same_efficient_events() -> None:
    tracker = BadgeTracker()

    results = _unlocked_kinds(tracker, 12, power_w=0, device_count=0)

    green = [i for i, kinds in enumerate(results) if BadgeKind.GREEN_MASTER in kinds]
    assert green == [9]
    assert tracker.progress[BadgeKind.GREEN_MASTER].count == 12


def test_inefficient_evaluations_do_not_count() -> None:
    tracker = BadgeTracker()

    _unlocked_kinds(tracker, 10, power_w=2501, device_count=5)

    assert tracker.progress[BadgeKind.POWER_SAVER].count == 0
    assert tracker.progress[BadgeKind.MINIMALIST].count == 0


def test_minimalist_tracks_peak_device_count() -> None:
    tracker = BadgeTracker()
    minimalist = tracker.progress[BadgeKind.MINIMALIST]

    assert tracker.record_evaluation(3000, 2) == []
    assert minimalist.count == 2
    assert tracker.record_evaluation(3000, 1) == []
    assert minimalist.count == 2

    [badge] = tracker.record_evaluation(3000, 3)
    assert badge.kind is BadgeKind.MINIMALIST
    assert badge.name == "Minimalist"

    assert tracker.record_evaluation(3000, 3) == []
    tracker.record_evaluation(3000, 6)
    assert minimalist.count == 3


def test_eco_warrior_counts_resets_without_overloads() -> None:
    tracker = BadgeTracker()

    assert tracker.record_fuse_reset(overload_count=1) == []
    assert tracker.progress[BadgeKind.ECO_WARRIOR].count == 0

    assert tracker.record_fuse_reset(0) == []
    assert tracker.record_fuse_reset(0) == []
    [badge] = tracker.record_fuse_reset(0)
    assert badge.kind is BadgeKind.ECO_WARRIOR
    assert tracker.record_fuse_reset(0) == []


def test_reset_progress_keeps_unlocks() -> None:
    tracker = BadgeTracker()
    _unlocked_kinds(tracker, 5, power_w=40, device_count=0)

    tracker.reset_progress()

    power_saver = tracker.progress[BadgeKind.POWER_SAVER]
    assert power_saver.count == 0
    assert power_saver.unlocked
    assert _unlocked_kinds(tracker, 5, power_w=40, device_count=0)[-1] == []


def test_snapshot_is_a_copy() -> None:
    tracker = BadgeTracker()
    snapshot = tracker.snapshot()

    tracker.record_evaluation(40, 1)

    assert snapshot[BadgeKind.POWER_SAVER].count == 0
    assert snapshot[BadgeKind.POWER_SAVER].required == 5
