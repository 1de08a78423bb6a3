"""Tests for the fuse state machine."""

import asyncio

import pytest

from conftest import NOON, ManualScheduler
from core.errors import FuseNotResettableRejection
from core.models import FuseState
from simulation.config import SimConfig
from simulation.overload import (
    NORMAL_MESSAGE,
    TRIP_MESSAGE,
    TRIPPED_MESSAGE,
    WARNING_MESSAGE,
    OverloadProtection,
)


def _fuse(scheduler: ManualScheduler, **kwargs) -> OverloadProtection:
    return OverloadProtection(SimConfig(), scheduler=scheduler, now=lambda: NOON, **kwargs)


@pytest.mark.parametrize(
    ("power_w", "state"),
    [
        (0, FuseState.NORMAL),
        (3500, FuseState.NORMAL),
        (3501, FuseState.WARNING),
        (4000, FuseState.WARNING),
        (4001, FuseState.TRIPPED),
    ],
)
def test_state_by_power(scheduler: ManualScheduler, power_w: int, state: FuseState) -> None:
    fuse = _fuse(scheduler)

    assert fuse.evaluate(power_w).state is state


def test_exact_threshold_does_not_trip(scheduler: ManualScheduler) -> None:
    fuse = _fuse(scheduler)

    check = fuse.evaluate(4000)

    assert not fuse.fuse_tripped
    assert fuse.warning_active
    assert check.message == WARNING_MESSAGE
    assert scheduler.timers == []


def test_trip_records_timestamp_and_schedules_timer(scheduler: ManualScheduler) -> None:
    fuse = _fuse(scheduler)

    first = fuse.evaluate(4200)
    second = fuse.evaluate(4200)

    assert first.newly_tripped and first.message == TRIP_MESSAGE
    assert not second.newly_tripped and second.message == TRIPPED_MESSAGE
    assert fuse.trip_timestamp == NOON
    assert [t.delay_s for t in scheduler.timers] == [5.0]


def test_reset_is_time_gated(scheduler: ManualScheduler) -> None:
    notified: list[bool] = []
    fuse = _fuse(scheduler, on_resettable=lambda: notified.append(True))
    fuse.evaluate(5000)

    with pytest.raises(FuseNotResettableRejection):
        fuse.reset()
    assert fuse.state is FuseState.TRIPPED

    scheduler.fire_all()
    assert fuse.state is FuseState.RESETTABLE
    assert notified == [True]

    fuse.reset()
    assert fuse.state is FuseState.NORMAL
    assert fuse.trip_timestamp is None
    assert not fuse.resettable


def test_reset_without_trip_is_rejected(scheduler: ManualScheduler) -> None:
    with pytest.raises(FuseNotResettableRejection, match="Please wait"):
        _fuse(scheduler).reset()


def test_clear_cancels_pending_timer(scheduler: ManualScheduler) -> None:
    fuse = _fuse(scheduler)
    fuse.evaluate(5000)
    stale = scheduler.timers[0]

    fuse.clear()
    fuse.evaluate(5000)
    stale.callback()  # a stale timer firing late must not mark the new trip

    assert stale.cancelled
    assert fuse.fuse_tripped
    assert not fuse.resettable


def test_status_report(scheduler: ManualScheduler) -> None:
    fuse = _fuse(scheduler)
    fuse.evaluate(1000)

    status = fuse.status(1000, 1000 / 230)

    assert status.threshold == 4000
    assert status.safety_margin == 500
    assert status.percentage == 25.0
    assert status.message == NORMAL_MESSAGE
    assert status.trip_timestamp is None

    fuse.evaluate(4500)
    tripped = fuse.status(4500, 4500 / 230)
    assert tripped.fuse_tripped
    assert tripped.trip_timestamp == NOON.isoformat()
    assert tripped.message == TRIPPED_MESSAGE


def test_fuse_becomes_resettable_on_event_loop() -> None:
    async def scenario() -> tuple[bool, bool]:
        fuse = OverloadProtection(SimConfig(trip_delay_ms=20))
        fuse.evaluate(5000)
        before = fuse.resettable
        await asyncio.sleep(0.2)
        return before, fuse.resettable

    assert asyncio.run(scenario()) == (False, True)


def test_cleared_fuse_timer_never_fires_on_event_loop() -> None:
    async def scenario() -> bool:
        fuse = OverloadProtection(SimConfig(trip_delay_ms=20))
        fuse.evaluate(5000)
        fuse.clear()
        await asyncio.sleep(0.2)
        return fuse.resettable

    assert asyncio.run(scenario()) is False
