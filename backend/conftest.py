"""Shared pytest fixtures."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import pytest

NOON = datetime(2025, 1, 15, 12, 0, 0)


@dataclass
class PendingTimer:
    delay_s: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Records scheduled callbacks; tests fire them explicitly."""

    def __init__(self) -> None:
        self.timers: list[PendingTimer] = []

    def __call__(self, delay_s: float, callback: Callable[[], None]) -> PendingTimer:
        timer = PendingTimer(delay_s, callback)
        self.timers.append(timer)
        return timer

    def fire_all(self) -> None:
        pending, self.timers = self.timers, []
        for timer in pending:
            if not timer.cancelled:
                timer.callback()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def noon() -> Callable[[], datetime]:
    return lambda: NOON
