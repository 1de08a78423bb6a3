"""Overload protection - the fuse state machine.

States::

    normal --(power > threshold - margin)--> warning
    any    --(power > threshold)-----------> tripped
    tripped --(trip_delay_ms elapsed)------> resettable
    resettable --(reset)-------------------> normal

The tripped -> resettable transition is time driven: a one-shot callback is
scheduled on the event loop when the fuse trips and fires without any further
client activity.
"""

import asyncio
import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypeAlias

from core.errors import FuseNotResettableRejection
from core.models import FuseState, OverloadStatus
from simulation.config import DEFAULT, SimConfig

logger = logging.getLogger(__name__)

TRIP_MESSAGE = "Overload! Fuse triggered to prevent damage."
TRIPPED_MESSAGE = "Fuse is tripped. Power usage too high."
RESETTABLE_MESSAGE = "Fuse is tripped. It can now be reset."
WARNING_MESSAGE = "High power usage detected. Consider turning off some devices."
NORMAL_MESSAGE = "System operating normally"
RESET_MESSAGE = "Fuse reset successfully. Power restored."


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler: TypeAlias = Callable[[float, Callable[[], None]], TimerHandle]


def asyncio_scheduler(delay_s: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule ``callback`` on the running event loop."""
    return asyncio.get_running_loop().call_later(delay_s, callback)


@dataclass
class OverloadCheck:
    """Outcome of evaluating a power level against the fuse."""

    state: FuseState
    newly_tripped: bool
    message: str


class OverloadProtection:
    """Fuse latch with a warning band and a time-gated reset."""

    def __init__(
        self,
        config: SimConfig = DEFAULT,
        scheduler: Scheduler | None = None,
        on_resettable: Callable[[], None] | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self._schedule = scheduler or asyncio_scheduler
        self._on_resettable = on_resettable
        self._now = now
        self._timer: TimerHandle | None = None
        self._trip_id = 0

        self.fuse_tripped = False
        self.trip_timestamp: datetime | None = None
        self.resettable = False
        self.warning_active = False

    @property
    def state(self) -> FuseState:
        if self.fuse_tripped:
            return FuseState.RESETTABLE if self.resettable else FuseState.TRIPPED
        if self.warning_active:
            return FuseState.WARNING
        return FuseState.NORMAL

    def exceeds_threshold(self, power_w: float) -> bool:
        return power_w > self.config.overload_threshold_w

    def in_warning_band(self, power_w: float) -> bool:
        threshold = self.config.overload_threshold_w
        return threshold - self.config.safety_margin_w < power_w <= threshold

    def evaluate(self, power_w: float) -> OverloadCheck:
        """Run the state machine for the given total power."""
        if self.exceeds_threshold(power_w):
            if not self.fuse_tripped:
                self._trip(power_w)
                return OverloadCheck(self.state, newly_tripped=True, message=TRIP_MESSAGE)
            return OverloadCheck(self.state, newly_tripped=False, message=TRIPPED_MESSAGE)

        self.warning_active = self.in_warning_band(power_w)
        return OverloadCheck(self.state, newly_tripped=False, message=self.message())

    def _trip(self, power_w: float) -> None:
        self.fuse_tripped = True
        self.resettable = False
        self.trip_timestamp = self._now()
        logger.warning(
            "Fuse tripped at %.0f W (threshold %d W), resettable in %d ms",
            power_w,
            self.config.overload_threshold_w,
            self.config.trip_delay_ms,
        )
        self._trip_id += 1
        callback = functools.partial(self._mark_resettable, self._trip_id)
        self._timer = self._schedule(self.config.trip_delay_ms / 1000, callback)

    def _mark_resettable(self, trip_id: int) -> None:
        if trip_id != self._trip_id or not self.fuse_tripped:
            return
        self._timer = None
        self.resettable = True
        logger.info("Fuse is now resettable")
        if self._on_resettable is not None:
            self._on_resettable()

    def reset(self) -> None:
        """Manual fuse reset, allowed only once the trip delay has elapsed."""
        if not (self.fuse_tripped and self.resettable):
            logger.info("Fuse reset rejected: not resettable yet")
            raise FuseNotResettableRejection()
        self._clear_state()
        logger.info("Fuse reset")

    def clear(self) -> None:
        """Return to normal unconditionally, dropping any pending timer."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._clear_state()

    def _clear_state(self) -> None:
        self.fuse_tripped = False
        self.trip_timestamp = None
        self.resettable = False
        self.warning_active = False

    def message(self) -> str:
        match self.state:
            case FuseState.TRIPPED:
                return TRIPPED_MESSAGE
            case FuseState.RESETTABLE:
                return RESETTABLE_MESSAGE
            case FuseState.WARNING:
                return WARNING_MESSAGE
            case FuseState.NORMAL:
                return NORMAL_MESSAGE

    def status(self, power_w: int, current_a: float) -> OverloadStatus:
        threshold = self.config.overload_threshold_w
        return OverloadStatus(
            current_power=power_w,
            current_amps=current_a,
            threshold=threshold,
            safety_margin=self.config.safety_margin_w,
            fuse_tripped=self.fuse_tripped,
            trip_timestamp=self.trip_timestamp.isoformat() if self.trip_timestamp else None,
            resettable=self.resettable,
            warning_active=self.warning_active,
            percentage=power_w / threshold * 100,
            state=self.state,
            message=self.message(),
        )
