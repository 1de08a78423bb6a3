"""SimulationContext - the single owner of all simulation state.

Commands mutate the house topology, re-run the power evaluation and publish
events to subscribers. Rejected commands raise a ``SimulationRejection`` and
leave the state untouched.
"""

import copy
import logging
from collections.abc import Callable
from datetime import datetime
from typing import TypeAlias

from core.errors import FuseTrippedRejection, OverloadRejection
from core.events import FuseReset, FuseResettable, FuseTripped, PowerUpdate, SimulationEvent
from core.house import HouseTopology
from core.models import HouseLayout, NewBadge, OverloadStatus, PowerAggregate, SimulationSnapshot
from data.sample_house import create_sample_house
from simulation.badges import BadgeTracker
from simulation.config import DEFAULT, SimConfig
from simulation.efficiency import EfficiencyEngine
from simulation.overload import RESET_MESSAGE, OverloadCheck, OverloadProtection, Scheduler
from simulation.power import compute_aggregate
from simulation.session import SessionTracker

logger = logging.getLogger(__name__)

Subscriber: TypeAlias = Callable[[SimulationEvent], None]


class SimulationContext:
    """House, fuse, efficiency, badges and session stats behind one handle."""

    def __init__(
        self,
        config: SimConfig = DEFAULT,
        layout: HouseLayout | None = None,
        scheduler: Scheduler | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.house = HouseTopology(layout or create_sample_house())
        self.overload = OverloadProtection(
            config,
            scheduler=scheduler,
            on_resettable=self._on_fuse_resettable,
            now=now,
        )
        self.efficiency = EfficiencyEngine(config, now=now)
        self.badges = BadgeTracker(config)
        self.session = SessionTracker()
        self._subscribers: list[Subscriber] = []

    # --- Subscribers ---

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register for published events; returns an unsubscribe callable."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, event: SimulationEvent) -> None:
        for subscriber in list(self._subscribers):
            subscriber(event)

    # --- Reads ---

    def aggregate(self) -> PowerAggregate:
        return compute_aggregate(self.house, self.config.nominal_voltage_v)

    def overload_status(self) -> OverloadStatus:
        agg = self.aggregate()
        return self.overload.status(agg.total_power, agg.total_current)

    def snapshot(self, include_history: bool = False, new_badges: list[NewBadge] | None = None) -> SimulationSnapshot:
        agg = self.aggregate()
        return SimulationSnapshot(
            house=copy.deepcopy(self.house.layout),
            power=agg.total_power,
            current=agg.total_current,
            overload_status=self.overload.status(agg.total_power, agg.total_current),
            efficiency=copy.copy(self.efficiency.current),
            badges=self.badges.snapshot(),
            session_stats=self.session.snapshot(),
            new_badges=list(new_badges or []),
            history=list(self.efficiency.history) if include_history else None,
        )

    def initial_state(self) -> SimulationSnapshot:
        """Full snapshot with history. Does not evaluate."""
        return self.snapshot(include_history=True)

    # --- Commands ---

    def open_session(self) -> None:
        self.session.open_session()

    def refresh(self) -> SimulationSnapshot:
        """Re-evaluate the current load and publish the result."""
        return self._evaluate_and_publish()

    def toggle_device(self, room_id: str | None, device_kind: str | None) -> SimulationSnapshot:
        if self.overload.fuse_tripped:
            logger.info("Toggle of %s/%s rejected: fuse tripped", room_id, device_kind)
            raise FuseTrippedRejection()

        device = self.house.find_device(room_id, device_kind)
        device.active = not device.active

        projected = self.aggregate().total_power
        if self.overload.exceeds_threshold(projected):
            device.active = not device.active
            logger.info("Toggle of %s rejected: %d W would exceed the limit", device.id, projected)
            raise OverloadRejection(self.config.overload_threshold_w)

        logger.info("Toggled %s: %s", device.id, "ON" if device.active else "OFF")
        return self._evaluate_and_publish()

    def reset_fuse(self) -> SimulationSnapshot:
        self.overload.reset()
        new_badges = self.badges.record_fuse_reset(self.session.stats.overload_count)
        self.publish(FuseReset(message=RESET_MESSAGE, new_badges=new_badges))
        return self._evaluate_and_publish()

    def reset_simulation(self) -> SimulationSnapshot:
        """Switch every device off and clear the fuse and score."""
        self.house.deactivate_all()
        self.overload.clear()
        self.efficiency.reset()
        if self.config.reset_clears_progress:
            self.badges.reset_progress()
            self.session.reset()
        logger.info("Simulation reset")
        return self._evaluate_and_publish()

    def shutdown(self) -> None:
        self.overload.clear()
        self._subscribers.clear()

    # --- Evaluation ---

    def _evaluate(self) -> tuple[OverloadCheck, list[NewBadge]]:
        agg = self.aggregate()
        device_count = len(agg.active_devices)

        check = self.overload.evaluate(agg.total_power)
        if check.newly_tripped:
            self.session.record_overload()

        self.efficiency.evaluate(agg, self.overload.fuse_tripped)

        self.session.record_devices(device_count)
        if agg.total_power <= self.config.excellent_threshold_w:
            self.session.record_efficient()
        new_badges = self.badges.record_evaluation(agg.total_power, device_count)
        return check, new_badges

    def _evaluate_and_publish(self) -> SimulationSnapshot:
        check, new_badges = self._evaluate()
        snapshot = self.snapshot(new_badges=new_badges)
        self.publish(PowerUpdate(snapshot))
        if check.newly_tripped:
            self.publish(FuseTripped(message=check.message, status=snapshot.overload_status))
        return snapshot

    def _on_fuse_resettable(self) -> None:
        self.publish(FuseResettable(status=self.overload_status()))
