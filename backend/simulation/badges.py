"""Badge tracker - progress counters with one-way unlock latches."""

import logging
from dataclasses import dataclass

from core.models import BadgeKind, BadgeProgress, NewBadge
from simulation.config import DEFAULT, SimConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeDefinition:
    kind: BadgeKind
    name: str
    description: str
    required: int


BADGES: dict[BadgeKind, BadgeDefinition] = {
    BadgeKind.POWER_SAVER: BadgeDefinition(
        BadgeKind.POWER_SAVER, "Power Saver", "Achieved 5+ efficient sessions", required=5
    ),
    BadgeKind.ECO_WARRIOR: BadgeDefinition(BadgeKind.ECO_WARRIOR, "Eco Warrior", "3 days without overload", required=3),
    BadgeKind.MINIMALIST: BadgeDefinition(
        BadgeKind.MINIMALIST, "Minimalist", "Used max 3 devices simultaneously", required=3
    ),
    BadgeKind.GREEN_MASTER: BadgeDefinition(
        BadgeKind.GREEN_MASTER, "Green Master", "Achieved 10+ efficient sessions", required=10
    ),
}

MINIMALIST_MAX_DEVICES = 3


class BadgeTracker:
    def __init__(self, config: SimConfig = DEFAULT) -> None:
        self.config = config
        self.progress: dict[BadgeKind, BadgeProgress] = {
            kind: BadgeProgress(required=badge.required) for kind, badge in BADGES.items()
        }

    def record_evaluation(self, power_w: float, device_count: int) -> list[NewBadge]:
        """Update counters after a power evaluation, returning fresh unlocks."""
        unlocked: list[NewBadge] = []

        if power_w <= self.config.excellent_threshold_w:
            for kind in (BadgeKind.POWER_SAVER, BadgeKind.GREEN_MASTER):
                self.progress[kind].count += 1
                unlocked += self._try_unlock(kind)

        if 0 < device_count <= MINIMALIST_MAX_DEVICES:
            minimalist = self.progress[BadgeKind.MINIMALIST]
            minimalist.count = max(minimalist.count, device_count)
            unlocked += self._try_unlock(BadgeKind.MINIMALIST)

        return unlocked

    def record_fuse_reset(self, overload_count: int) -> list[NewBadge]:
        # Counts only while no overload has been recorded.
        if overload_count != 0:
            return []
        self.progress[BadgeKind.ECO_WARRIOR].count += 1
        return self._try_unlock(BadgeKind.ECO_WARRIOR)

    def _try_unlock(self, kind: BadgeKind) -> list[NewBadge]:
        progress = self.progress[kind]
        if progress.unlocked or progress.count < progress.required:
            return []
        progress.unlocked = True
        badge = BADGES[kind]
        logger.info("Badge unlocked: %s", badge.name)
        return [NewBadge(kind=kind, name=badge.name, description=badge.description)]

    def reset_progress(self) -> None:
        """Zero the counters. Unlocked badges stay unlocked."""
        for progress in self.progress.values():
            progress.count = 0

    def snapshot(self) -> dict[BadgeKind, BadgeProgress]:
        return {
            kind: BadgeProgress(required=p.required, count=p.count, unlocked=p.unlocked)
            for kind, p in self.progress.items()
        }
