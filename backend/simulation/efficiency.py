"""Efficiency scoring - a 0-100 score from power level, device mix and time of day."""

import logging
import math
from collections import deque
from collections.abc import Callable
from datetime import datetime

from core.models import (
    ActiveDevice,
    EfficiencyLevel,
    EfficiencySnapshot,
    HistoryEntry,
    PowerAggregate,
)
from simulation.config import DEFAULT, SimConfig

logger = logging.getLogger(__name__)

LEVEL_BADGES: dict[EfficiencyLevel, str] = {
    EfficiencyLevel.EXCELLENT: "🌱",
    EfficiencyLevel.GOOD: "🟢",
    EfficiencyLevel.AVERAGE: "🟡",
    EfficiencyLevel.POOR: "🔴",
}

_MAX_SCORE = 100


def time_multiplier(hour: int, cfg: SimConfig = DEFAULT) -> float:
    """Penalty multiplier for the wall-clock hour.

    The peak window is checked first, so its end hour is peak, not off-peak.
    """
    if cfg.peak_start_hour <= hour <= cfg.peak_end_hour:
        return cfg.peak_multiplier
    if hour >= cfg.off_peak_start_hour or hour <= cfg.off_peak_end_hour:
        return cfg.off_peak_multiplier
    return cfg.normal_multiplier


def _power_penalty(power_w: float, cfg: SimConfig) -> int:
    if power_w > cfg.poor_threshold_w:
        return 40
    if power_w > cfg.average_threshold_w:
        return 20
    if power_w > cfg.excellent_threshold_w:
        return 10
    return 0


def compute_score(
    power_w: float,
    active_devices: list[ActiveDevice],
    hour: int,
    cfg: SimConfig = DEFAULT,
) -> int:
    device_penalty = sum(cfg.device_penalties.get(d.kind, cfg.default_penalty) for d in active_devices)
    score = _MAX_SCORE - _power_penalty(power_w, cfg) - device_penalty * time_multiplier(hour, cfg)
    # half-up rounding, not banker's rounding
    return max(0, min(_MAX_SCORE, math.floor(score + 0.5)))


def efficiency_level(power_w: float, fuse_tripped: bool, cfg: SimConfig = DEFAULT) -> EfficiencyLevel:
    if power_w > cfg.poor_threshold_w or fuse_tripped:
        return EfficiencyLevel.POOR
    if power_w > cfg.average_threshold_w:
        return EfficiencyLevel.AVERAGE
    if power_w > cfg.excellent_threshold_w:
        return EfficiencyLevel.GOOD
    return EfficiencyLevel.EXCELLENT


def _perfect() -> EfficiencySnapshot:
    return EfficiencySnapshot(
        score=_MAX_SCORE,
        level=EfficiencyLevel.EXCELLENT,
        badge=LEVEL_BADGES[EfficiencyLevel.EXCELLENT],
    )


class EfficiencyEngine:
    """Scores every power-affecting event and keeps a bounded history."""

    def __init__(self, config: SimConfig = DEFAULT, now: Callable[[], datetime] = datetime.now) -> None:
        self.config = config
        self._now = now
        self.current = _perfect()
        self.history: deque[HistoryEntry] = deque(maxlen=config.history_size)

    def evaluate(self, aggregate: PowerAggregate, fuse_tripped: bool) -> EfficiencySnapshot:
        now = self._now()
        score = compute_score(aggregate.total_power, aggregate.active_devices, now.hour, self.config)
        level = efficiency_level(aggregate.total_power, fuse_tripped, self.config)
        self.current = EfficiencySnapshot(score=score, level=level, badge=LEVEL_BADGES[level])
        self.history.append(
            HistoryEntry(
                timestamp=now.isoformat(),
                power=aggregate.total_power,
                score=score,
                level=level,
                device_count=len(aggregate.active_devices),
            )
        )
        logger.debug("Efficiency %d (%s) at %d W", score, level, aggregate.total_power)
        return self.current

    def reset(self) -> None:
        """Back to a perfect score; history is kept."""
        self.current = _perfect()

    def history_tail(self, count: int) -> list[HistoryEntry]:
        if count <= 0:
            return []
        return list(self.history)[-count:]
