"""Centralised simulation tunables.

Every constant that controls the power simulation lives here.
Create a custom ``SimConfig`` to tweak values for testing::

    cfg = SimConfig(trip_delay_ms=50)
    ctx = SimulationContext(config=cfg)
"""

from dataclasses import dataclass, field

from core.catalog import DeviceKind


@dataclass(frozen=True)
class SimConfig:
    """All simulation tunables, grouped by category."""

    # --- Supply ---
    nominal_voltage_v: float = 230.0

    # --- Overload protection ---
    overload_threshold_w: int = 4000
    safety_margin_w: int = 500  # warning band below the threshold
    trip_delay_ms: int = 5000  # cool-down before a tripped fuse may be reset

    # --- Efficiency thresholds ---
    excellent_threshold_w: int = 2500
    average_threshold_w: int = 4000
    poor_threshold_w: int = 4000  # same as the overload threshold

    # --- Efficiency penalties ---
    # device kind → penalty multiplier; kinds not listed use default_penalty
    device_penalties: dict[DeviceKind, float] = field(
        default_factory=lambda: {DeviceKind.AC: 2.0, DeviceKind.WATER_HEATER: 1.8}
    )
    default_penalty: float = 1.0

    # --- Time-of-day multipliers (wall-clock hour, bounds inclusive) ---
    peak_start_hour: int = 18
    peak_end_hour: int = 22
    peak_multiplier: float = 1.2
    off_peak_start_hour: int = 22  # wraps past midnight
    off_peak_end_hour: int = 6
    off_peak_multiplier: float = 0.8
    normal_multiplier: float = 1.0

    # --- History ---
    history_size: int = 100
    history_tail: int = 20  # entries returned by the efficiency endpoint

    # --- Simulation reset ---
    # Also clear badge progress counters and session stats on reset.
    # Unlocked badges stay unlocked either way.
    reset_clears_progress: bool = False


DEFAULT = SimConfig()
