"""Core data models for the house power simulation."""

from dataclasses import dataclass, field
from enum import StrEnum

from core.catalog import DEVICE_DISPLAY_NAMES, DEVICE_POWER_RATINGS, DeviceKind


@dataclass
class Device:
    id: str
    kind: DeviceKind
    name: str
    power: int  # rated watts
    active: bool = False


@dataclass
class Room:
    id: str
    name: str
    devices: dict[DeviceKind, Device]


@dataclass
class HouseLayout:
    """Rooms of the house: a list of bedrooms plus singleton named rooms."""

    bedrooms: list[Room]
    common_rooms: dict[str, Room]


def make_device(room_id: str, kind: DeviceKind, name: str | None = None) -> Device:
    """Create an inactive catalog device with an id unique to its room."""
    return Device(
        id=f"{room_id}_{kind}",
        kind=kind,
        name=name or DEVICE_DISPLAY_NAMES[kind],
        power=DEVICE_POWER_RATINGS[kind],
    )


# ---------------------------------------------------------------------------
# Power
# ---------------------------------------------------------------------------


@dataclass
class ActiveDevice:
    id: str
    kind: DeviceKind
    power: int


@dataclass
class PowerAggregate:
    total_power: int  # W
    total_current: float  # A
    active_devices: list[ActiveDevice] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Overload protection
# ---------------------------------------------------------------------------


class FuseState(StrEnum):
    NORMAL = "normal"
    WARNING = "warning"
    TRIPPED = "tripped"
    RESETTABLE = "resettable"


@dataclass
class OverloadStatus:
    """Fuse status report - sent to clients and the REST API."""

    current_power: int
    current_amps: float
    threshold: int
    safety_margin: int
    fuse_tripped: bool
    trip_timestamp: str | None  # ISO format
    resettable: bool
    warning_active: bool
    percentage: float
    state: FuseState
    message: str


# ---------------------------------------------------------------------------
# Efficiency, badges, session
# ---------------------------------------------------------------------------


class EfficiencyLevel(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"


@dataclass
class EfficiencySnapshot:
    score: int
    level: EfficiencyLevel
    badge: str


@dataclass
class HistoryEntry:
    timestamp: str  # ISO format
    power: int
    score: int
    level: EfficiencyLevel
    device_count: int


class BadgeKind(StrEnum):
    POWER_SAVER = "power_saver"
    ECO_WARRIOR = "eco_warrior"
    MINIMALIST = "minimalist"
    GREEN_MASTER = "green_master"


@dataclass
class BadgeProgress:
    required: int
    count: int = 0
    unlocked: bool = False


@dataclass
class NewBadge:
    """Unlock notification, emitted once per badge."""

    kind: BadgeKind
    name: str
    description: str


@dataclass
class SessionStats:
    total_sessions: int = 0
    efficient_sessions: int = 0
    overload_count: int = 0
    max_devices_used: int = 0
    current_devices_used: int = 0


# ---------------------------------------------------------------------------
# Composite snapshot
# ---------------------------------------------------------------------------


@dataclass
class SimulationSnapshot:
    house: HouseLayout
    power: int
    current: float
    overload_status: OverloadStatus
    efficiency: EfficiencySnapshot
    badges: dict[BadgeKind, BadgeProgress]
    session_stats: SessionStats
    new_badges: list[NewBadge] = field(default_factory=list)
    history: list[HistoryEntry] | None = None
