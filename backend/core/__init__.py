"""Core domain models, house topology and events."""

from core.catalog import DEVICE_POWER_RATINGS, DeviceKind
from core.house import HouseTopology
from core.models import (
    Device,
    EfficiencyLevel,
    FuseState,
    HouseLayout,
    PowerAggregate,
    Room,
    SimulationSnapshot,
)

__all__ = [
    "DEVICE_POWER_RATINGS",
    "Device",
    "DeviceKind",
    "EfficiencyLevel",
    "FuseState",
    "HouseLayout",
    "HouseTopology",
    "PowerAggregate",
    "Room",
    "SimulationSnapshot",
]
