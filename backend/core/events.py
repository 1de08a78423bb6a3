"""Event variants published by the simulation to subscribed clients."""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from core.models import NewBadge, OverloadStatus, SimulationSnapshot


@dataclass
class InitialData:
    """Full snapshot including efficiency history."""

    snapshot: SimulationSnapshot


@dataclass
class PowerUpdate:
    """Snapshot after a power-affecting event."""

    snapshot: SimulationSnapshot


@dataclass
class FuseTripped:
    message: str
    status: OverloadStatus


@dataclass
class FuseResettable:
    """Trip delay elapsed - a manual reset is now allowed."""

    status: OverloadStatus


@dataclass
class FuseReset:
    message: str
    new_badges: list[NewBadge] = field(default_factory=list)


@dataclass
class DeviceToggleRejected:
    message: str


@dataclass
class FuseResetRejected:
    message: str


SimulationEvent: TypeAlias = (
    InitialData
    | PowerUpdate
    | FuseTripped
    | FuseResettable
    | FuseReset
    | DeviceToggleRejected
    | FuseResetRejected
)


def event_id(event: SimulationEvent) -> str:
    """Stable string identifier for the wire message type."""
    match event:
        case InitialData():
            return "initial_data"
        case PowerUpdate():
            return "power_update"
        case FuseTripped():
            return "fuse_tripped"
        case FuseResettable():
            return "fuse_resettable"
        case FuseReset():
            return "fuse_reset"
        case DeviceToggleRejected():
            return "device_toggle_rejected"
        case FuseResetRejected():
            return "fuse_reset_rejected"


def to_message(event: SimulationEvent) -> dict[str, Any]:
    """Serialise an event as ``{"type": ..., "data": ...}``."""
    match event:
        case InitialData(snapshot=snapshot) | PowerUpdate(snapshot=snapshot):
            data = dataclasses.asdict(snapshot)
        case _:
            data = dataclasses.asdict(event)
    return {"type": event_id(event), "data": data}
