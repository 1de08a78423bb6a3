"""HouseTopology - fixed rooms and devices with their on/off state."""

import logging
from collections.abc import Iterator

from core.errors import UnknownDeviceRejection
from core.models import Device, HouseLayout, Room

logger = logging.getLogger(__name__)


class HouseTopology:
    """Owns a house layout and resolves devices by room id and kind."""

    def __init__(self, layout: HouseLayout) -> None:
        self.layout = layout
        self._rooms_by_id: dict[str, Room] = {}
        seen_device_ids: set[str] = set()
        for room in self.rooms():
            if room.id in self._rooms_by_id:
                raise ValueError(f"Duplicate room id {room.id!r}")
            self._rooms_by_id[room.id] = room
            for device in room.devices.values():
                if device.id in seen_device_ids:
                    raise ValueError(f"Duplicate device id {device.id!r}")
                seen_device_ids.add(device.id)

    def rooms(self) -> Iterator[Room]:
        yield from self.layout.bedrooms
        yield from self.layout.common_rooms.values()

    def devices(self) -> Iterator[Device]:
        for room in self.rooms():
            yield from room.devices.values()

    def active_devices(self) -> list[Device]:
        return [d for d in self.devices() if d.active]

    def find_device(self, room_id: str | None, device_kind: str | None) -> Device:
        room = self._rooms_by_id.get(room_id or "")
        if room is None:
            raise UnknownDeviceRejection(room_id, device_kind)
        # DeviceKind is a StrEnum, so plain strings hash to the same keys
        device = room.devices.get(device_kind)  # type: ignore[call-overload]
        if device is None:
            raise UnknownDeviceRejection(room_id, device_kind)
        return device

    def deactivate_all(self) -> None:
        for device in self.devices():
            device.active = False
        logger.info("All devices switched off")
