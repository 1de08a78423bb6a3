"""Sample house layout used by the simulation."""

from core.catalog import DeviceKind
from core.models import HouseLayout, Room, make_device


def create_sample_house() -> HouseLayout:
    """Create the hardcoded house: two bedrooms, hall, kitchen, washroom, garden."""
    return HouseLayout(
        bedrooms=[
            _bedroom("bedroom1", "Bedroom 1"),
            _bedroom("bedroom2", "Bedroom 2"),
        ],
        common_rooms={
            "hall": _room("hall", "Hall", [DeviceKind.TUBE_LIGHT, DeviceKind.FAN]),
            "kitchen": _room(
                "kitchen",
                "Kitchen",
                [DeviceKind.TUBE_LIGHT, DeviceKind.FRIDGE, DeviceKind.GRINDER],
            ),
            "washroom": _room("washroom", "Washroom", [DeviceKind.TUBE_LIGHT, DeviceKind.WATER_HEATER]),
            "garden": Room(
                id="garden",
                name="Garden",
                devices={DeviceKind.TUBE_LIGHT: make_device("garden", DeviceKind.TUBE_LIGHT, name="Garden Light")},
            ),
        },
    )


def _bedroom(room_id: str, name: str) -> Room:
    """Bedrooms: tube light, fan and AC."""
    return _room(room_id, name, [DeviceKind.TUBE_LIGHT, DeviceKind.FAN, DeviceKind.AC])


def _room(room_id: str, name: str, kinds: list[DeviceKind]) -> Room:
    return Room(id=room_id, name=name, devices={kind: make_device(room_id, kind) for kind in kinds})
