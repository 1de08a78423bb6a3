"""Device catalog - nominal wattage per device kind."""

from enum import StrEnum


class DeviceKind(StrEnum):
    TUBE_LIGHT = "tube_light"
    FAN = "fan"
    AC = "ac"
    FRIDGE = "fridge"
    GRINDER = "grinder"
    WASHING_MACHINE = "washing_machine"
    WATER_HEATER = "water_heater"


DEVICE_POWER_RATINGS: dict[DeviceKind, int] = {
    DeviceKind.TUBE_LIGHT: 40,
    DeviceKind.FAN: 60,
    DeviceKind.AC: 1500,
    DeviceKind.FRIDGE: 200,
    DeviceKind.GRINDER: 500,
    DeviceKind.WASHING_MACHINE: 1000,
    DeviceKind.WATER_HEATER: 2000,
}

DEVICE_DISPLAY_NAMES: dict[DeviceKind, str] = {
    DeviceKind.TUBE_LIGHT: "Tube Light",
    DeviceKind.FAN: "Fan",
    DeviceKind.AC: "AC",
    DeviceKind.FRIDGE: "Fridge",
    DeviceKind.GRINDER: "Grinder",
    DeviceKind.WASHING_MACHINE: "Washing Machine",
    DeviceKind.WATER_HEATER: "Water Heater",
}
