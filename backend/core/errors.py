"""Rejections raised by simulation commands.

A rejection never leaves partial state behind: the command either applied
fully or was reverted before raising.
"""


class SimulationRejection(Exception):
    """Base class for recoverable command rejections."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FuseTrippedRejection(SimulationRejection):
    def __init__(self) -> None:
        super().__init__("Cannot toggle devices while fuse is tripped.")


class OverloadRejection(SimulationRejection):
    def __init__(self, threshold_w: int) -> None:
        super().__init__(f"Cannot turn on device. Would exceed {threshold_w}W limit.")
        self.threshold_w = threshold_w


class FuseNotResettableRejection(SimulationRejection):
    def __init__(self) -> None:
        super().__init__("Cannot reset fuse yet. Please wait.")


class UnknownDeviceRejection(SimulationRejection):
    def __init__(self, room_id: str | None, device_kind: str | None) -> None:
        super().__init__(f"Device not found: {device_kind!r} in room {room_id!r}")
        self.room_id = room_id
        self.device_kind = device_kind
