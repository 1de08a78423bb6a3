"""Power aggregation over the house topology."""

from core.house import HouseTopology
from core.models import ActiveDevice, PowerAggregate


def compute_aggregate(house: HouseTopology, voltage_v: float) -> PowerAggregate:
    """Sum rated power of all active devices and derive the current draw.

    Pure function of the topology - nothing is mutated or recorded.
    """
    active = [ActiveDevice(id=d.id, kind=d.kind, power=d.power) for d in house.active_devices()]
    total_power = sum(d.power for d in active)
    return PowerAggregate(
        total_power=total_power,
        total_current=total_power / voltage_v,
        active_devices=active,
    )
