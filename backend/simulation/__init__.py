"""Simulation module - power aggregation, fuse protection and efficiency scoring."""

from simulation.badges import BADGES, BadgeDefinition, BadgeTracker
from simulation.config import DEFAULT as DEFAULT_SIM_CONFIG
from simulation.config import SimConfig
from simulation.context import SimulationContext, Subscriber
from simulation.efficiency import EfficiencyEngine, compute_score, efficiency_level, time_multiplier
from simulation.overload import OverloadCheck, OverloadProtection, Scheduler, asyncio_scheduler
from simulation.power import compute_aggregate
from simulation.session import SessionTracker

__all__ = [
    "BADGES",
    "DEFAULT_SIM_CONFIG",
    "BadgeDefinition",
    "BadgeTracker",
    "EfficiencyEngine",
    "OverloadCheck",
    "OverloadProtection",
    "Scheduler",
    "SessionTracker",
    "SimConfig",
    "SimulationContext",
    "Subscriber",
    "asyncio_scheduler",
    "compute_aggregate",
    "compute_score",
    "efficiency_level",
    "time_multiplier",
]
