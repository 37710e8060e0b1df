"""Discrete-event simulation of a single-server (M/M/1) queue."""

from .core import (
    CustomerRecord,
    EventCalendar,
    EventType,
    RunningTotals,
    ServerStatus,
    SingleServerQueue,
)
from .distributions import LCGRandom, erlang_b, erlang_c
from .system import MM1Simulation, SimulationConfig, SimulationResult, load_config

__version__ = '0.1.0'

__all__ = [
    'CustomerRecord',
    'EventCalendar',
    'EventType',
    'RunningTotals',
    'ServerStatus',
    'SingleServerQueue',
    'LCGRandom',
    'erlang_b',
    'erlang_c',
    'MM1Simulation',
    'SimulationConfig',
    'SimulationResult',
    'load_config',
]
