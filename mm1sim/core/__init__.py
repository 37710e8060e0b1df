"""Core components of the M/M/1 simulation."""

from .base import (
    EventType,
    ServerStatus,
    SimulationClock,
    CustomerRecord,
    RunningTotals,
)
from .calendar import EventCalendar
from .queue import SingleServerQueue
from .errors import (
    SimulationError,
    ConfigurationError,
    FatalSimulationError,
    QueueOverflowError,
    EmptyEventListError,
)

__all__ = [
    'EventType',
    'ServerStatus',
    'SimulationClock',
    'CustomerRecord',
    'RunningTotals',
    'EventCalendar',
    'SingleServerQueue',
    'SimulationError',
    'ConfigurationError',
    'FatalSimulationError',
    'QueueOverflowError',
    'EmptyEventListError',
]
