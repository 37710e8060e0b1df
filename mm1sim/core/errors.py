"""Exceptions raised by the simulator and the exit codes they map to."""

from typing import Optional


EXIT_EVENT_LIST_EMPTY = 1
EXIT_QUEUE_OVERFLOW = 2
EXIT_CONFIGURATION = 3


class SimulationError(Exception):
    """Base class for all simulator errors.

    Concrete subclasses set `exit_code`, the process status the CLI exits with.
    """


class ConfigurationError(SimulationError):
    """Missing, unreadable or invalid run parameters."""
    exit_code = EXIT_CONFIGURATION


class FatalSimulationError(SimulationError):
    """A condition that aborts a run at simulation time `time`."""

    def __init__(self, message: str, time: Optional[float] = None):
        if time is not None:
            message = f"{message} at time {time:.6f}"
        super().__init__(message)
        self.time = time


class QueueOverflowError(FatalSimulationError):
    """The waiting queue grew past its configured capacity."""
    exit_code = EXIT_QUEUE_OVERFLOW

    def __init__(self, capacity: int, time: float):
        super().__init__(
            f"Overflow of the waiting queue (capacity {capacity})", time)
        self.capacity = capacity


class EmptyEventListError(FatalSimulationError):
    """No event is scheduled; the calendar has nothing to fire."""
    exit_code = EXIT_EVENT_LIST_EMPTY

    def __init__(self, time: float):
        super().__init__("Event list empty", time)
