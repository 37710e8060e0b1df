"""Event calendar holding the next time of each event type."""

from typing import Dict, Tuple
import numpy as np

from .base import EventType, SimulationClock
from .errors import EmptyEventListError


# Order used to break ties between events scheduled at the same time
TIE_BREAK_ORDER = (EventType.DEPARTURE, EventType.ARRIVAL)


class EventCalendar:
    """Next scheduled time per event type; np.inf means not scheduled."""

    def __init__(self, clock: SimulationClock):
        self.clock = clock
        self.time_next_event: Dict[EventType, float] = {
            event_type: np.inf for event_type in TIE_BREAK_ORDER
        }

    def schedule(self, event_type: EventType, time: float) -> None:
        """Set the next occurrence of `event_type`."""
        self.time_next_event[event_type] = time

    def cancel(self, event_type: EventType) -> None:
        """Mark `event_type` as not scheduled."""
        self.time_next_event[event_type] = np.inf

    def time_of(self, event_type: EventType) -> float:
        return self.time_next_event[event_type]

    def is_scheduled(self, event_type: EventType) -> bool:
        return bool(np.isfinite(self.time_next_event[event_type]))

    def clear(self) -> None:
        for event_type in TIE_BREAK_ORDER:
            self.cancel(event_type)

    def next_event(self) -> Tuple[EventType, float]:
        """
        Find the earliest scheduled event and advance the clock to it.

        Raises EmptyEventListError if nothing is scheduled.
        """
        min_time = np.inf
        next_type = None

        # Strict comparison keeps the first type in TIE_BREAK_ORDER on ties
        for event_type in TIE_BREAK_ORDER:
            event_time = self.time_next_event[event_type]
            if event_time < min_time:
                min_time = event_time
                next_type = event_type

        if next_type is None:
            raise EmptyEventListError(self.clock.current_time)

        self.clock.current_time = min_time
        return next_type, min_time
