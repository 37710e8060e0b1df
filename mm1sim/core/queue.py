"""Single-server FIFO queue: the arrival and departure transitions."""

import logging
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

from .base import (
    CustomerRecord,
    EventType,
    RunningTotals,
    ServerStatus,
    SimulationClock,
)
from .calendar import EventCalendar
from .errors import QueueOverflowError

logger = logging.getLogger(__name__)


class SingleServerQueue:
    """One server with a bounded FIFO waiting line.

    The queue reacts to events dispatched by the driver. It reads the time
    from `clock`, schedules events on `calendar` and folds delays into
    `totals`; it never decides when the run stops.
    """

    def __init__(self,
                 clock: SimulationClock,
                 calendar: EventCalendar,
                 totals: RunningTotals,
                 interarrival_distribution: Callable[[], float],
                 service_distribution: Callable[[], float],
                 capacity: int = 1000,
                 record_customers: bool = True):
        self.clock = clock
        self.calendar = calendar
        self.totals = totals
        self.interarrival_distribution = interarrival_distribution
        self.service_distribution = service_distribution
        self.capacity = capacity
        self.record_customers = record_customers
        self.reset()

    def reset(self) -> None:
        """Empty the queue and put the server back to idle."""
        self.server_status = ServerStatus.IDLE
        self.queue: Deque[float] = deque()  # arrival times of waiting customers
        self.customers_served = 0
        self.time_last_arrival: Optional[float] = None

        # Records of waiting customers, in the same order as self.queue
        self._pending: Deque[CustomerRecord] = deque()
        self._customers: List[CustomerRecord] = []

    @property
    def num_in_queue(self) -> int:
        return len(self.queue)

    @property
    def waiting_times(self) -> Tuple[float, ...]:
        """Arrival times of the customers currently waiting, oldest first."""
        return tuple(self.queue)

    @property
    def customers(self) -> List[CustomerRecord]:
        """Completed customer records, in order of entering service."""
        return list(self._customers)

    def schedule_arrival(self) -> None:
        """Schedule the next arrival from the current time."""
        now = self.clock.current_time
        self.calendar.schedule(EventType.ARRIVAL,
                               now + self.interarrival_distribution())

    def _start_service(self, record: Optional[CustomerRecord], delay: float) -> None:
        now = self.clock.current_time
        self.totals.record_delay(delay)
        self.customers_served += 1
        self.calendar.schedule(EventType.DEPARTURE,
                               now + self.service_distribution())

        if record is not None:
            self._customers.append(record.complete(self.customers_served, delay))

    def arrive(self) -> None:
        """Process an arriving customer."""
        now = self.clock.current_time
        self.schedule_arrival()

        if self.time_last_arrival is None:
            interarrival = 0.0
        else:
            interarrival = now - self.time_last_arrival
        self.time_last_arrival = now

        record = None
        if self.record_customers:
            record = CustomerRecord(arrival_time=now, interarrival_time=interarrival)

        if self.server_status == ServerStatus.BUSY:
            if len(self.queue) >= self.capacity:
                logger.error("Queue overflow at time %f (capacity %d)",
                             now, self.capacity)
                raise QueueOverflowError(self.capacity, now)
            self.queue.append(now)
            if record is not None:
                self._pending.append(record)
            logger.debug("t=%f arrival waits, %d in queue", now, len(self.queue))
        else:
            # Server idle: the customer goes straight into service
            self.server_status = ServerStatus.BUSY
            self._start_service(record, 0.0)
            logger.debug("t=%f arrival served immediately", now)

    def depart(self) -> None:
        """Process a service completion."""
        now = self.clock.current_time

        if not self.queue:
            self.server_status = ServerStatus.IDLE
            self.calendar.cancel(EventType.DEPARTURE)
            logger.debug("t=%f departure, server idle", now)
            return

        arrival_time = self.queue.popleft()
        record = self._pending.popleft() if self.record_customers else None
        delay = now - arrival_time
        self._start_service(record, delay)
        logger.debug("t=%f departure, next customer waited %f", now, delay)
