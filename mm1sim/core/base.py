"""Base types for the single-server queueing simulation."""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional


class EventType(IntEnum):
    """Kinds of events kept on the event calendar."""
    ARRIVAL = 1
    DEPARTURE = 2


class ServerStatus(IntEnum):
    """Server state; the value doubles as the busy indicator (0 or 1)."""
    IDLE = 0
    BUSY = 1


@dataclass
class SimulationClock:
    """Current simulation time and the time statistics were last updated."""
    current_time: float = 0.0
    time_last_event: float = 0.0

    def reset(self) -> None:
        self.current_time = 0.0
        self.time_last_event = 0.0


@dataclass(frozen=True)
class CustomerRecord:
    """Observed values for one customer.

    `customer_id` and `delay` stay None until the customer enters service.
    """
    arrival_time: float
    interarrival_time: float
    customer_id: Optional[int] = None
    delay: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return self.customer_id is not None

    def complete(self, customer_id: int, delay: float) -> 'CustomerRecord':
        """Return the finished record for a customer entering service."""
        if self.is_complete:
            raise ValueError(f"customer {self.customer_id} is already complete")
        return replace(self, customer_id=customer_id, delay=delay)


@dataclass
class RunningTotals:
    """Counters and time-weighted areas accumulated over a run."""
    num_customers_delayed: int = 0
    total_of_delays: float = 0.0
    area_num_in_queue: float = 0.0
    area_server_status: float = 0.0

    def update_time_avg_stats(self,
                              clock: SimulationClock,
                              num_in_queue: int,
                              server_status: ServerStatus) -> None:
        """Integrate the state that held since the last event.

        Must be called before the event at `clock.current_time` changes
        the queue length or server status.
        """
        time_since_last_event = clock.current_time - clock.time_last_event
        clock.time_last_event = clock.current_time

        self.area_num_in_queue += num_in_queue * time_since_last_event
        self.area_server_status += int(server_status) * time_since_last_event

    def record_delay(self, delay: float) -> None:
        """Count one more customer who has finished waiting."""
        self.total_of_delays += delay
        self.num_customers_delayed += 1

    def average_delay(self) -> float:
        """Calculate average delay in queue."""
        if self.num_customers_delayed > 0:
            return self.total_of_delays / self.num_customers_delayed
        return 0.0

    def average_number_in_queue(self, end_time: float) -> float:
        """Calculate time-average number of customers in queue."""
        if end_time > 0:
            return self.area_num_in_queue / end_time
        return 0.0

    def server_utilization(self, end_time: float) -> float:
        """Calculate fraction of time the server was busy."""
        if end_time > 0:
            return self.area_server_status / end_time
        return 0.0
