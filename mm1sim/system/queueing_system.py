"""Simulation driver for the single-server queue."""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..core import (
    CustomerRecord,
    EventCalendar,
    EventType,
    RunningTotals,
    SimulationClock,
    SingleServerQueue,
)
from ..distributions import LCGRandom, exponential_distribution, erlang_b, erlang_c
from .config import SimulationConfig

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Summary of one finished run."""
    config: SimulationConfig
    average_delay: float
    average_number_in_queue: float
    server_utilization: float
    end_time: float
    erlang_b: float
    erlang_c: float
    num_customers_delayed: int
    totals: RunningTotals
    customers: List[CustomerRecord] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class MM1Simulation:
    """Runs the event loop until enough customers have been delayed.

    Owns the clock, calendar, running totals and random number generator of
    a single run; separate instances share no state.
    """

    def __init__(self, config: SimulationConfig, rng: Optional[LCGRandom] = None):
        self.config = config
        self.rng = rng if rng is not None else LCGRandom(config.seed)

        self.clock = SimulationClock()
        self.calendar = EventCalendar(self.clock)
        self.totals = RunningTotals()
        self.server = SingleServerQueue(
            clock=self.clock,
            calendar=self.calendar,
            totals=self.totals,
            interarrival_distribution=exponential_distribution(
                config.mean_interarrival, self.rng, config.arrival_stream),
            service_distribution=exponential_distribution(
                config.mean_service, self.rng, config.service_stream),
            capacity=config.queue_capacity,
            record_customers=config.record_customers,
        )
        self.num_events = 0

    @property
    def current_time(self) -> float:
        return self.clock.current_time

    def initialize(self) -> None:
        """Reset all state and schedule the first arrival."""
        self.clock.reset()
        self.totals = RunningTotals()
        self.server.totals = self.totals
        self.server.reset()
        self.calendar.clear()
        self.num_events = 0

        self.server.schedule_arrival()
        self.calendar.cancel(EventType.DEPARTURE)

    def step(self) -> EventType:
        """Advance to the next event, update statistics and handle it."""
        event_type, _ = self.calendar.next_event()

        # Statistics cover the interval that just ended, so the update comes
        # before the event changes the state
        self.totals.update_time_avg_stats(self.clock,
                                          self.server.num_in_queue,
                                          self.server.server_status)

        if event_type == EventType.ARRIVAL:
            self.server.arrive()
        else:
            self.server.depart()

        self.num_events += 1
        return event_type

    def is_finished(self) -> bool:
        return self.totals.num_customers_delayed >= self.config.num_delays_required

    def run(self) -> SimulationResult:
        """Run the simulation from an empty system and return its result."""
        self.initialize()
        logger.info("Starting M/M/1 run: mean inter-arrival %g, mean service %g, "
                    "%d delays required",
                    self.config.mean_interarrival, self.config.mean_service,
                    self.config.num_delays_required)

        while not self.is_finished():
            self.step()

        logger.info("Run finished at time %f after %d events",
                    self.clock.current_time, self.num_events)
        return self.get_result()

    def get_result(self) -> SimulationResult:
        """Build the result from the current totals."""
        end_time = self.clock.current_time
        arrival_rate = self.config.arrival_rate
        service_rate = self.config.service_rate

        return SimulationResult(
            config=self.config,
            average_delay=self.totals.average_delay(),
            average_number_in_queue=self.totals.average_number_in_queue(end_time),
            server_utilization=self.totals.server_utilization(end_time),
            end_time=end_time,
            erlang_b=erlang_b(1, arrival_rate, service_rate),
            erlang_c=erlang_c(1, arrival_rate, service_rate),
            num_customers_delayed=self.totals.num_customers_delayed,
            totals=RunningTotals(**asdict(self.totals)),
            customers=self.server.customers,
        )

    def get_metrics_summary(self) -> Dict:
        """Get a summary of all system metrics."""
        end_time = self.clock.current_time
        return {
            'system': {
                'end_time': end_time,
                'num_events': self.num_events,
                'num_customers_delayed': self.totals.num_customers_delayed,
                'average_delay': self.totals.average_delay(),
                'average_number_in_queue': self.totals.average_number_in_queue(end_time),
                'server_utilization': self.totals.server_utilization(end_time),
            },
            'server': {
                'status': self.server.server_status.name,
                'num_in_queue': self.server.num_in_queue,
                'customers_served': self.server.customers_served,
                'capacity': self.server.capacity,
            },
        }
