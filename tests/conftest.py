import pytest

from mm1sim.core import EventCalendar, RunningTotals, SimulationClock, SingleServerQueue
from mm1sim.system import SimulationConfig


@pytest.fixture
def clock():
    return SimulationClock()


@pytest.fixture
def calendar(clock):
    return EventCalendar(clock)


@pytest.fixture
def totals():
    return RunningTotals()


@pytest.fixture
def server(clock, calendar, totals):
    """Queue with fixed 1.0 inter-arrival and 5.0 service times."""
    return SingleServerQueue(clock, calendar, totals,
                             interarrival_distribution=lambda: 1.0,
                             service_distribution=lambda: 5.0,
                             capacity=2)


@pytest.fixture
def mm1_config():
    return SimulationConfig(mean_interarrival=1.0, mean_service=0.5,
                            num_delays_required=1000)


@pytest.fixture
def params_file(tmp_path):
    path = tmp_path / "params.txt"
    path.write_text("1.0 0.5 200\n")
    return path
