"""Calendar, accumulator and arrive/depart transitions."""

import numpy as np
import pytest

from mm1sim.core import (
    CustomerRecord,
    EmptyEventListError,
    EventType,
    FatalSimulationError,
    QueueOverflowError,
    ServerStatus,
    SimulationClock,
    SimulationError,
)
from mm1sim.core.errors import EXIT_EVENT_LIST_EMPTY, EXIT_QUEUE_OVERFLOW


# Event calendar

def test_empty_calendar_raises(calendar, clock):
    clock.current_time = 3.25
    with pytest.raises(EmptyEventListError) as excinfo:
        calendar.next_event()
    assert excinfo.value.time == 3.25
    assert excinfo.value.exit_code == EXIT_EVENT_LIST_EMPTY


def test_next_event_advances_clock(calendar, clock):
    calendar.schedule(EventType.ARRIVAL, 1.5)
    assert calendar.next_event() == (EventType.ARRIVAL, 1.5)
    assert clock.current_time == 1.5


def test_earliest_event_wins(calendar):
    calendar.schedule(EventType.ARRIVAL, 4.0)
    calendar.schedule(EventType.DEPARTURE, 2.0)
    assert calendar.next_event()[0] == EventType.DEPARTURE


def test_tie_goes_to_departure(calendar):
    calendar.schedule(EventType.ARRIVAL, 2.0)
    calendar.schedule(EventType.DEPARTURE, 2.0)
    assert calendar.next_event() == (EventType.DEPARTURE, 2.0)


def test_cancel(calendar):
    calendar.schedule(EventType.DEPARTURE, 2.0)
    assert calendar.is_scheduled(EventType.DEPARTURE)
    calendar.cancel(EventType.DEPARTURE)
    assert not calendar.is_scheduled(EventType.DEPARTURE)
    assert calendar.time_of(EventType.DEPARTURE) == np.inf


# Statistics accumulator

def test_update_integrates_previous_state(totals):
    clock = SimulationClock(current_time=2.0, time_last_event=0.5)
    totals.update_time_avg_stats(clock, 3, ServerStatus.BUSY)
    assert totals.area_num_in_queue == pytest.approx(4.5)
    assert totals.area_server_status == pytest.approx(1.5)
    assert clock.time_last_event == 2.0


def test_idle_server_adds_no_busy_area(totals):
    clock = SimulationClock(current_time=4.0, time_last_event=1.0)
    totals.update_time_avg_stats(clock, 0, ServerStatus.IDLE)
    assert totals.area_server_status == 0.0
    assert totals.area_num_in_queue == 0.0


def test_averages_without_data(totals):
    assert totals.average_delay() == 0.0
    assert totals.average_number_in_queue(0.0) == 0.0
    assert totals.server_utilization(0.0) == 0.0


def test_customer_record_completes_once():
    record = CustomerRecord(arrival_time=1.0, interarrival_time=0.5)
    assert not record.is_complete
    done = record.complete(customer_id=1, delay=0.25)
    assert done.customer_id == 1 and done.delay == 0.25
    assert record.customer_id is None
    with pytest.raises(ValueError):
        done.complete(customer_id=2, delay=0.0)


# Arrive / depart transitions

def test_arrival_to_idle_server(server, calendar, totals):
    server.arrive()
    assert server.server_status == ServerStatus.BUSY
    assert server.num_in_queue == 0
    assert calendar.time_of(EventType.ARRIVAL) == 1.0
    assert calendar.time_of(EventType.DEPARTURE) == 5.0
    assert totals.num_customers_delayed == 1
    assert totals.total_of_delays == 0.0
    assert server.customers == [CustomerRecord(arrival_time=0.0, interarrival_time=0.0,
                                               customer_id=1, delay=0.0)]


def test_arrival_to_busy_server_waits(server, clock, totals):
    server.arrive()
    clock.current_time = 1.0
    server.arrive()
    clock.current_time = 2.0
    server.arrive()
    assert server.waiting_times == (1.0, 2.0)
    assert totals.num_customers_delayed == 1
    assert len(server.customers) == 1


def test_queue_overflow(server, clock):
    for t in (0.0, 1.0, 2.0):
        clock.current_time = t
        server.arrive()
    clock.current_time = 3.0
    with pytest.raises(QueueOverflowError) as excinfo:
        server.arrive()
    assert excinfo.value.time == 3.0
    assert excinfo.value.capacity == 2
    assert excinfo.value.exit_code == EXIT_QUEUE_OVERFLOW


def test_departure_serves_front_of_queue(server, clock, calendar, totals):
    for t in (0.0, 1.0, 2.0):
        clock.current_time = t
        server.arrive()
    clock.current_time = 5.0
    server.depart()

    assert server.server_status == ServerStatus.BUSY
    assert server.waiting_times == (2.0,)
    assert totals.num_customers_delayed == 2
    assert totals.total_of_delays == pytest.approx(4.0)
    assert calendar.time_of(EventType.DEPARTURE) == 10.0

    second = server.customers[1]
    assert second.customer_id == 2
    assert second.delay == pytest.approx(4.0)
    assert second.interarrival_time == pytest.approx(1.0)


def test_departure_with_empty_queue_idles_server(server, calendar):
    server.arrive()
    server.depart()
    assert server.server_status == ServerStatus.IDLE
    assert calendar.time_of(EventType.DEPARTURE) == np.inf
    assert calendar.next_event()[0] == EventType.ARRIVAL


def test_customers_not_recorded_when_disabled(server, clock, totals):
    server.record_customers = False
    server.arrive()
    clock.current_time = 1.0
    server.arrive()
    clock.current_time = 5.0
    server.depart()
    assert server.customers == []
    assert totals.num_customers_delayed == 2


def test_overflow_leaves_queue_consistent(server, clock, totals):
    for t in (0.0, 1.0, 2.0):
        clock.current_time = t
        server.arrive()
    clock.current_time = 3.0
    with pytest.raises(QueueOverflowError):
        server.arrive()
    assert server.waiting_times == (1.0, 2.0)

    clock.current_time = 5.0
    server.depart()
    server.depart()
    assert [c.customer_id for c in server.customers] == [1, 2, 3]
    assert totals.total_of_delays == pytest.approx(4.0 + 3.0)


def test_base_error_has_no_exit_code():
    assert not hasattr(SimulationError, 'exit_code')
    assert not hasattr(FatalSimulationError, 'exit_code')
