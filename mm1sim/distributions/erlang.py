"""
Closed-form queueing results used alongside the simulation.

Erlang B gives the probability that an arrival finds all `servers` busy in a
loss system; Erlang C gives the probability that an arrival has to wait in
a delay system. Both take the offered traffic A = arrival_rate / service_rate.
"""

import math


def factorial(n: int) -> int:
    """Return n! for a non-negative integer n."""
    if n < 0:
        raise ValueError(f"factorial is undefined for negative n ({n})")
    return math.factorial(n)


def _traffic(servers: int, arrival_rate: float, service_rate: float) -> float:
    if servers < 1:
        raise ValueError("servers must be at least 1")
    if arrival_rate < 0:
        raise ValueError("arrival_rate must be non-negative")
    if service_rate <= 0:
        raise ValueError("service_rate must be strictly positive")
    return arrival_rate / service_rate


def erlang_b(servers: int, arrival_rate: float, service_rate: float) -> float:
    """Blocking probability of an M/M/m/m system."""
    traffic = _traffic(servers, arrival_rate, service_rate)
    upper = traffic ** servers / factorial(servers)
    lower = sum(traffic ** i / factorial(i) for i in range(servers + 1))
    return upper / lower


def erlang_c(servers: int, arrival_rate: float, service_rate: float) -> float:
    """Probability that an arrival waits in an M/M/m system.

    Returns 1.0 when traffic >= servers, since the queue then grows without
    bound and every arrival eventually waits.
    """
    traffic = _traffic(servers, arrival_rate, service_rate)
    if traffic >= servers:
        return 1.0

    upper = (traffic ** servers / factorial(servers)) * (servers / (servers - traffic))
    lower = sum(traffic ** i / factorial(i) for i in range(servers))
    return upper / (lower + upper)


# M/M/1 steady-state values
def mm1_utilization(arrival_rate: float, service_rate: float) -> float:
    """Traffic intensity rho = lambda / mu."""
    return _traffic(1, arrival_rate, service_rate)


def mm1_expected_delay(arrival_rate: float, service_rate: float) -> float:
    """Expected delay in queue, rho / (mu * (1 - rho)); inf if rho >= 1."""
    rho = mm1_utilization(arrival_rate, service_rate)
    if rho >= 1:
        return math.inf
    return rho / (service_rate * (1 - rho))


def mm1_expected_queue_length(arrival_rate: float, service_rate: float) -> float:
    """Expected number in queue, lambda * Wq (Little's law)."""
    return arrival_rate * mm1_expected_delay(arrival_rate, service_rate)
