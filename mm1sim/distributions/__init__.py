"""Random variables and closed-form results for the M/M/1 simulator."""

from .random_variables import (
    LCGRandom,
    exponential,
    exponential_distribution,
)
from .erlang import (
    factorial,
    erlang_b,
    erlang_c,
    mm1_utilization,
    mm1_expected_delay,
    mm1_expected_queue_length,
)

__all__ = [
    'LCGRandom',
    'exponential',
    'exponential_distribution',
    'factorial',
    'erlang_b',
    'erlang_c',
    'mm1_utilization',
    'mm1_expected_delay',
    'mm1_expected_queue_length',
]
