"""Visualization utilities for M/M/1 simulation results."""

from .plotting import (
    plot_simulation_metrics,
    plot_customer_delays,
    plot_delay_distribution,
    create_performance_report
)

__all__ = [
    'plot_simulation_metrics',
    'plot_customer_delays',
    'plot_delay_distribution',
    'create_performance_report'
]
