"""
Visualization utilities for finished M/M/1 runs.
"""

import matplotlib.pyplot as plt
import numpy as np
from typing import Optional
import seaborn as sns

from ..distributions import (
    mm1_expected_delay,
    mm1_expected_queue_length,
    mm1_utilization,
)


def _require_customers(result) -> None:
    if not result.customers:
        raise ValueError("Run has no per-customer records; "
                         "enable record_customers to plot them")


def plot_simulation_metrics(result, title: str = "M/M/1 Simulation Metrics"):
    """Compare simulated averages with the M/M/1 steady-state values."""
    config = result.config
    arrival_rate, service_rate = config.arrival_rate, config.service_rate

    labels = ['Delay in queue', 'Number in queue', 'Utilization']
    simulated = [result.average_delay,
                 result.average_number_in_queue,
                 result.server_utilization]
    theoretical = [mm1_expected_delay(arrival_rate, service_rate),
                   mm1_expected_queue_length(arrival_rate, service_rate),
                   mm1_utilization(arrival_rate, service_rate)]
    # Unstable parameters have no steady state
    theoretical = [value if np.isfinite(value) else np.nan for value in theoretical]

    fig, ax = plt.subplots(figsize=(10, 6))
    x = np.arange(len(labels))
    width = 0.35

    ax.bar(x - width/2, simulated, width, label='Simulated')
    ax.bar(x + width/2, theoretical, width, label='Theoretical')
    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_ylabel('Value')
    ax.set_title(title)
    ax.legend()

    return fig


def plot_customer_delays(result):
    """Plot each customer's delay with the running average delay."""
    _require_customers(result)

    ids = [c.customer_id for c in result.customers]
    delays = np.array([c.delay for c in result.customers])
    running_average = np.cumsum(delays) / np.arange(1, len(delays) + 1)

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(ids, delays, '.', alpha=0.4, label='Delay')
    ax.plot(ids, running_average, 'r-', linewidth=2, label='Running average')

    expected = mm1_expected_delay(result.config.arrival_rate,
                                  result.config.service_rate)
    if np.isfinite(expected):
        ax.axhline(expected, color='k', linestyle='--', label='Theoretical')

    ax.set_xlabel('Customer')
    ax.set_ylabel('Delay in queue (minutes)')
    ax.set_title('Delay in Queue per Customer')
    ax.legend()
    ax.grid(True, alpha=0.3)

    return fig


def plot_delay_distribution(result, bins: int = 50):
    """Histogram of delays and inter-arrival times."""
    _require_customers(result)

    delays = [c.delay for c in result.customers]
    gaps = [c.interarrival_time for c in result.customers]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    sns.histplot(delays, bins=bins, stat='density', ax=ax1)
    ax1.set_xlabel('Delay in queue (minutes)')
    ax1.set_title('Delay Distribution')

    sns.histplot(gaps, bins=bins, stat='density', ax=ax2)
    x_range = np.linspace(0, max(gaps), 100)
    mean = result.config.mean_interarrival
    ax2.plot(x_range, np.exp(-x_range / mean) / mean, 'r-', linewidth=2,
             label='Theoretical')
    ax2.set_xlabel('Inter-arrival time (minutes)')
    ax2.set_title('Inter-arrival Distribution')
    ax2.legend()

    fig.suptitle('Per-customer Distributions')
    return fig


def create_performance_report(result, save_path: Optional[str] = None):
    """Create a comprehensive performance report with multiple visualizations."""
    _require_customers(result)

    fig = plt.figure(figsize=(16, 14))
    grid = fig.add_gridspec(3, 2)

    # Delay trace across the whole width
    ax_delays = fig.add_subplot(grid[0, :])
    ids = [c.customer_id for c in result.customers]
    delays = np.array([c.delay for c in result.customers])
    ax_delays.plot(ids, delays, '.', alpha=0.4)
    ax_delays.plot(ids, np.cumsum(delays) / np.arange(1, len(delays) + 1), 'r-')
    ax_delays.set_xlabel('Customer')
    ax_delays.set_ylabel('Delay in queue')
    ax_delays.set_title('Delay in Queue per Customer')

    ax_hist = fig.add_subplot(grid[1, 0])
    sns.histplot(delays, bins=50, ax=ax_hist)
    ax_hist.set_xlabel('Delay in queue')
    ax_hist.set_title('Delay Distribution')

    ax_bars = fig.add_subplot(grid[1, 1])
    ax_bars.bar(['Delay', 'Number in queue', 'Utilization'],
                [result.average_delay,
                 result.average_number_in_queue,
                 result.server_utilization])
    ax_bars.set_title('Simulated Averages')

    # Summary text
    ax_text = fig.add_subplot(grid[2, :])
    ax_text.axis('off')
    config = result.config
    stats_text = f"""
    System Performance Summary
    -------------------------
    Mean Inter-arrival Time: {config.mean_interarrival:.4f}
    Mean Service Time: {config.mean_service:.4f}
    Customers Delayed: {result.num_customers_delayed}
    Simulation End Time: {result.end_time:.4f}
    Average Delay in Queue: {result.average_delay:.4f}
    Average Number in Queue: {result.average_number_in_queue:.4f}
    Server Utilization: {result.server_utilization:.4f}
    Erlang B: {result.erlang_b:.4f}
    Erlang C: {result.erlang_c:.4f}
    """
    ax_text.text(0.1, 0.9, stats_text, transform=ax_text.transAxes,
                 fontfamily='monospace', verticalalignment='top')

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig
