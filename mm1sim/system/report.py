"""Text and JSON renderings of a finished simulation."""

import json
from pathlib import Path
from typing import Dict, List, Union

from .queueing_system import SimulationResult


RULE = "=" * 45


def _format_header(result: SimulationResult) -> List[str]:
    config = result.config
    seed = "default" if config.seed is None else config.seed
    return [
        RULE,
        "|| Single-server queueing system (M/M/1 model)",
        RULE,
        f"|| Mean inter-arrival time: {config.mean_interarrival:>10.4f} minutes.",
        f"|| Mean service time:       {config.mean_service:>10.4f} minutes.",
        f"|| Number of customers:     {config.num_delays_required:>10d} customers.",
        f"|| Queue capacity:          {config.queue_capacity:>10d} customers.",
        f"|| Seed value:              {seed:>10}",
        f"|| Streams (arrival/service): {config.arrival_stream}/{config.service_stream}",
        RULE,
    ]


def _format_results(result: SimulationResult) -> List[str]:
    return [
        "|| Simulation Results",
        RULE,
        f"|| Average delay in queue:           {result.average_delay:>10.4f} minutes.",
        f"|| Average number in queue:          {result.average_number_in_queue:>10.4f} customers.",
        f"|| Server utilization:               {result.server_utilization:>10.4f}",
        f"|| Time simulation ended at:         {result.end_time:>10.4f} minutes.",
        RULE,
        "|| Erlang formulas (1 server)",
        RULE,
        f"|| Erlang B:                         {result.erlang_b:>10.4f}",
        f"|| Erlang C:                         {result.erlang_c:>10.4f}",
        RULE,
    ]


def _format_customers(result: SimulationResult) -> List[str]:
    lines = [
        "|| Customer data",
        RULE,
        "ID , Inter-arrival time , Delay in queue",
    ]
    for customer in result.customers:
        lines.append(f"{customer.customer_id} , {customer.interarrival_time:.4f}"
                     f" , {customer.delay:.4f}")
    lines.append(RULE)
    return lines


def format_report(result: SimulationResult, include_customers: bool = True) -> str:
    """Render the end-of-run report as text."""
    lines = _format_header(result)
    lines += _format_results(result)
    if include_customers and result.customers:
        lines += _format_customers(result)
    return "\n".join(lines) + "\n"


def write_report(result: SimulationResult,
                 path: Union[str, Path],
                 include_customers: bool = True) -> None:
    """Write the text report to `path`."""
    with open(path, 'w') as f:
        f.write(format_report(result, include_customers))


def save_results(results: Dict, output_path: Union[str, Path]) -> None:
    """Save results to JSON file."""
    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)
