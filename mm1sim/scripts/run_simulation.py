#!/usr/bin/env python3
"""Command-line interface for running M/M/1 simulations."""

import argparse
import logging
import sys
import numpy as np
from pathlib import Path
from scipy import stats
from typing import Dict, List, Optional

from ..core.errors import ConfigurationError, FatalSimulationError
from ..distributions import mm1_expected_delay, mm1_expected_queue_length
from ..system import (
    MM1Simulation,
    SimulationConfig,
    SimulationResult,
    format_report,
    load_config,
    save_results,
    write_report,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_SEED = 42
SUMMARY_METRICS = (
    'average_delay',
    'average_number_in_queue',
    'server_utilization',
    'end_time',
)


def run_simulation(config: SimulationConfig) -> SimulationResult:
    """Run a single simulation and return its result."""
    return MM1Simulation(config).run()


def run_replications(config: SimulationConfig,
                     num_replications: int,
                     base_seed: int = DEFAULT_BASE_SEED,
                     confidence: float = 0.95) -> Dict:
    """Run independent replications and compute summary statistics.

    Replication i uses seed base_seed + i and its own generator, so the runs
    share no state.
    """
    results = []
    for i in range(num_replications):
        rep_config = SimulationConfig(**{**config.as_dict(), 'seed': base_seed + i,
                                         'record_customers': False})
        results.append(run_simulation(rep_config))

    summary = {
        'replications': num_replications,
        'base_seed': base_seed,
        'confidence': confidence,
        'theoretical': {
            'average_delay': mm1_expected_delay(config.arrival_rate, config.service_rate),
            'average_number_in_queue': mm1_expected_queue_length(
                config.arrival_rate, config.service_rate),
            'server_utilization': config.arrival_rate / config.service_rate,
        },
        'metrics': {},
    }

    for key in SUMMARY_METRICS:
        values = np.array([getattr(r, key) for r in results])
        if num_replications > 1:
            sem = np.std(values, ddof=1) / np.sqrt(num_replications)
            half_width = stats.t.ppf((1 + confidence) / 2, num_replications - 1) * sem
        else:
            half_width = np.nan
        summary['metrics'][key] = {
            'mean': float(np.mean(values)),
            'std': float(np.std(values)),
            'min': float(np.min(values)),
            'max': float(np.max(values)),
            'half_width': float(half_width),
        }

    return summary


def format_replications(summary: Dict, detailed: bool = False) -> str:
    """Render replication statistics as text."""
    lines = [
        "=== Replication Results ===",
        f"Replications: {summary['replications']}",
        f"Base seed: {summary['base_seed']}",
    ]

    level = int(summary['confidence'] * 100)
    for metric, values in summary['metrics'].items():
        lines.append(f"  {metric}:")
        lines.append(f"    Mean: {values['mean']:.4f} (±{values['half_width']:.4f}, {level}% CI)")
        if detailed:
            lines.append(f"    Std: {values['std']:.4f}, "
                         f"Min: {values['min']:.4f}, Max: {values['max']:.4f}")
        if metric in summary['theoretical']:
            lines.append(f"    Theoretical: {summary['theoretical'][metric]:.4f}")
    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Run a single-server (M/M/1) queueing simulation')

    parser.add_argument('params',
                        help='Parameter file: mean inter-arrival time, mean '
                             'service time and number of delays required')

    # Run parameters
    parser.add_argument('-c', '--capacity', type=int, default=None,
                        help='Queue capacity (default: 1000)')
    parser.add_argument('-s', '--seed', type=int, default=None,
                        help='Random seed (default: standard seed table)')
    parser.add_argument('--arrival-stream', type=int, default=None,
                        help='Generator stream for inter-arrival times (default: 1)')
    parser.add_argument('--service-stream', type=int, default=None,
                        help='Generator stream for service times (default: 2)')
    parser.add_argument('-r', '--replications', type=int, default=1,
                        help='Number of independent replications (default: 1)')

    # Output options
    parser.add_argument('-o', '--output', type=str,
                        help='Write the report to this file instead of stdout')
    parser.add_argument('--no-customers', action='store_true',
                        help='Do not record or report per-customer data')
    parser.add_argument('-j', '--json', type=str,
                        help='Output file for results (JSON)')
    parser.add_argument('--plot-file', type=str,
                        help='Save plots to file')
    parser.add_argument('-d', '--detailed', action='store_true',
                        help='Show detailed replication statistics')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Suppress console output')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log verbosity (-v info, -vv debug)')
    return parser


def configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')


def fail(error: Exception) -> None:
    """Report a fatal error and exit with its status code."""
    print(f"Error: {error}", file=sys.stderr)
    sys.exit(error.exit_code)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        if args.replications < 1:
            raise ConfigurationError("Number of replications must be at least 1.")
        for path in (args.output, args.json, args.plot_file):
            if path and not Path(path).resolve().parent.is_dir():
                raise ConfigurationError(f"Output directory for {path} does not exist.")
        config = load_config(
            args.params,
            queue_capacity=args.capacity,
            seed=args.seed,
            arrival_stream=args.arrival_stream,
            service_stream=args.service_stream,
            record_customers=not args.no_customers,
        )
    except ConfigurationError as e:
        fail(e)

    try:
        if args.replications > 1:
            base_seed = config.seed if config.seed is not None else DEFAULT_BASE_SEED
            logger.info("Running %d replications from seed %d", args.replications, base_seed)
            summary = run_replications(config, args.replications, base_seed)
            text = format_replications(summary, args.detailed)
            if args.output:
                with open(args.output, 'w') as f:
                    f.write(text)
                if not args.quiet:
                    print(f"Summary saved to: {args.output}")
            elif not args.quiet:
                print("\n" + text, end='')
            if args.json:
                save_results(summary, args.json)
            # For plotting, we need a single run with customer data
            result = run_simulation(config) if args.plot_file else None
        else:
            result = run_simulation(config)
            report = format_report(result, include_customers=not args.no_customers)
            if args.output:
                write_report(result, args.output, include_customers=not args.no_customers)
                if not args.quiet:
                    print(f"Report saved to: {args.output}")
            elif not args.quiet:
                print(report, end='')
            if args.json:
                save_results(result.as_dict(), args.json)
    except FatalSimulationError as e:
        fail(e)

    if args.json and not args.quiet:
        print(f"\nResults saved to: {args.json}")

    # Generate plots
    if args.plot_file and result is not None:
        from ..visualization import create_performance_report

        if not result.customers:
            print("Plots need per-customer data; drop --no-customers to plot",
                  file=sys.stderr)
            return
        create_performance_report(result, save_path=args.plot_file)
        if not args.quiet:
            print(f"Plot saved to: {args.plot_file}")


if __name__ == '__main__':
    main()
