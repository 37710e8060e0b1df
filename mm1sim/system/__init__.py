"""Simulation driver, run configuration and reporting."""

from .config import SimulationConfig, load_config, parse_parameters
from .queueing_system import MM1Simulation, SimulationResult
from .report import format_report, write_report, save_results

__all__ = [
    'SimulationConfig',
    'load_config',
    'parse_parameters',
    'MM1Simulation',
    'SimulationResult',
    'format_report',
    'write_report',
    'save_results',
]
