"""Run parameters for the M/M/1 simulation and the parameter-file loader."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
import numpy as np

from ..core.errors import ConfigurationError
from ..distributions.random_variables import NUM_STREAMS


DEFAULT_QUEUE_CAPACITY = 1000


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one simulation run, fixed for its whole duration."""

    mean_interarrival: float
    mean_service: float
    num_delays_required: int
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    seed: Optional[int] = None
    arrival_stream: int = 1
    service_stream: int = 2
    record_customers: bool = True

    def __post_init__(self) -> None:
        # NaN fails both comparisons, so it is rejected here too
        if not (self.mean_interarrival > 0 and np.isfinite(self.mean_interarrival)):
            raise ConfigurationError(
                "Mean inter-arrival time must be positive and finite.")
        if not (self.mean_service > 0 and np.isfinite(self.mean_service)):
            raise ConfigurationError("Mean service time must be positive and finite.")
        if self.num_delays_required < 1:
            raise ConfigurationError("Number of delays required must be at least 1.")
        if self.queue_capacity < 1:
            raise ConfigurationError("Queue capacity must be at least 1.")
        if self.seed is not None and self.seed < 0:
            raise ConfigurationError(f"Seed must be non-negative, got {self.seed}.")
        for name in ('arrival_stream', 'service_stream'):
            stream = getattr(self, name)
            if not 1 <= stream <= NUM_STREAMS:
                raise ConfigurationError(
                    f"{name} must be between 1 and {NUM_STREAMS}, got {stream}.")

    @property
    def arrival_rate(self) -> float:
        return 1.0 / self.mean_interarrival

    @property
    def service_rate(self) -> float:
        return 1.0 / self.mean_service

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_parameters(text: str) -> Dict[str, Any]:
    """
    Parse 'mean_interarrival mean_service num_delays_required'.

    Values may be separated by any whitespace, including newlines.
    """
    tokens = text.split()
    if len(tokens) < 3:
        raise ConfigurationError(
            f"Expected 3 parameters (mean inter-arrival, mean service, "
            f"number of delays), found {len(tokens)}.")

    try:
        mean_interarrival = float(tokens[0])
        mean_service = float(tokens[1])
    except ValueError as exc:
        raise ConfigurationError(f"Invalid mean time: {exc}") from exc

    try:
        num_delays_required = int(tokens[2])
    except ValueError as exc:
        raise ConfigurationError(
            f"Number of delays must be an integer, got {tokens[2]!r}.") from exc

    return {
        'mean_interarrival': mean_interarrival,
        'mean_service': mean_service,
        'num_delays_required': num_delays_required,
    }


def load_config(path: Union[str, Path], **overrides) -> SimulationConfig:
    """Read a parameter file and build a validated SimulationConfig.

    Keyword arguments set the remaining SimulationConfig fields
    (queue_capacity, seed, streams, record_customers); None values are
    ignored so CLI defaults can be passed straight through.
    """
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read parameter file {path}: {exc}") from exc

    params = parse_parameters(text)
    params.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return SimulationConfig(**params)
    except TypeError as exc:
        raise ConfigurationError(str(exc)) from exc
