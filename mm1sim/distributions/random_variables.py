"""
Random variable generators for the M/M/1 simulator.

Uniform draws come from a per-instance copy of the simlib combined
multiplicative congruential generator (modulus 2**31 - 1, multipliers
24112 and 26143) with 100 independent streams. Exponential variates are
derived from those draws by inversion.
"""

import numpy as np
from typing import Callable, List, Optional


MODULUS = 2147483647
MULT1 = 24112
MULT2 = 26143
NUM_STREAMS = 100

# Initial seeds for streams 1-100 (index 0 is unused)
DEFAULT_SEEDS = (
    1,
    1973272912, 281629770, 20006270, 1280689831, 2096730329, 1933576050,
    913566091, 246780520, 1363774876, 604901985, 1511192140, 1259851944,
    824064364, 150493284, 242708531, 75253171, 1964472944, 1202299975,
    233217322, 1911216000, 726370533, 403498145, 993232223, 1103205531,
    762430696, 1922803170, 1385516923, 76271663, 413682397, 726466604,
    336157058, 1432650381, 1120463904, 595778810, 877722890, 1046574445,
    68911991, 2088367019, 748545416, 622401386, 2122378830, 640690903,
    1774806513, 2132545692, 2079249579, 78130110, 852776735, 1187867272,
    1351423507, 1645973084, 1997049139, 922510944, 2045512870, 898585771,
    243649545, 1004818771, 773686062, 403188473, 372279877, 1901633463,
    498067494, 2087759558, 493157915, 597104727, 1530940798, 1814496276,
    536444882, 1663153658, 855503735, 67784357, 1432404475, 619691088,
    119025595, 880802310, 176192644, 1116780070, 277854671, 1366580350,
    1142483975, 2026948561, 1053920743, 786262391, 1792203830, 1494667770,
    1923011392, 1433700034, 1244184613, 1147297105, 539712780, 1545929719,
    190641742, 1645390429, 264907697, 620389253, 1502074852, 927711160,
    364849192, 2049576050, 638580085, 547070247,
)


def _multiply(zi: int, mult: int) -> int:
    """One multiplicative step modulo 2**31 - 1 without overflowing 32 bits."""
    lowprd = (zi & 65535) * mult
    hi31 = (zi >> 16) * mult + (lowprd >> 16)
    zi = ((lowprd & 65535) - MODULUS) + ((hi31 & 32767) << 16) + (hi31 >> 15)
    if zi < 0:
        zi += MODULUS
    return zi


class LCGRandom:
    """Seedable uniform(0, 1) source with independent numbered streams.

    Each instance owns its seed table, so separate simulations never share
    generator state.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            self._zrng: List[int] = list(DEFAULT_SEEDS)
        else:
            rng = np.random.default_rng(seed)
            draws = rng.integers(1, MODULUS, size=NUM_STREAMS)
            self._zrng = [1] + [int(z) for z in draws]
        self.seed = seed

    def _check_stream(self, stream: int) -> None:
        if not 1 <= stream <= NUM_STREAMS:
            raise ValueError(
                f"stream must be between 1 and {NUM_STREAMS}, got {stream}")

    def uniform(self, stream: int = 1) -> float:
        """Next draw from `stream`, strictly between 0 and 1."""
        self._check_stream(stream)
        zi = _multiply(self._zrng[stream], MULT1)
        zi = _multiply(zi, MULT2)
        self._zrng[stream] = zi
        # The low bit is forced on so a draw is never exactly 0
        return ((zi >> 7) | 1) / 16777216.0

    def set_seed(self, stream: int, zset: int) -> None:
        """Set the current integer state of `stream`."""
        self._check_stream(stream)
        if not 0 < zset < MODULUS:
            raise ValueError(f"seed must be in (0, {MODULUS}), got {zset}")
        self._zrng[stream] = int(zset)

    def get_seed(self, stream: int) -> int:
        """Return the current integer state of `stream`."""
        self._check_stream(stream)
        return self._zrng[stream]

    def exponential(self, mean: float, stream: int = 1) -> float:
        """Exponential variate with the given mean, by inversion."""
        return exponential(mean, self, stream)


def exponential(mean: float, rng: LCGRandom, stream: int = 1) -> float:
    """Generate exponential random variable with the given mean."""
    return -mean * np.log(rng.uniform(stream))


def exponential_distribution(mean: float,
                             rng: LCGRandom,
                             stream: int = 1) -> Callable[[], float]:
    """Create an exponential distribution function bound to one stream."""
    return lambda: exponential(mean, rng, stream)
