"""
Seeded normal-distribution sampler.

The literal output of a run depends on the algorithm below, so it is fixed:

- PRNG: numpy PCG64 bit generator seeded with the 64-bit seed, wrapped in
  numpy.random.Generator. Uniform draws are Generator.random() doubles in [0, 1).
- Transform: basic Box-Muller. For each pair of uniforms u1, u2 (drawn in that
  order), r = sqrt(-2 ln(1 - u1)) and theta = 2 pi u2 give z0 = r cos(theta)
  and z1 = r sin(theta).
- Order: z0 is emitted first. z1 is held as the single pending value and
  emitted by the next call before any new uniforms are drawn.
- Scaling: each deviate z becomes mean + std * z in double precision.

The uniform stream is identical on every platform. The transform uses the
platform libm (math.log, math.cos, math.sin), which IEEE-754 does not require
to round identically everywhere, so bit-exact output across machines holds for
hosts sharing the same libm results; runs on one host are always identical.

References:
- Box, G. E. P. and Muller, M. E. (1958). A Note on the Generation of Random
  Normal Deviates.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


@dataclass
class SamplerState:
    """
    PRNG state owned by one sampler for the duration of a run.

    Attributes:
        rng: Uniform generator, consumed strictly in draw order
        pending: Second deviate of the last Box-Muller pair, not yet emitted
        emitted: Number of deviates produced so far
    """

    rng: np.random.Generator
    pending: Optional[float] = None
    emitted: int = 0


def initialize(seed: int) -> SamplerState:
    """Create a fresh sampler state for *seed*."""
    rng = np.random.Generator(np.random.PCG64(seed))
    return SamplerState(rng=rng)


def _box_muller(u1: float, u2: float) -> Tuple[float, float]:
    radius = math.sqrt(-2.0 * math.log(1.0 - u1))
    theta = TWO_PI * u2
    return radius * math.cos(theta), radius * math.sin(theta)


def next_standard(state: SamplerState) -> Tuple[float, SamplerState]:
    """
    Produce the next standard-normal deviate.

    Args:
        state: Sampler state, advanced in place

    Returns:
        Tuple of (deviate, state)
    """
    if state.pending is not None:
        value = state.pending
        state.pending = None
    else:
        u1 = float(state.rng.random())
        u2 = float(state.rng.random())
        value, state.pending = _box_muller(u1, u2)
    state.emitted += 1
    return value, state


def next_value(
    state: SamplerState, mean: float = 0.0, std: float = 1.0
) -> Tuple[float, SamplerState]:
    """
    Produce the next draw from N(mean, std^2).

    Args:
        state: Sampler state, advanced in place
        mean: Distribution mean
        std: Distribution standard deviation

    Returns:
        Tuple of (sample, state)
    """
    z, state = next_standard(state)
    return mean + std * z, state


class NormalSampler:
    """
    Iterator over N(mean, std^2) samples for a fixed seed.

    Two samplers built with the same seed yield bit-identical sequences.

    Example:
        >>> sampler = NormalSampler(seed=42, mean=10.0, std=2.0)
        >>> values = sampler.take(4)
    """

    def __init__(self, seed: int, mean: float = 0.0, std: float = 1.0):
        self.seed = seed
        self.mean = mean
        self.std = std
        self._state = initialize(seed)
        logger.debug(f"Initialized PCG64 sampler with seed {seed}")

    @property
    def emitted(self) -> int:
        return self._state.emitted

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        value, self._state = next_value(self._state, self.mean, self.std)
        return value

    def take(self, n: int) -> list:
        """Return the next *n* samples as a list."""
        return [next(self) for _ in range(n)]
