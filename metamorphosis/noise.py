"""Smooth one-dimensional value noise for air-current drift.

A lattice of seeded random values is interpolated with a cosine ease and
summed over a few octaves, giving a smooth signal in [0, 1] that varies
slowly for small input steps. Drawing the lattice from the scene's
``random.Random`` keeps drift reproducible for a fixed seed.
"""

import math
import random
from typing import List, Optional

LATTICE_SIZE = 256


class ValueNoise:
    """Fractal 1D value noise in [0, 1].

    Args:
        rng: Generator used to fill the lattice
        octaves: Number of layered frequencies
        falloff: Amplitude multiplier per octave
    """

    def __init__(self, rng: Optional[random.Random] = None, octaves: int = 4, falloff: float = 0.5) -> None:
        rng = rng or random.Random()
        self._lattice: List[float] = [rng.random() for _ in range(LATTICE_SIZE)]
        self.octaves = octaves
        self.falloff = falloff
        self._norm = sum(falloff**i for i in range(octaves))

    def _sample(self, x: float) -> float:
        i = math.floor(x)
        frac = x - i
        a = self._lattice[i % LATTICE_SIZE]
        b = self._lattice[(i + 1) % LATTICE_SIZE]
        t = 0.5 * (1.0 - math.cos(frac * math.pi))
        return a + (b - a) * t

    def __call__(self, x: float) -> float:
        total = 0.0
        amplitude = 1.0
        frequency = 1.0
        for _ in range(self.octaves):
            total += self._sample(x * frequency) * amplitude
            amplitude *= self.falloff
            frequency *= 2.0
        return total / self._norm
