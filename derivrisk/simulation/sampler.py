"""Standard normal sampler built on the Box-Muller transform."""

import math
from typing import Optional, Union

import numpy as np

TWO_PI = 2.0 * math.pi


class GaussianSampler:
    """Draws independent standard normal values from a uniform source.

    Each call to :meth:`sample` consumes two fresh uniforms ``u1, u2`` and
    returns ``sqrt(-2 ln u1) * sin(2 pi u2)``. The cosine twin that
    Box-Muller also yields is dropped, so draws map one-to-one onto pairs of
    uniforms.

    Parameters
    ----------
    seed : int or numpy.random.Generator, optional
        Seed for a private ``numpy.random.Generator``, or an existing
        generator to draw from. If None, the generator is seeded from OS
        entropy.
    """

    def __init__(self, seed: Optional[Union[int, np.random.Generator]] = None):
        if isinstance(seed, np.random.Generator):
            self._rng = seed
        else:
            self._rng = np.random.default_rng(seed)

    def uniform(self) -> float:
        """Return one uniform draw on [0, 1)."""
        return float(self._rng.random())

    def sample(self) -> float:
        """Return one standard normal draw."""
        # Shift to (0, 1] so the logarithm stays finite
        u1 = 1.0 - self.uniform()
        u2 = self.uniform()
        return math.sqrt(-2.0 * math.log(u1)) * math.sin(TWO_PI * u2)
