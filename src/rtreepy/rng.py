"""Seedable random generator used for split tie-breaking.

A single :class:`Random` is threaded through one tree build. Draws happen in
attribute/boundary scan order, so a fixed seed and a fixed instance order give
the same tree every time.
"""
from __future__ import annotations
from typing import Optional
import numpy as np


class Random:
    """Thin wrapper around :class:`numpy.random.Generator`.

    Parameters
    ----------
    seed : int, default=0
        Initial seed.
    """

    def __init__(self, seed: int = 0):
        self.set_seed(seed)

    def set_seed(self, seed: int) -> None:
        self.seed = int(seed)
        self._gen = np.random.default_rng(self.seed)

    def next_int(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""
        bound = int(bound)
        if bound <= 0:
            raise ValueError("bound must be positive")
        if bound == 1:
            # no draw, so single candidates never perturb the stream
            return 0
        return int(self._gen.integers(0, bound))

    def __repr__(self) -> str:
        return f"Random(seed={self.seed})"


def check_random(rng: Optional[Random | int]) -> Random:
    """Return ``rng`` unchanged, or a new :class:`Random` seeded from an int (``None`` -> 0)."""
    if isinstance(rng, Random):
        return rng
    return Random(0 if rng is None else int(rng))
