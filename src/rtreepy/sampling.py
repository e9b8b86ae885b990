"""Bootstrap resampling of a training set."""
from __future__ import annotations
import numpy as np

from .attributes import Instances
from .rng import Random


def create_bootstrap_sample(instances: Instances, rng: Random) -> Instances:
    """Draw ``n`` rows with replacement.

    A row drawn ``k`` times appears ``k`` times, so the sample has as many
    instances as the input. Rows keep their input order.
    """
    n = len(instances)
    counts = np.zeros(n, dtype=np.intp)
    for _ in range(n):
        counts[rng.next_int(n)] += 1
    rows = np.repeat(np.arange(n, dtype=np.intp), counts)
    return instances.subset(rows)
