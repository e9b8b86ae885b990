"""Per-attribute split-search histograms.

Each builder returns a :class:`Histogram`: the candidate boundary values in
scan order and, for each, the total weight and weighted target sum of the
instances holding that value. The evaluator scans these arrays left to
right, so their order decides both the split found and the tie-break draws.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import numpy as np

from .attributes import Attribute
from .dataset import Dataset
from .exceptions import DataIntegrityError

logger = logging.getLogger(__name__)


@dataclass
class Histogram:
    unique_values: np.ndarray
    weights: np.ndarray
    sums: np.ndarray
    # per bucket: all merged targets equal (continuous only, reporting aid)
    pure: Optional[np.ndarray] = None

    def __len__(self) -> int:
        return int(self.unique_values.shape[0])


def _empty() -> Histogram:
    z = np.empty(0, dtype=float)
    return Histogram(z, z.copy(), z.copy(), np.empty(0, dtype=bool))


def bucket_histogram(dataset: Dataset, attribute: Attribute) -> Histogram:
    """Histogram over category/bin ids, in id order, zero-weight ids dropped."""
    size = attribute.n_buckets
    ids = dataset.instances.X[dataset.indices, attribute.index].astype(np.intp)
    w = dataset.weights
    if ids.size and (ids.min() < 0 or ids.max() >= size):
        raise DataIntegrityError(
            f"{attribute.kind} attribute {attribute.name!r} has ids outside [0, {size})")
    hw = np.bincount(ids, weights=w, minlength=size)
    hs = np.bincount(ids, weights=dataset.targets * w, minlength=size)
    keep = np.flatnonzero(hw != 0)
    return Histogram(keep.astype(float), hw[keep], hs[keep])


def continuous_histogram(dataset: Dataset, attribute: Attribute) -> Histogram:
    """Histogram over distinct values of a pre-sorted continuous attribute.

    Consecutive equal values merge into one bucket. Buckets whose merged
    weight is zero carry no information and are dropped.
    """
    rows, values = dataset.sorted_values(attribute.index)
    if rows.size == 0:
        return _empty()
    y = dataset.instances.y[rows]
    w = dataset.instances.weights[rows]

    # bucket starts: first element and every change of value
    starts = np.flatnonzero(np.r_[True, values[1:] != values[:-1]])
    uniq = values[starts]
    hw = np.add.reduceat(w, starts)
    hs = np.add.reduceat(y * w, starts)
    # a bucket is pure when no adjacent target pair inside it differs
    changed = np.r_[False, y[1:] != y[:-1]]
    changed[starts] = False
    pure = np.add.reduceat(changed.astype(np.intp), starts) == 0

    keep = hw != 0
    hist = Histogram(uniq[keep], hw[keep], hs[keep], pure[keep])
    if logger.isEnabledFor(logging.DEBUG):
        for v, a, b in zip(hist.unique_values, hist.weights, hist.sums):
            logger.debug("histogram %s: %r weight=%r sum=%r", attribute.name, v, a, b)
    return hist


def build_histogram(dataset: Dataset, attribute: Attribute) -> Histogram:
    if attribute.is_continuous:
        return continuous_histogram(dataset, attribute)
    return bucket_histogram(dataset, attribute)
