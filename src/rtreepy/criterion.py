"""Squared-error split criterion.

For a boundary that sends buckets ``[0, i)`` left and ``[i, k)`` right the
score is::

    eval(i) = -(sum1 ** 2 / weight1) - (sum2 ** 2 / weight2)

Lower is better; minimising it minimises the weighted squared error of the
two children. Every threshold reaching the minimum exactly is a tie, and ties
are pooled over all attributes before a single random draw picks the split.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import math
import numpy as np

from .dataset import Dataset
from .exceptions import DataIntegrityError
from .histogram import Histogram, build_histogram
from .rng import Random


@dataclass(frozen=True)
class SplitCandidate:
    attribute_index: int
    split_point: float
    score: float


def evaluate_boundaries(hist: Histogram) -> np.ndarray:
    """Score every boundary ``i = 1..k-1`` of a histogram, in scan order.

    Both sides are accumulated from the buckets themselves (prefix sums on
    the left, suffix sums on the right), so a light bucket never cancels out
    against the node total.
    """
    if np.any(hist.weights <= 0):
        raise DataIntegrityError("histogram bucket with no weight")
    weight1 = np.cumsum(hist.weights)[:-1]
    sum1 = np.cumsum(hist.sums)[:-1]
    weight2 = np.cumsum(hist.weights[::-1])[::-1][1:]
    sum2 = np.cumsum(hist.sums[::-1])[::-1][1:]
    return -(sum1 * sum1) / weight1 - (sum2 * sum2) / weight2


def midpoint(lo: float, hi: float) -> float:
    """Threshold between two adjacent distinct values, always in ``[lo, hi)``.

    ``(lo + hi) / 2`` can round up to ``hi`` for neighbouring doubles or
    overflow for huge ones; either would send every row left.
    """
    mid = lo / 2 + hi / 2
    if not math.isfinite(mid) or mid >= hi or mid < lo:
        return lo
    return mid


def best_boundaries(hist: Histogram) -> Tuple[float, List[float]]:
    """Minimum score of a histogram and all thresholds that reach it exactly.

    Returns ``(inf, [])`` when the histogram has fewer than two buckets or no
    boundary has a finite score.
    """
    if len(hist) < 2:
        return math.inf, []
    evals = evaluate_boundaries(hist)
    finite = np.isfinite(evals)
    if not finite.any():
        return math.inf, []
    best = float(evals[finite].min())
    u = hist.unique_values
    pos = np.flatnonzero(evals == best)
    return best, [midpoint(float(u[p]), float(u[p + 1])) for p in pos]


def find_best_split(dataset: Dataset, rng: Random) -> Optional[SplitCandidate]:
    """Scan every attribute and return the globally best split, or ``None``."""
    best_eval = math.inf
    ties: List[Tuple[int, float]] = []
    for att in dataset.instances.attributes:
        hist = build_histogram(dataset, att)
        if len(hist) < 2:
            continue
        score, thresholds = best_boundaries(hist)
        if score > best_eval or not thresholds:
            continue
        if score < best_eval:
            best_eval = score
            ties = []
        ties.extend((att.index, t) for t in thresholds)
    if not ties or not math.isfinite(best_eval):
        return None
    attribute_index, split_point = ties[rng.next_int(len(ties))]
    return SplitCandidate(attribute_index, split_point, best_eval)
