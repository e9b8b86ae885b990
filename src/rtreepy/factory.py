"""Node creation: weighted statistics and the leaf-or-split decision."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import numpy as np

from .criterion import find_best_split
from .dataset import Dataset
from .rng import Random
from .tree import RegressionTreeInteriorNode, RegressionTreeLeaf, RegressionTreeNode


@dataclass
class NodeStats:
    total_weight: float
    weighted_mean: float
    zero_variance: bool


@dataclass
class NodeResult:
    node: RegressionTreeNode
    stats: NodeStats
    # best_eval + total_weight * weighted_mean ** 2; None for leaves
    potential: Optional[float] = None


def get_stats(y: np.ndarray, w: np.ndarray) -> NodeStats:
    """Total weight, weighted mean and whether all targets are equal.

    An empty set, or one with zero total weight, has mean ``0.0``.
    """
    if y.shape[0] == 0:
        return NodeStats(0.0, 0.0, True)
    sw = float(w.sum())
    mean = float((w * y).sum() / sw) if sw > 0.0 else 0.0
    zero_variance = bool(np.all(y == y[0]))
    return NodeStats(sw, mean, zero_variance)


def dataset_stats(dataset: Dataset) -> NodeStats:
    return get_stats(dataset.targets, dataset.weights)


def create_node(dataset: Dataset, limit: float, rng: Random) -> NodeResult:
    """Build a leaf or an interior node (children unset) for ``dataset``.

    The node is a leaf at the weighted mean when its total weight is below
    ``limit``, its targets are all equal, or no attribute offers a split.
    """
    stats = dataset_stats(dataset)
    if stats.total_weight < limit or stats.zero_variance:
        return NodeResult(RegressionTreeLeaf(stats.weighted_mean), stats)

    split = find_best_split(dataset, rng)
    if split is None:
        return NodeResult(RegressionTreeLeaf(stats.weighted_mean), stats)

    node = RegressionTreeInteriorNode(split.attribute_index, split.split_point)
    potential = split.score + stats.total_weight * stats.weighted_mean * stats.weighted_mean
    return NodeResult(node, stats, potential)
