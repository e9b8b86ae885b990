"""Active instance subsets with per-attribute sorted indices.

A :class:`Dataset` never copies feature values: it keeps arrays of row indices
into a shared :class:`~rtreepy.attributes.Instances`. For every continuous
attribute it also keeps the active rows sorted by that attribute. Splitting
filters each sorted array with a boolean routing mask, which keeps relative
order, so children are sorted without sorting again.
"""
from __future__ import annotations
from typing import Dict, Tuple
import numpy as np

from .attributes import Instances


class Dataset:
    """A view over ``instances`` restricted to ``indices``.

    Attributes
    ----------
    instances : Instances
        Shared, immutable training set.
    indices : ndarray of int
        Active rows, ascending.
    sorted_lists : dict[int, ndarray]
        Attribute index -> active rows sorted ascending by that attribute's
        value, equal values in ascending row order. Continuous attributes only.
    """

    def __init__(self, instances: Instances, indices: np.ndarray,
                 sorted_lists: Dict[int, np.ndarray]):
        self.instances = instances
        self.indices = indices
        self.sorted_lists = sorted_lists

    @classmethod
    def create(cls, instances: Instances) -> "Dataset":
        X = instances.X
        sorted_lists = {}
        for att in instances.attributes:
            if att.is_continuous:
                sorted_lists[att.index] = np.argsort(X[:, att.index], kind="stable")
        return cls(instances, np.arange(len(instances)), sorted_lists)

    def __len__(self) -> int:
        return int(self.indices.shape[0])

    @property
    def targets(self) -> np.ndarray:
        return self.instances.y[self.indices]

    @property
    def weights(self) -> np.ndarray:
        return self.instances.weights[self.indices]

    def sorted_values(self, attribute_index: int) -> Tuple[np.ndarray, np.ndarray]:
        """``(rows, values)`` of a continuous attribute in sorted order."""
        rows = self.sorted_lists[attribute_index]
        return rows, self.instances.X[rows, attribute_index]

    def split(self, node) -> Tuple["Dataset", "Dataset"]:
        """Partition this dataset by an interior node's routing rule.

        Rows with ``value <= node.split_point`` go left. Every sorted list is
        filtered in place order, so both children inherit sorted lists.
        An empty dataset yields two empty children.
        """
        goes_left = np.zeros(len(self.instances), dtype=bool)
        goes_left[self.indices] = self.instances.X[self.indices, node.attribute_index] <= node.split_point

        left_sorted, right_sorted = {}, {}
        for j, rows in self.sorted_lists.items():
            mask = goes_left[rows]
            left_sorted[j] = rows[mask]
            right_sorted[j] = rows[~mask]
        mask = goes_left[self.indices]
        left = Dataset(self.instances, self.indices[mask], left_sorted)
        right = Dataset(self.instances, self.indices[~mask], right_sorted)
        return left, right

    def __repr__(self) -> str:
        return f"Dataset(n_active={len(self)}, n_sorted={len(self.sorted_lists)})"
