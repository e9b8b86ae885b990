"""Attribute metadata and the weighted instance collection.

Attributes describe how a stored value turns into split candidates:

- ``ContinuousAttribute``: raw doubles, candidates between distinct sorted values.
- ``NominalAttribute``: category ids in ``[0, cardinality)``.
- ``BinnedAttribute``: bin ids in ``[0, n_bins)``.

Nominal and binned values are stored as floats holding small integers so that
one ``(n, m)`` float matrix holds every column.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .exceptions import DataIntegrityError

CONTINUOUS = "continuous"
NOMINAL = "nominal"
BINNED = "binned"

# ----------------------------- Attributes -----------------------------

@dataclass(frozen=True)
class Attribute:
    name: str
    index: int

    kind = None  # overridden by subclasses

    @property
    def is_continuous(self) -> bool:
        return self.kind == CONTINUOUS

    @property
    def n_buckets(self) -> int:
        raise TypeError(f"{self.kind} attribute has no bucket count")


@dataclass(frozen=True)
class ContinuousAttribute(Attribute):
    kind = CONTINUOUS


@dataclass(frozen=True)
class NominalAttribute(Attribute):
    cardinality: int = 0
    states: Tuple[str, ...] = field(default=())

    kind = NOMINAL

    def __post_init__(self):
        if self.cardinality <= 0:
            raise ValueError(f"nominal attribute {self.name!r} needs a positive cardinality")
        if self.states and len(self.states) != self.cardinality:
            raise ValueError(f"nominal attribute {self.name!r}: {len(self.states)} states "
                             f"for cardinality {self.cardinality}")

    @property
    def n_buckets(self) -> int:
        return self.cardinality


@dataclass(frozen=True)
class BinnedAttribute(Attribute):
    n_bins: int = 0

    kind = BINNED

    def __post_init__(self):
        if self.n_bins <= 0:
            raise ValueError(f"binned attribute {self.name!r} needs a positive number of bins")

    @property
    def n_buckets(self) -> int:
        return self.n_bins


def continuous_attributes(n_features: int, names: Optional[Sequence[str]] = None) -> List[Attribute]:
    names = list(names) if names is not None else [f"f{i}" for i in range(n_features)]
    if len(names) != n_features:
        raise ValueError("feature_names length must match X.shape[1]")
    return [ContinuousAttribute(name=str(n), index=i) for i, n in enumerate(names)]

# ----------------------------- Instances -----------------------------

class Instances:
    """Immutable weighted training set.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Feature values. Nominal/binned columns hold integer ids.
    y : array-like of shape (n_samples,)
        Regression targets.
    weights : array-like of shape (n_samples,), optional
        Non-negative instance weights; defaults to ones.
    attributes : list[Attribute], optional
        One attribute per column, ``attributes[j].index == j``. Defaults to
        all-continuous attributes named ``f0, f1, ...``.
    """

    def __init__(self, X, y, weights=None, attributes: Optional[Sequence[Attribute]] = None):
        X = np.array(X, dtype=float)
        if X.ndim == 1 and X.size == 0:
            X = X.reshape(0, len(attributes) if attributes is not None else 0)
        if X.ndim != 2:
            raise ValueError("X must be 2D")
        y = np.array(y, dtype=float).reshape(-1)
        n, m = X.shape
        if y.shape[0] != n:
            raise ValueError("X and y must have the same number of rows")
        if weights is None:
            w = np.ones(n, dtype=float)
        else:
            w = np.array(weights, dtype=float).reshape(-1)
            if w.shape[0] != n:
                raise ValueError("sample_weight must have same length as y")
            if np.any(w < 0) or not np.all(np.isfinite(w)):
                raise DataIntegrityError("instance weights must be finite and non-negative")
        if not np.all(np.isfinite(X)):
            raise DataIntegrityError("feature values must be finite (no NaN or inf)")
        if not np.all(np.isfinite(y)):
            raise DataIntegrityError("target values must be finite (no NaN or inf)")
        if attributes is None:
            attributes = continuous_attributes(m)
        attributes = list(attributes)
        if len(attributes) != m:
            raise ValueError(f"{len(attributes)} attributes given for {m} columns")
        for j, att in enumerate(attributes):
            if att.index != j:
                raise ValueError(f"attribute {att.name!r} has index {att.index}, expected {j}")
            if not att.is_continuous:
                _check_ids(X[:, j], att)

        self.X = X
        self.y = y
        self.weights = w
        self.attributes: List[Attribute] = attributes
        for arr in (self.X, self.y, self.weights):
            arr.setflags(write=False)

    def __len__(self) -> int:
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        return self.X.shape[1]

    def subset(self, rows, weights=None) -> "Instances":
        """New ``Instances`` over ``rows`` (in the given order), optionally reweighted."""
        rows = np.asarray(rows, dtype=np.intp)
        w = self.weights[rows] if weights is None else weights
        return Instances(self.X[rows], self.y[rows], w, self.attributes)

    def __repr__(self) -> str:
        return f"Instances(n={len(self)}, attributes={[a.name for a in self.attributes]})"


def _check_ids(col: np.ndarray, att: Attribute) -> None:
    if col.size == 0:
        return
    bad = (col < 0) | (col >= att.n_buckets) | (col != np.floor(col))
    if np.any(bad):
        first = col[np.argmax(bad)]
        raise DataIntegrityError(
            f"{att.kind} attribute {att.name!r}: value {first!r} outside [0, {att.n_buckets})")
