"""scikit-learn style estimator around the tree builder."""
from __future__ import annotations
from typing import List, Optional, Sequence
import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin

from .attributes import Attribute, Instances, continuous_attributes
from .config import GrowthConfig, GrowthMode, parse_mode
from .growth import build_tree
from .rng import Random


class RegressionTreeLearner(RegressorMixin, BaseEstimator):
    r"""
    RegressionTreeLearner(mode="a", alpha=0.01, max_depth=None, max_leaves=None,
                          random_state=None, feature_names=None, verbose=0)

    A least-squares regression tree with a scikit-learn style API.

    **Core behavior**

    - **Split criterion**: weighted squared error. Continuous thresholds are
      midpoints between distinct sorted values; nominal and binned attributes
      split between consecutive category/bin ids.
    - **Ties**: equally good splits, across all attributes, are broken by a
      seeded random draw, so ``random_state`` fixes the tree.
    - **Growth**: one of three budgets, selected by ``mode``:

      * ``"a"`` (alpha limited): nodes holding less than
        ``floor(alpha * n_samples)`` weight become leaves.
      * ``"d"`` (depth limited): at most ``max_depth`` levels of nodes.
      * ``"l"`` (leaves limited): best-first growth up to ``max_leaves`` leaves.

    Parameters
    ----------
    mode : {"a", "d", "l"} or str, default="a"
        Construction mode. A combined string such as ``"d:3"`` sets the
        mode and its parameter at once.
    alpha : float, default=0.01
        Alpha for ``mode="a"``, in (0, 1].
    max_depth : int, optional
        Depth for ``mode="d"``; 1 gives a single leaf.
    max_leaves : int, optional
        Leaf budget for ``mode="l"``.
    random_state : int, optional
        Seed of the tie-breaking generator (``None`` means 0).
    feature_names : sequence of str, optional
        Column names used by the text and Graphviz exports.
    verbose : int, default=0
        Verbosity level (0 = silent).

    Attributes
    ----------
    tree_ : RegressionTree
        The fitted tree.
    attributes_ : list[Attribute]
        Attribute metadata used during fitting.
    config_ : GrowthConfig
        Validated growth configuration.
    """

    def __init__(self,
                 mode: str = "a",
                 alpha: float = 0.01,
                 max_depth: Optional[int] = None,
                 max_leaves: Optional[int] = None,
                 random_state: Optional[int] = None,
                 feature_names: Optional[List[str]] = None,
                 verbose: int = 0):
        self.mode = mode
        self.alpha = alpha
        self.max_depth = max_depth
        self.max_leaves = max_leaves
        self.random_state = random_state
        self.feature_names = feature_names
        self.verbose = verbose

    # ----------------------------- Public API -----------------------------

    def _make_config(self) -> GrowthConfig:
        if isinstance(self.mode, str) and ":" in self.mode:
            return parse_mode(self.mode)
        return GrowthConfig(GrowthMode.coerce(self.mode), alpha=self.alpha,
                            max_depth=self.max_depth, max_leaves=self.max_leaves).validate()

    def fit(self, X, y, sample_weight=None, attributes: Optional[Sequence[Attribute]] = None):
        X = np.asarray(X, dtype=float)
        if X.ndim != 2:
            raise ValueError("X must be 2D")
        m = X.shape[1]
        if attributes is None:
            attributes = continuous_attributes(m, self.feature_names)
        instances = Instances(X, y, sample_weight, attributes)

        self.config_ = self._make_config()
        self.attributes_ = instances.attributes
        self.n_features_in_ = m
        self.feature_names_ = (list(self.feature_names) if self.feature_names is not None
                               else [a.name for a in self.attributes_])
        self.tree_ = build_tree(instances, self.config_, Random(self.random_state or 0))
        if self.verbose:
            print(f"RegressionTreeLearner: {self.config_.to_string()} -> "
                  f"{self.tree_.n_leaves} leaves, depth {self.tree_.depth}")
        return self

    def _check_fitted(self):
        if getattr(self, "tree_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")

    def predict(self, X):
        self._check_fitted()
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.n_features_in_:
            raise ValueError(f"X must have shape (n_samples, {self.n_features_in_})")
        return self.tree_.predict(X)

    def get_n_leaves(self) -> int:
        self._check_fitted()
        return self.tree_.n_leaves

    def get_depth(self) -> int:
        self._check_fitted()
        return self.tree_.depth

    # ----------------------------- Pretty / Rules / Graphviz -----------------------------

    def _maybe_feature_names(self, feature_names):
        return feature_names if feature_names is not None else getattr(self, "feature_names_", None)

    def print_tree(self, feature_names: Optional[List[str]] = None) -> None:
        """
        Pretty-print the fitted regression tree to ``stdout``.

        Raises
        ------
        ValueError
            If the estimator has not been fitted.
        """
        self._check_fitted()
        print(self.tree_.format_tree(self._maybe_feature_names(feature_names)))

    def export_rules(self, feature_names: Optional[List[str]] = None) -> List[str]:
        """
        Export one decision rule per leaf.

        Returns
        -------
        list[str]
            Strings of the form ``"<antecedent> => value=<prediction>"``.

        Raises
        ------
        ValueError
            If the model has not been fitted.
        """
        self._check_fitted()
        return self.tree_.rules(self._maybe_feature_names(feature_names))

    def export_graphviz(self, filename: Optional[str] = "rtree", feature_names: Optional[List[str]] = None,
                        format: str = "png") -> str:
        """
        Export the tree to Graphviz.

        If ``format='dot'`` the DOT source is written directly without
        invoking the external ``dot`` binary; for other formats rendering is
        attempted and a ``.dot`` file is written if it fails. With
        ``filename=None`` the DOT source is returned instead.

        Returns
        -------
        str
            Path to the written file, or the DOT source.
        """
        self._check_fitted()
        fn = self._maybe_feature_names(feature_names)
        try:
            from graphviz import Digraph
        except ImportError as e:
            raise RuntimeError("Please install the 'graphviz' Python package.") from e
        dot = Digraph(comment="RegressionTree", format=format)
        self.tree_.add_graph_nodes(dot, self.tree_.root, "root", fn)
        if filename is None:
            return dot.source
        if format.lower() == "dot":
            path = f"{filename}.dot"
            dot.save(path)
            return path
        try:
            dot.render(filename, cleanup=True)
            return f"{filename}.{format}"
        except Exception:
            fallback_path = f"{filename}.dot"
            dot.save(fallback_path)
            return fallback_path
