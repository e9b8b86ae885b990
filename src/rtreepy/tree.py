"""Regression tree nodes and the tree container.

An interior node sends an instance left when ``x[attribute_index] <= split_point``
and right otherwise. For nominal and binned attributes the stored id is
compared as a float against a midpoint threshold. Nodes own their children
and keep no parent pointer; :meth:`RegressionTree.parent_map` recovers
parents by traversal when they are needed.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Union
import numpy as np

# ----------------------------- Nodes -----------------------------

@dataclass(eq=False)
class RegressionTreeLeaf:
    prediction: float

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(eq=False)
class RegressionTreeInteriorNode:
    attribute_index: int
    split_point: float
    left: Optional["RegressionTreeNode"] = None
    right: Optional["RegressionTreeNode"] = None

    @property
    def is_leaf(self) -> bool:
        return False

    def goes_left(self, x) -> bool:
        return float(x[self.attribute_index]) <= self.split_point


RegressionTreeNode = Union[RegressionTreeLeaf, RegressionTreeInteriorNode]

# ----------------------------- Tree -----------------------------

class RegressionTree:
    """A single regression tree rooted at ``root``."""

    def __init__(self, root: Optional[RegressionTreeNode] = None):
        self.root = root

    # -- traversal --

    def nodes(self) -> Iterator[RegressionTreeNode]:
        """Pre-order (node, left subtree, right subtree) iteration."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                if node.right is not None:
                    stack.append(node.right)
                if node.left is not None:
                    stack.append(node.left)

    def leaves(self) -> List[RegressionTreeLeaf]:
        return [n for n in self.nodes() if n.is_leaf]

    @property
    def n_leaves(self) -> int:
        return len(self.leaves())

    @property
    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path (a lone leaf has depth 1)."""
        if self.root is None:
            return 0
        best = 0
        stack = [(self.root, 1)]
        while stack:
            node, d = stack.pop()
            best = max(best, d)
            if not node.is_leaf:
                for child in (node.left, node.right):
                    if child is not None:
                        stack.append((child, d + 1))
        return best

    def parent_map(self) -> Dict[int, RegressionTreeInteriorNode]:
        """Map ``id(child) -> parent`` for every non-root node."""
        parents: Dict[int, RegressionTreeInteriorNode] = {}
        for node in self.nodes():
            if not node.is_leaf:
                for child in (node.left, node.right):
                    if child is not None:
                        parents[id(child)] = node
        return parents

    def replace(self, node: RegressionTreeNode, new: RegressionTreeNode,
                parents: Optional[Dict[int, RegressionTreeInteriorNode]] = None) -> None:
        """Put ``new`` where ``node`` currently hangs (root included)."""
        if node is self.root:
            self.root = new
            return
        parents = self.parent_map() if parents is None else parents
        parent = parents[id(node)]
        if parent.left is node:
            parent.left = new
        else:
            parent.right = new
        parents[id(new)] = parent

    # -- prediction --

    def leaf_for(self, x) -> RegressionTreeLeaf:
        node = self.root
        while not node.is_leaf:
            node = node.left if node.goes_left(x) else node.right
        return node

    def regress(self, x) -> float:
        return self.leaf_for(x).prediction

    def predict(self, X) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        out = np.empty(X.shape[0], dtype=float)
        for i, x in enumerate(X):
            out[i] = self.regress(x)
        return out

    # -- text / graph export --

    def _name(self, j: int, fn=None) -> str:
        return fn[j] if (fn is not None and 0 <= j < len(fn)) else f"X[{j}]"

    def format_tree(self, feature_names: Optional[List[str]] = None) -> str:
        lines: List[str] = []
        self._format_node(self.root, "", feature_names, lines)
        return "\n".join(lines)

    def _format_node(self, node, indent, fn, lines):
        if node is None:
            lines.append(f"{indent}<empty>")
            return
        if node.is_leaf:
            lines.append(f"{indent}Predict {node.prediction:.4f}")
            return
        name = self._name(node.attribute_index, fn)
        lines.append(f"{indent}if {name} <= {node.split_point:.6g}:")
        self._format_node(node.left, indent + "  ", fn, lines)
        lines.append(f"{indent}else:")
        self._format_node(node.right, indent + "  ", fn, lines)

    def rules(self, feature_names: Optional[List[str]] = None) -> List[str]:
        """One ``"<antecedent> => value=<prediction>"`` string per leaf, left to right."""
        rules: List[str] = []
        self._collect_rules(self.root, [], rules, feature_names)
        return rules

    def _collect_rules(self, node, parts, rules, fn):
        if node is None:
            return
        if node.is_leaf:
            antecedent = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{antecedent} => value={node.prediction:.6g}")
            return
        name = self._name(node.attribute_index, fn)
        self._collect_rules(node.left, parts + [f"{name} <= {node.split_point:.6g}"], rules, fn)
        self._collect_rules(node.right, parts + [f"{name} > {node.split_point:.6g}"], rules, fn)

    def add_graph_nodes(self, dot, node, node_id: str, fn=None) -> None:
        if node is None:
            dot.node(node_id, "<empty>")
            return
        if node.is_leaf:
            dot.node(node_id, f"Leaf\nvalue={node.prediction:.6g}")
            return
        name = self._name(node.attribute_index, fn)
        dot.node(node_id, f"{name} <= {node.split_point:.6g}")
        left_id = node_id + "L"
        right_id = node_id + "R"
        dot.edge(node_id, left_id, label="True")
        dot.edge(node_id, right_id, label="False")
        self.add_graph_nodes(dot, node.left, left_id, fn)
        self.add_graph_nodes(dot, node.right, right_id, fn)

    def __repr__(self) -> str:
        return f"RegressionTree(n_leaves={self.n_leaves}, depth={self.depth})"
