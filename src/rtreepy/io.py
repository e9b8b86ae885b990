"""Reading training data and reading/writing tree models.

Attribute file, one attribute per line (``#`` starts a comment)::

    age: cont
    colour: {red, green, blue}
    income_bin: binned(16)
    price: cont (target)

Exactly one line carries ``(target)``. Training file: one instance per line,
values separated by commas or whitespace, one column per attribute line in
the same order, plus an optional trailing weight column. Nominal cells may be
state names or integer ids.

Model files list the tree in pre-order after a ``RegressionTree`` header::

    RegressionTree
    I 0 2.5
    L 0.0
    L 10.0
"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import re
import numpy as np

from .attributes import BinnedAttribute, ContinuousAttribute, Instances, NominalAttribute
from .tree import RegressionTree, RegressionTreeInteriorNode, RegressionTreeLeaf

MODEL_HEADER = "RegressionTree"

_BINNED = re.compile(r"^binned\s*\(\s*(\d+)\s*\)$", re.IGNORECASE)
_TARGET = re.compile(r"\(\s*target\s*\)\s*$", re.IGNORECASE)

# ----------------------------- Attributes -----------------------------

def _lines(path: str):
    with open(path, "r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            line = raw.split("#", 1)[0].strip()
            if line:
                yield lineno, line


def read_attributes(path: str) -> Tuple[List, int]:
    """Parse an attribute file.

    Returns
    -------
    (attributes, target_column)
        ``attributes`` excludes the target and is indexed in column order
        without it; ``target_column`` is the target's position in the file.
    """
    attributes = []
    target_column: Optional[int] = None
    column = 0
    for lineno, line in _lines(path):
        if ":" not in line:
            raise ValueError(f"{path}:{lineno}: expected '<name>: <type>'")
        name, spec = (s.strip() for s in line.split(":", 1))
        if _TARGET.search(spec):
            if target_column is not None:
                raise ValueError(f"{path}:{lineno}: more than one target attribute")
            target_column = column
            column += 1
            continue
        index = len(attributes)
        if spec.lower() in ("cont", "continuous"):
            att = ContinuousAttribute(name=name, index=index)
        elif spec.startswith("{") and spec.endswith("}"):
            states = tuple(s.strip() for s in spec[1:-1].split(",") if s.strip())
            if not states:
                raise ValueError(f"{path}:{lineno}: nominal attribute without states")
            att = NominalAttribute(name=name, index=index, cardinality=len(states), states=states)
        else:
            m = _BINNED.match(spec)
            if m is None:
                raise ValueError(f"{path}:{lineno}: unknown attribute type {spec!r}")
            att = BinnedAttribute(name=name, index=index, n_bins=int(m.group(1)))
        attributes.append(att)
        column += 1
    if target_column is None:
        raise ValueError(f"{path}: no attribute is marked '(target)'")
    return attributes, target_column


def _parse_cell(token: str, state_ids: Dict[str, int]) -> float:
    if token in state_ids:
        return float(state_ids[token])
    return float(token)


def read_instances(attribute_path: str, data_path: str) -> Instances:
    """Read a training set described by an attribute file."""
    attributes, target_column = read_attributes(attribute_path)
    n_columns = len(attributes) + 1
    lookups = [
        {s: i for i, s in enumerate(a.states)} if isinstance(a, NominalAttribute) else {}
        for a in attributes
    ]
    rows: List[List[float]] = []
    targets: List[float] = []
    weights: List[float] = []
    for lineno, line in _lines(data_path):
        tokens = [t.strip() for t in (line.split(",") if "," in line else line.split())]
        if len(tokens) not in (n_columns, n_columns + 1):
            raise ValueError(f"{data_path}:{lineno}: expected {n_columns} values "
                             f"(+1 optional weight), got {len(tokens)}")
        values = tokens[:n_columns]
        try:
            targets.append(float(values.pop(target_column)))
            rows.append([_parse_cell(t, lk) for t, lk in zip(values, lookups)])
            weights.append(float(tokens[n_columns]) if len(tokens) > n_columns else 1.0)
        except ValueError as e:
            raise ValueError(f"{data_path}:{lineno}: {e}") from e
    X = np.asarray(rows, dtype=float).reshape(len(rows), len(attributes))
    return Instances(X, np.asarray(targets), np.asarray(weights), attributes)

# ----------------------------- Models -----------------------------

def dumps_model(tree: RegressionTree) -> str:
    lines = [MODEL_HEADER]
    for node in tree.nodes():
        if node.is_leaf:
            lines.append(f"L {node.prediction!r}")
        else:
            lines.append(f"I {node.attribute_index} {node.split_point!r}")
    return "\n".join(lines) + "\n"


def loads_model(text: str) -> RegressionTree:
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    if not lines or lines[0] != MODEL_HEADER:
        raise ValueError(f"model must start with {MODEL_HEADER!r}")
    root = None
    # interior nodes still waiting for a child
    open_nodes: List[RegressionTreeInteriorNode] = []
    for line in lines[1:]:
        if root is not None and not open_nodes:
            raise ValueError("trailing lines after model")
        parts = line.split()
        if parts[0] == "L" and len(parts) == 2:
            node = RegressionTreeLeaf(float(parts[1]))
        elif parts[0] == "I" and len(parts) == 3:
            node = RegressionTreeInteriorNode(int(parts[1]), float(parts[2]))
        else:
            raise ValueError(f"bad model line: {line!r}")
        if root is None:
            root = node
        else:
            parent = open_nodes[-1]
            if parent.left is None:
                parent.left = node
            else:
                parent.right = node
                open_nodes.pop()
        if not node.is_leaf:
            open_nodes.append(node)
    if root is None or open_nodes:
        raise ValueError("truncated model")
    return RegressionTree(root)


def write_model(tree: RegressionTree, path: str) -> str:
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(dumps_model(tree))
    return path


def read_model(path: str) -> RegressionTree:
    with open(path, "r", encoding="utf-8") as fh:
        return loads_model(fh.read())
