from rtreepy.tree import RegressionTree, RegressionTreeInteriorNode, RegressionTreeLeaf


def _small_tree():
    """x0 <= 2.5 -> 0; else x1 <= 0.5 -> 1 else 2."""
    inner = RegressionTreeInteriorNode(1, 0.5, RegressionTreeLeaf(1.0), RegressionTreeLeaf(2.0))
    return RegressionTree(RegressionTreeInteriorNode(0, 2.5, RegressionTreeLeaf(0.0), inner))


def test_routing_uses_less_or_equal():
    tree = _small_tree()
    assert tree.regress([2.5, 9.0]) == 0.0
    assert tree.regress([3.0, 0.0]) == 1.0
    assert tree.regress([3.0, 1.0]) == 2.0
    assert tree.predict([[1.0, 0.0], [4.0, 4.0]]).tolist() == [0.0, 2.0]


def test_counts_and_depth():
    tree = _small_tree()
    assert tree.n_leaves == 3
    assert tree.depth == 3
    assert RegressionTree(RegressionTreeLeaf(1.0)).depth == 1


def test_parent_map_and_replace():
    tree = _small_tree()
    inner = tree.root.right
    parents = tree.parent_map()
    assert parents[id(inner)] is tree.root
    assert id(tree.root) not in parents
    tree.replace(inner, RegressionTreeLeaf(1.5), parents)
    assert tree.root.right.prediction == 1.5
    tree.replace(tree.root, RegressionTreeLeaf(7.0))
    assert tree.root.is_leaf and tree.n_leaves == 1


def test_rules_and_text():
    tree = _small_tree()
    rules = tree.rules(["a", "b"])
    assert rules == ["a <= 2.5 => value=0",
                     "a > 2.5 AND b <= 0.5 => value=1",
                     "a > 2.5 AND b > 0.5 => value=2"]
    text = tree.format_tree()
    assert text.splitlines()[0] == "if X[0] <= 2.5:"
