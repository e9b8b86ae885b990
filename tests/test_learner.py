import numpy as np
import os
import pytest
from rtreepy import ConfigurationError, DataIntegrityError, NominalAttribute, ContinuousAttribute, RegressionTreeLearner


def _tiny_reg_dataset():
    """Return a small regression dataset with a numeric and a nominal feature."""
    X = np.array([[1.0, 0], [2.0, 0], [3.0, 1], [4.0, 1],
                  [5.0, 2], [6.0, 2], [7.0, 1], [8.0, 0]])
    y = np.array([1.0, 1.5, 2.0, 2.5, 7.0, 7.5, 2.0, 1.0])
    atts = [ContinuousAttribute(name="num", index=0),
            NominalAttribute(name="cat", index=1, cardinality=3)]
    return X, y, atts


def test_regressor_predictions_shape():
    X, y, atts = _tiny_reg_dataset()
    regr = RegressionTreeLearner(alpha=0.25, feature_names=['num', 'cat'])
    regr.fit(X, y, attributes=atts)
    pred = regr.predict(X)
    # predictions should have same length as input
    assert pred.shape == y.shape


def test_regressor_fits_step_function():
    X = np.array([[1.0], [2.0], [3.0], [4.0]])
    y = np.array([0.0, 0.0, 10.0, 10.0])
    regr = RegressionTreeLearner(mode="a:0.5").fit(X, y)
    assert np.allclose(regr.predict(X), y)
    assert regr.score(X, y) == pytest.approx(1.0)
    assert regr.get_n_leaves() == 2
    assert regr.get_depth() == 2


def test_regressor_rule_and_export():
    X, y, atts = _tiny_reg_dataset()
    regr = RegressionTreeLearner(alpha=0.25, feature_names=['num', 'cat'])
    regr.fit(X, y, attributes=atts)
    exported = regr.export_rules()
    # one rule per leaf, each with antecedent and value
    assert len(exported) == regr.get_n_leaves()
    assert all('value=' in r for r in exported)
    assert any('num' in r or 'cat' in r for r in exported)


def test_regressor_print_tree(capsys):
    X, y, atts = _tiny_reg_dataset()
    regr = RegressionTreeLearner(mode="d:2").fit(X, y, attributes=atts)
    regr.print_tree()
    out = capsys.readouterr().out
    assert out.startswith("if ")
    assert "Predict" in out


def test_regressor_graphviz_export(tmp_path):
    pytest.importorskip("graphviz")
    X = np.array([[1], [2], [3], [4], [5], [6]])
    y = np.array([1.1, 2.1, 3.1, 8.0, 8.1, 8.2])
    reg = RegressionTreeLearner(mode="a:0.3").fit(X, y)

    source = reg.export_graphviz(None)
    assert "<=" in source
    out_path = reg.export_graphviz(str(tmp_path / "test_reg_tree"), format="dot")
    assert out_path.endswith('.dot')
    assert os.path.exists(out_path)


def test_regressor_not_fitted():
    regr = RegressionTreeLearner()
    with pytest.raises(ValueError):
        regr.predict([[1.0, 0.0]])
    with pytest.raises(ValueError):
        regr.export_rules()


def test_regressor_bad_mode():
    X, y, _ = _tiny_reg_dataset()
    with pytest.raises(ConfigurationError):
        RegressionTreeLearner(mode="x:3").fit(X, y)
    with pytest.raises(ConfigurationError):
        RegressionTreeLearner(mode="d").fit(X, y)


def test_regressor_sample_weight():
    # a heavy instance pulls its leaf mean towards itself
    X = np.array([[1.0], [1.0], [2.0]])
    y = np.array([0.0, 3.0, 10.0])
    w = np.array([2.0, 1.0, 1.0])
    regr = RegressionTreeLearner(mode="a:0.5").fit(X, y, sample_weight=w)
    assert regr.predict([[1.0]])[0] == pytest.approx(1.0)
    assert regr.predict([[2.0]])[0] == pytest.approx(10.0)


def test_regressor_rejects_missing_values():
    X = np.array([[1.0], [np.nan], [3.0]])
    with pytest.raises(DataIntegrityError):
        RegressionTreeLearner().fit(X, np.array([0.0, 1.0, 2.0]))


def test_regressor_same_seed_same_tree():
    rng = np.random.default_rng(3)
    X = rng.integers(0, 4, size=(60, 3)).astype(float)
    y = rng.integers(0, 3, size=60).astype(float)
    a = RegressionTreeLearner(mode="l:6", random_state=11).fit(X, y)
    b = RegressionTreeLearner(mode="l:6", random_state=11).fit(X, y)
    assert a.export_rules() == b.export_rules()


def test_get_params_roundtrip():
    regr = RegressionTreeLearner(mode="d", max_depth=3, random_state=5)
    params = regr.get_params()
    assert params["max_depth"] == 3
    assert RegressionTreeLearner(**params).get_params() == params
