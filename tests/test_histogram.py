import numpy as np
import pytest
from rtreepy.attributes import BinnedAttribute, ContinuousAttribute, Instances, NominalAttribute
from rtreepy.dataset import Dataset
from rtreepy.exceptions import DataIntegrityError
from rtreepy.histogram import build_histogram


def test_nominal_missing_category_is_omitted():
    # cardinality 3, category 1 never appears
    X = np.array([[0], [2], [2], [0]])
    y = np.array([1.0, 5.0, 7.0, 3.0])
    w = np.array([1.0, 1.0, 2.0, 1.0])
    att = NominalAttribute(name="c", index=0, cardinality=3)
    ds = Dataset.create(Instances(X, y, w, [att]))
    hist = build_histogram(ds, att)
    assert hist.unique_values.tolist() == [0.0, 2.0]
    assert hist.weights.tolist() == [2.0, 3.0]
    assert hist.sums.tolist() == [4.0, 19.0]


def test_binned_histogram_in_bin_order():
    X = np.array([[3], [0], [3], [1]])
    y = np.array([1.0, 2.0, 3.0, 4.0])
    att = BinnedAttribute(name="b", index=0, n_bins=4)
    ds = Dataset.create(Instances(X, y, attributes=[att]))
    hist = build_histogram(ds, att)
    assert hist.unique_values.tolist() == [0.0, 1.0, 3.0]
    assert hist.sums.tolist() == [2.0, 4.0, 4.0]


def test_zero_weight_bucket_dropped():
    X = np.array([[0], [1], [2]])
    y = np.array([1.0, 2.0, 3.0])
    w = np.array([1.0, 0.0, 1.0])
    att = NominalAttribute(name="c", index=0, cardinality=3)
    ds = Dataset.create(Instances(X, y, w, [att]))
    assert build_histogram(ds, att).unique_values.tolist() == [0.0, 2.0]


def test_continuous_histogram_merges_equal_values():
    X = np.array([[2.0], [1.0], [2.0], [3.0], [1.0]])
    y = np.array([4.0, 1.0, 4.0, 0.0, 2.0])
    att = ContinuousAttribute(name="x", index=0)
    ds = Dataset.create(Instances(X, y, attributes=[att]))
    hist = build_histogram(ds, att)
    assert hist.unique_values.tolist() == [1.0, 2.0, 3.0]
    assert hist.weights.tolist() == [2.0, 2.0, 1.0]
    assert hist.sums.tolist() == [3.0, 8.0, 0.0]
    # value 1 mixes targets 1 and 2; value 2 holds two 4s
    assert hist.pure.tolist() == [False, True, True]


def test_continuous_histogram_empty_dataset():
    att = ContinuousAttribute(name="x", index=0)
    inst = Instances(np.array([[1.0]]), np.array([1.0]), attributes=[att])
    ds = Dataset(inst, np.array([], dtype=np.intp), {0: np.array([], dtype=np.intp)})
    assert len(build_histogram(ds, att)) == 0


def test_out_of_range_category_is_rejected():
    att = NominalAttribute(name="c", index=0, cardinality=2)
    with pytest.raises(DataIntegrityError):
        Instances(np.array([[0], [2]]), np.array([1.0, 2.0]), attributes=[att])
    with pytest.raises(DataIntegrityError):
        Instances(np.array([[0.5]]), np.array([1.0]), attributes=[att])


def test_zero_weight_continuous_bucket_dropped():
    X = np.array([[3.0], [1.0], [2.0], [2.0]])
    y = np.array([3.0, 1.0, 2.0, 5.0])
    w = np.array([1.0, 1.0, 0.0, 0.0])
    att = ContinuousAttribute(name="x", index=0)
    hist = build_histogram(Dataset.create(Instances(X, y, w, [att])), att)
    assert hist.unique_values.tolist() == [1.0, 3.0]
    assert hist.weights.tolist() == [1.0, 1.0]


@pytest.mark.parametrize("X,y,w", [
    ([[1.0], [np.nan]], [0.0, 1.0], None),
    ([[1.0], [np.inf]], [0.0, 1.0], None),
    ([[1.0], [2.0]], [0.0, np.nan], None),
    ([[1.0], [2.0]], [-np.inf, 1.0], None),
    ([[1.0], [2.0]], [0.0, 1.0], [1.0, np.inf]),
])
def test_non_finite_input_is_rejected(X, y, w):
    with pytest.raises(DataIntegrityError):
        Instances(np.array(X), np.array(y), w)
