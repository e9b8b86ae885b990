import math
import numpy as np
import pytest
from rtreepy.attributes import Instances
from rtreepy.criterion import best_boundaries, evaluate_boundaries, find_best_split, midpoint
from rtreepy.dataset import Dataset
from rtreepy.exceptions import DataIntegrityError
from rtreepy.histogram import Histogram
from rtreepy.rng import Random


class RecordingRandom(Random):
    """Always picks the last candidate and remembers every bound it was asked for."""

    def __init__(self):
        super().__init__(0)
        self.bounds = []

    def next_int(self, bound):
        self.bounds.append(bound)
        return bound - 1


def _hist(values, weights, sums):
    return Histogram(np.asarray(values, float), np.asarray(weights, float), np.asarray(sums, float))


def test_evaluate_boundaries_matches_formula():
    hist = _hist([1, 2, 3, 4], [1, 1, 1, 1], [0, 0, 10, 10])
    evals = evaluate_boundaries(hist)
    assert np.allclose(evals, [-400 / 3, -200.0, -100 - 100 / 3])


def test_best_boundary_is_midpoint():
    hist = _hist([1, 2, 3, 4], [1, 1, 1, 1], [0, 0, 10, 10])
    score, thresholds = best_boundaries(hist)
    assert score == -200.0
    assert thresholds == [2.5]


def test_exact_ties_are_all_kept():
    # symmetric targets 0, 10, 10, 0: first and last boundary tie
    hist = _hist([1, 2, 3, 4], [1, 1, 1, 1], [0, 10, 10, 0])
    score, thresholds = best_boundaries(hist)
    assert score == pytest.approx(-400 / 3)
    assert thresholds == [1.5, 3.5]


def test_single_bucket_has_no_split():
    score, thresholds = best_boundaries(_hist([2], [3], [6]))
    assert math.isinf(score) and thresholds == []


def test_zero_weight_side_is_fatal():
    hist = _hist([1, 2], [0, 2], [0, 4])
    with pytest.raises(DataIntegrityError):
        evaluate_boundaries(hist)


def test_tie_break_pools_all_attributes():
    # two identical columns: each offers the same best threshold
    X = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0], [4.0, 4.0]])
    y = np.array([0.0, 0.0, 10.0, 10.0])
    ds = Dataset.create(Instances(X, y))
    rng = RecordingRandom()
    split = find_best_split(ds, rng)
    # a single draw over both attributes' ties
    assert rng.bounds == [2]
    assert split.attribute_index == 1
    assert split.split_point == 2.5
    assert split.score == -200.0


def test_no_attribute_with_two_values():
    X = np.array([[1.0], [1.0], [1.0]])
    ds = Dataset.create(Instances(X, np.array([0.0, 1.0, 2.0])))
    assert find_best_split(ds, Random(0)) is None


def test_light_bucket_is_not_cancelled_by_total():
    # 2.0 - 2.0 would leave the last bucket with no weight
    hist = _hist([1, 2, 3], [1, 1, 1e-20], [0, 10, 1e-19])
    evals = evaluate_boundaries(hist)
    assert np.all(np.isfinite(evals))
    X = np.array([[1.0], [2.0], [3.0]])
    ds = Dataset.create(Instances(X, np.array([0.0, 10.0, 10.0]), np.array([1.0, 1.0, 1e-20])))
    assert find_best_split(ds, Random(0)).split_point == 1.5


@pytest.mark.parametrize("lo,hi", [
    (1.0, 3.0),
    (np.nextafter(1.0, 2.0), np.nextafter(np.nextafter(1.0, 2.0), 2.0)),
    (1e308, 1.5e308),
    (np.nextafter(np.finfo(float).max, 0.0), np.finfo(float).max),
    (-5e-324, 5e-324),
])
def test_midpoint_stays_below_upper_value(lo, hi):
    mid = midpoint(float(lo), float(hi))
    assert lo <= mid < hi


def test_adjacent_doubles_split_between_them():
    a = np.nextafter(1.0, 2.0)
    b = np.nextafter(a, 2.0)
    hist = _hist([a, b], [1, 1], [0, 10])
    _, thresholds = best_boundaries(hist)
    assert thresholds == [a]
