# backend/tests/test_correlation_binning.py
import math

import pytest

from backend.titanic_eda.core.errors import DatasetShapeError
from backend.titanic_eda.services.binning import fixed_bins, histogram, quantile_bins, sturges_bin_count
from backend.titanic_eda.services.correlation import correlate, pearson
from backend.titanic_eda.services.dataset import merge


# -----------------------------------------------------------
# CORRELATION
# -----------------------------------------------------------
def test_correlation_matrix_properties(titanic_batches):
    ds = merge(*titanic_batches)
    cols = ["Age", "Fare", "Pclass", "SibSp", "Survived"]
    m = correlate(ds, cols, label_column="Survived")

    assert m.columns == cols
    for i in range(len(cols)):
        assert m.matrix[i][i] == 1.0
        for j in range(len(cols)):
            assert -1.0 <= m.matrix[i][j] <= 1.0
            assert m.matrix[i][j] == m.matrix[j][i]


def test_perfect_linear_relationships():
    train = [{"x": i, "y": 2 * i + 1, "z": -i} for i in range(5)]
    ds = merge(train, [{"x": 10, "y": 21, "z": -10}])
    m = correlate(ds, ["x", "y", "z"])
    assert m.value("x", "y") == pytest.approx(1.0)
    assert m.value("x", "z") == pytest.approx(-1.0)


def test_constant_column_correlates_to_zero():
    train = [{"c": 5, "x": i} for i in range(6)]
    ds = merge(train, [{"c": 5, "x": 9}])
    m = correlate(ds, ["c", "x"])
    assert m.value("c", "x") == 0.0
    assert m.value("c", "c") == 1.0
    assert not math.isnan(m.value("x", "c"))


def test_pairwise_complete_observations():
    train = [
        {"a": 1, "b": 2, "c": None},
        {"a": 2, "b": 4, "c": 3},
        {"a": 3, "b": 6, "c": 1},
        {"a": None, "b": 1, "c": 2},
    ]
    ds = merge(train, [{"a": 4, "b": 8, "c": None}])
    m = correlate(ds, ["a", "b", "c"])
    # a/b use rows 0,1,2,4 and are perfectly correlated despite c's gaps
    assert m.value("a", "b") == pytest.approx(1.0)
    # a/c only share rows 1 and 2
    assert m.value("a", "c") == pytest.approx(pearson([2, 3], [3, 1]))


def test_label_participation_restricts_to_train_rows():
    train = [{"x": 1, "y": 0}, {"x": 2, "y": 1}, {"x": 3, "y": 0}]
    test = [{"x": 100, "y": 1000}]
    ds = merge(train, test)

    with_label = correlate(ds, ["x", "y"], label_column="y")
    without_label = correlate(ds, ["x", "y"])
    assert with_label.value("x", "y") == pytest.approx(0.0)
    assert without_label.value("x", "y") > 0.9


def test_no_shared_rows_gives_zero():
    ds = merge([{"a": 1, "b": None}, {"a": 2, "b": None}], [{"a": None, "b": 3}])
    assert correlate(ds, ["a", "b"]).value("a", "b") == 0.0


def test_correlate_unknown_column():
    ds = merge([{"a": 1}], [{"a": 2}])
    with pytest.raises(DatasetShapeError):
        correlate(ds, ["a", "nope"])


# -----------------------------------------------------------
# EQUAL-WIDTH HISTOGRAM
# -----------------------------------------------------------
def test_histogram_edges_and_boundaries():
    bins = histogram([0, 1, 2, 2.5, 5, 7.5, 10], 4)

    assert [(b.lower, b.upper) for b in bins] == [(0, 2.5), (2.5, 5), (5, 7.5), (7.5, 10)]
    # 2.5, 5 and 7.5 sit on interior edges and go to the upper bin; 10 closes the last bin
    assert [b.count for b in bins] == [3, 1, 1, 2]
    assert [b.closed_upper for b in bins] == [False, False, False, True]
    assert sum(b.count for b in bins) == 7


def test_histogram_ignores_absent_values():
    bins = histogram([1, None, 3, float("nan"), "x"], 2)
    assert sum(b.count for b in bins) == 2


def test_histogram_positive_rate():
    bins = histogram([1, 2, 9, 10], 2, labels=[1, 0, 1, None])
    assert bins[0].positive_rate == 50.0
    assert bins[1].positive_rate == 100.0


def test_histogram_degenerate_inputs():
    assert histogram([], 5) == []
    single = histogram([4, 4, 4], 5)
    assert len(single) == 1
    assert (single[0].lower, single[0].upper, single[0].count) == (4, 4, 3)
    assert single[0].closed_upper


def test_histogram_rejects_non_positive_bin_count():
    with pytest.raises(ValueError):
        histogram([1, 2], 0)


@pytest.mark.parametrize("n,expected", [(0, 1), (1, 1), (2, 2), (8, 4), (9, 5), (891, 11)])
def test_sturges_bin_count(n, expected):
    assert sturges_bin_count(n) == expected


# -----------------------------------------------------------
# EQUAL-FREQUENCY / FIXED BINS
# -----------------------------------------------------------
def test_quantile_bins_chunking():
    values = [9, 1, 8, 2, 7, 3, 6, 4, 5]
    bins = quantile_bins(values, 4)
    # chunk size ceil(9 / 4) = 3 -> three chunks
    assert [(b.lower, b.upper, b.count) for b in bins] == [(1, 3, 3), (4, 6, 3), (7, 9, 3)]
    assert bins[-1].closed_upper and not bins[0].closed_upper


def test_quantile_bins_short_last_chunk():
    bins = quantile_bins(list(range(10)), 3)
    assert [b.count for b in bins] == [4, 4, 2]
    assert (bins[-1].lower, bins[-1].upper) == (8, 9)


def test_quantile_bins_carry_labels_through_sort():
    bins = quantile_bins([3, 1, 2, 4], 2, labels=[1, 0, 0, 1])
    assert bins[0].positive_rate == 0.0
    assert bins[1].positive_rate == 100.0


def test_quantile_bins_empty():
    assert quantile_bins([], 10) == []


def test_fixed_bins_overflow_goes_to_last_bin():
    bins = fixed_bins([5, 10, 79, 80, 95, -1], [0, 10, 20, 80])
    assert [b.count for b in bins] == [1, 1, 3]
    assert bins[-1].closed_upper


def test_fixed_bins_require_increasing_edges():
    with pytest.raises(ValueError):
        fixed_bins([1], [0])
    with pytest.raises(ValueError):
        fixed_bins([1], [0, 10, 5])
