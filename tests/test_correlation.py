import numpy as np
import pytest
from scipy.stats import pearsonr

from dropwls.stats.correlation import (
    DegenerateDataError,
    DegenerateWeightsError,
    correlation_matrix,
    pearson_corr,
    weighted_corr,
    weighted_correlation_matrix,
)


def _pair(n=300, seed=0):
    rng = np.random.default_rng(seed)
    x = rng.normal(size=n)
    y = 0.6 * x + rng.normal(scale=0.8, size=n)
    return x, y


def test_pearson_matches_scipy_and_numpy():
    x, y = _pair()
    r = pearson_corr(x, y)
    assert np.isclose(r, pearsonr(x, y)[0], rtol=1e-12)
    assert np.isclose(r, np.corrcoef(x, y)[0, 1], rtol=1e-12)


def test_pearson_rejects_degenerate_input():
    with pytest.raises(DegenerateDataError, match="zero-variance"):
        pearson_corr(np.ones(5), np.arange(5.0))
    with pytest.raises(ValueError, match="same length"):
        pearson_corr(np.arange(3.0), np.arange(4.0))
    with pytest.raises(DegenerateDataError, match="at least two"):
        pearson_corr(np.array([1.0]), np.array([2.0]))


def test_correlation_matrix_unit_diagonal_and_symmetric():
    x, y = _pair()
    m = correlation_matrix(np.column_stack([x, y, x + y]))
    assert m.shape == (3, 3)
    assert np.allclose(np.diag(m), 1.0)
    assert np.allclose(m, m.T)
    assert np.allclose(m, np.corrcoef(np.column_stack([x, y, x + y]), rowvar=False))


def test_equal_weights_reduce_to_pearson():
    x, y = _pair(seed=4)
    r = pearson_corr(x, y)
    assert np.isclose(weighted_corr(x, y, np.ones(x.size)), r, rtol=1e-12)
    assert np.isclose(weighted_corr(x, y, np.full(x.size, 3.7)), r, rtol=1e-12)


def test_binary_weights_select_rows():
    x, y = _pair(seed=5)
    w = np.zeros(x.size)
    w[::3] = 1.0
    sel = w > 0
    assert np.isclose(weighted_corr(x, y, w), pearson_corr(x[sel], y[sel]), rtol=1e-12)


def test_weighted_corr_degenerate_weights():
    x, y = _pair(n=10)
    with pytest.raises(DegenerateWeightsError, match="all weights are zero"):
        weighted_corr(x, y, np.zeros(10))
    one = np.zeros(10)
    one[2] = 1.0
    with pytest.raises(DegenerateWeightsError):
        weighted_corr(x, y, one)
    with pytest.raises(ValueError, match="non-negative"):
        weighted_corr(x, y, -np.ones(10))
    with pytest.raises(ValueError, match="does not match"):
        weighted_corr(x, y, np.ones(9))
    assert issubclass(DegenerateWeightsError, ValueError)


def test_weighted_correlation_matrix():
    x, y = _pair(seed=9)
    w = np.random.default_rng(1).uniform(0.1, 1.0, size=x.size)
    m = weighted_correlation_matrix(np.column_stack([x, y]), w)
    assert np.allclose(np.diag(m), 1.0)
    assert np.isclose(m[0, 1], weighted_corr(x, y, w))
    assert np.isclose(m[0, 1], m[1, 0])
