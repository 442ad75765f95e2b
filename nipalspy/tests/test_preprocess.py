import numpy as np
from nipalspy.core import preprocess

rand_s = np.random.RandomState(950613)


def test_column_mean_and_std():
    X = np.array([[1.0, 2.0], [3.0, 6.0]])
    assert np.allclose(preprocess.column_mean(X), [2.0, 4.0])
    # population standard deviation, divisor R
    assert np.allclose(preprocess.column_std(X), [1.0, 2.0])


def test_mean_centre_zero_means():
    X = rand_s.rand(30, 8) * 5 + 3
    X_orig = X.copy()
    X_mc, X_means = preprocess.mean_centre(X)
    assert np.allclose(preprocess.column_mean(X_mc), 0, atol=1e-12)
    assert np.allclose(X_means, X_orig.mean(axis=0))
    # input is not modified
    assert np.array_equal(X, X_orig)


def test_scale_by_std():
    X = rand_s.rand(25, 4) * np.array([1, 10, 100, 0.1])
    X_scaled, X_stds = preprocess.scale_by_std(X)
    assert np.allclose(X_stds, X.std(axis=0))
    assert np.allclose(preprocess.column_std(X_scaled), 1.0)


def test_autoscale_unit_variance():
    X = rand_s.randn(40, 6) * 3 + 7
    X_as, X_means, X_stds = preprocess.autoscale(X)
    assert np.allclose(preprocess.column_mean(X_as), 0, atol=1e-12)
    assert np.allclose(preprocess.column_std(X_as), 1.0)
    assert np.allclose(X_means, X.mean(axis=0))
    assert np.allclose(X_stds, X.std(axis=0))


def test_autoscale_constant_column_guarded():
    X = rand_s.rand(10, 3)
    X[:, 1] = 4.2
    X_as, X_means, X_stds = preprocess.autoscale(X)
    assert np.all(np.isfinite(X_as))
    assert X_stds[1] == 1.0
    assert np.allclose(X_as[:, 1], 0)
    assert np.allclose(preprocess.column_std(X_as[:, [0, 2]]), 1.0)


def test_apply_and_undo_preprocessing():
    X = rand_s.rand(15, 3) * 4
    X_as, X_means, X_stds = preprocess.autoscale(X)
    assert np.allclose(preprocess.apply_preprocessing(X, X_means, X_stds), X_as)
    assert np.allclose(preprocess.undo_preprocessing(X_as, X_means, X_stds), X)
