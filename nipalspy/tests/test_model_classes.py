import json

import numpy as np
import nipalspy
import pytest
from nipalspy.core import model_classes, nipals, preprocess

rand_s = np.random.RandomState(950613)

X_REF = np.array(
    [
        [-1.18, -1.43, -1.17, -1.37, -1.61],
        [-0.59, -0.99, -0.82, -1.12, -0.89],
        [0.59, -0.44, -0.58, -0.93, -0.48],
        [-1.18, 0.00, 0.23, 0.62, -0.16],
        [0.00, 0.22, -0.35, 0.93, 0.89],
        [0.59, 0.99, 0.70, 1.06, 1.05],
        [1.77, 1.65, 1.99, 0.81, 1.21],
    ]
)


def _pls_data(rows=25, n_x=4, n_y=2):
    X = rand_s.rand(rows, n_x) * 10
    Y = X @ rand_s.randn(n_x, n_y) + rand_s.rand(rows, n_y)
    return (X, Y)


def test_methods_registry():
    assert set(nipalspy.methods) == {"pca", "pls"}
    assert nipalspy.methods["pca"] is model_classes._PCA


def test_default_method_is_pca():
    res = nipalspy.NIPALS(X_REF)
    assert isinstance(res, model_classes._PCA)
    # defaults to one component per variable
    assert res.n_components == 5
    assert res.scores.shape == (7, 5)
    assert res.loadings.shape == (5, 5)
    assert np.array_equal(res.X_stds, np.ones(5))


def test_pca_model_reference_first_component():
    res = nipalspy.PCA(X_REF, n_components=2)
    expected = [-3.034, -1.981, -0.874, -0.168, 0.764, 1.977, 3.316]
    assert np.allclose(res.scores[:, 0], expected, atol=0.01)
    assert np.allclose(res.variance_percentages.sum(), 100.0)


def test_pca_model_autoscale():
    X = rand_s.rand(20, 4) * np.array([1, 10, 100, 1000])
    res = nipalspy.PCA(X, autoscale=True)
    assert np.allclose(res.X_means, X.mean(axis=0))
    assert np.allclose(res.X_stds, X.std(axis=0))
    assert np.allclose(preprocess.column_std(res.X_pre), 1.0)


def test_pca_model_nonpositive_components_means_all():
    res = nipalspy.PCA(X_REF, n_components=-1)
    assert res.n_components == 5
    res = nipalspy.PCA(X_REF, n_components=0)
    assert res.n_components == 5


def test_pca_transform_training_data():
    res = nipalspy.PCA(X_REF, n_components=3)
    T_new = res.transform(X_REF)
    assert T_new.shape == (7, 3)
    assert np.allclose(T_new[:, 0], res.scores[:, 0], atol=1e-2)


def test_pca_reconstruct_all_components():
    res = nipalspy.PCA(X_REF)
    assert res.reconstruct().shape == res.X_pre.shape


def test_pca_to_dict_is_json_serializable():
    names = ["a", "b", "c", "d", "e"]
    res = nipalspy.PCA(X_REF, n_components=2, variable_names=names)
    out = json.loads(json.dumps(res.to_dict()))
    assert out["variable_names"] == names
    assert out["object_names"] == ["O1", "O2", "O3", "O4", "O5", "O6", "O7"]
    assert out["num_components"] == 2
    assert len(out["scores"]) == 7
    assert len(out["loadings"]) == 5
    assert len(out["eigenvalues"]) == 2
    assert len(out["x_std"]) == 5


def test_pca_repr():
    res = nipalspy.PCA(X_REF, n_components=1)
    assert "Algorithm: NIPALS Principal Component Analysis" in repr(res)
    assert "loadings" in str(res)


def test_invalid_method():
    with pytest.raises(nipalspy.exceptions.InvalidParameterError):
        nipalspy.NIPALS(X_REF, method="kpca")


def test_method_keyword_reaches_model():
    res = nipalspy.NIPALS(X_REF, n_components=2, method="pca")
    assert isinstance(res, model_classes._PCA)
    assert res.method == "pca"
    res = nipalspy.PCA(X_REF, n_components=2)
    assert res.method == "pca"
    X, Y = _pls_data()
    res = nipalspy.PLS(X, Y, n_components=1)
    assert isinstance(res, model_classes._PLS)
    assert res.method == "pls"


def test_unexpected_keyword():
    with pytest.raises(TypeError):
        nipalspy.PCA(X_REF, num_perm=10)


def test_bad_inputs():
    with pytest.raises(nipalspy.exceptions.ImproperShapeError):
        nipalspy.PCA(np.arange(5.0))
    X = X_REF.copy()
    X[2, 3] = np.nan
    with pytest.raises(nipalspy.exceptions.NonFiniteValueError):
        nipalspy.PCA(X)
    with pytest.raises(nipalspy.exceptions.InputMatrixDimensionMismatchError):
        nipalspy.PCA(X_REF, variable_names=["a", "b"])


def test_pls_model_shapes_and_predict():
    X, Y = _pls_data()
    res = nipalspy.NIPALS(X, Y, n_components=2, method="pls")
    assert isinstance(res, model_classes._PLS)
    assert res.scores.shape == (25, 2)
    assert res.loadings.shape == (4, 2)
    assert res.weights.shape == (4, 2)
    assert res.y_loadings.shape == (2, 2)

    Y_pred = res.predict(X)
    assert Y_pred.shape == (25, 2)
    assert np.all(np.isfinite(Y_pred))
    assert res.transform(X).shape == (25, 2)


def test_pls_model_one_dimensional_response():
    X, Y = _pls_data(n_y=1)
    res = nipalspy.PLS(X, Y[:, 0], n_components=2, autoscale=True)
    assert res.Y.shape == (25, 1)
    assert res.predict(X).shape == (25, 1)
    assert np.all(res.converged)
    assert np.all(res.variance_percentages >= 0)
    assert res.variance_percentages.sum() <= 100.0 + 1e-9


def test_pls_model_predict_wrong_columns():
    X, Y = _pls_data()
    res = nipalspy.PLS(X, Y, n_components=2)
    with pytest.raises(nipalspy.exceptions.InputMatrixDimensionMismatchError):
        res.predict(X[:, :2])


def test_pls_model_row_mismatch():
    X, Y = _pls_data()
    with pytest.raises(nipalspy.exceptions.InputMatrixDimensionMismatchError):
        nipalspy.PLS(X, Y[:10])


def test_pls_to_dict():
    X, Y = _pls_data()
    res = nipalspy.PLS(X, Y, n_components=2, response_names=["r1", "r2"])
    out = json.loads(json.dumps(res.to_dict()))
    assert out["response_names"] == ["r1", "r2"]
    assert len(out["weights"]) == 4
    assert len(out["y_loadings"]) == 2
    assert len(out["y_mean"]) == 2


@pytest.mark.parametrize("autoscale", [False, True])
def test_pls_predict_matches_manual_computation(autoscale):
    X, Y = _pls_data()
    res = nipalspy.PLS(X, Y, n_components=2, autoscale=autoscale)
    X_new = rand_s.rand(6, 4) * 10
    X_new_pre = preprocess.apply_preprocessing(X_new, res.X_means, res.X_stds)
    expected = preprocess.undo_preprocessing(
        nipals.pls_predict(X_new_pre, res.components),
        res.Y_means,
        res.Y_stds,
    )
    assert np.allclose(res.predict(X_new), expected)
    # training predictors are centred, so predictions centre on Y_means
    assert np.allclose(res.predict(X).mean(axis=0), Y.mean(axis=0))
