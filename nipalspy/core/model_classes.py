import abc

import numpy as np
from scipy import linalg

# project imports
from . import check_inputs, exceptions, nipals, preprocess
from .decorators import proctimer


class ModelBase(abc.ABC):
    """Abstract base class and factory for NIPALS models. Registers and
    keeps track of the defined latent-variable methods, as well as
    enforces use of base functions that all implementations should use.
    """

    # tracks registered ModelBase subclasses
    _subclasses = {}

    # maps abbreviated user-specified classnames to full method names
    _model_types = {
        "pca": "NIPALS Principal Component Analysis",
        "pls": "NIPALS Partial Least Squares Regression",
    }

    @abc.abstractmethod
    def transform(self, X_new):
        pass

    @abc.abstractmethod
    def to_dict(self):
        pass

    # register valid decorated method as a subclass of ModelBase
    @classmethod
    def _register_subclass(cls, method):
        def decorator(subclass):
            cls._subclasses[method] = subclass
            return subclass

        return decorator

    # instantiate and return valid registered method specified by user
    @classmethod
    def _create(cls, model_method, *args, **kwargs):
        if model_method not in cls._subclasses:
            raise exceptions.InvalidParameterError(
                f"Invalid NIPALS method {model_method}"
            )
        return cls._subclasses[model_method](*args, **kwargs)

    @staticmethod
    def _get_labels(labels, count, prefix):
        """Returns `labels` as a list, or generated names
        `<prefix>1`..`<prefix>count` if none were given.
        """
        if labels is None:
            return [f"{prefix}{i + 1}" for i in range(count)]
        labels = [str(lb) for lb in labels]
        if len(labels) != count:
            raise exceptions.InputMatrixDimensionMismatchError(
                f"Got {len(labels)} labels for {count} entries."
            )
        return labels

    @staticmethod
    def _preprocess(M, autoscale):
        """Mean-centres `M`, or autoscales it if `autoscale` is set.
        Without autoscaling the scale factors are all 1.0.
        """
        if autoscale:
            return preprocess.autoscale(M)
        M_mc, M_means = preprocess.mean_centre(M)
        return (M_mc, M_means, np.ones(M.shape[1]))

    def _preprocess_new(self, X_new):
        X_new = check_inputs.check_matrix(X_new, "X_new")
        check_inputs.check_input_columns_match(X_new, self.X_means)
        return preprocess.apply_preprocessing(X_new, self.X_means, self.X_stds)

    def __repr__(self):
        stg = ""
        info = f"\nAlgorithm: {self._model_types[self.method]}\n\n"
        stg += info
        for k, v in self.__dict__.items():
            if k[0] != "_":
                stg += f"\n{k}:\n\t"
                stg += str(v).replace("\n", "\n\t")
        return stg

    def __str__(self):
        return self.__repr__()


@ModelBase._register_subclass("pca")
class _PCA(ModelBase):
    """Driver class for NIPALS Principal Component Analysis.

    The input matrix is mean-centred (or autoscaled, if requested) and
    then decomposed one component at a time by `nipals.nipals_pca`.

    Parameters
    ----------
    X : np.array
        Input data matrix, observations x variables.
    n_components : int, optional
        Number of principal components to compute. Defaults to the number
        of variables (columns) of `X`; values <= 0 mean the same.
    autoscale : boolean, optional
        Whether to scale each variable to unit variance after
        mean-centring. Defaults to False (mean-centring only, with scale
        factors of 1.0).
    tol : float, optional
        Convergence tolerance. Defaults to `nipals.EPSILON` (1e-6).
    max_iter : int, optional
        Maximum iterations per component. Defaults to
        `nipals.MAX_ITERATIONS` (500).
    init : str, optional
        "variance" (default) seeds each component with the residual
        column of highest variance; "random" seeds it randomly.
    random_state : None, int or np.random.RandomState, optional
        Seed used with `init="random"`.
    variable_names : list, optional
        Names of the columns of `X`.
    object_names : list, optional
        Names of the rows of `X`.

    Attributes
    ----------
    X : np.array
        Input data matrix.
    X_pre : np.array
        Preprocessed (mean-centred or autoscaled) copy of `X`.
    X_means : np.array
        Column means of `X`.
    X_stds : np.array
        Column scale factors (all 1.0 unless autoscaling).
    n_components : int
        Number of principal components computed.
    scores : np.array
        Scores matrix T, observations x components.
    loadings : np.array
        Loadings matrix P, variables x components.
    eigenvalues : np.array
        Squared norm of each column of `scores`.
    variance_percentages : np.array
        Percentage of the summed eigenvalues held by each component.
    n_iter : np.array
        Iterations used per component.
    converged : np.array
        Whether each component met the convergence criterion.
    """

    def __init__(
        self,
        X: np.array,
        n_components: int = None,
        autoscale: bool = False,
        tol: float = nipals.EPSILON,
        max_iter: int = nipals.MAX_ITERATIONS,
        init: str = "variance",
        random_state=None,
        variable_names: list = None,
        object_names: list = None,
        **kwargs: str,
    ):
        self.method = kwargs.pop("method", "pca")
        if kwargs:
            raise TypeError(
                f"Unexpected arguments for {self._model_types[self.method]}: "
                f"{sorted(kwargs)}"
            )

        self.X = check_inputs.check_matrix(X, "X")
        self.variable_names = self._get_labels(
            variable_names, self.X.shape[1], "V"
        )
        self.object_names = self._get_labels(
            object_names, self.X.shape[0], "O"
        )
        self.n_components = check_inputs.check_n_components(
            n_components, self.X.shape
        )
        self.autoscale = autoscale

        self.X_pre, self.X_means, self.X_stds = self._preprocess(
            self.X, self.autoscale
        )
        self._fit(tol, max_iter, init, random_state)

    @proctimer
    def _fit(self, tol, max_iter, init, random_state):
        res = nipals.nipals_pca(
            self.X_pre,
            self.n_components,
            tol=tol,
            max_iter=max_iter,
            init=init,
            random_state=random_state,
        )
        self.scores = res.T
        self.loadings = res.P
        self.eigenvalues = res.eigenvalues
        self.variance_percentages = nipals.variance_percentage(
            res.eigenvalues
        )
        self.n_iter = res.n_iter
        self.converged = res.converged

    def transform(self, X_new):
        """Projects new data onto the principal components, using the
        centring/scaling statistics of the training data.

        Returns
        -------
        T_new : np.array
            Scores of the new observations, rows x components.
        """
        return self._preprocess_new(X_new) @ self.loadings

    def reconstruct(self):
        """Sum of the outer products of every score and loading column,
        in preprocessed units.
        """
        return self.scores @ self.loadings.T

    def to_dict(self):
        return {
            "variable_names": list(self.variable_names),
            "object_names": list(self.object_names),
            "num_components": self.n_components,
            "scores": self.scores.tolist(),
            "loadings": self.loadings.tolist(),
            "eigenvalues": self.eigenvalues.tolist(),
            "variance_percentages": self.variance_percentages.tolist(),
            "x_mean": self.X_means.tolist(),
            "x_std": self.X_stds.tolist(),
            "converged": self.converged.tolist(),
        }


@ModelBase._register_subclass("pls")
class _PLS(ModelBase):
    """Driver class for NIPALS Partial Least Squares regression.

    Both the predictor matrix `X` and the response matrix `Y` are
    mean-centred (or autoscaled) before fitting with
    `nipals.nipals_pls`; the same statistics are applied to new data in
    `transform` and `predict`.

    Parameters
    ----------
    X : np.array
        Predictor matrix, observations x predictors.
    Y : np.array
        Response matrix, observations x responses. A 1-d array is treated
        as a single response column.
    n_components : int, optional
        Number of latent variables. Defaults to the number of predictors.
    autoscale : boolean, optional
        Scale X and Y columns to unit variance after centring. Defaults
        to False.
    max_iter : int, optional
        Maximum iterations per component. Defaults to 500.
    tol : float, optional
        Convergence tolerance on the change of the X scores. Defaults to
        1e-6.
    init : str, optional
        "variance" (default) or "random" seeding of the Y scores.
    random_state : None, int or np.random.RandomState, optional
        Seed used with `init="random"`.
    variable_names : list, optional
        Names of the columns of `X`.
    object_names : list, optional
        Names of the rows of `X` and `Y`.
    response_names : list, optional
        Names of the columns of `Y`.

    Attributes
    ----------
    X, Y : np.array
        Input matrices.
    X_pre, Y_pre : np.array
        Preprocessed copies of `X` and `Y`.
    X_means, X_stds, Y_means, Y_stds : np.array
        Preprocessing statistics (scale factors are 1.0 unless
        autoscaling).
    n_components : int
        Number of latent variables extracted.
    scores : np.array
        X scores T, observations x components.
    loadings : np.array
        X loadings P, predictors x components.
    y_loadings : np.array
        Y loadings Q, responses x components.
    weights : np.array
        X weights W, predictors x components.
    variance_percentages : np.array
        Percentage of the preprocessed X sum of squares removed by each
        component's deflation.
    n_iter : np.array
        Iterations used per component.
    converged : np.array
        Whether each component met the convergence criterion.
    """

    def __init__(
        self,
        X: np.array,
        Y: np.array,
        n_components: int = None,
        autoscale: bool = False,
        max_iter: int = nipals.MAX_ITERATIONS,
        tol: float = nipals.EPSILON,
        init: str = "variance",
        random_state=None,
        variable_names: list = None,
        object_names: list = None,
        response_names: list = None,
        **kwargs: str,
    ):
        self.method = kwargs.pop("method", "pls")
        if kwargs:
            raise TypeError(
                f"Unexpected arguments for {self._model_types[self.method]}: "
                f"{sorted(kwargs)}"
            )

        self.X = check_inputs.check_matrix(X, "X")
        Y = np.asarray(Y, dtype=float)
        if Y.ndim == 1:
            Y = Y.reshape(-1, 1)
        self.Y = check_inputs.check_matrix(Y, "Y")
        check_inputs.check_input_rows_match(self.X, self.Y)

        self.variable_names = self._get_labels(
            variable_names, self.X.shape[1], "V"
        )
        self.object_names = self._get_labels(
            object_names, self.X.shape[0], "O"
        )
        self.response_names = self._get_labels(
            response_names, self.Y.shape[1], "Y"
        )
        self.n_components = check_inputs.check_n_components(
            n_components, self.X.shape
        )
        self.autoscale = autoscale

        self.X_pre, self.X_means, self.X_stds = self._preprocess(
            self.X, self.autoscale
        )
        self.Y_pre, self.Y_means, self.Y_stds = self._preprocess(
            self.Y, self.autoscale
        )
        self._fit(max_iter, tol, init, random_state)

    @proctimer
    def _fit(self, max_iter, tol, init, random_state):
        self.components = nipals.nipals_pls(
            self.X_pre,
            self.Y_pre,
            self.n_components,
            max_iter=max_iter,
            tol=tol,
            init=init,
            random_state=random_state,
        )
        self.scores = self.components.T
        self.loadings = self.components.P
        self.y_loadings = self.components.Q
        self.weights = self.components.W
        self.n_iter = self.components.n_iter
        self.converged = self.components.converged

        # scores are unit length, so deflating by t p^T removes ||p||^2
        total = linalg.norm(self.X_pre) ** 2
        removed = np.sum(self.loadings ** 2, axis=0)
        if total == 0:
            self.variance_percentages = np.zeros_like(removed)
        else:
            self.variance_percentages = removed / total * 100

    def transform(self, X_new):
        """Projects new predictor data onto the weights, returning the
        scores `X_new` `W` in preprocessed units.
        """
        return self._preprocess_new(X_new) @ self.weights

    def predict(self, X_new):
        """Predicts the response for new predictor data.

        `X_new` is preprocessed with the training statistics of `X`, the
        fitted model is applied with `nipals.pls_predict`, and the result
        is mapped back to the original units of `Y`.

        Returns
        -------
        Y_pred : np.array
            Predicted response, rows of `X_new` x responses.
        """
        Y_pre = nipals.pls_predict(self._preprocess_new(X_new), self.components)
        return preprocess.undo_preprocessing(Y_pre, self.Y_means, self.Y_stds)

    def to_dict(self):
        return {
            "variable_names": list(self.variable_names),
            "object_names": list(self.object_names),
            "response_names": list(self.response_names),
            "num_components": self.n_components,
            "scores": self.scores.tolist(),
            "loadings": self.loadings.tolist(),
            "y_loadings": self.y_loadings.tolist(),
            "weights": self.weights.tolist(),
            "variance_percentages": self.variance_percentages.tolist(),
            "x_mean": self.X_means.tolist(),
            "x_std": self.X_stds.tolist(),
            "y_mean": self.Y_means.tolist(),
            "y_std": self.Y_stds.tolist(),
            "converged": self.converged.tolist(),
        }
