import logging
from collections import namedtuple

import numpy as np
from scipy import linalg

from . import check_inputs, exceptions
from .matrix_functions import (
    deflate,
    max_variance_column,
    norm_diff,
    normalize,
    random_unit_vector,
    stack_components,
)

logger = logging.getLogger(__name__)

# convergence tolerance and iteration cap used by NIPALS PCA
EPSILON = 1e-6
MAX_ITERATIONS = 500

# ways of seeding the first score vector of each component
INIT_METHODS = ("variance", "random")

PCAComponents = namedtuple(
    "PCAComponents", ["T", "P", "eigenvalues", "n_iter", "converged"]
)
PCAComponents.__doc__ = """Result of `nipals_pca`.

T : np.array
    Scores matrix of shape R x n_components.
P : np.array
    Loadings matrix of shape C x n_components.
eigenvalues : np.array
    Squared norm of each column of `T`.
n_iter : np.array
    Number of inner iterations run for each component.
converged : np.array
    Boolean flag per component; False when the iteration cap was hit or
    the data was degenerate.
"""

PLSComponents = namedtuple(
    "PLSComponents", ["T", "P", "Q", "W", "n_iter", "converged"]
)
PLSComponents.__doc__ = """Result of `nipals_pls`.

T : np.array
    X scores, R x n_components.
P : np.array
    X loadings, Cx x n_components.
Q : np.array
    Y loadings, Cy x n_components.
W : np.array
    X weights, Cx x n_components.
n_iter : np.array
    Number of inner iterations run for each component.
converged : np.array
    Boolean flag per component.
"""


def _check_engine_params(n_components, max_iter, tol, init):
    if int(n_components) != n_components or n_components < 0:
        raise exceptions.InvalidParameterError(
            f"Number of components must be a non-negative integer, "
            f"got {n_components}."
        )
    if int(max_iter) != max_iter or max_iter < 1:
        raise exceptions.InvalidParameterError(
            f"Maximum number of iterations must be a positive integer, "
            f"got {max_iter}."
        )
    if not tol > 0:
        raise exceptions.InvalidParameterError(
            f"Tolerance must be positive, got {tol}."
        )
    if init not in INIT_METHODS:
        raise exceptions.InvalidParameterError(
            f"Invalid init method {init}; expected one of {INIT_METHODS}."
        )


def _initial_vector(M, init, random_state):
    """Starting vector for one component: either the column of `M` with
    the highest variance, or a random unit vector drawn from
    `random_state`.
    """
    if init == "random":
        return random_unit_vector(M.shape[0], random_state)
    return M[:, max_variance_column(M)].copy()


def nipals_pca(
    X,
    n_components,
    tol=EPSILON,
    max_iter=MAX_ITERATIONS,
    init="variance",
    random_state=None,
):
    """Principal Component Analysis using the Non-linear Iterative Partial
    Least Squares (NIPALS) algorithm.

    Components are extracted one at a time. For each component:

    1) The score vector `t` is seeded with the residual column of highest
       variance (or a random unit vector when `init="random"`).

    2) The loading vector `p` = `X`^T `t` is computed and normalized to
       unit length. If `p` has zero norm the data is degenerate and the
       loop stops.

    3) A candidate score vector `t_new` = `X` `p` is computed. Iteration
       stops once the norm of `t_new` exceeds the norm of `t` by less
       than `tol`; otherwise `t` becomes `t_new` and step 2 repeats, at
       most `max_iter` times.

    4) `t` and `p` are stored and their outer product is subtracted from
       the residual matrix before the next component is extracted.

    `X` must already be mean-centred (and usually autoscaled); no
    centring is done here. `X` itself is not modified.

    Parameters
    ----------
    X : np.array
        Preprocessed data matrix of shape RxC.
    n_components : int
        Number of principal components to compute.
    tol : float, optional
        Convergence tolerance on the growth of the score vector's norm.
        Defaults to 1e-6.
    max_iter : int, optional
        Maximum number of iterations per component. Defaults to 500.
    init : str, optional
        "variance" (default, deterministic) or "random".
    random_state : None, int or np.random.RandomState, optional
        Seed for `init="random"`. Ignored otherwise.

    Returns
    -------
    PCAComponents
        Named tuple of scores `T`, loadings `P`, `eigenvalues`, `n_iter`
        and `converged`.
    """
    _check_engine_params(n_components, max_iter, tol, init)
    n_components = int(n_components)

    X_res = np.array(X, dtype=float, copy=True)
    rows, cols = X_res.shape

    T = np.zeros((rows, n_components))
    P = np.zeros((cols, n_components))
    n_iter = np.zeros(n_components, dtype=int)
    converged = np.zeros(n_components, dtype=bool)
    if init == "random" and not isinstance(
        random_state, np.random.RandomState
    ):
        random_state = np.random.RandomState(random_state)

    for i in range(n_components):
        t = _initial_vector(X_res, init, random_state)
        p = np.zeros(cols)

        for j in range(max_iter):
            p = X_res.T @ t
            if linalg.norm(p) == 0:
                break
            normalize(p)

            t_new = X_res @ p
            if linalg.norm(t_new) - linalg.norm(t) < tol:
                converged[i] = True
                break
            t = t_new
        n_iter[i] = j + 1

        T[:, i] = t
        P[:, i] = p
        deflate(X_res, t, p)

        if converged[i]:
            logger.debug(
                "PCA component %d converged after %d iterations",
                i + 1,
                n_iter[i],
            )
        else:
            logger.warning(
                "PCA component %d did not converge in %d iterations",
                i + 1,
                n_iter[i],
            )

    # squared norm of each stored score column
    eigenvalues = np.array(
        [linalg.norm(T[:, i]) ** 2 for i in range(n_components)]
    )
    return PCAComponents(T, P, eigenvalues, n_iter, converged)


def nipals_pls(
    X,
    Y,
    n_components,
    max_iter=MAX_ITERATIONS,
    tol=EPSILON,
    init="variance",
    random_state=None,
):
    """Partial Least Squares regression using the NIPALS algorithm.

    For each component the response score `u` is seeded (highest-variance
    column of the Y residual by default, a random unit vector for
    `init="random"`) and the following is repeated up to `max_iter`
    times:

    1) `w` = `X`^T `u`, normalized to unit length.

    2) `t` = `X` `w`, normalized to unit length. Iteration stops once the
       norm of the difference between `t` and the previous `t` is below
       `tol`. A zero `t` (exhausted residual) also stops iteration, but
       the component is not flagged as converged and its `p` and `q`
       are zero.

    3) `p` = `X`^T `t` and `q` = `Y`^T `u`.

    4) `u` = `Y` `q`, normalized to unit length.

    The last `w`, `p` and `q` of each component are kept, and `X` and `Y`
    residuals are deflated by the outer products of (`t`, `p`) and
    (`t`, `q`). `X` and `Y` must already be mean-centred; neither is
    modified.

    Parameters
    ----------
    X : np.array
        Preprocessed predictor matrix of shape R x Cx.
    Y : np.array
        Preprocessed response matrix of shape R x Cy.
    n_components : int
        Number of latent variables to extract.
    max_iter : int, optional
        Maximum number of iterations per component. Defaults to 500.
    tol : float, optional
        Convergence tolerance on the change in `t`. Defaults to 1e-6.
    init : str, optional
        "variance" (default, deterministic) or "random".
    random_state : None, int or np.random.RandomState, optional
        Seed for `init="random"`. Ignored otherwise.

    Returns
    -------
    PLSComponents
        Named tuple of `T`, `P`, `Q`, `W`, `n_iter` and `converged`.

    Raises
    ------
    ComponentStackError
        If the per-component loadings and weights cannot be assembled
        into matrices, e.g. when `n_components` is 0.
    """
    _check_engine_params(n_components, max_iter, tol, init)
    n_components = int(n_components)

    X_res = np.array(X, dtype=float, copy=True)
    Y_res = np.array(Y, dtype=float, copy=True)
    check_inputs.check_input_rows_match(X_res, Y_res)
    rows = X_res.shape[0]

    T = np.zeros((rows, n_components))
    P, Q, W = [], [], []
    n_iter = np.zeros(n_components, dtype=int)
    converged = np.zeros(n_components, dtype=bool)
    if init == "random" and not isinstance(
        random_state, np.random.RandomState
    ):
        random_state = np.random.RandomState(random_state)

    for c in range(n_components):
        u = normalize(_initial_vector(Y_res, init, random_state))
        t_old = None
        t = np.zeros(rows)
        p = np.zeros(X_res.shape[1])
        q = np.zeros(Y_res.shape[1])

        for iteration in range(max_iter):
            w = normalize(X_res.T @ u)
            t = normalize(X_res @ w)
            # exhausted residual: nothing left to extract
            if linalg.norm(t) == 0:
                break

            if norm_diff(t, t_old) < tol:
                converged[c] = True
                break
            t_old = t

            p = X_res.T @ t
            q = Y_res.T @ u
            u = normalize(Y_res @ q)
        n_iter[c] = iteration + 1

        T[:, c] = t
        W.append(w)
        P.append(p)
        Q.append(q)

        deflate(X_res, t, p)
        deflate(Y_res, t, q)

        if converged[c]:
            logger.debug(
                "PLS component %d converged after %d iterations",
                c + 1,
                n_iter[c],
            )
        else:
            logger.warning(
                "PLS component %d did not converge in %d iterations",
                c + 1,
                n_iter[c],
            )

    return PLSComponents(
        T,
        stack_components(P),
        stack_components(Q),
        stack_components(W),
        n_iter,
        converged,
    )


def pls_predict(X_new, components):
    """Applies a fitted PLS model to new (preprocessed) predictor data.

    Computes the projected scores `X_new` `W` and returns the predicted
    response (`X_new` `W`) `Q`^T.

    Parameters
    ----------
    X_new : np.array
        Preprocessed predictor matrix, R_new x Cx.
    components : PLSComponents
        Fitted model; only `W` and `Q` are used.

    Returns
    -------
    Y_pred : np.array
        Predicted (preprocessed) response of shape R_new x Cy, i.e. one
        column per response (per row of `Q`).
    """
    W, Q = components.W, components.Q
    if X_new.ndim != 2 or X_new.shape[1] != W.shape[0]:
        raise exceptions.InputMatrixDimensionMismatchError(
            f"New data has shape {X_new.shape}; expected {W.shape[0]} "
            "columns to match the rows of W."
        )
    if W.shape[1] != Q.shape[1]:
        raise exceptions.InputMatrixDimensionMismatchError(
            f"W has {W.shape[1]} components but Q has {Q.shape[1]}."
        )
    T_new = X_new @ W
    return T_new @ Q.T


def variance_percentage(eigenvalues):
    """Percentage of the total of `eigenvalues` accounted for by each
    eigenvalue. An all-zero vector gives all-zero percentages.
    """
    eigenvalues = np.asarray(eigenvalues, dtype=float)
    total = np.sum(eigenvalues)
    if total == 0:
        return np.zeros_like(eigenvalues)
    return eigenvalues / total * 100
