import numpy as np
from scipy import linalg

from . import exceptions


def normalize(x):
    """Rescales vector `x` in place to unit Euclidean length. A vector
    whose norm is exactly zero is left unchanged.

    Parameters
    ----------
    x : np.array
        Floating-point vector to normalize. Modified in place.

    Returns
    -------
    x : np.array
        The same (now unit-length) vector, returned for convenience.
    """
    norm = linalg.norm(x)
    if norm != 0:
        x /= norm
    return x


def norm_diff(a, b):
    """Euclidean norm of `a` - `b`.

    Returns positive infinity if either operand is None, i.e. when there
    is nothing to compare against yet.
    """
    if a is None or b is None:
        return np.inf
    return linalg.norm(a - b)


def deflate(X, t, p):
    """Subtracts the outer product of score vector `t` and loading vector
    `p` from `X` in place, removing the part of `X` explained by one
    component.

    Parameters
    ----------
    X : np.array
        Residual matrix of shape RxC. Modified in place.
    t : np.array
        Score vector of length R.
    p : np.array
        Loading vector of length C.

    Returns
    -------
    X : np.array
        The deflated residual matrix.
    """
    X -= np.outer(t, p)
    return X


def stack_components(vectors):
    """Stacks a list of per-component vectors column-wise into a single
    matrix, so that column `i` holds the vector of component `i`.

    Parameters
    ----------
    vectors : list of np.array
        Component vectors, all of the same length.

    Returns
    -------
    stacked : np.array
        Matrix of shape (len(vectors[0]), len(vectors)).

    Raises
    ------
    ComponentStackError
        If `vectors` is empty or the vectors differ in length.
    """
    if len(vectors) == 0:
        raise exceptions.ComponentStackError("No component vectors to stack.")

    length = vectors[0].shape[0]
    for i, v in enumerate(vectors):
        if v.ndim != 1 or v.shape[0] != length:
            raise exceptions.ComponentStackError(
                f"Component vector {i} has shape {v.shape}; "
                f"expected ({length},)."
            )
    return np.column_stack(vectors)


def column_variance(X):
    """Population variance (divisor R) of each column of `X`."""
    return np.var(X, axis=0)


def max_variance_column(X):
    """Returns the index of the column of `X` with the largest population
    variance. If no column has a variance above zero, 0 is returned.
    Ties resolve to the lowest index.
    """
    variances = column_variance(X)
    if variances.size == 0 or not np.any(variances > 0):
        return 0
    return int(np.argmax(variances))


def random_unit_vector(length, random_state=None):
    """Draws a vector of uniform [0, 1) values of length `length` and
    scales it to unit norm.

    Parameters
    ----------
    length : int
        Length of the vector.
    random_state : None, int or np.random.RandomState, optional
        Seed or generator. None draws from fresh OS entropy, so results
        are not reproducible between runs.
    """
    if not isinstance(random_state, np.random.RandomState):
        random_state = np.random.RandomState(random_state)
    return normalize(random_state.rand(length))
