import logging

import numpy as np

logger = logging.getLogger(__name__)


def column_mean(X):
    """Mean of each column of `X`.

    Parameters
    ----------
    X : np.array
        Input matrix of shape RxC.

    Returns
    -------
    means : np.array
        Vector of length C.
    """
    return np.mean(X, axis=0)


def column_std(X):
    """Population standard deviation (divisor R, not R-1) of each column
    of `X`.

    Parameters
    ----------
    X : np.array
        Input matrix of shape RxC.

    Returns
    -------
    stds : np.array
        Vector of length C.
    """
    return np.std(X, axis=0, ddof=0)


def mean_centre(X):
    """Subtracts each column's mean from that column. `X` itself is left
    untouched.

    Parameters
    ----------
    X : np.array
        Input matrix of shape RxC.

    Returns
    -------
    X_mc : np.array
        Mean-centred copy of `X`.
    X_means : np.array
        Column means that were subtracted.
    """
    X_means = column_mean(X)
    X_mc = X - X_means
    return (X_mc, X_means)


def scale_by_std(X):
    """Divides each column of `X` by its population standard deviation.

    Columns with zero standard deviation cannot be scaled; they are
    divided by 1.0 instead and the returned standard deviation for that
    column is recorded as 1.0 so that new data is treated the same way.

    Parameters
    ----------
    X : np.array
        Input matrix of shape RxC.

    Returns
    -------
    X_scaled : np.array
        Scaled copy of `X`.
    X_stds : np.array
        Scale factor used for each column.
    """
    X_stds = column_std(X)
    constant = X_stds == 0
    if np.any(constant):
        logger.warning(
            "Columns %s have zero standard deviation; using a scale "
            "factor of 1.0 for them.",
            np.flatnonzero(constant).tolist(),
        )
        X_stds = np.where(constant, 1.0, X_stds)
    X_scaled = X / X_stds
    return (X_scaled, X_stds)


def autoscale(X):
    """Mean-centres `X` and then scales each column to unit variance.

    Returns
    -------
    X_as : np.array
        Centred and scaled copy of `X`.
    X_means : np.array
        Column means of `X`.
    X_stds : np.array
        Column standard deviations of the centred matrix (1.0 for
        constant columns).
    """
    X_mc, X_means = mean_centre(X)
    X_as, X_stds = scale_by_std(X_mc)
    return (X_as, X_means, X_stds)


def apply_preprocessing(X, X_means, X_stds=None):
    """Centres (and optionally scales) new data `X` using statistics
    computed on training data.
    """
    X_pre = X - X_means
    if X_stds is not None:
        X_pre = X_pre / X_stds
    return X_pre


def undo_preprocessing(X, X_means, X_stds=None):
    """Maps preprocessed data back to its original units; inverse of
    `apply_preprocessing`.
    """
    if X_stds is not None:
        X = X * X_stds
    return X + X_means
