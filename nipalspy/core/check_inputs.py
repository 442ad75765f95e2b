import logging

import numpy as np

from . import exceptions

logger = logging.getLogger(__name__)


def check_matrix(M, name="X"):
    """Casts `M` to a 2-d float array and makes sure it is non-empty and
    contains only finite values.
    """
    M = np.asarray(M, dtype=float)
    if M.ndim != 2:
        raise exceptions.ImproperShapeError(
            f"Input matrix {name} must be 2-dimensional; got {M.ndim} "
            "dimension(s)."
        )
    if M.shape[0] < 1 or M.shape[1] < 1:
        raise exceptions.ImproperShapeError(
            f"Input matrix {name} must have at least one row and one "
            f"column; got shape {M.shape}."
        )
    if not np.all(np.isfinite(M)):
        raise exceptions.NonFiniteValueError(
            f"Input matrix {name} contains NaN or infinite values."
        )
    return M


def check_input_rows_match(X, Y):
    """X and Y must describe the same observations."""

    if X.shape[0] != Y.shape[0]:
        raise exceptions.InputMatrixDimensionMismatchError(
            f"Number of rows of X ({X.shape[0]}) does not match "
            f"number of rows of Y ({Y.shape[0]})."
        )


def check_input_columns_match(X_new, X_means):
    """New data must have one column per variable the model was fit on."""

    if X_new.shape[1] != len(X_means):
        raise exceptions.InputMatrixDimensionMismatchError(
            f"New data has {X_new.shape[1]} columns; model was fit on "
            f"{len(X_means)} variables."
        )


def check_n_components(n_components, X_shape):
    """Resolves the number of components to compute.

    A value of None or <= 0 means "as many as there are variables",
    matching the command-line default. More components than
    min(rows, columns) are allowed but can't be meaningful, so a warning
    is logged.
    """
    if n_components is None or n_components <= 0:
        n_components = X_shape[1]
    if int(n_components) != n_components:
        raise exceptions.InvalidParameterError(
            f"Number of components must be an integer, got {n_components}."
        )
    n_components = int(n_components)

    if n_components > min(X_shape):
        logger.warning(
            "Requested %d components but the data is %dx%d; components "
            "beyond %d carry no information.",
            n_components,
            X_shape[0],
            X_shape[1],
            min(X_shape),
        )
    return n_components
