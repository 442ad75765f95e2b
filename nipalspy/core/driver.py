from typing import Type

import numpy as np

from .. import __docs__

# project imports
from . import model_classes

# dictionary holding NIPALS methods; used with help()
methods = {
    "pca": model_classes._PCA,
    "pls": model_classes._PLS,
}


def NIPALS(*args: np.ndarray, **kwargs: str) -> Type[model_classes.ModelBase]:
    """
    Driver function for NIPALS. This function collects arguments from the
    user, passes them to the specified model, and returns the result.

    To read more on each model, see the docs for them under
    `model_classes`.

    Parameters
    ----------
    *args : np.ndarray
        Positional (required) arguments for the model. Passed into
        `model_classes`.
    **kwargs : str
        Keyword (optional) arguments for the model. Passed into
        `model_classes`.
    Returns
    -------
    Type[model_classes.ModelBase]
        Fitted model from the specified method. See docs of
        `model_classes` for info on exact return values/types.
    """
    method = kwargs.pop("method", "pca")
    kwargs["method"] = method

    # return fitted model with user-specified method
    return model_classes.ModelBase._create(method, *args, **kwargs)


def PCA(X: np.ndarray, **kwargs: str) -> model_classes._PCA:
    """Shortcut for `NIPALS(X, method="pca", ...)`."""
    return NIPALS(X, method="pca", **kwargs)


def PLS(X: np.ndarray, Y: np.ndarray, **kwargs: str) -> model_classes._PLS:
    """Shortcut for `NIPALS(X, Y, method="pls", ...)`."""
    return NIPALS(X, Y, method="pls", **kwargs)


# docstring assembled using blocks also used in
# other files. Docstrings found in __docs__.py
NIPALS.__doc__ = __docs__.nipals_wrapper_header
NIPALS.__doc__ += __docs__.nipalspy_body
