"""
File containing docstrings for various methods, modules, and files
in nipalspy. Can be combined as needed to make full docstrings for
functions and modules.
"""

nipalspy_header = """
nipalspy
========

nipalspy computes Principal Component Analysis (PCA) and Partial Least
Squares (PLS) regression models with the NIPALS (Non-linear Iterative
Partial Least Squares) algorithm.

In addition to the model drivers, this package also contains the following modules:

matrix_functions
    vector normalization, norm differences, deflation and component stacking
preprocess
    column means/standard deviations, mean-centring and autoscaling
nipals
    the NIPALS PCA and PLS engines, PLS prediction and variance percentages
model_classes
    Source code for each model (called by NIPALS)
check_inputs
    Validation of input matrices and parameters
exceptions
    Houses custom exceptions used within nipalspy
io
    CSV ingestion and JSON/console export of results

"""


nipalspy_body = """
Basic usage examples:

    Note: PCA takes one required argument, the 2-d data matrix X
    (observations x variables). PLS takes two, X and the response
    matrix Y. Inputs are mean-centred by the model; pass
    autoscale=True to also scale each variable to unit variance.

    Principal Component Analysis:

        >>> result = nipalspy.NIPALS(X, n_components=3, method="pca")

    Autoscaled PCA with every component:

        >>> result = nipalspy.NIPALS(X, autoscale=True)

    Partial Least Squares regression:

        >>> result = nipalspy.NIPALS(X, Y, n_components=2, method="pls")
        >>> Y_hat = result.predict(X_new)

To see documentation on additional arguments and fields available,
call help on a specific method (see below for details).

To get help documentation on a particular method, type the following
in a Python interpreter after loading the module:
    >>> import nipalspy
    >>> help(nipalspy.methods["<methodname>"])

Where <methodname> is the string of one of the methods shown below.

Available methods:

    "pca" - NIPALS Principal Component Analysis

    "pls" - NIPALS Partial Least Squares Regression


Note: calling
    >>> help(nipalspy.NIPALS)

will show you this same help page.
"""

nipals_wrapper_header = """
Front-facing wrapper function for NIPALS that captures user input
and extracts the user-specified method. If no method is specified,
PCA is used.

"""
