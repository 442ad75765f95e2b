# define exceptions for error handling


class Error(Exception):
    """Base class for the following exceptions."""

    pass


class ImproperShapeError(Error):
    """Exception raised when a matrix has the incorrect shape."""

    pass


class InputMatrixDimensionMismatchError(Error):
    """Exception raised when the dimensions of two matrices used together
    (e.g. X and Y, or new data and a fitted weight matrix) don't match.
    """

    pass


class NonFiniteValueError(Error):
    """Raised when an input matrix contains NaN or infinite values."""

    pass


class ComponentStackError(Error):
    """Raised when per-component vectors cannot be stacked into a matrix,
    either because there are none or because their lengths differ.
    """

    pass


class InvalidParameterError(Error):
    """Raised when a parameter is outside of its valid range."""

    pass


class DataParseError(Error):
    """Raised when an input data file cannot be parsed into a numeric
    matrix with labels.
    """

    pass
