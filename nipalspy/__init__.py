import sys

from . import __docs__
from .core import (
    check_inputs,
    decorators,
    driver,
    exceptions,
    matrix_functions,
    model_classes,
    nipals,
    preprocess,
)
from .core.driver import NIPALS, PCA, PLS, methods
from .io import io

# __init__.py docstring assembled using blocks also used in
# other files. Docstrings found in __docs__.py
sys.modules[__name__].__doc__ = __docs__.nipalspy_header
sys.modules[__name__].__doc__ += __docs__.nipalspy_body

__version__ = "0.1.0"
