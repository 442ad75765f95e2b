import functools
import logging
from time import process_time

logger = logging.getLogger(__name__)


def proctimer(fct):
    """Function wrapper that times runtime (without sleeps) of input
    function. Returns value of function passed into wrapper and
    additionally logs the process time of function.

    Parameters
    ----------
    fct : function
          Function with arbitrary number of arguments.

    Returns
    -------
    res : arbitrary
          Return value of function `fct` passed into wrapper.
    """

    @functools.wraps(fct)
    def wrap_timer(*args, **kwargs):
        start = process_time()
        res = fct(*args, **kwargs)
        end = process_time()
        total = end - start
        logger.info("%s finished in %.6f seconds", fct.__qualname__, total)
        return res

    return wrap_timer
