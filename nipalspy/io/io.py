import json
import logging
from collections import namedtuple
from typing import List, Union

import numpy as np
import pandas as pd

from ..core import exceptions

logger = logging.getLogger(__name__)

LabelledData = namedtuple(
    "LabelledData", ["variable_names", "object_names", "data"]
)
LabelledData.__doc__ = """Numeric matrix read from a labelled CSV file.

variable_names : list of str
    Column labels from the first row (first cell skipped).
object_names : list of str
    Row labels from the first column (header row skipped).
data : np.ndarray
    Float matrix of shape len(object_names) x len(variable_names).
"""


def read_csv(fpath: str) -> LabelledData:
    """Reads a CSV file whose first row holds variable names and whose
    first column holds object names; every other cell must be a finite
    number.

    Parameters
    ----------
    fpath : str
        Path to the CSV file.

    Returns
    -------
    LabelledData
        Variable names, object names and the numeric data.

    Raises
    ------
    DataParseError
        If the file is empty, has fewer than one data row or column, has
        rows of unequal length, or contains a cell that isn't a finite
        number.
    """
    try:
        frame = pd.read_csv(
            fpath,
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as e:
        raise exceptions.DataParseError(f"{fpath} is empty.") from e
    except pd.errors.ParserError as e:
        raise exceptions.DataParseError(
            f"Rows of unequal length in {fpath}: {e}"
        ) from e

    if frame.shape[0] < 2 or frame.shape[1] < 2:
        raise exceptions.DataParseError(
            "CSV file must contain at least one row and one column of data."
        )
    # short rows are padded with NaN by pandas
    if frame.isna().to_numpy().any():
        raise exceptions.DataParseError(f"Rows of unequal length in {fpath}.")

    variable_names = [str(v).strip() for v in frame.iloc[0, 1:]]
    object_names = [str(v).strip() for v in frame.iloc[1:, 0]]

    cells = frame.iloc[1:, 1:]
    try:
        data = cells.apply(lambda col: pd.to_numeric(col.str.strip()))
    except ValueError as e:
        raise exceptions.DataParseError(
            f"Error parsing float in {fpath}: {e}"
        ) from e
    data = data.to_numpy(dtype=float)

    if not np.all(np.isfinite(data)):
        bad = np.argwhere(~np.isfinite(data))[0]
        raise exceptions.DataParseError(
            f"Non-finite value for object {object_names[bad[0]]}, "
            f"variable {variable_names[bad[1]]} in {fpath}."
        )

    logger.info(
        "Read %d objects x %d variables from %s",
        data.shape[0],
        data.shape[1],
        fpath,
    )
    return LabelledData(variable_names, object_names, data)


def split_columns(labelled: LabelledData, names: List[str]):
    """Splits the columns called `names` off of `labelled`, returning
    (remaining, selected) as two LabelledData. Used to separate the
    response (Y) columns from the predictors (X) for PLS.
    """
    missing = [n for n in names if n not in labelled.variable_names]
    if missing:
        raise exceptions.DataParseError(f"Unknown variable(s): {missing}")

    selected = [labelled.variable_names.index(n) for n in names]
    remaining = [
        i for i in range(len(labelled.variable_names)) if i not in selected
    ]
    if not remaining:
        raise exceptions.DataParseError(
            "At least one predictor variable must remain."
        )

    def _take(idx):
        return LabelledData(
            [labelled.variable_names[i] for i in idx],
            list(labelled.object_names),
            labelled.data[:, idx],
        )

    return (_take(remaining), _take(selected))


def _as_dict(result) -> dict:
    if isinstance(result, dict):
        return result
    return result.to_dict()


def results_to_json(result, fpath: str) -> None:
    """Writes the canonical result of a fitted model (or its `to_dict()`
    output) to `fpath` as a flat JSON document.
    """
    with open(fpath, "w") as f:
        json.dump(_as_dict(result), f)
    logger.info("Results saved to %s", fpath)


def format_matrix(matrix: Union[np.ndarray, list], title: str = "Matrix") -> str:
    """Renders `matrix` as text: a header with its dimensions, one line
    per row with each cell formatted as `%9.6f`, and a closing `---`.
    """
    matrix = np.atleast_2d(np.asarray(matrix, dtype=float))
    rows, cols = matrix.shape
    lines = [f"--- {title}: Dimensions ({rows}, {cols})"]
    for row in matrix:
        lines.append(" ".join("%9.6f" % v for v in row) + " ")
    lines.append("---")
    return "\n".join(lines)


def format_results(result) -> str:
    """Renders the canonical result dict of a PCA or PLS model for the
    console.
    """
    res = _as_dict(result)
    num_components = res["num_components"]

    def _2d(values, rows):
        # keep the matrix shape when there are zero components
        return np.asarray(values, dtype=float).reshape(rows, num_components)

    out = [
        f"Variable names:\n{res['variable_names']}",
        f"Object names:\n{res['object_names']}",
        f"Number of components: {num_components}",
        format_matrix(
            _2d(res["scores"], len(res["object_names"])), "Scores (T)"
        ),
        format_matrix(
            _2d(res["loadings"], len(res["variable_names"])), "Loadings (P)"
        ),
    ]
    if "eigenvalues" in res:
        out.append(f"Eigenvalues:\n{res['eigenvalues']}")
    if "weights" in res:
        out.append(f"Response names:\n{res['response_names']}")
        out.append(
            format_matrix(
                _2d(res["weights"], len(res["variable_names"])), "Weights (W)"
            )
        )
        out.append(
            format_matrix(
                _2d(res["y_loadings"], len(res["response_names"])),
                "Y loadings (Q)",
            )
        )
    out.append(f"Variance percentages:\n{res['variance_percentages']}")
    out.append(f"X mean:\n{res['x_mean']}")
    out.append(f"X std:\n{res['x_std']}")
    if "y_mean" in res:
        out.append(f"Y mean:\n{res['y_mean']}")
        out.append(f"Y std:\n{res['y_std']}")
    out.append(f"Converged:\n{res['converged']}")
    return "\n".join(out)
