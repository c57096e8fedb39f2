# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

"""Utility methods."""

import numbers
import warnings
import numpy as np
import pandas as pd
from sklearn.utils import check_array

DOUBLE = np.float64
INTP = np.intp


class InvalidInputError(ValueError):
    """Raised when the arguments of a tree search are malformed or inconsistent.

    Subclasses :class:`ValueError`, so callers that already guard against scikit-learn style
    validation errors keep working.
    """


def _check_matrix(A, name):
    try:
        A = check_array(A, dtype=DOUBLE, ensure_2d=True, ensure_min_samples=1,
                        ensure_min_features=0, accept_sparse=False)
    except ValueError as exc:
        raise InvalidInputError("Invalid {}: {}".format(name, exc)) from exc
    return A


def check_int_param(value, name, minimum):
    """Check that `value` is an integer no smaller than `minimum` and return it as an `int`."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError("{} must be an integer, got {!r}".format(name, value))
    if value < minimum:
        raise InvalidInputError("{} must be at least {}, got {}".format(name, minimum, value))
    return int(value)


def check_search_inputs(X, Y, depth, split_step=1, min_node_size=1):
    """Validate the arguments of a policy tree search.

    Parameters
    ----------
    X : array_like of shape (n, p)
        Covariates. Must be finite; ``p`` may be zero.

    Y : array_like of shape (n, d)
        Rewards of each of the ``d >= 2`` actions for every observation.

    depth : int
        Maximum depth of the tree, non-negative.

    split_step : int, default 1
        Positive threshold decimation step.

    min_node_size : int, default 1
        Positive minimum number of observations per leaf.

    Returns
    -------
    X, Y : ndarray
        Contiguous float64 copies (or views) of the inputs.

    depth, split_step, min_node_size : int

    Raises
    ------
    InvalidInputError
        If any of the arguments is malformed.
    """
    depth = check_int_param(depth, "depth", 0)
    split_step = check_int_param(split_step, "split_step", 1)
    min_node_size = check_int_param(min_node_size, "min_node_size", 1)
    X = _check_matrix(X, "X")
    Y = _check_matrix(Y, "Y")
    if X.shape[0] != Y.shape[0]:
        raise InvalidInputError("X and Y have incompatible numbers of rows: {} and {}".format(
            X.shape[0], Y.shape[0]))
    if Y.shape[1] < 2:
        raise InvalidInputError("Y must have at least two action columns, got {}".format(Y.shape[1]))
    return np.ascontiguousarray(X), np.ascontiguousarray(Y), depth, split_step, min_node_size


def get_input_columns(X, prefix="X"):
    """Extracts column names from dataframe-like input object.

    Currently supports column name extraction from pandas DataFrame and Series objects.

    Parameters
    ----------
    X : array_like or None
        Input array with column names to be extracted.

    prefix: str, default "X"
        If input array doesn't have column names, a default using the naming scheme
        "{prefix}{column number}" will be returned.

    Returns
    -------
    cols: list of str or None
        List of columns corresponding to the input object, None if `X` is None.
    """
    if X is None:
        return None
    if np.ndim(X) == 0:
        raise ValueError(
            f"Expected array_like object for input with prefix {prefix} but got '{X}' object instead.")
    type_to_func = {
        pd.DataFrame: lambda x: x.columns.tolist(),
        pd.Series: lambda x: [x.name]
    }
    if type(X) in type_to_func:
        column_names = type_to_func[type(X)](X)

        if not all(isinstance(item, str) for item in column_names):
            warnings.warn("Not all column names are strings. Coercing to strings for now.", UserWarning)

        return [str(item) for item in column_names]

    len_X = 1 if np.ndim(X) == 1 else np.asarray(X).shape[1]
    return [f"{prefix}{i}" for i in range(len_X)]
