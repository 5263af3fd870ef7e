"""
Utility functions and package-wide constants.
"""

import numpy as np

from .exceptions import InvalidShapeError


# Magnitudes below this are treated as zero everywhere in the package
EPSILON = 1e-10

# Fixed-point digits used when numbers are rendered without fractions
DISPLAY_DIGITS = 4

# Rational search tries 10**0 .. 10**(MAX_DENOMINATOR_EXPONENT - 1), then
# settles on 10**MAX_DENOMINATOR_EXPONENT
MAX_DENOMINATOR_EXPONENT = 15


def resolve_tol(tol):
    """Return the tolerance to use for a call (default EPSILON)."""
    return EPSILON if tol is None else float(tol)


def check_matrix(matrix, name='matrix'):
    """
    Validate a rectangular matrix and return a float64 copy of it.

    Parameters
    ----------
    matrix : sequence of sequences or ndarray
        Rows outer, columns inner
    name : str
        Name used in error messages

    Returns
    -------
    ndarray, shape (m, n)
        Fresh float64 array; never shares memory with the input

    Raises
    ------
    InvalidShapeError
        If the input is not 2-D, has no rows or columns, or is ragged
    """
    if isinstance(matrix, np.ndarray) and matrix.ndim != 2:
        raise InvalidShapeError(f"{name} must be 2-dimensional")

    if isinstance(matrix, (str, bytes)):
        raise InvalidShapeError(f"{name} must be a sequence of rows")

    rows = []
    try:
        for i, row in enumerate(matrix):
            if isinstance(row, (str, bytes)):
                raise InvalidShapeError(f"Row {i + 1} of {name} is a string, not a row of numbers")
            rows.append(list(row))
    except TypeError:
        raise InvalidShapeError(f"{name} must be a sequence of rows")

    if not rows:
        raise InvalidShapeError(f"{name} must have at least one row")

    n_cols = len(rows[0])
    if n_cols == 0:
        raise InvalidShapeError(f"{name} must have at least one column")

    for i, row in enumerate(rows):
        if len(row) != n_cols:
            raise InvalidShapeError(
                f"Row {i + 1} of {name} has {len(row)} entries, expected {n_cols}"
            )

    try:
        X = np.array(rows, dtype=np.float64)
    except ValueError:
        raise InvalidShapeError(f"{name} entries must be single numbers")
    if X.ndim != 2:
        raise InvalidShapeError(f"{name} must be 2-dimensional")
    return X


def check_finite(X, name='matrix'):
    """Reject matrices containing NaN or Inf."""
    if not np.all(np.isfinite(X)):
        raise ValueError(f"{name} contains NaN or Inf")
    return X


def is_square(X) -> bool:
    """Whether a validated matrix has as many rows as columns."""
    return X.shape[0] == X.shape[1]
