"""
Determinant and inverse of square matrices.
"""

import logging
from typing import Optional

import numpy as np

from .._utils import check_matrix, is_square, resolve_tol
from .elimination import eliminate

logger = logging.getLogger(__name__)


def determinant(matrix, tol: Optional[float] = None) -> Optional[float]:
    """
    Determinant via upper-triangularization with partial pivoting.

    Parameters
    ----------
    matrix : array_like, shape (n, n)
        Matrix to evaluate (not modified)
    tol : float, optional
        Pivot magnitude below which the matrix is singular (default 1e-10)

    Returns
    -------
    det : float or None
        None if the matrix is not square, 0.0 as soon as a column has no
        usable pivot, otherwise the pivot product times (-1)**swaps
    """
    tol = resolve_tol(tol)
    mat = check_matrix(matrix)
    if not is_square(mat):
        return None

    n = mat.shape[0]
    det = 1.0
    swaps = 0

    for col in range(n):
        pivot_row = col + int(np.argmax(np.abs(mat[col:, col])))

        if abs(mat[pivot_row, col]) < tol:
            logger.debug("Singular: no pivot in column %d", col)
            return 0.0

        if pivot_row != col:
            mat[[col, pivot_row]] = mat[[pivot_row, col]]
            swaps += 1

        det *= float(mat[col, col])

        # Eliminate below the diagonal only
        for i in range(col + 1, n):
            factor = mat[i, col] / mat[col, col]
            mat[i, col:] -= factor * mat[col, col:]

    return det if swaps % 2 == 0 else -det


def inverse(matrix, tol: Optional[float] = None) -> Optional[np.ndarray]:
    """
    Inverse via Gauss-Jordan elimination of [A | I].

    Parameters
    ----------
    matrix : array_like, shape (n, n)
        Matrix to invert (not modified)
    tol : float, optional
        Zero tolerance (default 1e-10)

    Returns
    -------
    inv : ndarray or None
        None if the matrix is not square or the left block of the reduced
        augmented matrix is not the identity (singular)

    Notes
    -----
    Invertibility is decided by the identity check alone, never by the
    determinant.
    """
    tol = resolve_tol(tol)
    A = check_matrix(matrix)
    if not is_square(A):
        return None

    n = A.shape[0]
    augmented = np.hstack([A, np.eye(n)])
    rref = eliminate(augmented, tol=tol).rref

    if np.any(np.abs(rref[:, :n] - np.eye(n)) > tol):
        logger.debug("Left block is not the identity; matrix is singular")
        return None

    return rref[:, n:].copy()
