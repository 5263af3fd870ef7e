"""
Gauss-Jordan elimination with partial pivoting.

Reduces a matrix to RREF in a single forward sweep: each pivot is scaled
to 1 and cleared above and below as soon as it is found, so the recorded
row operations form one linear timeline with no back-substitution phase.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, List

import numpy as np

from .._utils import check_matrix, resolve_tol
from ..rational import format_value

logger = logging.getLogger(__name__)


class StepKind(Enum):
    """Elementary row operation types."""
    SWAP = "swap"
    SCALE = "scale"
    ELIMINATE = "eliminate"


@dataclass(frozen=True)
class PivotPosition:
    """Location of a leading 1 in the RREF."""
    row: int
    col: int


@dataclass(frozen=True, eq=False)
class EliminationStep:
    """
    One recorded row operation.

    Attributes
    ----------
    kind : StepKind
        Operation type
    row : int
        SWAP: first row; SCALE: scaled row; ELIMINATE: target row
    other_row : int or None
        SWAP: second row; ELIMINATE: pivot row used as source
    factor : float or None
        SCALE: 1 / pivot value; ELIMINATE: multiple of the pivot row
        subtracted from the target row
    divisor : float or None
        SCALE: the pivot value the row was divided by
    description : str
        Human-readable form, e.g. ``"R2 ← R2 - 3.0000·R1"``
    matrix : ndarray
        Read-only snapshot of the whole matrix after this operation
    """
    kind: StepKind
    row: int
    other_row: Optional[int]
    factor: Optional[float]
    divisor: Optional[float]
    description: str
    matrix: np.ndarray

    def apply(self, matrix) -> np.ndarray:
        """
        Replay this operation on a copy of ``matrix``.

        Applied in order to the original input, the steps reproduce every
        snapshot bit for bit.
        """
        out = np.array(matrix, dtype=np.float64)
        if self.kind is StepKind.SWAP:
            out[[self.row, self.other_row]] = out[[self.other_row, self.row]]
        elif self.kind is StepKind.SCALE:
            out[self.row] = out[self.row] / self.divisor
        else:
            out[self.row] = out[self.row] - self.factor * out[self.other_row]
        return out


@dataclass(frozen=True, eq=False)
class EliminationResult:
    """Result of Gauss-Jordan elimination."""
    rref: np.ndarray                      # Reduced row-echelon form (read-only)
    steps: Tuple[EliminationStep, ...]    # Row operations in the order applied
    pivots: Tuple[PivotPosition, ...]     # Pivot positions, by row

    @property
    def rank(self) -> int:
        return len(self.pivots)

    @property
    def pivot_columns(self) -> List[int]:
        return [p.col for p in self.pivots]


def _snapshot(mat: np.ndarray) -> np.ndarray:
    snap = mat.copy()
    snap.flags.writeable = False
    return snap


def eliminate(
    matrix,
    show_fractions: bool = False,
    tol: Optional[float] = None,
) -> EliminationResult:
    """
    Reduce a matrix to reduced row-echelon form.

    Parameters
    ----------
    matrix : array_like, shape (m, n)
        Rectangular matrix with at least one row and one column.
        Never modified.
    show_fractions : bool
        Write numbers in step descriptions as fractions
    tol : float, optional
        Magnitude below which a value counts as zero (default 1e-10)

    Returns
    -------
    result : EliminationResult
        RREF, recorded steps and pivot positions

    Raises
    ------
    InvalidShapeError
        If ``matrix`` is ragged or empty

    Notes
    -----
    Algorithm, for each column while unreduced rows remain:
    1. Pick the row with the largest magnitude in the column (partial
       pivoting); skip the column if that magnitude is below ``tol``
    2. Swap it into place
    3. Scale the pivot row so the pivot is 1
    4. Subtract multiples of it from every other row with a non-zero
       entry in the column

    No-op swaps, scales and eliminations are not recorded. Entries below
    ``tol`` are zeroed at the end without a step, so the last snapshot
    matches ``rref`` only up to ``tol``.
    """
    tol = resolve_tol(tol)
    mat = check_matrix(matrix)
    m, n = mat.shape

    def fmt(value):
        return format_value(value, show_fractions)

    steps = []
    pivots = []
    current_row = 0

    for col in range(n):
        if current_row >= m:
            break

        pivot_row = current_row + int(np.argmax(np.abs(mat[current_row:, col])))
        if abs(mat[pivot_row, col]) < tol:
            logger.debug("Column %d has no pivot below row %d", col, current_row)
            continue

        if pivot_row != current_row:
            mat[[current_row, pivot_row]] = mat[[pivot_row, current_row]]
            steps.append(EliminationStep(
                kind=StepKind.SWAP,
                row=current_row,
                other_row=pivot_row,
                factor=None,
                divisor=None,
                description=f"R{current_row + 1} ↔ R{pivot_row + 1}",
                matrix=_snapshot(mat),
            ))

        pivots.append(PivotPosition(current_row, col))
        logger.debug("Pivot at (%d, %d)", current_row, col)

        pivot_val = float(mat[current_row, col])
        if abs(pivot_val - 1) > tol:
            mat[current_row] = mat[current_row] / pivot_val
            steps.append(EliminationStep(
                kind=StepKind.SCALE,
                row=current_row,
                other_row=None,
                factor=1 / pivot_val,
                divisor=pivot_val,
                description=(f"R{current_row + 1} ← R{current_row + 1} "
                             f"/ {fmt(pivot_val)}"),
                matrix=_snapshot(mat),
            ))

        for i in range(m):
            if i == current_row:
                continue

            factor = float(mat[i, col])
            if abs(factor) < tol:
                continue

            mat[i] = mat[i] - factor * mat[current_row]
            sign = '-' if factor > 0 else '+'
            steps.append(EliminationStep(
                kind=StepKind.ELIMINATE,
                row=i,
                other_row=current_row,
                factor=factor,
                divisor=None,
                description=(f"R{i + 1} ← R{i + 1} {sign} "
                             f"{fmt(abs(factor))}·R{current_row + 1}"),
                matrix=_snapshot(mat),
            ))

        current_row += 1

    mat[np.abs(mat) < tol] = 0.0
    mat.flags.writeable = False

    return EliminationResult(
        rref=mat,
        steps=tuple(steps),
        pivots=tuple(pivots),
    )
