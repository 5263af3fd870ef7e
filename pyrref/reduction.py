"""
Row reduction with a complete report.

This is the user-facing API: one object that runs elimination, classifies
the system and, for square matrices, adds determinant and inverse.
"""

import warnings
from typing import Optional

import numpy as np
import pandas as pd

from ._core import analyze, determinant, eliminate, format_solution, inverse
from ._utils import check_finite, check_matrix, is_square, resolve_tol
from .rational import format_value


class MatrixReduction:
    """
    Reduce a matrix to RREF and analyze it.

    Examples
    --------
    >>> from pyrref import reduce
    >>>
    >>> # Solve 2x + y = 5, x - y = 1
    >>> r = reduce([[2, 1, 5], [1, -1, 1]], augmented=True)
    >>> r.analysis.solution_type
    <SolutionType.UNIQUE: 'unique'>
    >>> r.analysis.solution
    array([2., 1.])
    >>>
    >>> r.summary()        # Prints RREF, rank and solution
    >>> r.steps_frame()    # Every row operation as a DataFrame
    """

    def __init__(
        self,
        matrix,
        augmented: bool = False,
        show_fractions: bool = False,
        tol: Optional[float] = None,
    ):
        """
        Run the reduction.

        Parameters
        ----------
        matrix : array_like, shape (m, n)
            Matrix to reduce. With ``augmented=True`` the last column is
            the right-hand side.
        augmented : bool
            Treat the matrix as an augmented system [A | b]
        show_fractions : bool
            Render numbers as fractions in descriptions and reports
        tol : float, optional
            Zero tolerance (default 1e-10)

        Raises
        ------
        InvalidShapeError
            If the matrix is ragged or empty
        ValueError
            If the matrix contains NaN or Inf
        """
        self.matrix = check_finite(check_matrix(matrix))
        self.matrix.flags.writeable = False
        self.augmented = augmented
        self.show_fractions = show_fractions
        self.tol = resolve_tol(tol)

        result = eliminate(self.matrix, show_fractions=show_fractions, tol=self.tol)
        self.rref = result.rref
        self.steps = result.steps
        self.pivots = result.pivots
        self.analysis = analyze(self.rref, augmented, tol=self.tol)

        self.determinant = None
        self.inverse = None
        if is_square(self.matrix) and not augmented:
            self._compute_square()

    def _compute_square(self):
        """Determinant, and inverse when the determinant is non-zero."""
        self.determinant = determinant(self.matrix, tol=self.tol)
        if abs(self.determinant) > self.tol:
            self.inverse = inverse(self.matrix, tol=self.tol)
            if self.inverse is None:
                warnings.warn(
                    f"Determinant is {self.determinant:.3e} but elimination "
                    f"found the matrix singular; no inverse returned"
                )

    @property
    def shape(self):
        return self.matrix.shape

    @property
    def rank(self) -> int:
        return self.analysis.rank

    def _fmt(self, value) -> str:
        return format_value(value, self.show_fractions)

    def rref_frame(self) -> pd.DataFrame:
        """
        RREF as a DataFrame.

        Columns are ``x1 .. xk`` for variables, plus ``b`` for the
        right-hand side of an augmented system.
        """
        n = self.rref.shape[1]
        n_vars = n - 1 if self.augmented else n
        columns = [f'x{j + 1}' for j in range(n_vars)]
        if self.augmented:
            columns.append('b')
        index = [f'R{i + 1}' for i in range(self.rref.shape[0])]
        return pd.DataFrame(np.array(self.rref), index=index, columns=columns)

    def steps_frame(self) -> pd.DataFrame:
        """
        Recorded row operations, one per row (1-based row labels).

        Returns
        -------
        DataFrame
            Columns 'kind', 'row', 'other_row', 'factor', 'description'
        """
        records = []
        for step in self.steps:
            records.append({
                'kind': step.kind.value,
                'row': step.row + 1,
                'other_row': None if step.other_row is None else step.other_row + 1,
                'factor': step.factor,
                'description': step.description,
            })
        return pd.DataFrame(
            records,
            columns=['kind', 'row', 'other_row', 'factor', 'description'],
            index=pd.RangeIndex(1, len(records) + 1, name='step'),
        )

    def to_dict(self) -> dict:
        """
        Plain-data export of the reduction (JSON serializable).

        Keys: 'input', 'rref', 'steps' (descriptions), 'pivots',
        'analysis', 'determinant', 'inverse'.
        """
        analysis = self.analysis
        if analysis.solution is None:
            solution = None
        elif isinstance(analysis.solution, np.ndarray):
            solution = analysis.solution.tolist()
        else:
            solution = [
                {
                    'var': expr.variable,
                    'constant': expr.constant,
                    'params': {str(k): v for k, v in expr.params.items()},
                }
                for expr in analysis.solution
            ]

        return {
            'input': self.matrix.tolist(),
            'rref': self.rref.tolist(),
            'steps': [step.description for step in self.steps],
            'pivots': [[p.row, p.col] for p in self.pivots],
            'analysis': {
                'rank': analysis.rank,
                'pivotCols': list(analysis.pivot_columns),
                'solutionType': analysis.solution_type.value,
                'solution': solution,
                'freeCols': list(analysis.free_columns),
            },
            'determinant': self.determinant,
            'inverse': None if self.inverse is None else self.inverse.tolist(),
        }

    def _print_matrix(self, X, split=None):
        for row in X:
            cells = [f"{self._fmt(v):>12}" for v in row]
            if split is not None:
                cells.insert(split, "  |")
            print("  " + " ".join(cells))

    def summary(self):
        """Print a report of the reduction."""
        m, n = self.shape
        split = n - 1 if self.augmented else None

        print()
        print("=" * 72)
        print("ROW REDUCTION RESULTS")
        print("=" * 72)
        print()
        kind = "augmented system" if self.augmented else "matrix"
        print(f"Input: {m} x {n} {kind}")
        print(f"Row operations: {len(self.steps)}")
        print()

        print("Reduced row-echelon form:")
        self._print_matrix(self.rref, split)
        print()

        print(f"Rank:          {self.analysis.rank}")
        print(f"Pivot columns: {[c + 1 for c in self.analysis.pivot_columns]}")
        print()

        if self.augmented:
            print(f"Solution: {self.analysis.solution_type.value}")
            for line in format_solution(self.analysis, self.show_fractions):
                print(f"  {line}")
            print()

        if self.determinant is not None:
            print(f"Determinant: {format_value(self.determinant, self.show_fractions, digits=6)}")
            if self.inverse is not None:
                print("Inverse:")
                self._print_matrix(self.inverse)
            else:
                print("Inverse: does not exist (singular)")
            print()

        print("=" * 72)
        print()

    def __repr__(self):
        m, n = self.shape
        return (f"MatrixReduction(shape={m}x{n}, rank={self.rank}, "
                f"solution='{self.analysis.solution_type.value}')")


def reduce(matrix, augmented: bool = False, **kwargs) -> MatrixReduction:
    """
    Reduce and analyze a matrix (convenience function).

    Parameters
    ----------
    matrix : array_like
        Matrix to reduce
    augmented : bool
        Treat the last column as the right-hand side
    **kwargs
        Additional arguments passed to MatrixReduction

    Returns
    -------
    MatrixReduction

    Examples
    --------
    >>> r = reduce([[2, -1, 0], [-1, 2, -1], [0, -1, 2]])
    >>> round(r.determinant, 10)
    4.0
    >>> r.inverse @ r.matrix    # identity, within 1e-10
    """
    return MatrixReduction(matrix, augmented=augmented, **kwargs)
