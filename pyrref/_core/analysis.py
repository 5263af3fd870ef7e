"""
Solution-set classification from a reduced row-echelon form.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

import numpy as np

from .._utils import check_matrix, resolve_tol
from ..rational import format_value

logger = logging.getLogger(__name__)


class SolutionType(Enum):
    """Classification of the system implied by an RREF."""
    NOT_APPLICABLE = "N/A"        # Not an augmented system
    NO_SOLUTION = "no solution"   # Inconsistent row 0 = c
    UNIQUE = "unique"
    INFINITE = "infinite"


@dataclass
class ParametricExpression:
    """
    Pivot variable written in terms of the free variables.

    x[variable] = constant + sum(coef * t[free] for free, coef in params.items())
    """
    variable: int
    constant: float
    params: Dict[int, float] = field(default_factory=dict)


@dataclass
class SolutionAnalysis:
    """Rank, pivot structure and solution set of an RREF."""
    rank: int
    pivot_columns: List[int]
    solution_type: SolutionType
    num_variables: int
    solution: Optional[Union[np.ndarray, List[ParametricExpression]]] = None
    free_columns: List[int] = field(default_factory=list)

    @property
    def nullity(self) -> int:
        """Dimension of the null space of the coefficient part."""
        return self.num_variables - self.rank

    @property
    def is_consistent(self) -> bool:
        return self.solution_type is not SolutionType.NO_SOLUTION


def find_pivot_columns(rref: np.ndarray, num_vars: int, tol: float) -> List[int]:
    """
    Read pivot columns off an RREF.

    A column is the pivot of row ``i`` if it holds a 1 there and zeros in
    every other row. The first such column in a row wins.
    """
    m = rref.shape[0]
    pivot_cols = []
    for i in range(m):
        for j in range(num_vars):
            if abs(rref[i, j] - 1) >= tol:
                continue
            others = np.delete(rref[:, j], i)
            if np.all(np.abs(others) <= tol):
                pivot_cols.append(j)
                break
    return pivot_cols


def analyze(rref, is_augmented: bool, tol: Optional[float] = None) -> SolutionAnalysis:
    """
    Classify the solution set of a system in reduced row-echelon form.

    Parameters
    ----------
    rref : array_like, shape (m, n)
        Matrix in RREF, typically ``eliminate(A).rref``
    is_augmented : bool
        Whether the last column holds the right-hand side
    tol : float, optional
        Zero tolerance (default 1e-10)

    Returns
    -------
    analysis : SolutionAnalysis
        - NOT_APPLICABLE if not augmented (rank and pivots only)
        - NO_SOLUTION if some row reads 0 = c with c != 0
        - UNIQUE with the solution vector if there are no free columns
        - INFINITE with one ParametricExpression per pivot row otherwise
    """
    tol = resolve_tol(tol)
    rref = check_matrix(rref, name='rref')
    m, n = rref.shape
    num_vars = n - 1 if is_augmented else n

    pivot_cols = find_pivot_columns(rref, num_vars, tol)
    rank = len(pivot_cols)

    if not is_augmented:
        return SolutionAnalysis(
            rank=rank,
            pivot_columns=pivot_cols,
            solution_type=SolutionType.NOT_APPLICABLE,
            num_variables=num_vars,
        )

    for i in range(m):
        if np.all(np.abs(rref[i, :num_vars]) <= tol) and abs(rref[i, num_vars]) > tol:
            logger.debug("Row %d is inconsistent", i)
            return SolutionAnalysis(
                rank=rank,
                pivot_columns=pivot_cols,
                solution_type=SolutionType.NO_SOLUTION,
                num_variables=num_vars,
            )

    pivot_set = set(pivot_cols)
    free_cols = [j for j in range(num_vars) if j not in pivot_set]

    if not free_cols:
        solution = np.zeros(num_vars, dtype=np.float64)
        for i, col in enumerate(pivot_cols):
            solution[col] = rref[i, num_vars]
        return SolutionAnalysis(
            rank=rank,
            pivot_columns=pivot_cols,
            solution_type=SolutionType.UNIQUE,
            num_variables=num_vars,
            solution=solution,
        )

    parametric = []
    for i, pivot_col in enumerate(pivot_cols):
        expr = ParametricExpression(variable=pivot_col, constant=float(rref[i, num_vars]))
        for free_col in free_cols:
            if abs(rref[i, free_col]) > tol:
                # Moved to the right-hand side of the row equation
                expr.params[free_col] = -float(rref[i, free_col])
        parametric.append(expr)

    return SolutionAnalysis(
        rank=rank,
        pivot_columns=pivot_cols,
        solution_type=SolutionType.INFINITE,
        num_variables=num_vars,
        solution=parametric,
        free_columns=free_cols,
    )


def format_solution(analysis: SolutionAnalysis, show_fractions: bool = False) -> List[str]:
    """
    Render a solution as display lines, 1-based (x1, x2, ... and t1, t2, ...).

    >>> format_solution(analyze([[1, 0, 2], [0, 1, -1]], True))
    ['x1 = 2.0000', 'x2 = -1.0000']
    """
    def fmt(value):
        return format_value(value, show_fractions)

    if analysis.solution_type is SolutionType.NOT_APPLICABLE:
        return []

    if analysis.solution is None:
        return ["No solution exists."]

    if analysis.solution_type is SolutionType.UNIQUE:
        return [f"x{idx + 1} = {fmt(val)}" for idx, val in enumerate(analysis.solution)]

    lines = []
    for expr in analysis.solution:
        parts = [f"x{expr.variable + 1} = {fmt(expr.constant)}"]
        for free_col, coef in expr.params.items():
            sign = '+' if coef > 0 else '-'
            parts.append(f"{sign} {fmt(abs(coef))}·t{free_col + 1}")
        lines.append(' '.join(parts))
    for free_col in analysis.free_columns:
        lines.append(f"x{free_col + 1} = t{free_col + 1} (free)")
    return lines
