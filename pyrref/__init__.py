"""
pyrref: Gauss-Jordan row reduction with a reproducible step trace.

Copyright (C) 2024 SGCX
Licensed under GPL-3.0
"""

__version__ = "1.0.0"

# Import main user-facing API
from .reduction import reduce, MatrixReduction

# Core algorithms
from ._core import (
    eliminate,
    analyze,
    determinant,
    inverse,
    format_solution,
    EliminationResult,
    EliminationStep,
    PivotPosition,
    StepKind,
    SolutionAnalysis,
    SolutionType,
    ParametricExpression,
)

# Display helpers
from .rational import Rational, to_rational, format_value

from .exceptions import PyRREFError, InvalidShapeError, InvalidFractionError
from ._utils import EPSILON

__all__ = [
    'reduce',
    'MatrixReduction',
    'eliminate',
    'analyze',
    'determinant',
    'inverse',
    'format_solution',
    'EliminationResult',
    'EliminationStep',
    'PivotPosition',
    'StepKind',
    'SolutionAnalysis',
    'SolutionType',
    'ParametricExpression',
    'Rational',
    'to_rational',
    'format_value',
    'PyRREFError',
    'InvalidShapeError',
    'InvalidFractionError',
    'EPSILON',
]
