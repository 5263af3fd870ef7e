"""
Core algorithms: elimination, solution analysis, determinant and inverse.
"""

from .elimination import (
    eliminate,
    EliminationResult,
    EliminationStep,
    PivotPosition,
    StepKind,
)
from .analysis import (
    analyze,
    format_solution,
    ParametricExpression,
    SolutionAnalysis,
    SolutionType,
)
from .determinant import determinant, inverse

__all__ = [
    "eliminate",
    "EliminationResult",
    "EliminationStep",
    "PivotPosition",
    "StepKind",
    "analyze",
    "format_solution",
    "ParametricExpression",
    "SolutionAnalysis",
    "SolutionType",
    "determinant",
    "inverse",
]
