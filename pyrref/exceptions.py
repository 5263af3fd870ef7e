"""
Exception types raised by pyrref.

Non-square input to determinant/inverse is not an error: those functions
return None instead.
"""


class PyRREFError(Exception):
    """Base class for all pyrref errors."""


class InvalidShapeError(PyRREFError, ValueError):
    """Matrix is ragged, empty, or not two-dimensional."""


class InvalidFractionError(PyRREFError, ZeroDivisionError):
    """Rational constructed with a zero denominator."""
