"""
Fraction display for floating-point values.

Every computation in pyrref runs in float64. Fractions exist only to show
those results to people, so nothing here feeds back into elimination.
"""

import logging
import math
import operator
from typing import Optional

from ._utils import DISPLAY_DIGITS, EPSILON, MAX_DENOMINATOR_EXPONENT
from .exceptions import InvalidFractionError

logger = logging.getLogger(__name__)


class Rational:
    """
    Normalized fraction.

    The denominator is always positive and coprime with the numerator.

    Examples
    --------
    >>> Rational(6, -4)
    Rational(-3, 2)
    >>> str(Rational(4, 2))
    '2'
    """

    __slots__ = ('numerator', 'denominator')

    def __init__(self, numerator: int, denominator: int = 1):
        numerator = operator.index(numerator)
        denominator = operator.index(denominator)
        if denominator == 0:
            raise InvalidFractionError("Denominator cannot be zero")

        g = math.gcd(numerator, denominator)
        numerator //= g
        denominator //= g

        if denominator < 0:
            numerator = -numerator
            denominator = -denominator

        self.numerator = numerator
        self.denominator = denominator

    def to_decimal(self) -> float:
        return self.numerator / self.denominator

    __float__ = to_decimal

    def __mul__(self, other):
        if isinstance(other, int):
            other = Rational(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational(self.numerator * other.numerator,
                        self.denominator * other.denominator)

    __rmul__ = __mul__

    def __add__(self, other):
        if isinstance(other, int):
            other = Rational(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    __radd__ = __add__

    def __eq__(self, other):
        if isinstance(other, int):
            other = Rational(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return (self.numerator == other.numerator
                and self.denominator == other.denominator)

    def __hash__(self):
        return hash((self.numerator, self.denominator))

    def __str__(self):
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"

    def __repr__(self):
        return f"Rational({self.numerator}, {self.denominator})"


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def to_rational(value: float, tolerance: float = EPSILON) -> Rational:
    """
    Approximate a float by a fraction with a power-of-ten denominator.

    Trial denominators are 1, 10, 100, ... and the first one that turns
    ``value`` into an integer (within ``tolerance``) wins. If none up to
    10**14 does, 10**15 is used as is.

    Parameters
    ----------
    value : float
        Number to convert
    tolerance : float, default=1e-10
        Closeness to zero / to an integer that counts as exact

    Returns
    -------
    Rational
        Reduced fraction

    Notes
    -----
    Only terminating decimals are recovered exactly. 1/3 comes back as
    333333333333333/1000000000000000, not 1/3. Callers rely on this
    exact output, so do not swap in a continued-fraction search.
    """
    value = float(value)
    if abs(value) < tolerance:
        return Rational(0, 1)

    sign = -1 if value < 0 else 1
    magnitude = abs(value)

    denominator = 1
    scaled = magnitude
    for _ in range(MAX_DENOMINATOR_EXPONENT):
        if abs(scaled - _round_half_up(scaled)) < tolerance:
            break
        denominator *= 10
        scaled = magnitude * denominator
    else:
        logger.debug("No terminating decimal for %r, using denominator 10**%d",
                     value, MAX_DENOMINATOR_EXPONENT)

    return Rational(sign * _round_half_up(scaled), denominator)


def format_value(
    value: float,
    show_fractions: bool = False,
    digits: Optional[int] = None,
) -> str:
    """
    Render a number for display.

    Parameters
    ----------
    value : float
        Number to render
    show_fractions : bool
        Render as a fraction instead of fixed point
    digits : int, optional
        Fixed-point digits (default DISPLAY_DIGITS)

    Returns
    -------
    str
    """
    if not math.isfinite(value):
        return str(float(value))
    if show_fractions:
        return str(to_rational(value))
    if digits is None:
        digits = DISPLAY_DIGITS
    if abs(value) < EPSILON:
        value = 0.0
    return f"{value:.{digits}f}"
