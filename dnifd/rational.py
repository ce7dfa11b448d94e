# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Rational numbers as stored in TIFF RATIONAL/SRATIONAL values

Copyright 2025 DNAi inc.
"""

import math
from fractions import Fraction
from functools import total_ordering

# Decimal renderings must be shorter than this to be preferred over "n/d"
MAX_DECIMAL_LENGTH = 5


@total_ordering
class Rational:
    """
    Immutable numerator/denominator pair.

    Unlike fractions.Fraction, a Rational keeps the values exactly as read
    from the file (no normalisation, zero denominators allowed), because
    "1/100" and "10/1000" are both meaningful to someone inspecting an
    exposure time.
    """

    __slots__ = ('numerator', 'denominator')

    def __init__(self, numerator: int, denominator: int):
        self.numerator = int(numerator)
        self.denominator = int(denominator)

    def __float__(self) -> float:
        if self.numerator == 0:
            return 0.0
        if self.denominator == 0:
            return math.copysign(math.inf, self.numerator)
        return self.numerator / self.denominator

    def __int__(self) -> int:
        if self.numerator == 0 or self.denominator == 0:
            return 0
        return int(Fraction(self.numerator, self.denominator))

    @property
    def reciprocal(self) -> 'Rational':
        return Rational(self.denominator, self.numerator)

    def is_integer(self) -> bool:
        return (self.denominator == 1
                or (self.denominator != 0 and self.numerator % self.denominator == 0)
                or (self.denominator == 0 and self.numerator == 0))

    def simplified(self) -> 'Rational':
        """Return this value reduced by the greatest common divisor."""
        gcd = math.gcd(self.numerator, self.denominator)
        if gcd == 0:
            return Rational(self.numerator, self.denominator)
        return Rational(self.numerator // gcd, self.denominator // gcd)

    def to_simple_string(self, allow_decimal: bool = True) -> str:
        """
        Render the value in its most readable exact form.

        Integers render without a denominator, "2/6" becomes "1/3", and a
        decimal is used only when it is short and converts back to exactly
        this value (1/2 -> "0.5", 1/3 -> "1/3", 1/8 -> "1/8").

        Args:
            allow_decimal: Permit the decimal form

        Returns:
            Simplified string representation
        """
        if self.denominator == 0 and self.numerator != 0:
            return str(self)
        if self.is_integer():
            return str(int(self))
        if self.numerator != 1 and self.denominator % self.numerator == 0:
            # n/(k*n) -> 1/k
            return Rational(1, self.denominator // self.numerator).to_simple_string(allow_decimal)

        simplified = self.simplified()
        if allow_decimal:
            decimal = repr(float(simplified))
            if (len(decimal) < MAX_DECIMAL_LENGTH
                    and Fraction(decimal) == Fraction(simplified.numerator, simplified.denominator)):
                return decimal
        return str(simplified)

    def equals_exact(self, other: 'Rational') -> bool:
        """Compare numerator and denominator rather than numeric value."""
        return self.numerator == other.numerator and self.denominator == other.denominator

    def _as_fraction(self):
        if self.denominator == 0:
            return None
        return Fraction(self.numerator, self.denominator)

    def __eq__(self, other) -> bool:
        if isinstance(other, Rational):
            mine, theirs = self._as_fraction(), other._as_fraction()
            if mine is None or theirs is None:
                return self.equals_exact(other)
            return mine == theirs
        if isinstance(other, (int, float, Fraction)):
            return float(self) == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, (Rational, int, float, Fraction)):
            return float(self) < float(other)
        return NotImplemented

    def __hash__(self) -> int:
        fraction = self._as_fraction()
        if fraction is None:
            return hash((self.numerator, self.denominator))
        return hash(fraction)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def __repr__(self) -> str:
        return f"Rational({self.numerator}, {self.denominator})"
