"""Exception types raised by the operator-algebra engine."""

from __future__ import annotations

import cmath


class FuzzyEDError(Exception):
    """Base class for fuzzyed errors."""


class InvalidTermError(FuzzyEDError, ValueError):
    """
    An operator string is structurally malformed.

    Raised at construction and validation boundaries: odd-length flat
    strings, unknown operator kinds, negative orbitals, or orbitals outside
    the declared range. The normal-order rewrite assumes validated input and
    never raises this.
    """


class NumericDegenerateError(FuzzyEDError, ArithmeticError):
    """A coefficient became NaN or infinite after an arithmetic operation."""


def check_finite(coeff: complex, context: str = "coefficient") -> complex:
    """
    Return `coeff` unchanged, raising if it is NaN or infinite.

    Parameters
    ----------
    coeff:
        Complex scalar to check.
    context:
        Short description used in the error message.

    Raises
    ------
    NumericDegenerateError
        If either component of `coeff` is not finite.
    """
    if not cmath.isfinite(coeff):
        raise NumericDegenerateError(f"{context} is not finite: {coeff!r}")
    return coeff


__all__ = [
    "FuzzyEDError",
    "InvalidTermError",
    "NumericDegenerateError",
    "check_finite",
]
