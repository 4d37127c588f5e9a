"""Closure operations over formal sums of fermionic terms.

All functions return new :class:`TermSum` objects and never normal order or
merge terms; the result of a product in particular is the plain formal
concatenation. Pass the result to :func:`fuzzyed.fermion.simplify` before
handing it to matrix assembly.
"""

from __future__ import annotations

from typing import List, Union, overload

from fuzzyed.errors import NumericDegenerateError, check_finite

from .terms import Term, TermLike, TermSum, as_term_sum


def _checked_scalar(factor: complex) -> complex:
    try:
        c = complex(factor)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Terms can only be scaled by numbers, got {factor!r}") from exc
    return check_finite(c, "Scale factor")


def scale(terms: TermLike, factor: complex) -> TermSum:
    """
    Multiply every coefficient by `factor`.

    A zero factor keeps the terms with zero coefficients; `simplify` is
    responsible for dropping them.

    Raises
    ------
    NumericDegenerateError
        If `factor` or a resulting coefficient is not finite.
    """
    c = _checked_scalar(factor)
    return TermSum.from_terms(
        Term(c * term.coeff, term.ops) for term in as_term_sum(terms)
    )


def negate(terms: TermLike) -> TermSum:
    """Return ``-terms``."""
    return scale(terms, -1)


def divide(terms: TermLike, factor: complex) -> TermSum:
    """
    Return ``terms / factor``.

    Raises
    ------
    NumericDegenerateError
        If `factor` is zero or not finite.
    """
    c = _checked_scalar(factor)
    if c == 0:
        raise NumericDegenerateError("Cannot divide terms by zero.")
    return scale(terms, 1 / c)


def add(left: TermLike, right: TermLike) -> TermSum:
    """Formal sum: the concatenation of both term lists."""
    return TermSum(as_term_sum(left).terms + as_term_sum(right).terms)


def subtract(left: TermLike, right: TermLike) -> TermSum:
    """Return ``left + (-right)``."""
    return add(left, negate(right))


def multiply(left: TermLike, right: TermLike) -> TermSum:
    """
    Formal product of two sums.

    For every pair ``(a, b)`` with ``a`` from `left` and ``b`` from `right`
    one term is emitted with coefficient ``a.coeff * b.coeff`` and operator
    string ``a.ops + b.ops``. The result holds ``len(left) * len(right)``
    terms in row-major order.
    """
    right_terms = as_term_sum(right).terms
    product: List[Term] = []
    for a in as_term_sum(left):
        for b in right_terms:
            product.append(Term(a.coeff * b.coeff, a.ops + b.ops))
    return TermSum.from_terms(product)


@overload
def conjugate(terms: Term) -> Term: ...


@overload
def conjugate(terms: TermSum) -> TermSum: ...


def conjugate(terms: Union[Term, TermLike]) -> Union[Term, TermSum]:
    """
    Hermitian conjugate of a term or of every term in a sum.

    ``U c^{(p1)}_{o1} ... c^{(pl)}_{ol}`` maps to
    ``conj(U) c^{(1-pl)}_{ol} ... c^{(1-p1)}_{o1}``.
    """
    if isinstance(terms, Term):
        return terms.conjugate()
    return TermSum.from_terms(term.conjugate() for term in as_term_sum(terms))


__all__ = [
    "scale",
    "negate",
    "divide",
    "add",
    "subtract",
    "multiply",
    "conjugate",
]
