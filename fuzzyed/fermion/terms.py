"""Fermionic operator terms and formal sums of terms."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union

from fuzzyed.errors import InvalidTermError, check_finite


class OpKind(IntEnum):
    """
    Kind of a single ladder operator.

    The integer values match the flat string encoding: 1 for creation,
    0 for annihilation and -1 for the identity marker.
    """

    IDENTITY = -1
    ANNIHILATION = 0
    CREATION = 1

    def dagger(self) -> "OpKind":
        """Return the kind of the Hermitian conjugate operator."""
        if self is OpKind.CREATION:
            return OpKind.ANNIHILATION
        if self is OpKind.ANNIHILATION:
            return OpKind.CREATION
        return OpKind.IDENTITY


Op = Tuple[OpKind, int]
"""
A single operator symbol: (kind, orbital).

- kind: OpKind - creation, annihilation or the identity marker.
- orbital: int - 0-based orbital index, or -1 for the identity marker.
"""

IDENTITY_ORBITAL = -1
IDENTITY_STRING: Tuple[Op, ...] = ((OpKind.IDENTITY, IDENTITY_ORBITAL),)


def _coerce_op(op: Sequence[int]) -> Op:
    try:
        kind_value, orbital = op
    except (TypeError, ValueError) as exc:
        raise InvalidTermError(
            f"Each operator must be a (kind, orbital) pair, got {op!r}"
        ) from exc

    if isinstance(kind_value, bool) or not isinstance(kind_value, numbers.Integral):
        raise InvalidTermError(f"Operator kind must be an integer, got {kind_value!r}")
    try:
        kind = OpKind(int(kind_value))
    except ValueError as exc:
        raise InvalidTermError(
            f"Operator kind must be 1 (creation), 0 (annihilation) or "
            f"-1 (identity), got {kind_value!r}"
        ) from exc

    if isinstance(orbital, bool) or not isinstance(orbital, numbers.Integral):
        raise InvalidTermError(f"Orbital index must be an integer, got {orbital!r}")
    orbital = int(orbital)

    if kind is OpKind.IDENTITY:
        if orbital != IDENTITY_ORBITAL:
            raise InvalidTermError(
                f"Identity marker must carry orbital {IDENTITY_ORBITAL}, got {orbital}"
            )
    elif orbital < 0:
        raise InvalidTermError(f"Orbital indices must be >= 0, got {orbital}")
    return kind, orbital


@dataclass(frozen=True)
class Term:
    """
    Single term of a second-quantized fermionic operator.

    Each term has the form

        coeff * c^{(p1)}_{o1} c^{(p2)}_{o2} ... c^{(pl)}_{ol},

    where ``c^{(1)}`` is a creation and ``c^{(0)}`` an annihilation operator.
    The operators are kept exactly in the stored order; use
    :func:`fuzzyed.fermion.normal_order` or :func:`fuzzyed.fermion.simplify`
    to bring them to canonical form.

    Attributes
    ----------
    coeff:
        Finite complex coefficient.
    ops:
        Tuple of (kind, orbital) pairs. An empty tuple or
        ``IDENTITY_STRING`` denotes ``coeff`` times the identity.

    Raises
    ------
    InvalidTermError
        If an operator is malformed.
    NumericDegenerateError
        If the coefficient is NaN or infinite.
    """

    coeff: complex
    ops: Tuple[Op, ...] = ()

    # numpy scalars on the left defer to __rmul__
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        """Validate Term invariants."""
        try:
            coeff = complex(self.coeff)
        except (TypeError, ValueError) as exc:
            raise TypeError(
                f"Term coefficient must be a number, got {self.coeff!r}"
            ) from exc
        object.__setattr__(self, "coeff", check_finite(coeff, "Term coefficient"))
        object.__setattr__(self, "ops", tuple(_coerce_op(op) for op in self.ops))

    @classmethod
    def from_cstr(cls, coeff: complex, cstr: Sequence[int]) -> "Term":
        """
        Build a term from the flat encoding ``(p1, o1, p2, o2, ...)``.

        Raises
        ------
        InvalidTermError
            If `cstr` has odd length or holds a malformed operator.
        """
        cstr = list(cstr)
        if len(cstr) % 2:
            raise InvalidTermError(
                f"Flat operator string must have even length, got {len(cstr)}: {cstr}"
            )
        return cls(coeff, tuple(zip(cstr[0::2], cstr[1::2])))

    @classmethod
    def identity(cls, coeff: complex = 1.0) -> "Term":
        """Return ``coeff`` times the identity operator."""
        return cls(coeff, IDENTITY_STRING)

    @property
    def cstr(self) -> Tuple[int, ...]:
        """Flat encoding ``(p1, o1, p2, o2, ...)`` of the operator string."""
        return tuple(int(x) for op in self.ops for x in op)

    def is_identity(self) -> bool:
        """Return True if this term carries no ladder operators."""
        return all(kind is OpKind.IDENTITY for kind, _ in self.ops)

    def num_operators(self) -> int:
        """Number of ladder operators, ignoring identity markers."""
        return sum(1 for kind, _ in self.ops if kind is not OpKind.IDENTITY)

    def orbitals(self) -> Tuple[int, ...]:
        """Orbitals touched by the ladder operators, in string order."""
        return tuple(o for kind, o in self.ops if kind is not OpKind.IDENTITY)

    def with_coeff(self, coeff: complex) -> "Term":
        """Return a copy of this term with a different coefficient."""
        return Term(coeff, self.ops)

    def conjugate(self) -> "Term":
        """
        Hermitian conjugate.

        The string is reversed, creation and annihilation are exchanged and
        the coefficient is complex conjugated.
        """
        return Term(
            self.coeff.conjugate(),
            tuple((kind.dagger(), o) for kind, o in reversed(self.ops)),
        )

    def __neg__(self) -> "Term":
        return self.with_coeff(-self.coeff)

    def __mul__(self, other: Union[complex, "Term"]) -> "Term":
        if isinstance(other, Term):
            return Term(self.coeff * other.coeff, self.ops + other.ops)
        if isinstance(other, numbers.Number):
            return self.with_coeff(self.coeff * other)
        return NotImplemented

    def __rmul__(self, scalar: complex) -> "Term":
        if isinstance(scalar, numbers.Number):
            return self.with_coeff(scalar * self.coeff)
        return NotImplemented

    def __str__(self) -> str:
        if self.is_identity():
            return f"({self.coeff:g}) I"
        symbols = []
        for kind, o in self.ops:
            if kind is OpKind.CREATION:
                symbols.append(f"c+{o}")
            elif kind is OpKind.ANNIHILATION:
                symbols.append(f"c{o}")
        return f"({self.coeff:g}) " + " ".join(symbols)


TermLike = Union[Term, "TermSum", Iterable[Term]]


@dataclass(frozen=True)
class TermSum:
    """
    Formal sum of :class:`Term` objects.

    The sum is not simplified: terms may repeat the same operator string and
    may carry zero coefficients. Arithmetic operators build new sums without
    normal ordering; call :func:`fuzzyed.fermion.simplify` to obtain a
    :class:`CanonicalTermSum`.
    """

    terms: Tuple[Term, ...] = ()

    # numpy scalars on the left defer to __rmul__ instead of iterating the sum
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        """Validate TermSum invariants."""
        if not isinstance(self.terms, tuple):
            object.__setattr__(self, "terms", tuple(self.terms))
        bad = [t for t in self.terms if not isinstance(t, Term)]
        if bad:
            raise TypeError(f"TermSum holds Term objects only, got {bad[0]!r}")

    @classmethod
    def from_terms(cls, terms: Iterable[Term]) -> "TermSum":
        """Create a TermSum from an iterable of Term objects."""
        return cls(terms=tuple(terms))

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __getitem__(self, index: int) -> Term:
        return self.terms[index]

    def is_zero(self) -> bool:
        """Return True if the sum has no terms."""
        return len(self.terms) == 0

    def conjugate(self) -> "TermSum":
        """Hermitian conjugate of every term."""
        from .algebra import conjugate

        return conjugate(self)

    def __add__(self, other: TermLike) -> "TermSum":
        from .algebra import add

        if not isinstance(other, (Term, TermSum)):
            return NotImplemented
        return add(self, other)

    def __radd__(self, other: TermLike) -> "TermSum":
        from .algebra import add

        if isinstance(other, Term):
            return add(other, self)
        # sum() starts from 0
        if isinstance(other, numbers.Number) and other == 0:
            return TermSum(self.terms)
        return NotImplemented

    def __sub__(self, other: TermLike) -> "TermSum":
        from .algebra import subtract

        if not isinstance(other, (Term, TermSum)):
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other: TermLike) -> "TermSum":
        from .algebra import subtract

        if not isinstance(other, Term):
            return NotImplemented
        return subtract(other, self)

    def __neg__(self) -> "TermSum":
        from .algebra import negate

        return negate(self)

    def __mul__(self, other: Union[complex, TermLike]) -> "TermSum":
        from .algebra import multiply, scale

        if isinstance(other, (Term, TermSum)):
            return multiply(self, other)
        if isinstance(other, numbers.Number):
            return scale(self, other)
        return NotImplemented

    def __rmul__(self, other: Union[complex, Term]) -> "TermSum":
        from .algebra import multiply, scale

        if isinstance(other, Term):
            return multiply(other, self)
        if isinstance(other, numbers.Number):
            return scale(self, other)
        return NotImplemented

    def __truediv__(self, other: complex) -> "TermSum":
        from .algebra import divide

        if not isinstance(other, numbers.Number):
            return NotImplemented
        return divide(self, other)

    def __str__(self) -> str:
        if not self.terms:
            return "0"
        return " + ".join(str(t) for t in self.terms)


@dataclass(frozen=True)
class CanonicalTermSum(TermSum):
    """
    Simplified sum of terms, as returned by :func:`fuzzyed.fermion.simplify`.

    Every term is normal ordered, no operator string appears twice and the
    terms are sorted in canonical order. Arithmetic on a canonical sum
    returns a plain :class:`TermSum`.

    Build instances with `simplify` only. The constructor does not check
    the canonical form; consumers such as
    :func:`fuzzyed.exact.terms_to_dense` reject terms that break it.
    """

    def as_dict(self) -> Dict[Tuple[Op, ...], complex]:
        """Map each operator string to its coefficient."""
        return {t.ops: t.coeff for t in self.terms}

    def coefficient(self, ops: Sequence[Sequence[int]]) -> complex:
        """
        Coefficient of the given normal-ordered operator string, 0 if absent.

        `ops` may be given as (kind, orbital) pairs; an empty string refers
        to the identity.
        """
        key = tuple(_coerce_op(op) for op in ops) or IDENTITY_STRING
        return self.as_dict().get(key, 0j)


def as_term_sum(terms: TermLike) -> TermSum:
    """Coerce a Term, a TermSum or an iterable of Terms into a TermSum."""
    if isinstance(terms, TermSum):
        return terms
    if isinstance(terms, Term):
        return TermSum((terms,))
    return TermSum.from_terms(terms)


def creation(orbital: int, coeff: complex = 1.0) -> TermSum:
    """Single creation operator ``coeff * c^dagger_orbital``."""
    return TermSum((Term(coeff, ((OpKind.CREATION, orbital),)),))


def annihilation(orbital: int, coeff: complex = 1.0) -> TermSum:
    """Single annihilation operator ``coeff * c_orbital``."""
    return TermSum((Term(coeff, ((OpKind.ANNIHILATION, orbital),)),))


def number(orbital: int, coeff: complex = 1.0) -> TermSum:
    """Occupation number ``coeff * c^dagger_orbital c_orbital``."""
    return TermSum(
        (Term(coeff, ((OpKind.CREATION, orbital), (OpKind.ANNIHILATION, orbital))),)
    )


def identity(coeff: complex = 1.0) -> TermSum:
    """``coeff`` times the identity operator."""
    return TermSum((Term.identity(coeff),))


def validate_terms(terms: TermLike, num_orbitals: Optional[int] = None) -> TermSum:
    """
    Check that every orbital in `terms` lies in ``[0, num_orbitals)``.

    Structural checks already happen when each Term is built; this adds the
    range check against a concrete orbital count.

    Returns
    -------
    TermSum
        The input, coerced to a TermSum.

    Raises
    ------
    InvalidTermError
        If an orbital index is out of range.
    ValueError
        If num_orbitals < 1.
    """
    term_sum = as_term_sum(terms)
    if num_orbitals is None:
        return term_sum
    if num_orbitals < 1:
        raise ValueError(f"num_orbitals must be >= 1, got {num_orbitals}")
    for term in term_sum:
        out_of_range = [o for o in term.orbitals() if o >= num_orbitals]
        if out_of_range:
            raise InvalidTermError(
                f"Orbital indices must be < {num_orbitals}, got {out_of_range} "
                f"in term {term}"
            )
    return term_sum


__all__ = [
    "OpKind",
    "Op",
    "IDENTITY_ORBITAL",
    "IDENTITY_STRING",
    "Term",
    "TermSum",
    "CanonicalTermSum",
    "as_term_sum",
    "creation",
    "annihilation",
    "number",
    "identity",
    "validate_terms",
]
