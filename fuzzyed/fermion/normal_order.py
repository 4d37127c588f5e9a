"""Normal ordering of fermionic terms under the canonical anticommutation relations.

Canonical form places every creation operator before every annihilation
operator, with creation orbitals strictly ascending and annihilation orbitals
strictly descending from left to right, e.g.

    c^dagger_0 c^dagger_2 c_3 c_1.

Rewriting uses only

    {c_i, c^dagger_j} = delta_ij,    {c_i, c_j} = {c^dagger_i, c^dagger_j} = 0,

applied to the first adjacent pair that violates the canonical form. The
contraction ``c_o c^dagger_o = 1 - c^dagger_o c_o`` splits one term into two,
so the rewrite runs over an explicit worklist instead of recursing.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .terms import IDENTITY_STRING, Op, OpKind, Term

_WorkItem = Tuple[complex, Tuple[Op, ...]]


def _swap(ops: Tuple[Op, ...], i: int) -> Tuple[Op, ...]:
    """Exchange the operators at positions i and i + 1."""
    return ops[:i] + (ops[i + 1], ops[i]) + ops[i + 2 :]


def _rewrite_step(coeff: complex, ops: Tuple[Op, ...]) -> Optional[List[_WorkItem]]:
    """
    Apply one rewrite at the first violation of the canonical form.

    Returns
    -------
    None if `ops` is already canonical, otherwise the list of descendant
    work items. An empty list means the term vanishes.
    """
    n = len(ops)
    for i, (kind, orbital) in enumerate(ops):
        if kind is OpKind.IDENTITY:
            return [(coeff, ops[:i] + ops[i + 1 :])]
        if i + 1 == n:
            break
        next_kind, next_orbital = ops[i + 1]
        if next_kind is OpKind.IDENTITY:
            # removed on the next position
            continue

        if kind is OpKind.ANNIHILATION and next_kind is OpKind.CREATION:
            if orbital == next_orbital:
                # c_o c^dagger_o = 1 - c^dagger_o c_o
                return [
                    (coeff, ops[:i] + ops[i + 2 :]),
                    (-coeff, _swap(ops, i)),
                ]
            return [(-coeff, _swap(ops, i))]

        if kind is next_kind:
            if orbital == next_orbital:
                return []
            ascending = orbital < next_orbital
            if ascending != (kind is OpKind.CREATION):
                return [(-coeff, _swap(ops, i))]
    return None


def is_normal_ordered(term: Term) -> bool:
    """
    Return True if `term` is already in canonical normal-ordered form.

    The identity sentinel counts as canonical. The empty string does not,
    since `normal_order` rewrites it to the sentinel, and neither does an
    embedded identity marker in a longer string.
    """
    if term.ops == IDENTITY_STRING:
        return True
    if not term.ops:
        return False
    return _rewrite_step(term.coeff, term.ops) is None


def normal_order(term: Term) -> List[Term]:
    """
    Rewrite `term` as an equivalent list of normal-ordered terms.

    The output may be empty (the term vanishes by Pauli exclusion) or hold
    several terms (each contraction contributes an extra branch). A string
    reduced to nothing becomes the identity sentinel with the accumulated
    coefficient. Terms sharing a string are not merged here; that is left
    to :func:`fuzzyed.fermion.simplify`.

    Parameters
    ----------
    term:
        Term to normal order. Its structure is assumed valid.

    Returns
    -------
    list of Term
        Normal-ordered terms whose sum equals `term`.
    """
    result: List[Term] = []
    pending: List[_WorkItem] = [(term.coeff, term.ops)]
    while pending:
        coeff, ops = pending.pop()
        descendants = _rewrite_step(coeff, ops)
        if descendants is None:
            result.append(Term(coeff, ops if ops else IDENTITY_STRING))
        else:
            # the last item pushed is processed first
            pending.extend(descendants)
    return result


__all__ = [
    "is_normal_ordered",
    "normal_order",
]
