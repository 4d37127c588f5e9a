"""Simplification of formal term sums into canonical form."""

from __future__ import annotations

import math
from itertools import groupby
from typing import List, Optional, Tuple

from fuzzyed.core.config import EngineConfig
from fuzzyed.errors import check_finite
from fuzzyed.logging import get_logger

from .normal_order import normal_order
from .terms import CanonicalTermSum, Op, Term, TermLike, as_term_sum

logger = get_logger(__name__)


def string_key(ops: Tuple[Op, ...]) -> Tuple[Tuple[int, int], ...]:
    """
    Sort key of an operator string.

    Strings compare lexicographically over their operators, with the orbital
    as primary discriminant and the kind as tie-break; a proper prefix sorts
    first. The key is injective, so equal strings are adjacent after sorting.
    """
    return tuple((orbital, int(kind)) for kind, orbital in ops)


def simplify(
    terms: TermLike,
    threshold: Optional[float] = None,
    config: Optional[EngineConfig] = None,
) -> CanonicalTermSum:
    """
    Normal order, merge and filter a sum of terms.

    Parameters
    ----------
    terms:
        Term, TermSum or iterable of Terms to simplify.
    threshold:
        Terms whose merged coefficient has magnitude at or below this are
        dropped. Defaults to ``config.threshold`` (1e-13 for the default
        configuration).
    config:
        Optional engine configuration supplying the default threshold.

    Returns
    -------
    CanonicalTermSum
        Normal-ordered terms with unique operator strings, sorted by
        :func:`string_key`.

    Raises
    ------
    NumericDegenerateError
        If a merged coefficient is not finite.
    ValueError
        If threshold is negative or not finite.
    """
    if threshold is None:
        threshold = (config or EngineConfig()).threshold
    if not math.isfinite(threshold) or threshold < 0:
        raise ValueError(f"threshold must be finite and >= 0, got {threshold}")

    term_sum = as_term_sum(terms)
    ordered: List[Term] = []
    for term in term_sum:
        ordered.extend(normal_order(term))
    ordered.sort(key=lambda t: string_key(t.ops))

    merged: List[Term] = []
    for ops, group in groupby(ordered, key=lambda t: t.ops):
        coeff = sum((t.coeff for t in group), 0j)
        check_finite(coeff, "Merged coefficient")
        if abs(coeff) > threshold:
            merged.append(Term(coeff, ops))

    logger.debug(
        "simplify: %d input terms -> %d normal-ordered -> %d canonical",
        len(term_sum),
        len(ordered),
        len(merged),
    )
    return CanonicalTermSum.from_terms(merged)


__all__ = [
    "simplify",
    "string_key",
]
