"""Dense matrix assembly of canonical term sums on occupation configurations."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import torch

from fuzzyed.core.config import EngineConfig
from fuzzyed.fermion import CanonicalTermSum, OpKind, is_normal_ordered, validate_terms
from fuzzyed.fermion.terms import Op
from fuzzyed.logging import get_logger

from .configurations import Configurations

logger = get_logger(__name__)


def apply_operator_string(
    ops: Tuple[Op, ...], bits: int
) -> Optional[Tuple[int, int]]:
    """
    Act with an operator string on one occupation pattern.

    Operators are applied right to left. A ladder operator on orbital ``o``
    picks up the sign ``(-1)^(number of occupied orbitals below o)``.

    Parameters
    ----------
    ops:
        Operator string of (kind, orbital) pairs.
    bits:
        Occupation pattern; bit ``o`` is orbital ``o``.

    Returns
    -------
    (sign, new_bits), or None if the string annihilates the pattern.
    """
    sign = 1
    for kind, orbital in reversed(ops):
        if kind is OpKind.IDENTITY:
            continue
        mask = 1 << orbital
        occupied = bool(bits & mask)
        if occupied == (kind is OpKind.CREATION):
            return None
        if bin(bits & (mask - 1)).count("1") % 2:
            sign = -sign
        bits ^= mask
    return sign, bits


def terms_to_dense(
    terms: CanonicalTermSum,
    confs: Configurations,
    confs_out: Optional[Configurations] = None,
    config: Optional[EngineConfig] = None,
) -> torch.Tensor:
    """
    Matrix of a simplified operator between two configuration sets.

    Parameters
    ----------
    terms:
        Canonical term sum, as returned by :func:`fuzzyed.fermion.simplify`.
    confs:
        Configurations spanning the columns (initial states).
    confs_out:
        Configurations spanning the rows (final states). Defaults to `confs`.
        Matrix elements leading outside `confs_out` are discarded.
    config:
        Engine configuration; selects dtype and device.

    Returns
    -------
    torch.Tensor
        Dense matrix of shape (len(confs_out), len(confs)).

    Raises
    ------
    TypeError:
        If `terms` has not been simplified.
    ValueError:
        If the configuration sets disagree on the orbital count, a term is
        not normal ordered or repeats a string, or a real dtype is requested
        for terms with complex coefficients.
    InvalidTermError:
        If a term touches an orbital outside the configurations.
    """
    if not isinstance(terms, CanonicalTermSum):
        raise TypeError(
            "terms_to_dense expects a CanonicalTermSum; call simplify() first, "
            f"got {type(terms).__name__}"
        )
    config = config or EngineConfig()
    if confs_out is None:
        confs_out = confs
    if confs_out.num_orbitals != confs.num_orbitals:
        raise ValueError(
            f"confs has {confs.num_orbitals} orbitals but confs_out has "
            f"{confs_out.num_orbitals}"
        )
    seen = set()
    for term in terms:
        if not is_normal_ordered(term) or term.ops in seen:
            raise ValueError(
                f"Term {term} is not in canonical form; "
                "build the input with simplify()."
            )
        seen.add(term.ops)
    validate_terms(terms, confs.num_orbitals)

    if config.is_real:
        complex_terms = [t for t in terms if abs(t.coeff.imag) > config.threshold]
        if complex_terms:
            raise ValueError(
                f"Real dtype {config.dtype} requested but term {complex_terms[0]} "
                f"has a complex coefficient."
            )

    mat = np.zeros((len(confs_out), len(confs)), dtype=np.complex128)
    for col, bits in enumerate(confs.bits):
        for term in terms:
            applied = apply_operator_string(term.ops, int(bits))
            if applied is None:
                continue
            sign, new_bits = applied
            row = confs_out.index_of(new_bits)
            if row is None:
                continue
            mat[row, col] += sign * term.coeff

    if config.is_real:
        mat = np.ascontiguousarray(mat.real)

    logger.debug(
        "assembled %d terms into a %dx%d matrix", len(terms), mat.shape[0], mat.shape[1]
    )
    return torch.as_tensor(mat, dtype=config.dtype, device=config.torch_device)


__all__ = [
    "apply_operator_string",
    "terms_to_dense",
]
