"""Hermiticity checks for assembled matrices and symbolic operators."""

from __future__ import annotations

from typing import Optional

import torch

from fuzzyed.fermion import conjugate, simplify, subtract
from fuzzyed.fermion.terms import TermLike


def is_hermitian(
    mat: torch.Tensor,
    atol: float = 1e-10,
) -> bool:
    """
    Check whether a matrix (or batch of matrices) is Hermitian.

    Parameters
    ----------
    mat:
        Real or complex tensor with shape (..., n, n).
    atol:
        Absolute tolerance for checking equality.

    Returns
    -------
    bool
        True if mat is Hermitian within the tolerance, False otherwise.
    """
    if mat.dim() < 2 or mat.shape[-1] != mat.shape[-2]:
        return False
    if mat.numel() == 0:
        return True

    diff = mat - mat.conj().transpose(-2, -1)
    max_dev = diff.abs().max()
    if not torch.isfinite(max_dev):
        return False

    return bool(max_dev <= atol)


def assert_hermitian(
    mat: torch.Tensor,
    atol: float = 1e-10,
) -> None:
    """
    Assert that a matrix (or batch of matrices) is Hermitian.

    Raises
    ------
    ValueError
        If the matrix is not Hermitian within the tolerance.
    """
    if not is_hermitian(mat, atol=atol):
        raise ValueError(f"Matrix is not Hermitian within tolerance {atol}.")


def is_hermitian_terms(terms: TermLike, threshold: Optional[float] = None) -> bool:
    """
    Check whether a symbolic operator equals its Hermitian conjugate.

    The difference ``terms - conjugate(terms)`` is simplified; the operator
    is Hermitian when nothing survives the threshold.
    """
    return simplify(subtract(terms, conjugate(terms)), threshold=threshold).is_zero()
