"""Exact diagonalization of simplified operators on configuration sets."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import torch

from fuzzyed.core.config import EngineConfig
from fuzzyed.diagnostics import assert_hermitian
from fuzzyed.fermion import CanonicalTermSum
from fuzzyed.logging import get_logger

from .assembly import terms_to_dense
from .configurations import Configurations

logger = get_logger(__name__)


def exact_eigensystem(
    terms: CanonicalTermSum,
    confs: Configurations,
    k: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Eigensystem of a Hermitian operator restricted to `confs`.

    The operator is assembled densely and handed to ``torch.linalg.eigh``
    under the thread count of `config`.

    Parameters
    ----------
    terms:
        Canonical, Hermitian term sum.
    confs:
        Configurations spanning the sector.
    k:
        Number of lowest eigenpairs to return; None returns all of them.
    config:
        Engine configuration.

    Returns
    -------
    eigenvalues, eigenvectors:
        - eigenvalues: real tensor of shape (k,) in ascending order.
        - eigenvectors: tensor of shape (len(confs), k) whose columns are
          normalized eigenvectors.

    Raises
    ------
    ValueError:
        If `confs` is empty, `k` is out of range, or the assembled matrix is
        not Hermitian.
    """
    config = config or EngineConfig()
    dim = len(confs)
    if dim == 0:
        raise ValueError("Cannot diagonalize on an empty configuration set.")
    if k is not None and not 1 <= k <= dim:
        raise ValueError(f"k must be in [1, {dim}], got {k}")

    level = logging.DEBUG if config.silent else logging.INFO
    logger.log(level, "diagonalizing %d terms in dimension %d", len(terms), dim)

    H = terms_to_dense(terms, confs, config=config)
    assert_hermitian(H)

    with config.threads():
        eigenvalues, eigenvectors = torch.linalg.eigh(H)

    eigenvalues = eigenvalues.real
    if k is not None:
        eigenvalues = eigenvalues[:k]
        eigenvectors = eigenvectors[:, :k]

    logger.log(level, "lowest eigenvalue %.12g", float(eigenvalues[0]))
    return eigenvalues, eigenvectors


def exact_ground_state(
    terms: CanonicalTermSum,
    confs: Configurations,
    config: Optional[EngineConfig] = None,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Ground-state energy and eigenvector of a Hermitian operator.

    Returns
    -------
    ground_energy, ground_state:
        - ground_energy: scalar tensor with the lowest eigenvalue.
        - ground_state: tensor of shape (len(confs),) normalized to 1.

    Raises
    ------
    RuntimeError:
        If the ground state eigenvector has zero norm.
    """
    eigenvalues, eigenvectors = exact_eigensystem(terms, confs, k=1, config=config)

    ground_energy = eigenvalues[0]
    ground_state = eigenvectors[:, 0]

    norm = torch.linalg.norm(ground_state)
    if norm == 0.0:
        raise RuntimeError("Zero-norm eigenvector encountered.")
    return ground_energy, ground_state / norm


__all__ = [
    "exact_eigensystem",
    "exact_ground_state",
]
