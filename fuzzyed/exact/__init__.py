"""Exact diagonalization helpers for small fermionic systems."""

from .assembly import apply_operator_string, terms_to_dense
from .configurations import MAX_ORBITALS, Configurations, fock_space
from .diagonalize import exact_eigensystem, exact_ground_state

__all__ = [
    "MAX_ORBITALS",
    "Configurations",
    "fock_space",
    "apply_operator_string",
    "terms_to_dense",
    "exact_eigensystem",
    "exact_ground_state",
]
