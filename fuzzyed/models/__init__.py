"""Model term generators for fuzzy-sphere Hamiltonians and observables."""

from .pseudopotential import interaction_matrix
from .spn import (
    QuantumNumbers,
    density_density_terms,
    spn_casimir_terms,
    spn_configurations,
    spn_pair_terms,
    spn_quantum_numbers,
)

__all__ = [
    "interaction_matrix",
    "QuantumNumbers",
    "spn_quantum_numbers",
    "spn_configurations",
    "density_density_terms",
    "spn_pair_terms",
    "spn_casimir_terms",
]
