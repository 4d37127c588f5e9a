"""fuzzyed - symbolic fermionic operators and exact diagonalization for fuzzy-sphere models."""

__version__ = "0.1.0"

# Configuration
from .core import DEFAULT_THRESHOLD, EngineConfig, default_config, real_config

# Diagnostics
from .diagnostics import assert_hermitian, is_hermitian, is_hermitian_terms

# Errors
from .errors import FuzzyEDError, InvalidTermError, NumericDegenerateError

# Exact diagonalization
from .exact import (
    Configurations,
    apply_operator_string,
    exact_eigensystem,
    exact_ground_state,
    fock_space,
    terms_to_dense,
)

# Operator algebra
from .fermion import (
    IDENTITY_STRING,
    CanonicalTermSum,
    OpKind,
    Term,
    TermSum,
    add,
    annihilation,
    conjugate,
    creation,
    divide,
    identity,
    is_normal_ordered,
    multiply,
    negate,
    normal_order,
    number,
    scale,
    simplify,
    subtract,
    validate_terms,
)

# Models
from .models import (
    QuantumNumbers,
    density_density_terms,
    interaction_matrix,
    spn_casimir_terms,
    spn_configurations,
    spn_pair_terms,
    spn_quantum_numbers,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "DEFAULT_THRESHOLD",
    "EngineConfig",
    "default_config",
    "real_config",
    # Errors
    "FuzzyEDError",
    "InvalidTermError",
    "NumericDegenerateError",
    # Operator algebra
    "OpKind",
    "IDENTITY_STRING",
    "Term",
    "TermSum",
    "CanonicalTermSum",
    "creation",
    "annihilation",
    "number",
    "identity",
    "validate_terms",
    "scale",
    "negate",
    "divide",
    "add",
    "subtract",
    "multiply",
    "conjugate",
    "normal_order",
    "is_normal_ordered",
    "simplify",
    # Diagnostics
    "is_hermitian",
    "assert_hermitian",
    "is_hermitian_terms",
    # Exact diagonalization
    "Configurations",
    "fock_space",
    "apply_operator_string",
    "terms_to_dense",
    "exact_eigensystem",
    "exact_ground_state",
    # Models
    "interaction_matrix",
    "QuantumNumbers",
    "spn_quantum_numbers",
    "spn_configurations",
    "density_density_terms",
    "spn_pair_terms",
    "spn_casimir_terms",
]
