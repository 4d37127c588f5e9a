"""Symbolic algebra of second-quantized fermionic operators."""

from .algebra import (
    add,
    conjugate,
    divide,
    multiply,
    negate,
    scale,
    subtract,
)
from .normal_order import is_normal_ordered, normal_order
from .simplify import simplify, string_key
from .terms import (
    IDENTITY_ORBITAL,
    IDENTITY_STRING,
    CanonicalTermSum,
    Op,
    OpKind,
    Term,
    TermSum,
    annihilation,
    as_term_sum,
    creation,
    identity,
    number,
    validate_terms,
)

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
    "string_key",
]
