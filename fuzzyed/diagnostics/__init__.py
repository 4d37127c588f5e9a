"""Diagnostics for assembled matrices and symbolic operators."""

from .core import assert_hermitian, is_hermitian, is_hermitian_terms

__all__ = [
    "is_hermitian",
    "assert_hermitian",
    "is_hermitian_terms",
]
