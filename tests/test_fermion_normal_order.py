"""Tests for normal ordering under the canonical anticommutation relations."""

from __future__ import annotations

import numpy as np
import pytest
import torch

from fuzzyed.exact import apply_operator_string, fock_space, terms_to_dense
from fuzzyed.fermion import (
    IDENTITY_STRING,
    OpKind,
    Term,
    TermSum,
    is_normal_ordered,
    normal_order,
    simplify,
)

C = OpKind.CREATION
A = OpKind.ANNIHILATION
ID = OpKind.IDENTITY


def raw_terms_to_dense(terms: TermSum, num_orbitals: int) -> torch.Tensor:
    """
    Dense matrix of a raw (unordered) term sum on the full Fock space.

    For tests only. Each operator string is applied literally, right to
    left, without any normal ordering.
    """
    dim = 1 << num_orbitals
    mat = np.zeros((dim, dim), dtype=np.complex128)
    for col in range(dim):
        for term in terms:
            applied = apply_operator_string(term.ops, col)
            if applied is None:
                continue
            sign, row = applied
            mat[row, col] += sign * term.coeff
    return torch.as_tensor(mat)


class TestNormalOrderCases:
    """One test per rewrite rule."""

    def test_canonical_term_is_unchanged(self):
        """Test that a canonical string passes through."""
        term = Term(2.0, ((C, 0), (C, 3), (A, 2), (A, 1)))
        assert is_normal_ordered(term)
        assert normal_order(term) == [term]

    def test_empty_string_becomes_identity_sentinel(self):
        """Test that the empty string is canonicalized to the sentinel."""
        assert normal_order(Term(1.5)) == [Term(1.5, IDENTITY_STRING)]
        assert normal_order(Term.identity(2.0)) == [Term.identity(2.0)]
        assert not is_normal_ordered(Term(1.5))
        assert is_normal_ordered(Term.identity(1.5))

    def test_embedded_identity_is_removed(self):
        """Test that identity markers inside a string are dropped."""
        term = Term(1.0, ((C, 0), (ID, -1), (A, 1), (ID, -1)))
        assert not is_normal_ordered(term)
        assert normal_order(term) == [Term(1.0, ((C, 0), (A, 1)))]

    def test_contraction_same_orbital(self):
        """Test c_o c^dagger_o = 1 - c^dagger_o c_o."""
        result = normal_order(Term(1.0, ((A, 2), (C, 2))))
        assert sorted(result, key=lambda t: len(t.ops)) == [
            Term.identity(1.0),
            Term(-1.0, ((C, 2), (A, 2))),
        ]

    def test_anticommute_different_orbitals(self):
        """Test c_i c^dagger_j = -c^dagger_j c_i for i != j."""
        assert normal_order(Term(1.0, ((A, 0), (C, 1)))) == [
            Term(-1.0, ((C, 1), (A, 0)))
        ]

    @pytest.mark.parametrize("kind", [C, A])
    def test_pauli_exclusion(self, kind):
        """Test that repeated operators of one kind vanish."""
        assert normal_order(Term(1.0, ((kind, 3), (kind, 3)))) == []

    def test_creation_orbitals_ascend(self):
        """Test that creations are sorted ascending with a sign."""
        assert normal_order(Term(1.0, ((C, 2), (C, 0)))) == [
            Term(-1.0, ((C, 0), (C, 2)))
        ]

    def test_annihilation_orbitals_descend(self):
        """Test that annihilations are sorted descending with a sign."""
        assert normal_order(Term(1.0, ((A, 0), (A, 2)))) == [
            Term(-1.0, ((A, 2), (A, 0)))
        ]

    def test_three_creations_reverse_order(self):
        """Test a permutation needing three swaps."""
        assert normal_order(Term(1.0, ((C, 2), (C, 1), (C, 0)))) == [
            Term(-1.0, ((C, 0), (C, 1), (C, 2)))
        ]

    def test_pauli_exclusion_after_reordering(self):
        """Test that c^dagger_0 c^dagger_1 c^dagger_0 vanishes."""
        assert normal_order(Term(1.0, ((C, 0), (C, 1), (C, 0)))) == []

    def test_double_contraction(self):
        """Test c_0 c^dagger_0 c_1 c^dagger_1 = (1 - n_0)(1 - n_1)."""
        result = simplify(Term(1.0, ((A, 0), (C, 0), (A, 1), (C, 1))))
        assert result.coefficient([]) == 1.0
        assert result.coefficient([(C, 0), (A, 0)]) == -1.0
        assert result.coefficient([(C, 1), (A, 1)]) == -1.0
        assert result.coefficient([(C, 0), (C, 1), (A, 1), (A, 0)]) == 1.0
        assert len(result) == 4

    def test_every_output_is_canonical(self, random_terms):
        """Test that normal_order only ever returns canonical terms."""
        for term in random_terms(num_terms=30, num_orbitals=3, max_ops=8):
            for out in normal_order(term):
                assert is_normal_ordered(out)

    def test_long_string_is_not_recursion_limited(self):
        """Test a string far longer than typical recursion depth budgets."""
        n = 40
        ops = tuple((C, o) for o in reversed(range(n)))
        result = normal_order(Term(1.0, ops))
        # reversing n elements takes n(n-1)/2 swaps
        sign = (-1) ** (n * (n - 1) // 2)
        assert result == [Term(sign, tuple((C, o) for o in range(n)))]


class TestNormalOrderEquivalence:
    """Normal ordering must not change the operator."""

    def test_random_terms_preserve_matrix(self, random_terms):
        """Test raw and simplified forms give the same Fock-space matrix."""
        num_orbitals = 3
        terms = random_terms(num_terms=25, num_orbitals=num_orbitals, max_ops=6)
        raw = raw_terms_to_dense(terms, num_orbitals)
        canon = terms_to_dense(simplify(terms), fock_space(num_orbitals))
        assert torch.allclose(raw, canon, atol=1e-10)

    def test_each_term_preserves_matrix(self, random_terms):
        """Test equivalence term by term on four orbitals."""
        num_orbitals = 4
        for term in random_terms(num_terms=15, num_orbitals=num_orbitals, max_ops=6):
            single = TermSum((term,))
            raw = raw_terms_to_dense(single, num_orbitals)
            ordered = TermSum.from_terms(normal_order(term))
            assert torch.allclose(
                raw, raw_terms_to_dense(ordered, num_orbitals), atol=1e-10
            )

    def test_anticommutator_matrix(self):
        """Test {c_0, c^dagger_0} = 1 on the dense level."""
        terms = TermSum(
            [Term(1.0, ((A, 0), (C, 0))), Term(1.0, ((C, 0), (A, 0)))]
        )
        dense = terms_to_dense(simplify(terms), fock_space(2))
        assert torch.allclose(dense, torch.eye(4, dtype=torch.complex128))
