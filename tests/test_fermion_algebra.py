"""Tests for term algebra: scaling, sums, products and conjugation."""

from __future__ import annotations

import math

import pytest

from fuzzyed.errors import NumericDegenerateError
from fuzzyed.fermion import (
    OpKind,
    Term,
    TermSum,
    add,
    annihilation,
    conjugate,
    creation,
    divide,
    multiply,
    negate,
    number,
    scale,
    simplify,
    subtract,
)

C = OpKind.CREATION
A = OpKind.ANNIHILATION


def test_scale_multiplies_every_coefficient():
    """Test scale on a two-term sum."""
    terms = number(0) + 2.0 * number(1)
    scaled = scale(terms, 1j)
    assert [t.coeff for t in scaled] == [1j, 2j]
    assert [t.ops for t in scaled] == [t.ops for t in terms]


def test_scale_by_zero_keeps_terms():
    """Test that a zero factor keeps zero-coefficient terms."""
    scaled = scale(number(0) + number(1), 0)
    assert len(scaled) == 2
    assert all(t.coeff == 0 for t in scaled)
    assert simplify(scaled).is_zero()


def test_scale_rejects_non_finite_factor():
    """Test that NaN factors raise NumericDegenerateError."""
    with pytest.raises(NumericDegenerateError):
        scale(number(0), math.nan)


def test_scale_overflow_is_surfaced():
    """Test that an overflowing product raises instead of propagating Inf."""
    with pytest.raises(NumericDegenerateError):
        scale(number(0, 1e300), 1e300)


def test_scale_rejects_non_numbers():
    """Test that non-numeric factors raise TypeError."""
    with pytest.raises(TypeError):
        scale(number(0), "two")


def test_negate():
    """Test negate flips every sign."""
    assert [t.coeff for t in negate(number(0) + number(1, 3.0))] == [-1.0, -3.0]


def test_divide():
    """Test division by a scalar and by zero."""
    assert divide(number(0, 3.0), 2)[0].coeff == 1.5
    assert (number(0, 3.0) / 3)[0].coeff == 1.0
    with pytest.raises(NumericDegenerateError, match="divide"):
        divide(number(0), 0)


def test_add_is_concatenation():
    """Test that add concatenates without merging."""
    total = add(number(0), number(0))
    assert len(total) == 2
    assert total.terms == number(0).terms + number(0).terms


def test_subtract():
    """Test that subtract appends the negated right operand."""
    diff = subtract(number(0), number(1, 2.0))
    assert [t.coeff for t in diff] == [1.0, -2.0]
    assert simplify(number(0) - number(0)).is_zero()


def test_add_accepts_terms_and_lists():
    """Test that algebra functions coerce Terms and iterables."""
    t = Term(1.0, ((C, 0),))
    assert len(add(t, [t, t])) == 3
    assert len(t + creation(1)) == 2
    assert len(creation(1) + t) == 2


def test_multiply_cross_product_order():
    """Test the formal product size, coefficients and row-major order."""
    left = creation(0, 2.0) + creation(1, 3.0)
    right = annihilation(2) + annihilation(3, 1j)
    product = multiply(left, right)
    assert len(product) == 4
    assert [t.coeff for t in product] == [2.0, 2j, 3.0, 3j]
    assert [t.ops for t in product] == [
        ((C, 0), (A, 2)),
        ((C, 0), (A, 3)),
        ((C, 1), (A, 2)),
        ((C, 1), (A, 3)),
    ]


def test_multiply_is_not_normal_ordered():
    """Test that the formal product keeps raw operator order."""
    product = annihilation(0) * creation(0)
    assert product.terms == (Term(1.0, ((A, 0), (C, 0))),)


def test_multiply_with_empty_sum():
    """Test that multiplying by the empty sum gives the empty sum."""
    assert multiply(number(0), TermSum()).is_zero()


def test_operator_overloads():
    """Test the Python operators on TermSum."""
    a = creation(0)
    b = annihilation(1)
    assert (a * b).terms == multiply(a, b).terms
    assert (a * 2).terms == scale(a, 2).terms
    assert (2 * a).terms == scale(a, 2).terms
    assert (-a).terms == negate(a).terms
    assert (a - b).terms == subtract(a, b).terms
    assert (Term(2.0, ((C, 1),)) * a).terms == (Term(2.0, ((C, 1), (C, 0))),)


def test_conjugate_term_and_sum():
    """Test Hermitian conjugation on a sum."""
    hop = TermSum([Term.from_cstr(1 + 1j, [1, 0, 0, 1])])
    conj = conjugate(hop)
    assert conj.terms == (Term.from_cstr(1 - 1j, [1, 1, 0, 0]),)
    assert conjugate(conj).terms == hop.terms
    assert hop.conjugate().terms == conj.terms
    assert conjugate(Term.from_cstr(2j, [1, 3])) == Term.from_cstr(-2j, [0, 3])


def test_conjugate_of_product_reverses_factors():
    """Test (AB)^dagger = B^dagger A^dagger on raw strings."""
    a = creation(0) + annihilation(2, 0.5j)
    b = number(1) + annihilation(3)
    lhs = conjugate(multiply(a, b))
    rhs = multiply(conjugate(b), conjugate(a))
    assert simplify(lhs) == simplify(rhs)


def test_operations_do_not_mutate_inputs():
    """Test that algebra operations leave their inputs untouched."""
    a = creation(0) + creation(1)
    before = a.terms
    scale(a, 3)
    add(a, a)
    multiply(a, a)
    conjugate(a)
    assert a.terms == before
