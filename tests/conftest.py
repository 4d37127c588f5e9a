"""Pytest configuration and shared fixtures for fuzzyed tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A factory for random raw fermionic term sums
"""

import os
from typing import Callable

import numpy as np
import pytest
import torch

from fuzzyed.fermion import OpKind, Term, TermSum


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator(device=torch.device("cpu"))
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture
def random_terms(rng: np.random.Generator) -> Callable[..., TermSum]:
    """
    Factory for random raw term sums.

    Each term gets a random complex coefficient and a random string of up to
    `max_ops` ladder operators on `num_orbitals` orbitals, in arbitrary order.
    """

    def make(num_terms: int = 4, num_orbitals: int = 3, max_ops: int = 6) -> TermSum:
        terms = []
        for _ in range(num_terms):
            length = int(rng.integers(0, max_ops + 1))
            ops = tuple(
                (
                    OpKind.CREATION if rng.random() < 0.5 else OpKind.ANNIHILATION,
                    int(rng.integers(0, num_orbitals)),
                )
                for _ in range(length)
            )
            coeff = complex(rng.normal(), rng.normal())
            terms.append(Term(coeff, ops))
        return TermSum.from_terms(terms)

    return make
