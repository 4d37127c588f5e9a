"""Sp(N) fermion models on the fuzzy sphere.

Orbital ``o = m * nf + f`` holds angular momentum index ``m`` in ``[0, nm)``
and flavour ``f`` in ``[0, nf)``. Flavours ``f`` and ``f + nf/2`` form the
symplectic pairs.
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence

from fuzzyed.exact.configurations import Configurations
from fuzzyed.fermion import OpKind, Term, TermSum

from .pseudopotential import interaction_matrix

_CUTOFF = 1e-15

C = OpKind.CREATION
A = OpKind.ANNIHILATION


class QuantumNumbers(NamedTuple):
    """Diagonal conserved quantities of a model."""

    charges: List[List[int]]
    names: List[str]
    moduli: List[int]


def _validate_sizes(nm: int, nf: int, symplectic: bool = False) -> None:
    if nm < 1:
        raise ValueError(f"nm must be >= 1, got {nm}")
    if nf < 1:
        raise ValueError(f"nf must be >= 1, got {nf}")
    if symplectic and nf % 2:
        raise ValueError(f"Sp(N) models need an even number of flavours, got nf={nf}")


def _two_body(val: complex, o1: int, o2: int, o3: int, o4: int) -> Term:
    """``val * c^dagger_o1 c^dagger_o2 c_o3 c_o4``."""
    return Term(val, ((C, o1), (C, o2), (A, o3), (A, o4)))


def spn_quantum_numbers(nm: int, nf: int) -> QuantumNumbers:
    """
    Particle number, angular momentum and Sp(N) Cartans of each orbital.

    The Cartan ``S_z,i`` is stored shifted so that every charge is
    nonnegative: an orbital of flavour ``i`` carries 2, flavour ``i + nf/2``
    carries 0 and every other flavour 1. Its target is ``N_e + S_z,i``.
    """
    _validate_sizes(nm, nf, symplectic=True)
    no = nf * nm
    half = nf // 2
    charges = [[1] * no, [o // nf for o in range(no)]]
    names = ["N_e", "L_z"]
    for f in range(half):
        cartan = []
        for o in range(no):
            f1 = o % nf
            cartan.append(2 if f1 == f else (0 if f1 == f + half else 1))
        charges.append(cartan)
        names.append(f"S_z{f + 1}")
    return QuantumNumbers(charges=charges, names=names, moduli=[1] * len(names))


def spn_configurations(
    nm: int,
    nf: int,
    ne: int,
    lz: float = 0.0,
    sz: Optional[Sequence[int]] = None,
) -> Configurations:
    """
    Configurations with fixed ``N_e``, ``L_z`` and Sp(N) Cartans.

    Parameters
    ----------
    nm, nf:
        Number of orbitals and flavours.
    ne:
        Number of fermions.
    lz:
        Angular momentum measured from the sphere's equator. ``ne * s + lz``
        must be an integer with ``s = (nm - 1) / 2``.
    sz:
        ``nf / 2`` Cartan eigenvalues; zeros by default.
    """
    qn = spn_quantum_numbers(nm, nf)
    half = nf // 2
    if sz is None:
        sz = [0] * half
    if len(sz) != half:
        raise ValueError(f"sz must have {half} entries, got {len(sz)}")
    lz_total = ne * 0.5 * (nm - 1) + lz
    if abs(lz_total - round(lz_total)) > 1e-9:
        raise ValueError(
            f"ne * s + lz must be an integer, got {lz_total} for ne={ne}, lz={lz}"
        )
    targets = [ne, int(round(lz_total))] + [ne + int(x) for x in sz]
    return Configurations(nf * nm, targets, qn.charges, qn.moduli)


def density_density_terms(nm: int, nf: int, ps_pot: Sequence[complex]) -> TermSum:
    """
    Flavour-symmetric density-density interaction

        sum 2 U[m1, m2, m3] c^dagger_{m1 f} c^dagger_{m2 f'} c_{m3 f'} c_{m4 f}

    from pseudopotentials. Each unordered pair of creation orbitals appears
    once; for ``f = f'`` the exchange partner is folded into the coefficient.
    """
    _validate_sizes(nm, nf)
    no = nm * nf
    int_el = interaction_matrix(nm, ps_pot)
    terms: List[Term] = []
    for o1 in range(no):
        m1, f1 = divmod(o1, nf)
        for o2 in range(no):
            m2, f2 = divmod(o2, nf)
            if f1 < f2:
                continue
            if f1 == f2 and m1 <= m2:
                continue
            for m3 in range(nm):
                m4 = m1 + m2 - m3
                if m4 < 0 or m4 >= nm:
                    continue
                o3 = m3 * nf + f2
                o4 = m4 * nf + f1
                val = 2.0 * int_el[m1, m2, m3]
                if f1 == f2:
                    val -= 2.0 * int_el[m2, m1, m3]
                if abs(val) < _CUTOFF:
                    continue
                terms.append(_two_body(val, o1, o2, o3, o4))
    return TermSum.from_terms(terms)


def spn_pair_terms(nm: int, nf: int, ps_pot: Sequence[complex]) -> TermSum:
    """
    Sp(N) pair-pair interaction

        sum U[m1, m2, m3] c^dagger_{m1 f} c^dagger_{m2, f+N/2}
                          c_{m3, f'+N/2} c_{m4 f'}

    from pseudopotentials, with ``f, f' < nf / 2``.
    """
    _validate_sizes(nm, nf, symplectic=True)
    no = nm * nf
    half = nf // 2
    int_el = interaction_matrix(nm, ps_pot)
    terms: List[Term] = []
    for o1 in range(no):
        m1, f1 = divmod(o1, nf)
        if f1 >= half:
            continue
        for m2 in range(nm):
            o2 = m2 * nf + f1 + half
            for o3 in range(no):
                m3, f3 = divmod(o3, nf)
                if f3 < half:
                    continue
                m4 = m1 + m2 - m3
                if m4 < 0 or m4 >= nm:
                    continue
                o4 = m4 * nf + f3 - half
                val = int_el[m1, m2, m3]
                if abs(val) < _CUTOFF:
                    continue
                terms.append(_two_body(val, o1, o2, o3, o4))
    return TermSum.from_terms(terms)


def spn_casimir_terms(nm: int, nf: int) -> TermSum:
    """
    Quadratic Casimir ``C_2`` of the Sp(N) flavour symmetry.

    The result is a raw sum; simplify it before assembly. For ``nf = 2``
    (Sp(2) = SU(2)) it is the total spin ``S^2``.
    """
    _validate_sizes(nm, nf, symplectic=True)
    no = nm * nf
    den_pot = [-0.5 if l % 2 == 0 else 0.0 for l in range(nm)]
    pair_pot = [-1.0 if l % 2 == 0 else 0.0 for l in range(nm)]
    terms = density_density_terms(nm, nf, den_pot) + spn_pair_terms(nm, nf, pair_pot)

    extra: List[Term] = []
    for o1 in range(no):
        extra.append(Term(0.25 + 0.25 * nf, ((C, o1), (A, o1))))
        for o2 in range(o1 + 1, no):
            extra.append(_two_body(0.5, o1, o2, o2, o1))
    return terms + TermSum.from_terms(extra)


__all__ = [
    "QuantumNumbers",
    "spn_quantum_numbers",
    "spn_configurations",
    "density_density_terms",
    "spn_pair_terms",
    "spn_casimir_terms",
]
