"""Two-body interaction matrix on the fuzzy sphere from Haldane pseudopotentials."""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence

import numpy as np
from sympy import Rational
from sympy.physics.wigner import wigner_3j


@lru_cache(maxsize=None)
def _three_j(two_s: int, big_l: int, two_ma: int, two_mb: int) -> float:
    """3j(s, s, L; ma, mb, -ma-mb) with s, ma, mb given as twice their value."""
    s = Rational(two_s, 2)
    ma = Rational(two_ma, 2)
    mb = Rational(two_mb, 2)
    return float(wigner_3j(s, s, big_l, ma, mb, -ma - mb))


def interaction_matrix(nm: int, ps_pot: Sequence[complex]) -> np.ndarray:
    """
    Interaction matrix ``U[m1, m2, m3]`` of a rotationally invariant two-body
    interaction in the lowest Landau level with ``nm = 2s + 1`` orbitals.

    The pseudopotential ``ps_pot[l]`` weights the pair channel of total
    angular momentum ``L = 2s - l``:

        U[m1, m2, m3] = sum_l ps_pot[l] (2L + 1)
                        3j(s, s, L; m1, m2, -m1-m2) 3j(s, s, L; m4, m3, -m3-m4)

    with ``m4 = m1 + m2 - m3`` (orbital ``m`` carries ``L_z = m - s``).
    Entries with ``m4`` outside ``[0, nm)`` stay zero.

    Parameters
    ----------
    nm:
        Number of orbitals (>= 1).
    ps_pot:
        Pseudopotentials ``V_0, V_1, ...``; entries beyond ``2s`` are ignored.

    Returns
    -------
    numpy.ndarray
        Complex array of shape (nm, nm, nm).
    """
    if nm < 1:
        raise ValueError(f"nm must be >= 1, got {nm}")
    two_s = nm - 1
    int_el = np.zeros((nm, nm, nm), dtype=np.complex128)
    for m1 in range(nm):
        two_m1 = 2 * m1 - two_s
        for m2 in range(nm):
            two_m2 = 2 * m2 - two_s
            for m3 in range(nm):
                m4 = m1 + m2 - m3
                if m4 < 0 or m4 >= nm:
                    continue
                two_m3 = 2 * m3 - two_s
                two_m4 = 2 * m4 - two_s
                for l, v in enumerate(ps_pot):
                    big_l = two_s - l
                    # |M| only fits channels with L >= |M|, and L decreases with l
                    if big_l < 0 or 2 * big_l < abs(two_m1 + two_m2):
                        break
                    if v == 0:
                        continue
                    int_el[m1, m2, m3] += (
                        v
                        * (2 * big_l + 1)
                        * _three_j(two_s, big_l, two_m1, two_m2)
                        * _three_j(two_s, big_l, two_m4, two_m3)
                    )
    return int_el


__all__ = ["interaction_matrix"]
