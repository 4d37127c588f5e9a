"""Occupation-number configurations with conserved quantum numbers."""

from __future__ import annotations

from typing import Dict, Optional, Sequence

import numpy as np

from fuzzyed.logging import get_logger

logger = get_logger(__name__)

MAX_ORBITALS = 24
"""Largest orbital count accepted by the brute-force enumeration."""


class Configurations:
    """
    Occupation patterns of `num_orbitals` fermionic orbitals.

    A configuration is stored as an integer whose bit ``o`` is the
    occupation of orbital ``o``. Only patterns satisfying every conserved
    quantity are kept:

        sum_o charges[q][o] * n_o == targets[q]          (moduli[q] == 1)
        sum_o charges[q][o] * n_o == targets[q] mod moduli[q]   otherwise

    Patterns are sorted in ascending order, which fixes the row and column
    order of assembled matrices.
    """

    def __init__(
        self,
        num_orbitals: int,
        targets: Sequence[int] = (),
        charges: Sequence[Sequence[int]] = (),
        moduli: Optional[Sequence[int]] = None,
    ) -> None:
        """
        Enumerate the configurations.

        Args:
            num_orbitals: Number of orbitals (1 <= num_orbitals <= MAX_ORBITALS).
            targets: Target value of each conserved quantity.
            charges: Per-orbital charge of each conserved quantity, shape
                (len(targets), num_orbitals).
            moduli: Modulus of each quantity; 1 means no modulus. Defaults
                to all ones.

        Raises:
            ValueError: If the sizes are inconsistent or out of range.
        """
        if num_orbitals < 1 or num_orbitals > MAX_ORBITALS:
            raise ValueError(
                f"num_orbitals must be in [1, {MAX_ORBITALS}], got {num_orbitals}"
            )
        targets_arr = np.asarray(targets, dtype=np.int64).reshape(-1)
        charges_arr = np.asarray(charges, dtype=np.int64)
        if len(targets_arr) == 0:
            charges_arr = np.zeros((0, num_orbitals), dtype=np.int64)
        if charges_arr.shape != (len(targets_arr), num_orbitals):
            raise ValueError(
                f"charges must have shape ({len(targets_arr)}, {num_orbitals}), "
                f"got {charges_arr.shape}"
            )
        if moduli is None:
            moduli_arr = np.ones(len(targets_arr), dtype=np.int64)
        else:
            moduli_arr = np.asarray(moduli, dtype=np.int64).reshape(-1)
        if len(moduli_arr) != len(targets_arr):
            raise ValueError(
                f"Got {len(targets_arr)} targets but {len(moduli_arr)} moduli."
            )
        if np.any(moduli_arr < 1):
            raise ValueError(f"moduli must be >= 1, got {moduli_arr.tolist()}")

        self.num_orbitals = num_orbitals
        self.targets = targets_arr
        self.charges = charges_arr
        self.moduli = moduli_arr

        all_bits = np.arange(1 << num_orbitals, dtype=np.int64)
        mask = np.ones(all_bits.shape, dtype=bool)
        for target, charge, modulus in zip(targets_arr, charges_arr, moduli_arr):
            total = np.zeros(all_bits.shape, dtype=np.int64)
            for o in range(num_orbitals):
                total += ((all_bits >> o) & 1) * charge[o]
            if modulus == 1:
                mask &= total == target
            else:
                mask &= (total - target) % modulus == 0

        self.bits: np.ndarray = all_bits[mask]
        self._index: Dict[int, int] = {int(b): i for i, b in enumerate(self.bits)}
        logger.debug(
            "enumerated %d of %d configurations on %d orbitals",
            len(self.bits),
            len(all_bits),
            num_orbitals,
        )

    def __len__(self) -> int:
        return len(self.bits)

    def __repr__(self) -> str:
        return (
            f"Configurations(num_orbitals={self.num_orbitals}, "
            f"targets={self.targets.tolist()}, size={len(self)})"
        )

    def index_of(self, bits: int) -> Optional[int]:
        """Position of the pattern `bits`, or None if it is not included."""
        return self._index.get(int(bits))

    def occupations(self) -> np.ndarray:
        """Occupation numbers as an int array of shape (len(self), num_orbitals)."""
        return ((self.bits[:, None] >> np.arange(self.num_orbitals)) & 1).astype(
            np.int64
        )


def fock_space(num_orbitals: int) -> Configurations:
    """Every occupation pattern of `num_orbitals` orbitals."""
    return Configurations(num_orbitals)


__all__ = [
    "MAX_ORBITALS",
    "Configurations",
    "fock_space",
]
