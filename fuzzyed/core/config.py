"""Engine configuration passed explicitly to entry points."""

from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

import torch

DEFAULT_THRESHOLD = 1e-13
"""Coefficients with magnitude at or below this are dropped by `simplify`."""

_SUPPORTED_DTYPES = (torch.complex128, torch.float64)


@dataclass(frozen=True)
class EngineConfig:
    """
    Settings shared by simplification, matrix assembly and diagonalization.

    Instances are immutable. Build a new one with `dataclasses.replace` to
    change a setting.

    Attributes
    ----------
    dtype:
        Element type of assembled matrices. ``torch.complex128`` keeps the
        full complex space; ``torch.float64`` materializes only the real
        subspace and rejects coefficients with an imaginary part.
    threshold:
        Negligibility threshold for merged coefficients in `simplify`.
    num_threads:
        Optional torch intra-op thread count used inside `threads()`.
        None leaves torch's setting alone.
    silent:
        If True, progress messages are logged at DEBUG instead of INFO.
    torch_device:
        Device on which dense matrices are allocated.
    """

    dtype: torch.dtype = torch.complex128
    threshold: float = DEFAULT_THRESHOLD
    num_threads: Optional[int] = None
    silent: bool = False
    torch_device: torch.device = field(default_factory=lambda: torch.device("cpu"))

    def __post_init__(self) -> None:
        """Validate EngineConfig settings."""
        if self.dtype not in _SUPPORTED_DTYPES:
            raise ValueError(
                f"Unsupported dtype: {self.dtype}. "
                f"Supported dtypes: {list(_SUPPORTED_DTYPES)}"
            )
        if not math.isfinite(self.threshold) or self.threshold < 0:
            raise ValueError(
                f"threshold must be finite and >= 0, got {self.threshold}"
            )
        if self.num_threads is not None and self.num_threads < 1:
            raise ValueError(f"num_threads must be >= 1, got {self.num_threads}")
        if not isinstance(self.torch_device, torch.device):
            object.__setattr__(self, "torch_device", torch.device(self.torch_device))

    def __repr__(self) -> str:
        return (
            f"EngineConfig(dtype={self.dtype}, threshold={self.threshold}, "
            f"num_threads={self.num_threads}, silent={self.silent}, "
            f"torch_device={self.torch_device})"
        )

    @property
    def is_real(self) -> bool:
        """True if only the real subspace is materialized."""
        return not self.dtype.is_complex

    @contextmanager
    def threads(self) -> Iterator[None]:
        """
        Context manager applying `num_threads` to torch for its duration.

        The previous torch thread count is restored on exit.
        """
        if self.num_threads is None:
            yield
            return
        prev = torch.get_num_threads()
        torch.set_num_threads(self.num_threads)
        try:
            yield
        finally:
            torch.set_num_threads(prev)


def default_config() -> EngineConfig:
    """Return the default configuration (complex128 on CPU)."""
    return EngineConfig()


def real_config(**kwargs) -> EngineConfig:
    """Return a configuration that materializes only the real subspace."""
    return EngineConfig(dtype=torch.float64, **kwargs)


__all__ = [
    "DEFAULT_THRESHOLD",
    "EngineConfig",
    "default_config",
    "real_config",
]
