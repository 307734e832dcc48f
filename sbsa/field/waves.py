from dataclasses import dataclass
from typing import List, Tuple
import math
from numbers import Real

import numpy as np

from sbsa.common.errors import DomainError

SPATIAL_MODES = ("radial", "kronecker")


@dataclass(frozen=True)
class WaveTerm:
    frequency: float          # cycles per unit time, >= 0
    amplitude: float = 1.0
    phase: float = 0.0        # radians
    wavenumber: float = 1.0   # scales the spatial phase term


@dataclass(frozen=True)
class WaveParams:
    terms: Tuple[WaveTerm, ...] = (WaveTerm(frequency=1.0),)
    spatial: str = "radial"   # "radial" | "kronecker"

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """(frequency, amplitude, phase, wavenumber) as float64 arrays, for the kernels."""
        f = np.array([t.frequency for t in self.terms], dtype=np.float64)
        a = np.array([t.amplitude for t in self.terms], dtype=np.float64)
        p = np.array([t.phase for t in self.terms], dtype=np.float64)
        k = np.array([t.wavenumber for t in self.terms], dtype=np.float64)
        return f, a, p, k

    @property
    def spatial_code(self) -> int:
        return SPATIAL_MODES.index(self.spatial)


def validate_wave_params(params: WaveParams) -> None:
    """
    Raise DomainError listing every problem found.

    Checks:
    - at least one term
    - frequency, amplitude, phase, wavenumber real (not bool, not str) and finite
    - frequency >= 0
    - spatial mode known
    """
    errs: List[str] = []
    terms = tuple(params.terms)
    if not terms:
        errs.append("wave_params needs at least one term")
    for k, t in enumerate(terms):
        for name in ("frequency", "amplitude", "phase", "wavenumber"):
            v = getattr(t, name)
            ok = isinstance(v, Real) and not isinstance(v, bool) and math.isfinite(v)
            if not ok:
                errs.append(f"term {k}: {name} must be a finite number (got {v!r})")
        f = t.frequency
        if isinstance(f, Real) and not isinstance(f, bool) and f < 0.0:
            errs.append(f"term {k}: frequency must be >= 0 (got {f})")
    if not isinstance(params.spatial, str) or params.spatial not in SPATIAL_MODES:
        errs.append(f"unknown spatial mode {params.spatial!r}; expected one of {SPATIAL_MODES}")

    if errs:
        raise DomainError("; ".join(errs))
