# sbsa/field/kernels.py
"""
Numba kernels for the sinusoidal wave field.

For each address the kernel decodes the coordinate tuple and evaluates

    value = Σ_k A_k sin(2π f_k t + phase_k + spatial_phase(c, k))

Spatial phase modes (integer code, see sbsa.field.waves.SPATIAL_MODES):
  0 = radial:    wavenumber_k * |c|                     (|c| Euclidean norm)
  1 = kronecker: 2π wavenumber_k * frac(Σ_i g_i c_i)    (golden-ratio slopes g_i)

Every address is independent; the outer loop runs under prange and
results are written into a caller-provided buffer.
"""

from __future__ import annotations
import math
import numpy as np
from numba import njit, prange

from sbsa.core.kernels import decode_one

TWO_PI = 2.0 * math.pi
PHI = (1.0 + 5.0 ** 0.5) / 2.0


def kronecker_slopes(dimensions: int) -> np.ndarray:
    """Incommensurate per-axis slopes g_i = frac(phi^-(i+1)), deterministic."""
    return np.array([(PHI ** -(i + 1)) % 1.0 for i in range(dimensions)], dtype=np.float64)


@njit
def spatial_phase_jit(coords, mode, wavenumber, slopes):
    if mode == 0:
        r2 = 0.0
        for i in range(coords.shape[0]):
            c = float(coords[i])
            r2 += c * c
        return wavenumber * math.sqrt(r2)
    s = 0.0
    for i in range(coords.shape[0]):
        s += slopes[i] * float(coords[i])
    return TWO_PI * wavenumber * (s % 1.0)


@njit
def wave_value_jit(coords, time, freq, amp, phase, wavenumber, mode, slopes):
    value = 0.0
    for k in range(freq.shape[0]):
        sp = spatial_phase_jit(coords, mode, wavenumber[k], slopes)
        value += amp[k] * math.sin(TWO_PI * freq[k] * time + phase[k] + sp)
    return value


@njit(parallel=True)
def sample_addresses_jit(addresses, bounds, time, freq, amp, phase, wavenumber,
                         mode, slopes, out):
    N = addresses.shape[0]
    D = bounds.shape[0]
    for n in prange(N):
        coords = np.empty(D, dtype=np.int64)
        decode_one(addresses[n], bounds, coords)
        out[n] = wave_value_jit(coords, time, freq, amp, phase, wavenumber, mode, slopes)


@njit(parallel=True)
def sample_range_jit(start, bounds, time, freq, amp, phase, wavenumber,
                     mode, slopes, out):
    N = out.shape[0]
    D = bounds.shape[0]
    for n in prange(N):
        coords = np.empty(D, dtype=np.int64)
        decode_one(start + n, bounds, coords)
        out[n] = wave_value_jit(coords, time, freq, amp, phase, wavenumber, mode, slopes)
