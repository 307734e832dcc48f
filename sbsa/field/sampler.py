# sbsa/field/sampler.py
"""
Wave Field Sampler.

- sample(address, bounds, time, params):
    scalar value at one address; decodes the address, then
    value = Σ_k A_k sin(2π f_k t + phase_k + spatial_phase(coords, k)).

- sample_range(bounds, time, params, start, stop):
    (addresses, values) for a contiguous address range, numba prange kernel.

- sample_points(addresses, bounds, time, params):
    same for an arbitrary int array of addresses.

Output depends only on (address, time, params); nothing is cached.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from sbsa.common.errors import DomainError
from sbsa.core.address import capacity, decode, validate_bounds
from sbsa.core.kernels import as_index_array
from sbsa.field.kernels import (
    TWO_PI,
    kronecker_slopes,
    sample_addresses_jit,
    sample_range_jit,
)
from sbsa.field.waves import WaveParams, WaveTerm, validate_wave_params

MAX_CELLS = 2**24  # one batch of float64 values = 128 MiB


def _check_time(time: float) -> float:
    try:
        t = float(time)
    except (TypeError, ValueError):
        raise DomainError(f"time must be a real number (got {time!r})") from None
    if not math.isfinite(t):
        raise DomainError(f"time must be finite (got {time!r})")
    return t


def spatial_phase(coords: Sequence[int], term: WaveTerm, mode: str = "radial") -> float:
    """
    Spatial phase offset (radians) of `term` at a decoded coordinate tuple.

    radial:    wavenumber * sqrt(Σ c_i^2)
    kronecker: 2π * wavenumber * frac(Σ g_i c_i), g_i = frac(phi^-(i+1))
    """
    if mode == "radial":
        r = math.sqrt(sum(float(c) * float(c) for c in coords))
        return term.wavenumber * r
    if mode == "kronecker":
        g = kronecker_slopes(len(coords))
        s = sum(float(gi) * float(c) for gi, c in zip(g, coords))
        return TWO_PI * term.wavenumber * (s % 1.0)
    raise DomainError(f"unknown spatial mode {mode!r}")


def sample(address: int, bounds: Sequence[int], time: float, params: WaveParams) -> float:
    validate_wave_params(params)
    t = _check_time(time)
    coords = decode(address, bounds)
    value = 0.0
    for term in params.terms:
        sp = spatial_phase(coords, term, params.spatial)
        value += term.amplitude * math.sin(TWO_PI * term.frequency * t + term.phase + sp)
    return value


def _kernel_args(bounds: Tuple[int, ...], params: WaveParams):
    f, a, p, k = params.as_arrays()
    return (
        np.asarray(bounds, dtype=np.int64),
        f, a, p, k,
        params.spatial_code,
        kronecker_slopes(len(bounds)),
    )


def sample_range(bounds: Sequence[int],
                 time: float,
                 params: WaveParams,
                 start: int = 0,
                 stop: Optional[int] = None,
                 *,
                 max_cells: int = MAX_CELLS) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample every address in [start, stop). `stop` defaults to capacity.
    Returns (addresses int64, values float64).
    """
    bs = validate_bounds(bounds)
    validate_wave_params(params)
    t = _check_time(time)
    cap = capacity(bs)
    stop = cap if stop is None else stop
    if not (isinstance(start, (int, np.integer)) and isinstance(stop, (int, np.integer))):
        raise DomainError(f"address range must be integers (got {start!r}, {stop!r})")
    if not 0 <= start <= stop <= cap:
        raise DomainError(f"address range [{start}, {stop}) not within [0, {cap}]")
    n = int(stop) - int(start)
    if n > max_cells:
        raise DomainError(
            f"address range of {n} cells exceeds max_cells={max_cells}; sample in chunks"
        )

    b_arr, f, a, p, k, mode, slopes = _kernel_args(bs, params)
    out = np.empty(n, dtype=np.float64)
    if n:
        sample_range_jit(np.int64(start), b_arr, t, f, a, p, k, mode, slopes, out)
    addresses = np.arange(int(start), int(stop), dtype=np.int64)
    return addresses, out


def sample_points(addresses, bounds: Sequence[int], time: float, params: WaveParams) -> np.ndarray:
    """Values (float64) at an arbitrary set of addresses, same order as given."""
    bs = validate_bounds(bounds)
    validate_wave_params(params)
    t = _check_time(time)
    arr = as_index_array(addresses, "addresses").ravel()
    cap = capacity(bs)
    bad = (arr < 0) | (arr >= cap)
    if bad.any():
        i = int(np.argmax(bad))
        raise DomainError(f"address out of range at index {i}: {int(arr[i])} not in [0, {cap})")
    b_arr, f, a, p, k, mode, slopes = _kernel_args(bs, params)
    out = np.empty(arr.shape[0], dtype=np.float64)
    if arr.shape[0]:
        sample_addresses_jit(arr, b_arr, t, f, a, p, k, mode, slopes, out)
    return out
