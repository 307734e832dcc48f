# sbsa/core/kernels.py
"""
Numba kernels for batch mixed-radix addressing.

Inputs are validated by the callers in sbsa.core.address; these loops
assume in-range int64 data and write into caller-provided output arrays.
Every row is independent, so the outer loop runs under prange.
"""

from __future__ import annotations
import numpy as np
from numba import njit, prange

from sbsa.common.errors import DomainError


@njit(parallel=True)
def encode_jit(coords, strides, out):
    N, D = coords.shape
    for n in prange(N):
        acc = 0
        for i in range(D):
            acc += coords[n, i] * strides[i]
        out[n] = acc


@njit(parallel=True)
def decode_jit(addresses, bounds, out):
    N = addresses.shape[0]
    D = bounds.shape[0]
    for n in prange(N):
        a = addresses[n]
        for i in range(D):
            b = bounds[i]
            out[n, i] = a % b
            a = a // b


@njit
def decode_one(address, bounds, out):
    """Decode a single address into `out` (length D); used inside other kernels."""
    a = address
    for i in range(bounds.shape[0]):
        b = bounds[i]
        out[i] = a % b
        a = a // b


def as_index_array(values, name: str) -> np.ndarray:
    arr = np.asarray(values)
    if arr.size == 0:
        # np.asarray([]) is float64; an empty batch carries no values to check
        return np.empty(arr.shape, dtype=np.int64)
    if arr.dtype.kind not in "iu":
        raise DomainError(f"{name} must be an integer array (got dtype {arr.dtype})")
    return np.ascontiguousarray(arr, dtype=np.int64)
