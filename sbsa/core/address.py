# sbsa/core/address.py
"""
Address Mapper: mixed-radix encoding of bounded integer coordinate tuples.

    address = c0 + c1*b0 + c2*b0*b1 + c3*b0*b1*b2 + ...

Axis i contributes the "digit" c_i with place value Π_{j<i} b_j. Because
0 <= c_i < b_i, every digit stays inside its own place, so the mapping is
a bijection from the hypercube onto [0, Π b_i). decode() peels digits off
with divmod in the same axis order.

The default bounds (S, T, W, V) = (10^4, 10^4, 10^4, 10^4) address 10^16
cells. Capacity is capped at int64 max so batch arrays hold every address.
"""

from __future__ import annotations

from numbers import Integral
from typing import Sequence, Tuple

import numpy as np

from sbsa.common.errors import DomainError
from sbsa.core.kernels import as_index_array, decode_jit, encode_jit

S = T = W = V = 10_000
DEFAULT_BOUNDS: Tuple[int, int, int, int] = (S, T, W, V)
MAX_CAPACITY = 2**63 - 1

Bounds = Sequence[int]
Coords = Tuple[int, ...]


def _is_int(v) -> bool:
    return isinstance(v, Integral) and not isinstance(v, bool)


def validate_bounds(bounds: Bounds) -> Tuple[int, ...]:
    """Normalize `bounds` to a tuple of Python ints and enforce capacity <= MAX_CAPACITY."""
    try:
        bs = tuple(bounds)
    except TypeError:
        raise DomainError(f"bounds must be a sequence of integers (got {bounds!r})") from None
    if not bs:
        raise DomainError("bounds must name at least one axis")
    for i, b in enumerate(bs):
        if not _is_int(b):
            raise DomainError(f"bound of axis {i} must be an integer (got {b!r})")
        if b < 1:
            raise DomainError(f"bound of axis {i} must be >= 1 (got {b})")
    bs = tuple(int(b) for b in bs)
    cap = 1
    for b in bs:
        cap *= b
    if cap > MAX_CAPACITY:
        raise DomainError(
            f"capacity {cap} of bounds {bs} exceeds the 64-bit address limit {MAX_CAPACITY}"
        )
    return bs


def capacity(bounds: Bounds) -> int:
    """Total number of addressable cells, Π bounds[i]."""
    cap = 1
    for b in validate_bounds(bounds):
        cap *= b
    return cap


def strides(bounds: Bounds) -> Tuple[int, ...]:
    """Place value of each axis: (1, b0, b0*b1, ...)."""
    out = []
    place = 1
    for b in validate_bounds(bounds):
        out.append(place)
        place *= b
    return tuple(out)


def encode(coords: Sequence[int], bounds: Bounds = DEFAULT_BOUNDS) -> int:
    bs = validate_bounds(bounds)
    cs = tuple(coords)
    if len(cs) != len(bs):
        raise DomainError(f"expected {len(bs)} coordinates for bounds {bs} (got {len(cs)})")
    address = 0
    place = 1
    for i, (c, b) in enumerate(zip(cs, bs)):
        if not _is_int(c):
            raise DomainError(f"coordinate of axis {i} must be an integer (got {c!r})")
        if not 0 <= c < b:
            raise DomainError(f"coordinate of axis {i} out of bounds: {c} not in [0, {b})")
        address += int(c) * place
        place *= b
    return address


def check_address(address: int, bounds: Bounds) -> int:
    cap = capacity(bounds)
    if not _is_int(address):
        raise DomainError(f"address must be an integer (got {address!r})")
    if not 0 <= address < cap:
        raise DomainError(f"address out of range: {address} not in [0, {cap})")
    return int(address)


def decode(address: int, bounds: Bounds = DEFAULT_BOUNDS) -> Coords:
    bs = validate_bounds(bounds)
    a = check_address(address, bs)
    out = []
    for b in bs:
        a, c = divmod(a, b)
        out.append(c)
    return tuple(out)


def encode_many(coords, bounds: Bounds = DEFAULT_BOUNDS) -> np.ndarray:
    """
    Vectorised encode over an (N, D) integer array. Returns int64 addresses (N,).
    A 1-D input is one coordinate tuple when D > 1, and N single-axis
    coordinates when D == 1.
    Raises DomainError naming the first offending row if any coordinate is out of bounds.
    """
    bs = validate_bounds(bounds)
    arr = as_index_array(coords, "coords")
    if arr.size == 0:
        arr = arr.reshape(0, len(bs))
    elif arr.ndim == 1:
        arr = arr.reshape(-1, 1) if len(bs) == 1 else arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] != len(bs):
        raise DomainError(f"coords must have shape (N, {len(bs)}) (got {arr.shape})")
    b_arr = np.asarray(bs, dtype=np.int64)
    bad = np.any((arr < 0) | (arr >= b_arr), axis=1)
    if bad.any():
        row = int(np.argmax(bad))
        raise DomainError(
            f"coordinates out of bounds at row {row}: {tuple(int(c) for c in arr[row])} "
            f"for bounds {bs}"
        )
    out = np.empty(arr.shape[0], dtype=np.int64)
    encode_jit(arr, np.asarray(strides(bs), dtype=np.int64), out)
    return out


def decode_many(addresses, bounds: Bounds = DEFAULT_BOUNDS) -> np.ndarray:
    """Vectorised decode of an address array. Returns an (N, D) int64 array."""
    bs = validate_bounds(bounds)
    arr = as_index_array(addresses, "addresses").ravel()
    cap = capacity(bs)
    bad = (arr < 0) | (arr >= cap)
    if bad.any():
        i = int(np.argmax(bad))
        raise DomainError(f"address out of range at index {i}: {int(arr[i])} not in [0, {cap})")
    out = np.empty((arr.shape[0], len(bs)), dtype=np.int64)
    decode_jit(arr, np.asarray(bs, dtype=np.int64), out)
    return out
