# sbsa/tests/test_address.py
"""
Address mapper tests.

Mixed-radix encoding must be a bijection from the bounded hypercube onto
[0, Π bounds). Small grids are checked exhaustively; the default (S, T, W, V)
bounds are spot-checked at the corners.
"""

import itertools

import numpy as np
import pytest

from sbsa.common.errors import DomainError
from sbsa.core.address import (
    DEFAULT_BOUNDS,
    MAX_CAPACITY,
    capacity,
    decode,
    decode_many,
    encode,
    encode_many,
    strides,
    validate_bounds,
)


def test_concrete_scenario_549():
    bounds = (4, 5, 6, 7)
    assert encode((1, 2, 3, 4), bounds) == 1 + 2 * 4 + 3 * 4 * 5 + 4 * 4 * 5 * 6 == 549
    assert decode(549, bounds) == (1, 2, 3, 4)


def test_exhaustive_roundtrip_injective_and_in_range():
    """
    Every coordinate tuple of a (3, 4, 2, 5) grid:
    - decodes back to itself
    - gets a distinct address
    - lands in [0, capacity)
    """
    bounds = (3, 4, 2, 5)
    cap = capacity(bounds)
    seen = set()
    for c in itertools.product(*(range(b) for b in bounds)):
        a = encode(c, bounds)
        assert 0 <= a < cap
        assert decode(a, bounds) == c
        seen.add(a)
    # injective and onto [0, cap)
    assert seen == set(range(cap))


def test_other_arities():
    assert encode((5,), (10,)) == 5
    assert decode(17, (4, 5)) == (1, 4)
    assert encode((1, 1, 1, 1, 1), (2, 2, 2, 2, 2)) == 31


def test_strides_are_place_values():
    assert strides((4, 5, 6, 7)) == (1, 4, 20, 120)


def test_default_bounds_capacity_fits_64_bit():
    cap = capacity(DEFAULT_BOUNDS)
    assert cap == 10**16
    assert cap > 2**32
    last = tuple(b - 1 for b in DEFAULT_BOUNDS)
    assert encode(last, DEFAULT_BOUNDS) == cap - 1
    assert decode(cap - 1, DEFAULT_BOUNDS) == last


@pytest.mark.parametrize("coords", [(4, 0, 0, 0), (0, 5, 0, 0), (0, 0, 0, 7), (-1, 0, 0, 0)])
def test_encode_rejects_out_of_bound(coords):
    with pytest.raises(DomainError, match="out of bounds"):
        encode(coords, (4, 5, 6, 7))


def test_encode_rejects_wrong_arity_and_non_integers():
    with pytest.raises(DomainError):
        encode((1, 2, 3), (4, 5, 6, 7))
    with pytest.raises(DomainError):
        encode((1.0, 2, 3, 4), (4, 5, 6, 7))


@pytest.mark.parametrize("address", [-1, 840, 10**20])
def test_decode_rejects_invalid_address(address):
    with pytest.raises(DomainError, match="out of range"):
        decode(address, (4, 5, 6, 7))


def test_invalid_bounds():
    for bad in [(), (0, 5), (4, -1), (4, 2.5)]:
        with pytest.raises(DomainError):
            validate_bounds(bad)


def test_capacity_overflow_rejected():
    with pytest.raises(DomainError, match="64-bit"):
        capacity((10**5,) * 4)
    with pytest.raises(DomainError):
        capacity((2**32, 2**32))
    # exactly at the limit is fine
    assert capacity((MAX_CAPACITY,)) == MAX_CAPACITY


def test_encode_many_matches_scalar():
    bounds = (4, 5, 6, 7)
    coords = np.array(list(itertools.product(*(range(b) for b in bounds))), dtype=np.int64)
    addrs = encode_many(coords, bounds)
    assert addrs.dtype == np.int64
    expected = [encode(tuple(int(v) for v in c), bounds) for c in coords[::37]]
    assert addrs[::37].tolist() == expected
    assert np.array_equal(np.sort(addrs), np.arange(capacity(bounds)))


def test_decode_many_inverts_encode_many():
    bounds = DEFAULT_BOUNDS
    rng = np.random.default_rng(0)
    coords = np.stack([rng.integers(0, b, size=256) for b in bounds], axis=1)
    back = decode_many(encode_many(coords, bounds), bounds)
    assert np.array_equal(back, coords)


def test_batch_errors():
    with pytest.raises(DomainError, match="row 1"):
        encode_many([[0, 0], [2, 0]], (2, 2))
    with pytest.raises(DomainError):
        decode_many([0, 4], (2, 2))
    with pytest.raises(DomainError):
        decode_many(np.array([0.5]), (2, 2))


def test_batch_empty_input():
    """Empty batches (np.asarray([]) is float64) give empty int64 results."""
    addrs = encode_many([], (4, 5))
    assert addrs.shape == (0,) and addrs.dtype == np.int64
    coords = decode_many([], (4, 5))
    assert coords.shape == (0, 2) and coords.dtype == np.int64


def test_encode_many_one_dimensional_input():
    """1-D input is N coordinates on a single-axis grid, one tuple otherwise."""
    assert encode_many([1, 2, 3], (10,)).tolist() == [1, 2, 3]
    assert encode_many([1, 2, 3, 4], (4, 5, 6, 7)).tolist() == [549]
    with pytest.raises(DomainError, match="row 1"):
        encode_many([1, 10], (10,))
