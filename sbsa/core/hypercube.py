# sbsa/core/hypercube.py
"""
Hypercube: raw coordinates -> Quantizer -> Address Mapper, and back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from sbsa.common.errors import DomainError
from sbsa.core.address import DEFAULT_BOUNDS, capacity, decode, encode, validate_bounds
from sbsa.core.quantizer import check_step, dequantize_point, quantize_point


@dataclass(frozen=True)
class Hypercube:
    bounds: Tuple[int, ...] = DEFAULT_BOUNDS
    steps: Tuple[float, ...] = (1.0, 1.0, 1.0, 1.0)

    def __post_init__(self):
        bs = validate_bounds(self.bounds)
        steps = tuple(self.steps)
        if len(steps) != len(bs):
            raise DomainError(f"expected {len(bs)} quantization steps (got {len(steps)})")
        # normalize; frozen dataclass needs object.__setattr__
        object.__setattr__(self, "bounds", bs)
        object.__setattr__(self, "steps", tuple(check_step(s) for s in steps))

    @property
    def dimensions(self) -> int:
        return len(self.bounds)

    @property
    def capacity(self) -> int:
        return capacity(self.bounds)

    def locate(self, xs: Sequence[float]) -> Tuple[int, Tuple[int, ...]]:
        """Quantize raw coordinates and return (address, coordinate tuple)."""
        coords = quantize_point(xs, self.steps)
        return encode(coords, self.bounds), coords

    def point(self, address: int) -> Tuple[float, ...]:
        """Cell centre in raw coordinates for `address`."""
        return dequantize_point(decode(address, self.bounds), self.steps)
