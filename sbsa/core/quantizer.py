# sbsa/core/quantizer.py
"""
Quantizer: continuous coordinate -> integer quantization index.

    index = round(x / step)          (ties: half away from zero)
    Q(x, step) = step * index        (reconstructed value, see dequantize)

The index, not the reconstructed value, feeds the address mapper.

Float inputs are divided in float64. Integer `x` is divided exactly
(fractions.Fraction), so indices above 2**53 are not rounded off.
"""

from __future__ import annotations

import math
from fractions import Fraction
from numbers import Integral, Real
from typing import Sequence, Tuple, Union

from sbsa.common.errors import DomainError

Step = Union[float, Sequence[float]]


def _finite(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise DomainError(f"{name} must be a real number (got {value!r})")
    try:
        v = float(value)
    except OverflowError:
        raise DomainError(f"{name} is too large for a float (got {value!r})") from None
    if not math.isfinite(v):
        raise DomainError(f"{name} must be finite (got {value!r})")
    return v


def check_step(step) -> float:
    s = _finite("step", step)
    if s <= 0.0:
        raise DomainError(f"step must be > 0 (got {step!r})")
    return s


def round_half_away(r) -> int:
    """Round to nearest integer; exact .5 ties go away from zero (2.5 -> 3, -2.5 -> -3)."""
    a = abs(r)
    f = math.floor(a)
    # a - f is exact for floats and Fractions, so ties are detected exactly
    n = f + 1 if a - f >= 0.5 else f
    return int(n) if r >= 0 else -int(n)


def quantize(x: float, step: float) -> int:
    """Quantization index of `x` for grid spacing `step`."""
    if isinstance(x, Integral) and not isinstance(x, bool):
        s = check_step(step)
        exact_step = Fraction(int(step)) if isinstance(step, Integral) else Fraction(s)
        return round_half_away(Fraction(int(x)) / exact_step)
    xv = _finite("x", x)
    s = check_step(step)
    r = xv / s
    if not math.isfinite(r):
        raise DomainError(f"x / step overflows for x={x!r}, step={step!r}")
    return round_half_away(r)


def dequantize(index: int, step: float) -> float:
    """Reconstructed coordinate `step * index`."""
    s = check_step(step)
    return s * int(index)


def _steps_for(n: int, steps: Step) -> Tuple[float, ...]:
    if isinstance(steps, Real):
        return (check_step(steps),) * n
    steps = tuple(steps)
    if len(steps) != n:
        raise DomainError(f"expected {n} quantization steps (got {len(steps)})")
    return tuple(check_step(s) for s in steps)


def quantize_point(xs: Sequence[float], steps: Step) -> Tuple[int, ...]:
    """
    Quantize one raw coordinate per axis. A scalar `steps` applies to
    every axis; a sequence must have one step per axis.
    """
    xs = tuple(xs)
    ss = _steps_for(len(xs), steps)
    return tuple(quantize(x, s) for x, s in zip(xs, ss))


def dequantize_point(indices: Sequence[int], steps: Step) -> Tuple[float, ...]:
    indices = tuple(indices)
    ss = _steps_for(len(indices), steps)
    return tuple(s * int(i) for i, s in zip(indices, ss))
