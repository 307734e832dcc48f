# sbsa/field/config.py
"""
Field configuration record and its validation.

Recognised keys (JSON object):
    dimensions          int, number of axes (default 4)
    bounds              list of int, one per axis (default S, T, W, V = 10^4 each)
    quantization_step   float or list of float, one per axis (default 1.0)
    wave_params         list of {frequency, amplitude, phase, wavenumber}
                        or {"spatial": "...", "terms": [...]}
    cache_size          accepted for compatibility, ignored
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from pathlib import Path
from typing import Any, Dict, List, Tuple

from sbsa.common.errors import DomainError
from sbsa.core.address import DEFAULT_BOUNDS, validate_bounds
from sbsa.field.waves import WaveParams, WaveTerm, validate_wave_params

log = logging.getLogger(__name__)

_KNOWN_KEYS = {"dimensions", "bounds", "quantization_step", "wave_params", "cache_size"}
_TERM_KEYS = {"frequency", "amplitude", "phase", "wavenumber"}


@dataclass(frozen=True)
class FieldConfig:
    dimensions: int = 4
    bounds: Tuple[int, ...] = DEFAULT_BOUNDS
    quantization_step: Tuple[float, ...] = (1.0, 1.0, 1.0, 1.0)
    wave_params: WaveParams = field(default_factory=WaveParams)


def validate_field_config(cfg: FieldConfig) -> None:
    """
    Raise DomainError if the configuration is unusable.

    Checks:
    - dimensions >= 1, equal to len(bounds) and len(quantization_step)
    - bounds integers >= 1, capacity within the 64-bit address limit
    - quantization steps finite and > 0
    - wave params valid (finite, frequency >= 0, known spatial mode)
    """
    errs: List[str] = []

    dims = cfg.dimensions
    if isinstance(dims, bool) or not isinstance(dims, int) or dims < 1:
        errs.append(f"dimensions must be an integer >= 1 (got {dims!r})")
    else:
        if len(cfg.bounds) != dims:
            errs.append(f"bounds has {len(cfg.bounds)} entries; dimensions={dims}")
        if len(cfg.quantization_step) != dims:
            errs.append(f"quantization_step has {len(cfg.quantization_step)} entries; dimensions={dims}")

    try:
        validate_bounds(cfg.bounds)
    except DomainError as e:
        errs.append(str(e))

    for i, s in enumerate(cfg.quantization_step):
        if isinstance(s, bool) or not isinstance(s, Real) or not math.isfinite(s) or s <= 0.0:
            errs.append(f"quantization_step of axis {i} must be finite and > 0 (got {s!r})")

    try:
        validate_wave_params(cfg.wave_params)
    except DomainError as e:
        errs.append(str(e))

    if errs:
        # Join all errors into a single message so callers can surface it at once.
        raise DomainError("; ".join(errs))


def _wave_params_from(obj: Any) -> WaveParams:
    spatial = "radial"
    if isinstance(obj, dict):
        unknown = set(obj) - {"spatial", "terms"}
        if unknown:
            raise DomainError(f"unknown wave_params keys: {sorted(unknown)}")
        spatial = obj.get("spatial", spatial)
        obj = obj.get("terms", [])
    if not isinstance(obj, list):
        raise DomainError(f"wave_params must be a list of terms (got {type(obj).__name__})")
    terms = []
    for k, t in enumerate(obj):
        if not isinstance(t, dict):
            raise DomainError(f"wave term {k} must be an object (got {t!r})")
        unknown = set(t) - _TERM_KEYS
        if unknown:
            raise DomainError(f"wave term {k}: unknown keys {sorted(unknown)}")
        if "frequency" not in t:
            raise DomainError(f"wave term {k}: frequency is required")
        terms.append(WaveTerm(**t))
    return WaveParams(terms=tuple(terms), spatial=spatial)


def config_from_dict(d: Dict[str, Any]) -> FieldConfig:
    """Build and validate a FieldConfig from a plain dict (e.g. parsed JSON)."""
    if not isinstance(d, dict):
        raise DomainError(f"config must be an object (got {type(d).__name__})")
    unknown = set(d) - _KNOWN_KEYS
    if unknown:
        raise DomainError(f"unknown config keys: {sorted(unknown)}")
    if "cache_size" in d:
        log.warning("config: cache_size=%r is not used; ignoring", d["cache_size"])

    bounds = d.get("bounds", DEFAULT_BOUNDS)
    if not isinstance(bounds, (list, tuple)):
        raise DomainError(f"bounds must be a list of integers (got {bounds!r})")
    bounds = tuple(bounds)
    dims = d.get("dimensions", len(bounds))
    step = d.get("quantization_step", 1.0)
    if isinstance(step, (list, tuple)):
        steps = tuple(step)
    else:
        steps = (step,) * (dims if isinstance(dims, int) and dims > 0 else len(bounds))

    kwargs: Dict[str, Any] = {
        "dimensions": dims,
        "bounds": bounds,
        "quantization_step": steps,
    }
    if "wave_params" in d:
        kwargs["wave_params"] = _wave_params_from(d["wave_params"])
    cfg = FieldConfig(**kwargs)
    validate_field_config(cfg)
    return cfg


def config_to_dict(cfg: FieldConfig) -> Dict[str, Any]:
    return {
        "dimensions": cfg.dimensions,
        "bounds": list(cfg.bounds),
        "quantization_step": list(cfg.quantization_step),
        "wave_params": {
            "spatial": cfg.wave_params.spatial,
            "terms": [
                {
                    "frequency": t.frequency,
                    "amplitude": t.amplitude,
                    "phase": t.phase,
                    "wavenumber": t.wavenumber,
                }
                for t in cfg.wave_params.terms
            ],
        },
    }


def load_config(path: Path) -> FieldConfig:
    path = Path(path)
    with path.open("r") as f:
        try:
            d = json.load(f)
        except json.JSONDecodeError as e:
            raise DomainError(f"{path}: invalid JSON ({e})") from e
    log.debug("config: loaded %s", path)
    return config_from_dict(d)
