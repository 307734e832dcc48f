# sbsa/tests/test_config.py
"""Field configuration: parsing, validation (aggregated messages), JSON loading."""

import json
import logging

import pytest

from sbsa.common.errors import DomainError
from sbsa.core.address import DEFAULT_BOUNDS
from sbsa.field.config import (
    FieldConfig,
    config_from_dict,
    config_to_dict,
    load_config,
    validate_field_config,
)
from sbsa.field.waves import WaveParams, WaveTerm


def test_defaults_are_valid():
    cfg = FieldConfig()
    validate_field_config(cfg)
    assert cfg.bounds == DEFAULT_BOUNDS
    assert cfg.dimensions == 4


def test_from_dict_full_record():
    cfg = config_from_dict({
        "dimensions": 4,
        "bounds": [4, 5, 6, 7],
        "quantization_step": [0.5, 0.5, 1.0, 2.0],
        "wave_params": [
            {"frequency": 1.0, "amplitude": 0.5, "phase": 0.1},
            {"frequency": 3.0},
        ],
    })
    assert cfg.bounds == (4, 5, 6, 7)
    assert cfg.quantization_step == (0.5, 0.5, 1.0, 2.0)
    assert len(cfg.wave_params.terms) == 2
    assert cfg.wave_params.terms[1] == WaveTerm(frequency=3.0)
    assert cfg.wave_params.spatial == "radial"


def test_scalar_step_and_spatial_block():
    cfg = config_from_dict({
        "bounds": [8, 8, 8],
        "quantization_step": 0.25,
        "wave_params": {"spatial": "kronecker", "terms": [{"frequency": 0.5, "wavenumber": 2.0}]},
    })
    assert cfg.dimensions == 3
    assert cfg.quantization_step == (0.25, 0.25, 0.25)
    assert cfg.wave_params.spatial == "kronecker"


def test_validation_collects_every_problem():
    cfg = FieldConfig(
        dimensions=3,
        bounds=(4, 5),
        quantization_step=(1.0, 0.0, 1.0),
        wave_params=WaveParams(terms=(WaveTerm(frequency=-2.0),)),
    )
    with pytest.raises(DomainError) as ei:
        validate_field_config(cfg)
    msg = str(ei.value)
    assert "bounds has 2 entries" in msg
    assert "quantization_step of axis 1" in msg
    assert "frequency must be >= 0" in msg


def test_capacity_overflow_in_config():
    with pytest.raises(DomainError, match="64-bit"):
        config_from_dict({"bounds": [100000] * 4})


def test_unknown_keys_rejected():
    with pytest.raises(DomainError, match="unknown config keys"):
        config_from_dict({"bounds": [4], "colour": "blue"})
    with pytest.raises(DomainError, match="unknown keys"):
        config_from_dict({"bounds": [4], "wave_params": [{"frequency": 1.0, "speed": 2}]})
    with pytest.raises(DomainError, match="frequency is required"):
        config_from_dict({"bounds": [4], "wave_params": [{"amplitude": 1.0}]})


def test_cache_size_is_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="sbsa.field.config"):
        cfg = config_from_dict({"bounds": [4, 4], "cache_size": 1024})
    assert cfg.bounds == (4, 4)
    assert any("cache_size" in r.getMessage() for r in caplog.records)


def test_load_config_roundtrip(tmp_path):
    cfg = config_from_dict({"bounds": [4, 5, 6, 7], "quantization_step": 0.5})
    path = tmp_path / "field.json"
    path.write_text(json.dumps(config_to_dict(cfg)))
    assert load_config(path) == cfg


def test_load_config_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{bounds: [4,")
    with pytest.raises(DomainError, match="invalid JSON"):
        load_config(path)


def test_string_and_bool_term_values_rejected():
    """Numeric strings from JSON are not numbers; they must fail validation, not sampling."""
    with pytest.raises(DomainError, match="frequency must be a finite number"):
        config_from_dict({"bounds": [2, 2], "wave_params": [{"frequency": "1"}]})
    with pytest.raises(DomainError, match="amplitude must be a finite number"):
        config_from_dict({"bounds": [2, 2], "wave_params": [{"frequency": 1.0, "amplitude": True}]})
    with pytest.raises(DomainError, match="spatial"):
        config_from_dict({"bounds": [2, 2],
                          "wave_params": {"spatial": 3, "terms": [{"frequency": 1.0}]}})
