"""
Field — sinusoidal wave field over the addressed hypercube.

- WaveTerm / WaveParams
- sample, sample_range, sample_points
- FieldConfig, load_config, validate_field_config
- Stepper: time-stepped run with background frame writer
"""
from .waves import WaveTerm, WaveParams, validate_wave_params
from .sampler import sample, sample_range, sample_points, spatial_phase
from .config import FieldConfig, config_from_dict, config_to_dict, load_config, validate_field_config
from .stepper import Stepper, StepperConfig
