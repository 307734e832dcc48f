"""
SBSA — Size-Based Spatial Addressing (hypercube addressing + wave field)

Modules
-------
- core: Quantizer, Address Mapper (mixed-radix encode/decode), Hypercube pipeline
- field: wave parameters, field sampler (numba, parallel over addresses),
  configuration records, time-stepped runner
- io: frame writer/reader (the only file I/O)
- common: DomainError, hashing, store paths
- cli: `sbsa` command (encode, decode, quantize, sample, run)

Rendering is not part of this package; renderers consume the
(address, value) frames written by `sbsa.io.saver`.
"""

__all__ = [
    "common",
    "core",
    "field",
    "io",
    "cli",
]

__version__ = "0.1.0"
