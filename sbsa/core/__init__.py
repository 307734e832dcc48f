"""
Core — Quantizer and Address Mapper.

- quantize / dequantize / quantize_point
- encode / decode (mixed-radix), encode_many / decode_many (numba)
- Hypercube: raw coordinates -> (address, coordinate tuple)
"""
from .quantizer import quantize, dequantize, quantize_point, dequantize_point
from .address import (
    DEFAULT_BOUNDS,
    MAX_CAPACITY,
    capacity,
    strides,
    encode,
    decode,
    encode_many,
    decode_many,
)
from .hypercube import Hypercube
