"""Primitives - Bit-level reading and the decode failure taxonomy."""

from primitives.bit_source import (
    BITS_PER_HEX_DIGIT,
    BitSource,
    hex_to_bits,
    validate_hex,
)
from primitives.errors import (
    FormatError,
    FramingError,
    InvalidArity,
    TransmissionError,
    UnexpectedEndOfStream,
)

__all__ = [
    # Bit source
    "BitSource",
    "BITS_PER_HEX_DIGIT",
    "hex_to_bits",
    "validate_hex",
    # Errors
    "TransmissionError",
    "UnexpectedEndOfStream",
    "FormatError",
    "FramingError",
    "InvalidArity",
]
