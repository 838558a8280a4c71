"""Forward-only bit cursor over a hex-encoded transmission.

Each hex digit expands to four bits, most-significant first, so "DA" reads as
1,1,0,1,1,0,1,0. The whole transmission is expanded once up front; reading
only ever moves the cursor forward.
"""

import logging
import string

import numpy as np

from primitives.errors import FormatError, UnexpectedEndOfStream

logger = logging.getLogger(__name__)

BITS_PER_HEX_DIGIT = 4

_HEX_DIGITS = frozenset(string.hexdigits)


def validate_hex(text: str) -> str:
    """Return the transmission stripped of surrounding whitespace.

    Raises:
        FormatError: On the first character that is not a hex digit.
    """
    text = text.strip()
    for index, char in enumerate(text):
        if char not in _HEX_DIGITS:
            raise FormatError(
                f"Invalid hex digit {char!r} at index {index}",
                index=index,
                char=char,
            )
    return text


def hex_to_bits(text: str) -> np.ndarray:
    """Expand hex text into a uint8 array of bits (MSB first per digit)."""
    text = validate_hex(text)
    n_bits = len(text) * BITS_PER_HEX_DIGIT

    # bytes.fromhex needs whole bytes; the pad nibble is sliced off below
    if len(text) % 2:
        text += "0"

    raw = np.frombuffer(bytes.fromhex(text), dtype=np.uint8)
    return np.unpackbits(raw)[:n_bits]


class BitSource:
    """Sequential reader over the bits of one transmission.

    Supports the iterator protocol (``next(source)`` yields a single bit and
    raises ``StopIteration`` once exhausted) plus ``take``/``read_uint`` for
    fixed-width fields. There is no peek or seek.
    """

    def __init__(self, hex_text: str) -> None:
        """Materialize the bits of a transmission.

        Args:
            hex_text: Hex digits, case-insensitive, no separators

        Raises:
            FormatError: If hex_text contains a non-hex character
        """
        self._bits = hex_to_bits(hex_text)
        self.total_bits = len(self._bits)
        self.position = 0
        logger.debug("BitSource over %d bits", self.total_bits)

    @property
    def remaining(self) -> int:
        """Number of bits not yet consumed."""
        return self.total_bits - self.position

    @property
    def exhausted(self) -> bool:
        return self.position >= self.total_bits

    def __iter__(self) -> "BitSource":
        return self

    def __next__(self) -> int:
        if self.exhausted:
            raise StopIteration
        bit = int(self._bits[self.position])
        self.position += 1
        return bit

    def take(self, n: int) -> np.ndarray:
        """Consume exactly n bits.

        The cursor does not move if fewer than n bits remain.

        Raises:
            UnexpectedEndOfStream: If fewer than n bits remain
        """
        if n < 0:
            raise ValueError(f"Cannot take a negative number of bits: {n}")
        if n > self.remaining:
            raise UnexpectedEndOfStream(
                f"Not enough bits at position {self.position}: need {n}, have {self.remaining}",
                bit_pos=self.position,
                bits_needed=n,
                bits_remaining=self.remaining,
            )
        bits = self._bits[self.position:self.position + n].copy()
        self.position += n
        return bits

    def read_uint(self, n: int) -> int:
        """Consume n bits and interpret them as an MSB-first unsigned integer."""
        value = 0
        for bit in self.take(n):
            value = (value << 1) | int(bit)
        return value
