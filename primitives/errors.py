"""Failure taxonomy for decoding and evaluating BITS transmissions.

Every error is fatal for the decode or evaluation in progress. The caller gets
the error kind plus whatever bit-position context was known when it was raised;
no partially built packet tree is ever returned alongside it.
"""

from typing import Optional


class TransmissionError(ValueError):
    """Base class for all transmission decode/evaluate failures."""

    kind = "transmission"

    def __init__(self, message: str, *, bit_pos: Optional[int] = None) -> None:
        super().__init__(message)
        self.bit_pos = bit_pos


class UnexpectedEndOfStream(TransmissionError):
    """Bit cursor exhausted before a packet or literal group completed."""

    kind = "unexpected-end-of-stream"

    def __init__(
        self,
        message: str,
        *,
        bit_pos: Optional[int] = None,
        bits_needed: Optional[int] = None,
        bits_remaining: Optional[int] = None,
    ) -> None:
        super().__init__(message, bit_pos=bit_pos)
        self.bits_needed = bits_needed
        self.bits_remaining = bits_remaining


class FormatError(TransmissionError):
    """Input is not a legal transmission: bad hex digit or unknown type id."""

    kind = "format"

    def __init__(
        self,
        message: str,
        *,
        bit_pos: Optional[int] = None,
        index: Optional[int] = None,
        char: Optional[str] = None,
        type_id: Optional[int] = None,
    ) -> None:
        super().__init__(message, bit_pos=bit_pos)
        self.index = index
        self.char = char
        self.type_id = type_id


class FramingError(TransmissionError):
    """Operator children do not fit the length declared in its header."""

    kind = "framing"

    def __init__(
        self,
        message: str,
        *,
        bit_pos: Optional[int] = None,
        expected_bits: Optional[int] = None,
        actual_bits: Optional[int] = None,
        child_count: Optional[int] = None,
    ) -> None:
        super().__init__(message, bit_pos=bit_pos)
        self.expected_bits = expected_bits
        self.actual_bits = actual_bits
        self.child_count = child_count


class InvalidArity(TransmissionError):
    """Comparison operator without exactly two children."""

    kind = "invalid-arity"

    def __init__(
        self,
        message: str,
        *,
        bit_pos: Optional[int] = None,
        op: Optional[str] = None,
        arity: Optional[int] = None,
    ) -> None:
        super().__init__(message, bit_pos=bit_pos)
        self.op = op
        self.arity = arity
