"""Protocol - BITS packet model, parser and tree reductions."""

from protocol.evaluator import evaluate
from protocol.layout import (
    DEFAULT_LAYOUT,
    LENGTH_TYPE_CHILD_COUNT,
    LENGTH_TYPE_TOTAL_BITS,
    PacketLayout,
)
from protocol.packet import (
    COMPARISON_KINDS,
    Literal,
    Operator,
    OperatorKind,
    Packet,
    PacketBody,
    format_tree,
)
from protocol.parser import PacketParser, parse_packet
from protocol.transmission import decode, decode_and_evaluate, decode_and_sum_versions
from protocol.versions import sum_versions

__all__ = [
    # Packet model
    "Packet",
    "PacketBody",
    "Literal",
    "Operator",
    "OperatorKind",
    "COMPARISON_KINDS",
    "format_tree",
    # Layout
    "PacketLayout",
    "DEFAULT_LAYOUT",
    "LENGTH_TYPE_TOTAL_BITS",
    "LENGTH_TYPE_CHILD_COUNT",
    # Parsing
    "PacketParser",
    "parse_packet",
    # Reductions
    "evaluate",
    "sum_versions",
    # Entry points
    "decode",
    "decode_and_evaluate",
    "decode_and_sum_versions",
]
