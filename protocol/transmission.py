"""Top-level decode entry points for a single hex transmission."""

import logging

from primitives.bit_source import BitSource
from protocol.evaluator import evaluate
from protocol.layout import DEFAULT_LAYOUT, PacketLayout
from protocol.packet import Packet
from protocol.parser import PacketParser
from protocol.versions import sum_versions

logger = logging.getLogger(__name__)


def decode(hex_text: str, layout: PacketLayout = DEFAULT_LAYOUT) -> Packet:
    """Decode the root packet of a transmission.

    Trailing bits after the root packet are padding and are ignored.

    Args:
        hex_text: Hex digits encoding the transmission
        layout: Packet field widths

    Returns:
        The root packet of the decoded tree
    """
    source = BitSource(hex_text)
    packet = PacketParser(source, layout).parse()
    logger.info(
        "Decoded %d-bit transmission: root packet %d bits, %d padding bits",
        source.total_bits, packet.bit_length, source.remaining,
    )
    return packet


def decode_and_sum_versions(hex_text: str) -> int:
    """Decode a transmission and return the sum of all packet versions."""
    return sum_versions(decode(hex_text))


def decode_and_evaluate(hex_text: str) -> int:
    """Decode a transmission and return the root packet's value."""
    return evaluate(decode(hex_text))
