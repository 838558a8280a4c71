"""Descent parser for BITS packets.

Packet wire format (all fields MSB first):

    version     3 bits
    type_id     3 bits      4 = literal, anything else = operator kind
    literal:    5-bit groups [continue:1][value:4], last group has continue=0
    operator:   length_type:1
                  0 -> total_length:15, children fill exactly that many bits
                  1 -> child_count:11, exactly that many children follow

Children follow the same packet grammar. Open operators are kept on an
explicit stack rather than the Python call stack, so nesting depth is bounded
only by the length of the transmission. Each packet records the number of bits
it consumed so a length-bounded parent knows when its children are complete.
"""

import logging
from dataclasses import dataclass, field

from primitives.bit_source import BitSource
from primitives.errors import FormatError, FramingError, InvalidArity
from protocol.layout import DEFAULT_LAYOUT, LENGTH_TYPE_TOTAL_BITS, PacketLayout
from protocol.packet import COMPARISON_ARITY, Literal, Operator, OperatorKind, Packet

logger = logging.getLogger(__name__)


@dataclass
class _OpenOperator:
    """An operator header whose children are still being parsed.

    Attributes:
        op: Operator kind
        version: Packet version
        start: Bit position of the packet header
        length_type_id: 0 for total-length framing, 1 for child-count framing
        declared: Declared total child bits (type 0) or child count (type 1)
        children: Children parsed so far
        consumed: Bits consumed by children so far
    """
    op: OperatorKind
    version: int
    start: int
    length_type_id: int
    declared: int
    children: list[Packet] = field(default_factory=list)
    consumed: int = 0

    def add_child(self, child: Packet) -> bool:
        """Attach a finished child; return True once all children are in."""
        self.children.append(child)
        self.consumed += child.bit_length

        if self.length_type_id != LENGTH_TYPE_TOTAL_BITS:
            return len(self.children) == self.declared

        if self.consumed > self.declared:
            raise FramingError(
                f"Children of packet at bit {self.start} span {self.consumed} bits, declared {self.declared}",
                bit_pos=self.start,
                expected_bits=self.declared,
                actual_bits=self.consumed,
            )
        return self.consumed == self.declared


class PacketParser:
    """Decodes one packet tree from a BitSource.

    The parser owns the source for the duration of a parse. On any failure the
    error propagates immediately and no packet is returned; the only side effect
    of parsing is the advanced cursor.
    """

    def __init__(self, source: BitSource, layout: PacketLayout = DEFAULT_LAYOUT) -> None:
        self.source = source
        self.layout = layout

    def parse(self) -> Packet:
        """Parse one packet, plus all nested children, at the current position.

        Bits after the packet are left unread.

        Raises:
            UnexpectedEndOfStream: If the source runs out mid-packet
            FormatError: If a type id has no operator kind
            FramingError: If operator children do not match the declared length
            InvalidArity: If a comparison operator does not have two children
        """
        open_operators: list[_OpenOperator] = []

        while True:
            start = self.source.position
            version = self.source.read_uint(self.layout.version_bits)
            type_id = self.source.read_uint(self.layout.type_id_bits)

            if type_id != self.layout.literal_type_id:
                op = self._operator_kind(type_id, start)
                open_operators.append(self._open_operator(op, version, start))
                continue

            packet = Packet(version=version, body=self._parse_literal(), bit_length=self.source.position - start)
            self._trace(packet, start, len(open_operators))

            # Close every operator this packet completes
            while open_operators:
                if not open_operators[-1].add_child(packet):
                    break
                pending = open_operators.pop()
                packet = self._close_operator(pending)
                self._trace(packet, pending.start, len(open_operators))
            else:
                logger.debug(
                    "Parsed root packet: %d bits, %d bits of padding left",
                    packet.bit_length, self.source.remaining,
                )
                return packet

    def _operator_kind(self, type_id: int, bit_pos: int) -> OperatorKind:
        try:
            return OperatorKind(type_id)
        except ValueError:
            raise FormatError(
                f"Unknown packet type id {type_id} at bit {bit_pos}",
                bit_pos=bit_pos,
                type_id=type_id,
            ) from None

    def _parse_literal(self) -> Literal:
        value = 0
        while True:
            # [continue][value bits...]
            group = self.source.take(self.layout.group_bits)
            for bit in group[1:]:
                value = (value << 1) | int(bit)
            if group[0] == 0:
                break
        return Literal(value)

    def _open_operator(self, op: OperatorKind, version: int, start: int) -> _OpenOperator:
        length_type_id = self.source.read_uint(1)
        declared = self.source.read_uint(self.layout.length_field_bits(length_type_id))

        if declared == 0:
            if length_type_id == LENGTH_TYPE_TOTAL_BITS:
                raise FramingError(
                    f"{op.name} packet at bit {start} declares 0 bits of children",
                    bit_pos=start,
                    expected_bits=0,
                    actual_bits=0,
                )
            raise FramingError(
                f"{op.name} packet at bit {start} declares 0 children",
                bit_pos=start,
                child_count=0,
            )

        return _OpenOperator(
            op=op, version=version, start=start,
            length_type_id=length_type_id, declared=declared,
        )

    def _close_operator(self, pending: _OpenOperator) -> Packet:
        op = pending.op
        n_children = len(pending.children)
        if op.is_comparison and n_children != COMPARISON_ARITY:
            raise InvalidArity(
                f"{op.name} packet at bit {pending.start} has {n_children} children, expected {COMPARISON_ARITY}",
                bit_pos=pending.start,
                op=op.name,
                arity=n_children,
            )
        return Packet(
            version=pending.version,
            body=Operator(op=op, children=tuple(pending.children)),
            bit_length=self.source.position - pending.start,
        )

    def _trace(self, packet: Packet, start: int, depth: int) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%sv%d %s at bit %d (%d bits)",
                         "  " * depth, packet.version, _describe(packet.body), start, packet.bit_length)


def _describe(body) -> str:
    if isinstance(body, Literal):
        return f"literal {body.value}"
    return f"{body.op.name.lower()}[{len(body.children)}]"


def parse_packet(source: BitSource, layout: PacketLayout = DEFAULT_LAYOUT) -> Packet:
    """Parse one packet tree from source."""
    return PacketParser(source, layout).parse()
