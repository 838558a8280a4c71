"""Packet tree → BITS encoder used to build test transmissions.

The decoder never needs to write packets, so this lives with the tests. The
``literal``/``operator`` builders compute ``bit_length`` for the framing the
encoder will use, so a hand-built tree re-parses to an identical tree.
"""

from protocol.layout import DEFAULT_LAYOUT, LENGTH_TYPE_TOTAL_BITS, PacketLayout
from protocol.packet import Literal, Operator, OperatorKind, Packet


def uint_bits(value: int, width: int) -> list[int]:
    """MSB-first bits of value in a fixed width."""
    if value < 0 or value >= 1 << width:
        raise ValueError(f"{value} does not fit in {width} bits")
    return [(value >> shift) & 1 for shift in range(width - 1, -1, -1)]


def literal_groups(value: int, layout: PacketLayout = DEFAULT_LAYOUT) -> int:
    """Number of groups needed to encode value (at least one)."""
    value_bits = layout.group_value_bits
    return max(1, -(-value.bit_length() // value_bits))


def literal(version: int, value: int, layout: PacketLayout = DEFAULT_LAYOUT) -> Packet:
    bit_length = layout.header_bits + layout.group_bits * literal_groups(value, layout)
    return Packet(version=version, body=Literal(value), bit_length=bit_length)


def operator(
    version: int,
    op: OperatorKind,
    children: list[Packet],
    length_type_id: int = LENGTH_TYPE_TOTAL_BITS,
    layout: PacketLayout = DEFAULT_LAYOUT,
) -> Packet:
    bit_length = (
        layout.header_bits + 1 + layout.length_field_bits(length_type_id)
        + sum(child.bit_length for child in children)
    )
    return Packet(version=version, body=Operator(op=op, children=tuple(children)), bit_length=bit_length)


def encode_bits(
    packet: Packet,
    length_type_id: int = LENGTH_TYPE_TOTAL_BITS,
    layout: PacketLayout = DEFAULT_LAYOUT,
) -> list[int]:
    """Serialize a packet tree, using one length type for every operator."""
    bits = uint_bits(packet.version, layout.version_bits)
    body = packet.body

    if isinstance(body, Literal):
        bits += uint_bits(layout.literal_type_id, layout.type_id_bits)
        value_bits = layout.group_value_bits
        n_groups = literal_groups(body.value, layout)
        for i in range(n_groups):
            shift = (n_groups - 1 - i) * value_bits
            more = 1 if i < n_groups - 1 else 0
            bits += [more] + uint_bits((body.value >> shift) & ((1 << value_bits) - 1), value_bits)
        return bits

    bits += uint_bits(int(body.op), layout.type_id_bits)
    child_bits = [encode_bits(child, length_type_id, layout) for child in body.children]
    bits.append(length_type_id)
    if length_type_id == LENGTH_TYPE_TOTAL_BITS:
        bits += uint_bits(sum(len(b) for b in child_bits), layout.total_length_bits)
    else:
        bits += uint_bits(len(child_bits), layout.child_count_bits)
    for b in child_bits:
        bits += b
    return bits


def bits_to_hex(bits: list[int]) -> str:
    """Pack bits into upper-case hex, zero-padding to a whole digit."""
    padded = bits + [0] * (-len(bits) % 4)
    digits = []
    for i in range(0, len(padded), 4):
        nibble = padded[i] << 3 | padded[i + 1] << 2 | padded[i + 2] << 1 | padded[i + 3]
        digits.append(format(nibble, 'X'))
    return ''.join(digits)


def encode_hex(
    packet: Packet,
    length_type_id: int = LENGTH_TYPE_TOTAL_BITS,
    layout: PacketLayout = DEFAULT_LAYOUT,
) -> str:
    return bits_to_hex(encode_bits(packet, length_type_id, layout))


def nested_chain_bits(
    depth: int,
    value: int,
    length_type_id: int = LENGTH_TYPE_TOTAL_BITS,
    op: OperatorKind = OperatorKind.SUM,
    layout: PacketLayout = DEFAULT_LAYOUT,
) -> list[int]:
    """Bits for ``depth`` single-child operators wrapped around one literal.

    Built level by level, so any depth can be produced. Level i (0 is the
    root) has version ``i % 8``; the innermost literal has version 7.
    """
    literal_bits = encode_bits(literal(7, value, layout), layout=layout)
    operator_header_bits = layout.header_bits + 1 + layout.length_field_bits(length_type_id)

    bits: list[int] = []
    for level in range(depth):
        if length_type_id == LENGTH_TYPE_TOTAL_BITS:
            declared = (depth - 1 - level) * operator_header_bits + len(literal_bits)
        else:
            declared = 1
        bits += uint_bits(level % 8, layout.version_bits)
        bits += uint_bits(int(op), layout.type_id_bits)
        bits.append(length_type_id)
        bits += uint_bits(declared, layout.length_field_bits(length_type_id))
    return bits + literal_bits


def nested_chain_version_sum(depth: int) -> int:
    """Version sum of the tree produced by nested_chain_bits."""
    return sum(level % 8 for level in range(depth)) + 7
