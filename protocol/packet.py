"""Decoded packet tree.

A Packet wraps a body that is either a Literal (one unsigned integer) or an
Operator over an ordered, non-empty tuple of child packets. Trees are built
once by the parser and never mutated, so any number of traversals can read
them without coordination.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class OperatorKind(IntEnum):
    """Operator packet kinds keyed by their type id.

    Type id 4 is not listed: it is reserved for literal packets.
    """
    SUM = 0
    PRODUCT = 1
    MINIMUM = 2
    MAXIMUM = 3
    GREATER_THAN = 5
    LESS_THAN = 6
    EQUAL_TO = 7

    @property
    def is_comparison(self) -> bool:
        return self in COMPARISON_KINDS


COMPARISON_KINDS = frozenset({
    OperatorKind.GREATER_THAN,
    OperatorKind.LESS_THAN,
    OperatorKind.EQUAL_TO,
})

COMPARISON_ARITY = 2


@dataclass(frozen=True)
class Literal:
    """Literal body: an arbitrary-width unsigned integer."""
    value: int


@dataclass(frozen=True)
class Operator:
    """Operator body: a kind applied to ordered child packets."""
    op: OperatorKind
    children: tuple["Packet", ...]

    def __post_init__(self) -> None:
        if not self.children:
            raise ValueError(f"{self.op.name} operator needs at least one child packet")


PacketBody = Union[Literal, Operator]


@dataclass(frozen=True)
class Packet:
    """One decoded packet.

    Attributes:
        version: 3-bit packet version
        body: Literal or Operator
        bit_length: Bits consumed by this packet and all of its descendants
    """
    version: int
    body: PacketBody
    bit_length: int

    @property
    def is_literal(self) -> bool:
        return isinstance(self.body, Literal)

    @property
    def children(self) -> tuple["Packet", ...]:
        """Child packets; empty for literals."""
        if isinstance(self.body, Operator):
            return self.body.children
        return ()


def format_tree(packet: Packet, indent: str = "  ") -> str:
    """Render a packet tree as indented text, one packet per line."""
    lines: list[str] = []
    pending: list[tuple[Packet, int]] = [(packet, 0)]

    while pending:
        node, depth = pending.pop()
        prefix = indent * depth
        if isinstance(node.body, Literal):
            lines.append(f"{prefix}v{node.version} literal {node.body.value} ({node.bit_length} bits)")
            continue
        lines.append(
            f"{prefix}v{node.version} {node.body.op.name.lower()} "
            f"[{len(node.body.children)}] ({node.bit_length} bits)"
        )
        pending.extend((child, depth + 1) for child in reversed(node.body.children))

    return "\n".join(lines)
