"""Version-sum checksum over a packet tree."""

from protocol.packet import Packet


def sum_versions(packet: Packet) -> int:
    """Sum the version field of packet and every descendant."""
    total = 0
    pending = [packet]
    while pending:
        node = pending.pop()
        total += node.version
        pending.extend(node.children)
    return total
