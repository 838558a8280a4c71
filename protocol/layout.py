"""Field widths of the BITS packet format."""

from dataclasses import dataclass

LENGTH_TYPE_TOTAL_BITS = 0
LENGTH_TYPE_CHILD_COUNT = 1


@dataclass(frozen=True)
class PacketLayout:
    """Bit widths and codes shared by the parser and encoder.

    Attributes:
        version_bits: Width of the packet version field
        type_id_bits: Width of the packet type id field
        literal_type_id: Type id reserved for literal packets
        group_bits: Width of one literal group (continuation bit + value bits)
        total_length_bits: Width of the total-length field (length type 0)
        child_count_bits: Width of the child-count field (length type 1)
    """
    version_bits: int = 3
    type_id_bits: int = 3
    literal_type_id: int = 4
    group_bits: int = 5
    total_length_bits: int = 15
    child_count_bits: int = 11

    @property
    def header_bits(self) -> int:
        """Bits in the version + type id header."""
        return self.version_bits + self.type_id_bits

    @property
    def group_value_bits(self) -> int:
        """Value bits carried by one literal group."""
        return self.group_bits - 1

    def length_field_bits(self, length_type_id: int) -> int:
        """Width of the operator length field selected by the length-type bit."""
        return self.total_length_bits if length_type_id == LENGTH_TYPE_TOTAL_BITS else self.child_count_bits


DEFAULT_LAYOUT = PacketLayout()
