from __future__ import annotations
from typing import Tuple

ADDRESS_MASK = 0xFFFF_FFFF


class AddressDecoder:
    """Splits a 32-bit address into (set index, tag).

    The same formula covers every organization: with one set the index is
    always 0 and the tag holds every bit above the offset, with one line per
    set the index selects the line directly.
    """

    def __init__(self, line_size_bytes: int, num_sets: int):
        self.offset_bits = line_size_bytes.bit_length() - 1
        self.index_bits = num_sets.bit_length() - 1
        self.index_mask = num_sets - 1

    def decode(self, address: int) -> Tuple[int, int]:
        """Returns (set_index, tag) for an address."""
        if not 0 <= address <= ADDRESS_MASK:
            raise ValueError(f"Address {address:#x} is not a 32-bit unsigned value.")
        set_index = (address >> self.offset_bits) & self.index_mask
        tag = address >> (self.offset_bits + self.index_bits)
        return set_index, tag


def decode_address(address: int, line_size_bytes: int, num_sets: int) -> Tuple[int, int]:
    return AddressDecoder(line_size_bytes, num_sets).decode(address)
