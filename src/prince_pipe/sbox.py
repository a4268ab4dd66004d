"""PRINCE 4-bit S-box layer.

The S-box and its inverse are applied independently to each of the 16
nibbles of a block; nibble i of the input maps to nibble i of the output.
"""

from __future__ import annotations

from .utils import NIBBLES_PER_BLOCK, get_nibble, set_nibble

# PRINCE S-box lookup table
SBOX = (
    0xB, 0xF, 0x3, 0x2, 0xA, 0xC, 0x9, 0x1,
    0x6, 0x7, 0x8, 0x0, 0xE, 0x5, 0xD, 0x4,
)

# Inverse S-box lookup table
SBOX_INV = (
    0xB, 0x7, 0x3, 0x2, 0xF, 0xD, 0x8, 0x9,
    0xA, 0x6, 0x4, 0x0, 0x5, 0xE, 0xC, 0x1,
)


def invert_table(table: tuple[int, ...] | list[int]) -> tuple[int, ...]:
    """Return the inverse of a permutation table.

    Raises:
        ValueError: If the table is not a permutation of its index range
    """
    if sorted(table) != list(range(len(table))):
        raise ValueError("Table is not a permutation")

    inverse = [0] * len(table)
    for x, y in enumerate(table):
        inverse[y] = x
    return tuple(inverse)


def sbox(x: int) -> int:
    """Substitute a single nibble."""
    return SBOX[x & 0xF]


def sbox_inv(x: int) -> int:
    """Inverse-substitute a single nibble."""
    return SBOX_INV[x & 0xF]


def _substitute(block: int, table: tuple[int, ...]) -> int:
    out = 0
    for i in range(NIBBLES_PER_BLOCK):
        out = set_nibble(out, i, table[get_nibble(block, i)])
    return out


def sub_nibbles(block: int) -> int:
    """Apply the S-box to every nibble of a 64-bit block."""
    return _substitute(block, SBOX)


def inv_sub_nibbles(block: int) -> int:
    """Apply the inverse S-box to every nibble of a 64-bit block."""
    return _substitute(block, SBOX_INV)
