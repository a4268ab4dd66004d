"""
PRINCE linear diffusion layer.

Two sub-steps on the 16 nibbles of a block:

- SR: a fixed nibble permutation behaving like AES ShiftRows on a 4x4
  nibble state (columns of four nibbles starting at the most significant
  nibble). Expressed here as an index map over LSB-first nibble positions:
  output nibble p takes input nibble SHIFT_ROWS[p].

- M': a block-diagonal 64x64 binary matrix made of four 16x16 blocks,
  one per group of four nibbles (group g = nibbles 4g..4g+3). Inside a
  group, bit b of output nibble r is the XOR of bit b of three of the
  four input nibbles; the excluded sibling j is the one with
  (r + j + w) % 4 == b, where the wiring offset w is 1 for the outer
  groups (0 and 3) and 0 for the inner groups (1 and 2). Both wirings are
  symmetric with an even number of ones per row, so M' is an involution.

M = SR . M' runs M' first, then SR. Its inverse runs SR^-1 first and
reuses M' unchanged.
"""

from __future__ import annotations

from .sbox import invert_table
from .utils import NIBBLES_PER_BLOCK, get_nibble, set_nibble

SHIFT_ROWS = (4, 9, 14, 3, 8, 13, 2, 7, 12, 1, 6, 11, 0, 5, 10, 15)
INV_SHIFT_ROWS = invert_table(SHIFT_ROWS)

WIRING_A = 1
WIRING_B = 0

# Wiring offset per 16-bit group, lowest group first
GROUP_WIRING = (WIRING_A, WIRING_B, WIRING_B, WIRING_A)


def _build_group_masks(wiring: int) -> tuple[tuple[int, ...], ...]:
    """Masks[r][j]: which bits of sibling j feed output nibble r."""
    return tuple(
        tuple(0xF ^ (1 << ((r + j + wiring) % 4)) for j in range(4))
        for r in range(4)
    )


GROUP_MASKS = {
    WIRING_A: _build_group_masks(WIRING_A),
    WIRING_B: _build_group_masks(WIRING_B),
}


def _permute_nibbles(block: int, index_map: tuple[int, ...]) -> int:
    out = 0
    for p in range(NIBBLES_PER_BLOCK):
        out = set_nibble(out, p, get_nibble(block, index_map[p]))
    return out


def shift_rows(block: int) -> int:
    """Apply the SR nibble permutation."""
    return _permute_nibbles(block, SHIFT_ROWS)


def inv_shift_rows(block: int) -> int:
    """Apply the inverse SR nibble permutation."""
    return _permute_nibbles(block, INV_SHIFT_ROWS)


def mix_group(group: int, wiring: int) -> int:
    """Apply one 16x16 block of M' to a 16-bit group of four nibbles."""
    masks = GROUP_MASKS[wiring]
    nibbles = [get_nibble(group, j) for j in range(4)]

    out = 0
    for r in range(4):
        acc = 0
        for j in range(4):
            acc ^= nibbles[j] & masks[r][j]
        out |= acc << (4 * r)
    return out


def m_prime(block: int) -> int:
    """Apply the involutive M' layer to a 64-bit block."""
    out = 0
    for g, wiring in enumerate(GROUP_WIRING):
        shift = 16 * g
        out |= mix_group((block >> shift) & 0xFFFF, wiring) << shift
    return out


def m_layer(block: int) -> int:
    """Forward linear layer M: M' followed by SR."""
    return shift_rows(m_prime(block))


def inv_m_layer(block: int) -> int:
    """Inverse linear layer: SR^-1 followed by M'."""
    return m_prime(inv_shift_rows(block))
