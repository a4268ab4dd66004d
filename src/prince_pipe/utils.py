"""
Utility functions for nibble addressing and block/hex conversions.

A PRINCE block is a 64-bit unsigned integer viewed as 16 nibbles,
nibble 0 being the least significant:

  bits 63..60  59..56  ...   7..4   3..0
       n[15]   n[14]   ...   n[1]   n[0]

Printed as a 4x4 grid the nibbles are laid out column by column,
starting from the most significant nibble (the order used when the
block is written as hex):

  n15 n11 n7 n3
  n14 n10 n6 n2
  n13 n9  n5 n1
  n12 n8  n4 n0
"""

from Crypto.Util.number import bytes_to_long

MASK64 = (1 << 64) - 1
NIBBLES_PER_BLOCK = 16


def get_nibble(block: int, index: int) -> int:
    """
    Extract nibble `index` (0 = least significant) from a block.
    """
    return (block >> (4 * index)) & 0xF


def set_nibble(block: int, index: int, value: int) -> int:
    """
    Return `block` with nibble `index` replaced by `value`.
    """
    shift = 4 * index
    return (block & ~(0xF << shift) & MASK64) | ((value & 0xF) << shift)


def block_to_nibbles(block: int) -> list[int]:
    """
    Split a block into its 16 nibbles, nibble 0 first.
    """
    return [get_nibble(block, i) for i in range(NIBBLES_PER_BLOCK)]


def rotr64(value: int, amount: int) -> int:
    """Rotate a 64-bit value right."""
    amount %= 64
    return ((value >> amount) | (value << (64 - amount))) & MASK64


def check_width(value: int, bits: int, name: str) -> int:
    """
    Check that `value` is an unsigned integer fitting in `bits` bits.

    Returns the value unchanged so callers can validate inline.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0 or value >> bits:
        raise ValueError(f"{name} must be {bits} bits, got 0x{value:x}")
    return value


def hex_to_int(hex_str: str, bits: int, name: str = "Value") -> int:
    """
    Parse a hex string of exactly bits/4 digits.

    Args:
        hex_str: Hex string, optionally prefixed with 0x
        bits: Expected width in bits
        name: Label used in error messages

    Returns:
        Parsed integer
    """
    digits = hex_str.strip().lower()
    if digits.startswith("0x"):
        digits = digits[2:]
    if len(digits) != bits // 4:
        raise ValueError(
            f"{name} must be {bits // 4} hex chars ({bits} bits), got {len(digits)} chars"
        )
    return bytes_to_long(bytes.fromhex(digits))


def block_to_hex(block: int) -> str:
    """
    Format a block as 16 lowercase hex digits.
    """
    return f"{block & MASK64:016x}"


def format_block_grid(block: int) -> str:
    """
    Format a block as a readable 4x4 nibble grid.

    Returns multi-line string like:
      b b b b
      b b b b
      b b b b
      b b b b
    """
    nibbles = block_to_nibbles(block)
    lines = []
    for row in range(4):
        cells = [f"{nibbles[15 - (col * 4 + row)]:x}" for col in range(4)]
        lines.append("  " + " ".join(cells))
    return "\n".join(lines)
