"""Tests for block helpers."""

import pytest

from prince_pipe.utils import (
    block_to_hex,
    block_to_nibbles,
    check_width,
    format_block_grid,
    get_nibble,
    hex_to_int,
    rotr64,
    set_nibble,
)


class TestNibbles:
    """Nibble addressing."""

    def test_lsb_first(self) -> None:
        """Nibble 0 is the least significant."""
        nibbles = block_to_nibbles(0x0123456789ABCDEF)
        assert nibbles[0] == 0xF
        assert nibbles[15] == 0x0

    def test_get_and_set(self) -> None:
        """Extract and insert a single nibble."""
        block = 0x0123456789ABCDEF
        assert get_nibble(block, 1) == 0xE
        assert set_nibble(block, 1, 0x0) == 0x0123456789ABCD0F
        assert set_nibble(block, 15, 0xF) == 0xF123456789ABCDEF

    def test_grid_matches_hex_order(self) -> None:
        """The grid reads column by column in hex order."""
        assert format_block_grid(0x0123456789ABCDEF) == (
            "  0 4 8 c\n"
            "  1 5 9 d\n"
            "  2 6 a e\n"
            "  3 7 b f"
        )


class TestRotate:
    def test_rotr64(self) -> None:
        assert rotr64(0x1, 1) == 0x8000000000000000
        assert rotr64(0x8000000000000000, 63) == 0x1
        assert rotr64(0x1234, 64) == 0x1234


class TestWidths:
    """Width validation."""

    def test_accepts_in_range(self) -> None:
        assert check_width(0xFF, 8, "Byte") == 0xFF

    @pytest.mark.parametrize("value", [-1, 0x100])
    def test_rejects_out_of_range(self, value: int) -> None:
        with pytest.raises(ValueError, match="Byte must be 8 bits"):
            check_width(value, 8, "Byte")

    def test_rejects_bool(self) -> None:
        with pytest.raises(ValueError, match="must be an int"):
            check_width(True, 8, "Byte")


class TestHex:
    """Hex parsing and formatting."""

    def test_round_trip(self) -> None:
        assert block_to_hex(hex_to_int("0123456789ABCDEF", 64)) == "0123456789abcdef"

    def test_prefix_and_whitespace(self) -> None:
        assert hex_to_int(" 0x00000000000000ff ", 64) == 0xFF

    def test_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="Plaintext must be 16 hex chars"):
            hex_to_int("abc", 64, "Plaintext")

    def test_not_hex(self) -> None:
        with pytest.raises(ValueError):
            hex_to_int("zz" * 8, 64)
