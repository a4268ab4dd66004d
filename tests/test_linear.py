"""Tests for the PRINCE linear diffusion layer."""

import random

import pytest

from prince_pipe.linear import (
    GROUP_WIRING,
    INV_SHIFT_ROWS,
    SHIFT_ROWS,
    WIRING_A,
    WIRING_B,
    inv_m_layer,
    inv_shift_rows,
    m_layer,
    m_prime,
    mix_group,
    shift_rows,
)


def _random_blocks(seed: int, count: int = 200) -> list[int]:
    rng = random.Random(seed)
    return [rng.getrandbits(64) for _ in range(count)]


class TestShiftRows:
    """Tests for the SR nibble permutation."""

    def test_index_map_is_permutation(self) -> None:
        """SR relabels all 16 positions."""
        assert sorted(SHIFT_ROWS) == list(range(16))

    def test_inverse_index_map(self) -> None:
        """INV_SHIFT_ROWS is the positional inverse of SHIFT_ROWS."""
        for p in range(16):
            assert INV_SHIFT_ROWS[SHIFT_ROWS[p]] == p

    def test_known_value(self) -> None:
        """SR behaves like AES ShiftRows on the hex-ordered nibble grid."""
        assert shift_rows(0x0123456789ABCDEF) == 0x05AF49E38D27C16B

    def test_inverse_known_value(self) -> None:
        """SR^-1 shifts the rows the other way."""
        assert inv_shift_rows(0x0123456789ABCDEF) == 0x0DA741EB852FC963

    def test_first_column_row_fixed(self) -> None:
        """The most significant nibble stays in place."""
        assert shift_rows(0xF000000000000000) == 0xF000000000000000

    def test_inverse_property(self) -> None:
        """SR^-1(SR(v)) == v for random blocks."""
        for v in _random_blocks(1):
            assert inv_shift_rows(shift_rows(v)) == v
            assert shift_rows(inv_shift_rows(v)) == v


class TestMPrime:
    """Tests for the block-diagonal M' matrix."""

    def test_group_wiring(self) -> None:
        """Outer groups use wiring A, inner groups wiring B."""
        assert GROUP_WIRING == (WIRING_A, WIRING_B, WIRING_B, WIRING_A)

    def test_single_bit_wiring_a(self) -> None:
        """Bit 0 of nibble 0 feeds bit 0 of nibbles 0, 1 and 2."""
        assert m_prime(0x1) == 0x111

    def test_single_bit_wiring_b(self) -> None:
        """Bit 0 of nibble 4 feeds bit 0 of nibbles 5, 6 and 7."""
        assert m_prime(0x10000) == 0x11100000

    def test_known_value(self) -> None:
        """Regression value for a mixed block."""
        assert m_prime(0x0123456789ABCDEF) == 0x3012456789ABFCDE

    def test_uniform_block_is_fixed_point(self) -> None:
        """XOR of three equal nibbles is the nibble itself."""
        for v in range(16):
            block = int(f"{v:x}" * 16, 16)
            assert m_prime(block) == block

    @pytest.mark.parametrize("wiring", [WIRING_A, WIRING_B])
    def test_each_output_bit_excludes_one_sibling(self, wiring: int) -> None:
        """Every output bit depends on exactly three input nibbles."""
        for j in range(4):
            for b in range(4):
                out = mix_group(1 << (4 * j + b), wiring)
                # The bit lands in the same lane of three nibbles
                lanes = [(out >> (4 * r + b)) & 1 for r in range(4)]
                assert sum(lanes) == 3
                assert (out & ~(0x1111 << b)) == 0

    @pytest.mark.parametrize("wiring", [WIRING_A, WIRING_B])
    def test_group_is_involution(self, wiring: int) -> None:
        """Every 16-bit group transform is its own inverse."""
        for group in range(0, 1 << 16, 97):
            assert mix_group(mix_group(group, wiring), wiring) == group

    def test_involution(self) -> None:
        """M'(M'(v)) == v for random blocks."""
        for v in _random_blocks(2):
            assert m_prime(m_prime(v)) == v

    def test_linearity(self) -> None:
        """M'(a ^ b) == M'(a) ^ M'(b)."""
        blocks = _random_blocks(3, 100)
        for a, b in zip(blocks, reversed(blocks)):
            assert m_prime(a ^ b) == m_prime(a) ^ m_prime(b)


class TestMLayer:
    """Tests for M and M^-1."""

    def test_m_is_m_prime_then_shift_rows(self) -> None:
        """M runs M' first, then SR."""
        v = 0x0123456789ABCDEF
        assert m_layer(v) == shift_rows(m_prime(v))

    def test_inverse(self) -> None:
        """M^-1(M(v)) == v and M(M^-1(v)) == v."""
        for v in _random_blocks(4):
            assert inv_m_layer(m_layer(v)) == v
            assert m_layer(inv_m_layer(v)) == v

    def test_zero_maps_to_zero(self) -> None:
        """The linear layer fixes zero."""
        assert m_layer(0) == 0
        assert inv_m_layer(0) == 0
