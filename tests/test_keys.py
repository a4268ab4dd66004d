"""Tests for PRINCE key expansion."""

import pytest

from prince_pipe.keys import (
    ExpandedKey,
    KeyExpander,
    derive_k0_prime,
    expand_key,
    join_key,
    split_key,
)


class TestSplitKey:
    """Tests for key halves."""

    def test_k1_is_high_half(self) -> None:
        """K1 is the high 64 bits, K0 the low 64 bits."""
        key = 0x0011223344556677_8899AABBCCDDEEFF
        k0, k1 = split_key(key)
        assert k0 == 0x8899AABBCCDDEEFF
        assert k1 == 0x0011223344556677

    def test_join_inverts_split(self) -> None:
        """join_key(split_key(k)) == k."""
        key = 0xFEDCBA98765432100123456789ABCDEF
        assert join_key(*split_key(key)) == key


class TestDeriveK0Prime:
    """Tests for the K0' derivation."""

    def test_zero(self) -> None:
        """Zero key gives zero K0'."""
        assert derive_k0_prime(0) == 0

    def test_all_ones(self) -> None:
        """Rotating all ones is a no-op; the extra XOR clears bit 0."""
        assert derive_k0_prime(0xFFFFFFFFFFFFFFFF) == 0xFFFFFFFFFFFFFFFE

    def test_low_bit_rotates_to_top(self) -> None:
        """Bit 0 reappears at bit 63."""
        assert derive_k0_prime(0x1) == 0x8000000000000000

    def test_top_bit(self) -> None:
        """Bit 63 shifts to bit 62 and is also folded into bit 0."""
        assert derive_k0_prime(0x8000000000000000) == 0x4000000000000001

    def test_plain_shift(self) -> None:
        """Without the top or bottom bit it is a right shift."""
        assert derive_k0_prime(0x0000000000000010) == 0x8


class TestExpandKey:
    """Tests for expand_key."""

    def test_expansion(self) -> None:
        """expand_key derives all three working keys."""
        keys = expand_key(join_key(0x1, 0xABCD))
        assert keys == ExpandedKey(k0=0x1, k1=0xABCD, k0_prime=0x8000000000000000)

    def test_to_dict(self) -> None:
        """Serialized keys are 16-digit hex strings."""
        d = expand_key(0).to_dict()
        assert d == {"k0": "0" * 16, "k1": "0" * 16, "k0_prime": "0" * 16}

    def test_rejects_wide_key(self) -> None:
        """Keys wider than 128 bits are rejected."""
        with pytest.raises(ValueError, match="Key must be 128 bits"):
            expand_key(1 << 128)

    def test_rejects_negative_key(self) -> None:
        """Negative keys are rejected."""
        with pytest.raises(ValueError, match="Key must be 128 bits"):
            expand_key(-1)

    def test_rejects_non_int(self) -> None:
        """Keys must be ints."""
        with pytest.raises(ValueError, match="Key must be an int"):
            expand_key("00")  # type: ignore[arg-type]


class TestKeyExpander:
    """Tests for the caching key holder."""

    def test_initial_key(self) -> None:
        """A fresh expander holds the zero key."""
        expander = KeyExpander()
        assert expander.keys == expand_key(0)
        assert expander.recomputations == 1

    def test_load_matches_pure_expansion(self) -> None:
        """load() returns the same value as expand_key()."""
        expander = KeyExpander()
        key = 0xFEDCBA98765432100123456789ABCDEF
        assert expander.load(key) == expand_key(key)

    def test_k1_change_reuses_k0_prime(self) -> None:
        """Changing only K1 does not recompute K0'."""
        expander = KeyExpander(join_key(0x1234, 0x1))
        before = expander.recomputations
        keys = expander.load(join_key(0x1234, 0x2))
        assert expander.recomputations == before
        assert keys.k1 == 0x2
        assert keys.k0_prime == derive_k0_prime(0x1234)

    def test_k0_change_recomputes(self) -> None:
        """Changing K0 recomputes K0'."""
        expander = KeyExpander(join_key(0x1234, 0x1))
        before = expander.recomputations
        keys = expander.load(join_key(0x5678, 0x1))
        assert expander.recomputations == before + 1
        assert keys.k0_prime == derive_k0_prime(0x5678)
