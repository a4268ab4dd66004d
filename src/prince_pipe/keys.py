"""PRINCE key expansion.

The 128-bit key is K1 || K0 (K1 in the high 64 bits). K0 and K0' whiten
the data path; K1 is injected unmodified into every round.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import KEY_BITS
from .utils import MASK64, check_width, rotr64


@dataclass(frozen=True)
class ExpandedKey:
    """The three working keys derived from one 128-bit key."""

    k0: int
    k1: int
    k0_prime: int

    def to_dict(self) -> dict[str, str]:
        """Convert to hex strings for serialization."""
        return {
            "k0": f"{self.k0:016x}",
            "k1": f"{self.k1:016x}",
            "k0_prime": f"{self.k0_prime:016x}",
        }


def split_key(key: int) -> tuple[int, int]:
    """Split a 128-bit key into (K0, K1)."""
    return key & MASK64, (key >> 64) & MASK64


def join_key(k0: int, k1: int) -> int:
    """Build the 128-bit key K1 || K0."""
    return ((k1 & MASK64) << 64) | (k0 & MASK64)


def derive_k0_prime(k0: int) -> int:
    """K0' = (K0 >>> 1) ^ (K0 >> 63)."""
    return rotr64(k0, 1) ^ (k0 >> 63)


def expand_key(key: int) -> ExpandedKey:
    """Derive (K0, K1, K0') from a 128-bit key."""
    check_width(key, KEY_BITS, "Key")
    k0, k1 = split_key(key)
    return ExpandedKey(k0=k0, k1=k1, k0_prime=derive_k0_prime(k0))


class KeyExpander:
    """
    Holds the currently configured key.

    K0' is only recomputed when the low half of the key changes; loading a
    key that differs only in K1 reuses the cached value.
    """

    def __init__(self, key: int = 0):
        self._k0: int | None = None
        self._k0_prime = 0
        self.recomputations = 0
        self.keys = self.load(key)

    def load(self, key: int) -> ExpandedKey:
        """Configure a new key and return its expansion."""
        check_width(key, KEY_BITS, "Key")
        k0, k1 = split_key(key)

        if k0 != self._k0:
            self._k0 = k0
            self._k0_prime = derive_k0_prime(k0)
            self.recomputations += 1

        self.keys = ExpandedKey(k0=k0, k1=k1, k0_prime=self._k0_prime)
        return self.keys

    def __repr__(self) -> str:
        return f"KeyExpander(recomputations={self.recomputations})"
