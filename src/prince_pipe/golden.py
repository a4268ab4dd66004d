"""Golden reference PRINCE encryption, evaluated round by round without staging."""

from .constants import BACKWARD_ROUNDS, FINAL_CONSTANT_INDEX, FORWARD_ROUNDS, ROUND_CONSTANTS
from .keys import expand_key, join_key
from .linear import inv_m_layer, m_layer, m_prime
from .sbox import inv_sub_nibbles, sub_nibbles
from .utils import MASK64, check_width


def golden_encrypt(key: int, plaintext: int) -> int:
    """Encrypt a single block with a straight-line PRINCE evaluation.

    Args:
        key: 128-bit key, K1 in the high half and K0 in the low half
        plaintext: 64-bit plaintext block

    Returns:
        64-bit ciphertext block

    Raises:
        ValueError: If key or plaintext is out of range
    """
    keys = expand_key(key)
    check_width(plaintext, 64, "Plaintext")

    state = plaintext ^ keys.k0
    state ^= ROUND_CONSTANTS[0] ^ keys.k1

    for i in FORWARD_ROUNDS:
        state = sub_nibbles(state)
        state = m_layer(state)
        state ^= ROUND_CONSTANTS[i] ^ keys.k1

    state = sub_nibbles(state)
    state = m_prime(state)
    state = inv_sub_nibbles(state)

    for i in BACKWARD_ROUNDS:
        state ^= ROUND_CONSTANTS[i] ^ keys.k1
        state = inv_m_layer(state)
        state = inv_sub_nibbles(state)

    state ^= ROUND_CONSTANTS[FINAL_CONSTANT_INDEX] ^ keys.k1
    return (state ^ keys.k0_prime) & MASK64


def validate_against_golden(
    key: int, plaintext: int, candidate_ciphertext: int
) -> tuple[bool, str]:
    """Validate a candidate ciphertext against the golden reference.

    Args:
        key: 128-bit key
        plaintext: 64-bit plaintext block
        candidate_ciphertext: 64-bit ciphertext to validate

    Returns:
        Tuple of (is_correct, error_detail)
    """
    expected = golden_encrypt(key, plaintext)
    if candidate_ciphertext == expected:
        return True, ""
    else:
        return False, (
            f"Ciphertext mismatch: expected {expected:016x}, "
            f"got {candidate_ciphertext:016x}"
        )


def _vector(k0: int, k1: int, plaintext: int, ciphertext: int) -> dict[str, int]:
    return {
        "key": join_key(k0, k1),
        "k0": k0,
        "k1": k1,
        "plaintext": plaintext,
        "ciphertext": ciphertext,
    }


# Known-answer vectors from the PRINCE paper (Appendix A)
PRINCE_TEST_VECTORS = [
    _vector(0x0000000000000000, 0x0000000000000000, 0x0000000000000000, 0x818665AA0D02DFDA),
    _vector(0x0000000000000000, 0x0000000000000000, 0xFFFFFFFFFFFFFFFF, 0x604AE6CA03C20ADA),
    _vector(0xFFFFFFFFFFFFFFFF, 0x0000000000000000, 0x0000000000000000, 0x9FB51935FC3DF524),
    _vector(0x0000000000000000, 0xFFFFFFFFFFFFFFFF, 0x0000000000000000, 0x78A54CBE737BB7EF),
    _vector(0x0000000000000000, 0xFEDCBA9876543210, 0x0123456789ABCDEF, 0xAE25AD3CA8FA9CCF),
]
