"""PRINCE round constants and round-structure sizes."""

# RC0..RC11, derived from the fraction part of pi. RC[i] is injected only
# at logical round i; RC[0] is zero and RC[i] ^ RC[11 - i] == ALPHA.
ROUND_CONSTANTS = (
    0x0000000000000000,
    0x13198A2E03707344,
    0xA4093822299F31D0,
    0x082EFA98EC4E6C89,
    0x452821E638D01377,
    0xBE5466CF34E90C6C,
    0x7EF84F78FD955CB1,
    0x85840851F1AC43AA,
    0xC882D32F25323C54,
    0x64A51195E0E3610D,
    0xD3B5A399CA0C2399,
    0xC0AC29B7C97C50DD,
)

ALPHA = 0xC0AC29B7C97C50DD

# Forward rounds 1..5, one middle step, backward rounds 6..10
FORWARD_ROUNDS = (1, 2, 3, 4, 5)
BACKWARD_ROUNDS = (6, 7, 8, 9, 10)
NUM_LOGICAL_STEPS = len(FORWARD_ROUNDS) + 1 + len(BACKWARD_ROUNDS)

# Index of the constant used by the output whitening
FINAL_CONSTANT_INDEX = 11

BLOCK_BITS = 64
KEY_BITS = 128
