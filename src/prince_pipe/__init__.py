"""Pipelined PRINCE block cipher core."""

__version__ = "0.1.0"

# PRINCE paper test vector: K1 || K0, plaintext, ciphertext
DEFAULT_KEY_HEX = "fedcba98765432100000000000000000"
DEFAULT_PT_HEX = "0123456789abcdef"
DEFAULT_CT_HEX = "ae25ad3ca8fa9ccf"

from .interfaces import PipelineConfig, Result
from .keys import ExpandedKey, KeyExpander, expand_key
from .pipeline import PipelineScheduler
from .cipher import PrinceCipher, encrypt_block
from .golden import golden_encrypt

__all__ = [
    "PipelineConfig",
    "Result",
    "ExpandedKey",
    "KeyExpander",
    "expand_key",
    "PipelineScheduler",
    "PrinceCipher",
    "encrypt_block",
    "golden_encrypt",
]
