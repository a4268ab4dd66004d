"""
PRINCE cipher facade.

Wraps a PipelineScheduler with key management, the input/output whitening
and the auxiliary pass-through lane, and offers block-level helpers that
drive the reset/enable contract correctly:

- encrypt():        reset, then hold enable for L ticks
- encrypt_stream(): one block admitted per tick, outputs collected
                    L ticks after admission
"""

from __future__ import annotations

from typing import Iterable

from .constants import BLOCK_BITS
from .golden import validate_against_golden
from .interfaces import PipelineConfig, Result
from .keys import ExpandedKey, KeyExpander, expand_key, join_key
from .pipeline import PipelineScheduler
from .rounds import RoundEngine, whiten_input, whiten_output
from .trace import TraceRecorder
from .utils import check_width

__all__ = [
    "PrinceCipher",
    "encrypt_block",
    "whiten_input",
    "whiten_output",
]


def encrypt_block(key: int, plaintext: int, stage_count: int = 1) -> int:
    """
    Encrypt one block by evaluating a schedule's stages back to back.

    No ticks are involved; this is the value the pipeline must produce
    for any legal stage count.
    """
    check_width(plaintext, BLOCK_BITS, "Plaintext")
    keys = expand_key(key)
    engine = RoundEngine(stage_count)
    return whiten_output(engine.run_all(plaintext, keys), keys)


class PrinceCipher:
    """
    Pipelined PRINCE encryption core.

    The key is assumed stable while blocks are in flight; loading a new key
    does not touch slot contents.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        key: int = 0,
        tracer: TraceRecorder | None = None,
    ):
        """
        Initialize the core in its reset state.

        Args:
            config: Pipeline configuration (default: 11 stages)
            key: Initial 128-bit key
            tracer: Optional trace recorder for per-tick records
        """
        self.config = config or PipelineConfig()
        self.key_expander = KeyExpander(key)
        self.scheduler = PipelineScheduler(self.config.stage_count, tracer=tracer)
        self._aux = 0

    @property
    def stage_count(self) -> int:
        return self.config.stage_count

    @property
    def keys(self) -> ExpandedKey:
        return self.key_expander.keys

    def load_key(self, key: int) -> ExpandedKey:
        """Configure a new 128-bit key (K1 high, K0 low)."""
        return self.key_expander.load(key)

    @property
    def output(self) -> int:
        """Ciphertext derived from the final stage under the keys of the last tick."""
        return self.scheduler.output

    @property
    def aux_output(self) -> int:
        """Auxiliary plaintext registered on the last tick (pass-through)."""
        return self._aux

    def tick(
        self,
        data_in: int = 0,
        enable: bool = True,
        reset: bool = False,
        aux_in: int = 0,
    ) -> int:
        """
        Apply one clock edge.

        Args:
            data_in: 64-bit primary input (plaintext or IV)
            enable: Advance the pipeline; low discards in-flight blocks
            reset: Synchronous reset, dominates enable
            aux_in: 64-bit auxiliary input, not consumed by the core

        Returns:
            The output after this tick
        """
        check_width(aux_in, BLOCK_BITS, "Auxiliary input")
        self.scheduler.step(reset, enable, data_in, self.keys)
        self._aux = aux_in if enable and not reset else 0
        return self.output

    def reset(self) -> None:
        """Apply one reset tick."""
        self.tick(reset=True)

    def encrypt(self, plaintext: int) -> int:
        """
        Encrypt one block through the pipeline.

        Resets the core, then holds enable (and the plaintext) for exactly
        L ticks.
        """
        check_width(plaintext, BLOCK_BITS, "Plaintext")
        self.reset()
        for _ in range(self.stage_count):
            self.tick(plaintext, enable=True)
        return self.output

    def encrypt_stream(self, blocks: Iterable[int]) -> list[int]:
        """
        Encrypt a sequence of blocks, admitting one per tick.

        After an L-tick fill the pipeline emits one ciphertext per tick, in
        admission order.
        """
        self.reset()
        latency = self.stage_count
        outputs: list[int] = []
        elapsed = 0

        for block in blocks:
            self.tick(block, enable=True)
            elapsed += 1
            if elapsed >= latency:
                outputs.append(self.output)

        if elapsed == 0:
            return outputs

        # Drain: keep enable high so in-flight blocks are not discarded
        for _ in range(latency - 1):
            self.tick(0, enable=True)
            elapsed += 1
            if elapsed >= latency:
                outputs.append(self.output)

        return outputs

    def run_block(self, plaintext: int) -> Result:
        """Encrypt one block and check it against the golden reference."""
        start = self.scheduler.ticks
        ciphertext = self.encrypt(plaintext)
        key = join_key(self.keys.k0, self.keys.k1)
        correct, error_detail = validate_against_golden(key, plaintext, ciphertext)

        result = Result(
            plaintext=plaintext,
            ciphertext=ciphertext,
            correct=correct,
            error_detail=error_detail,
            stage_count=self.stage_count,
            # Reset tick excluded
            cycle_count_total=self.scheduler.ticks - start - 1,
        )
        result.add_note(f"schedule: {' | '.join(self.scheduler.tags)}")
        if not correct:
            result.add_warning(f"Pipeline output differs from golden reference at L={self.stage_count}")
        return result

    def __repr__(self) -> str:
        return f"PrinceCipher(stage_count={self.stage_count}, ticks={self.scheduler.ticks})"
